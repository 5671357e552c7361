"""Exception types shared by the album core and its collaborators."""

from __future__ import annotations


class AlbumError(Exception):
    """Base class for album errors."""


class DecodeFailure(AlbumError):
    """Decoding an image id did not produce a usable image.

    Attributes:
        image_id: Identifier passed to the decoder.
        reason: Human-readable cause (decoder message or "no image").
    """

    def __init__(self, image_id: int, reason: str = "no image") -> None:
        super().__init__(f"Failed to decode image {image_id}: {reason}")
        self.image_id = image_id
        self.reason = reason


class CatalogError(AlbumError):
    """The photo catalog could not be loaded or is empty."""


class TransitionConflict(AlbumError):
    """A transition was started on an entry that already has one running."""
