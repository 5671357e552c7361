"""Collaborator protocols used by the swap coordinator.

The core never imports a UI toolkit; views, decoders and workers are
provided by adapters that satisfy these protocols (see `app/views` and
`infrastructure` for the Qt implementations).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from core.models import Photo, StackEntry

# on_done(result, error): exactly one of the two is not None
DoneCallback = Callable[[Any, "Exception | None"], None]


class PhotoCatalog(Protocol):
    """Provides the ordered album contents."""

    def load_all(self) -> list[Photo]:
        """Return every photo of the album in display order."""
        raise NotImplementedError


class Decoder(Protocol):
    """Turns an image identifier into a decoded image. May be slow."""

    def decode(self, image_id: int) -> Any:
        """Return the decoded image; raise or return None on failure."""
        raise NotImplementedError


class ThumbnailSource(Protocol):
    """Provides the small image shown in a photo's location marker."""

    def load_thumbnail(self, photo: Photo) -> Any:
        """Return the thumbnail of `photo`; raise or return None on failure."""
        raise NotImplementedError


class MarkerRenderer(Protocol):
    def make_marker(self, thumbnail: Any) -> Any:
        """Return a location marker image derived from `thumbnail`."""
        raise NotImplementedError


class LocationView(Protocol):
    """Displays where a photo was taken. Coordinates are in micro-degrees."""

    def set_center(self, latitude: int, longitude: int) -> None:
        raise NotImplementedError

    def set_overlay(self, marker: Any, latitude: int, longitude: int) -> None:
        raise NotImplementedError


class StackView(Protocol):
    """Renders the stack entries; the last added entry is drawn on top."""

    def clear(self) -> None:
        raise NotImplementedError

    def add_entry(self, entry: StackEntry) -> None:
        raise NotImplementedError

    def remove_entry(self, entry: StackEntry) -> None:
        raise NotImplementedError


class PhotoInfoView(Protocol):
    def bind_photo(self, photo: Photo) -> None:
        """Show name and camera details of `photo`."""
        raise NotImplementedError


class DecodeWorker(Protocol):
    """Runs jobs off the interactive thread, one at a time, in FIFO order.

    `on_done` must be invoked on the interactive thread.
    """

    def submit(self, job: Callable[[], Any], on_done: DoneCallback) -> None:
        raise NotImplementedError


class AnimationDriver(Protocol):
    """Plays the visual part of a transition."""

    def start(
        self, entry: StackEntry, kind: str, duration_ms: int, on_finished: Callable[[], None]
    ) -> Any:
        """Start animating `entry`; return a token accepted by `stop`."""
        raise NotImplementedError

    def stop(self, token: Any) -> None:
        """Stop the animation without invoking its `on_finished`."""
        raise NotImplementedError
