"""Core domain models for album photos and the visible photo stack."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Coordinates are stored as integer micro-degrees
GEO_SCALE = 1_000_000


@dataclass(frozen=True)
class Photo:
    """A single album photo. Created once by the catalog and shared read-only."""

    image_id: int
    thumbnail_id: int
    name: str
    camera: str = ""
    exposure: str = ""
    aperture: str = ""
    focal: str = ""
    iso: str = ""
    latitude: int = 0
    longitude: int = 0

    @property
    def latitude_deg(self) -> float:
        return self.latitude / GEO_SCALE

    @property
    def longitude_deg(self) -> float:
        return self.longitude / GEO_SCALE

    def same_photo(self, other: Photo | None) -> bool:
        """True if `other` refers to the same full image."""
        return other is not None and other.image_id == self.image_id


class EntryState(Enum):
    PUSHED = "pushed"
    ENTERING = "entering"
    VISIBLE = "visible"
    REMOVED = "removed"


@dataclass(eq=False)
class StackEntry:
    """One photo view in the stack, bottom entries are older.

    `transition` holds the single active transition handle, if any.
    `view` is owned by the stack view (e.g. a QLabel) and opaque here.
    """

    photo: Photo
    image: Any
    transition: Any | None = None
    state: EntryState = EntryState.PUSHED
    view: Any | None = None

    @property
    def is_transitioning(self) -> bool:
        return self.transition is not None and bool(getattr(self.transition, "active", False))


@dataclass(eq=False)
class PendingSwap:
    """A selection waiting for its image; committed in `seq` order."""

    seq: int
    photo: Photo
    image: Any | None = None
    marker: Any | None = None
    error: Exception | None = None
    done: bool = False
