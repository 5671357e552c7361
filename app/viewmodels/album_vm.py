"""ViewModel mediating between the album list and the swap coordinator."""

from __future__ import annotations

from app.viewmodels.photo_vm import PhotoVM
from core.models import Photo
from core.services.interfaces import PhotoCatalog
from core.services.swap_coordinator import SwapCoordinator


class AlbumVM:
    """Album view-model.

    Owns the catalog reference and maps photos shown by the
    `SwapCoordinator` back to album list rows.
    """

    def __init__(self, coordinator: SwapCoordinator, catalog: PhotoCatalog) -> None:
        """Create an AlbumVM.

        Args:
            coordinator: Coordinator owning the photo stack and image cache.
            catalog: Source of the album photos, loaded by `start`.
        """
        self._coordinator = coordinator
        self._catalog = catalog

    @property
    def photos(self) -> list[Photo]:
        return self._coordinator.photos

    @property
    def items(self) -> list[PhotoVM]:
        return [PhotoVM(p) for p in self.photos]

    @property
    def current_photo(self) -> Photo | None:
        top = self._coordinator.top
        return top.photo if top is not None else None

    def start(self, first_row: int = 0) -> Photo:
        """Load the album and show the photo at `first_row` (or the first one).

        Raises whatever `SwapCoordinator.initialize` raises.
        """
        photos = list(self._catalog.load_all())
        first = photos[first_row] if 0 <= first_row < len(photos) else None
        self._coordinator.initialize(_LoadedCatalog(photos), first)
        return self._coordinator.top.photo  # type: ignore[union-attr]

    def row_of(self, photo: Photo | None) -> int:
        """Index of `photo` in the album, or -1."""
        if photo is None:
            return -1
        for i, p in enumerate(self.photos):
            if p.same_photo(photo):
                return i
        return -1


class _LoadedCatalog:
    """Hands an already loaded photo list to `initialize` without reloading."""

    def __init__(self, photos: list[Photo]) -> None:
        self._photos = photos

    def load_all(self) -> list[Photo]:
        return list(self._photos)
