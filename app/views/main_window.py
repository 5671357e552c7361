from __future__ import annotations

from PySide6.QtWidgets import QMainWindow, QWidget
from loguru import logger

from app.viewmodels.album_vm import AlbumVM
from app.views.image_tasks import DecodeTaskRunner
from app.views.layout.layout_manager import LayoutManager
from app.views.widgets.album_list import AlbumListWidget
from app.views.widgets.location_view import LocationWidget
from app.views.widgets.photo_info import PhotoInfoPanel
from app.views.widgets.photo_stack import PhotoStackWidget, QtAnimationDriver
from core.cache import ImageCache
from core.errors import DecodeFailure
from core.models import Photo
from core.services.interfaces import Decoder, MarkerRenderer, PhotoCatalog, ThumbnailSource
from core.services.swap_coordinator import SwapCoordinator
from core.services.transitions import TransitionController
from infrastructure.settings import AlbumSettings


class AlbumWindow(QMainWindow):
    """Main window: photo stack with an overlaid album/info/location panel."""

    def __init__(
        self,
        *,
        catalog: PhotoCatalog,
        decoder: Decoder,
        marker_renderer: MarkerRenderer,
        thumbnails: ThumbnailSource | None = None,
        settings: AlbumSettings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or AlbumSettings()
        self.setWindowTitle("Photo Album")

        self.layout_manager = LayoutManager(self, toggle_ms=self._settings.panel_ms)

        self.stack = PhotoStackWidget()
        self.album_list = AlbumListWidget()
        self.info_panel = PhotoInfoPanel()
        self.location = LocationWidget()
        central = self.layout_manager.setup_main_layout(
            self.stack, [self.album_list, self.info_panel, self.location]
        )
        self.setCentralWidget(central)

        self.runner = DecodeTaskRunner(self)
        self.driver = QtAnimationDriver(self.stack, self.layout_manager.current_panel_width)
        self.transitions = TransitionController(
            self.driver, enter_ms=self._settings.enter_ms, exit_ms=self._settings.exit_ms
        )
        self.coordinator = SwapCoordinator(
            cache=ImageCache(self._settings.cache_capacity),
            decoder=decoder,
            worker=self.runner,
            transitions=self.transitions,
            stack_view=self.stack,
            location_view=self.location,
            marker_renderer=marker_renderer,
            thumbnails=thumbnails,
            info_view=self.info_panel,
            config=self._settings.swap,
        )
        self.coordinator.add_failure_listener(self._on_swap_failed)
        self.vm = AlbumVM(self.coordinator, catalog)

        self.album_list.photoSelected.connect(self._on_photo_selected)
        self.stack.clicked.connect(self.layout_manager.toggle_panel)

        self.layout_manager.setup_initial_window_size()

    def start(self) -> Photo:
        """Load the album and show its first photo. Raises on a fatal load error."""
        first = self.vm.start()
        self.album_list.set_photos(self.vm.items)
        self.album_list.select_row_silently(self.vm.row_of(first))
        self.statusBar().showMessage(f"{len(self.vm.photos)} photos", 3000)
        return first

    def _on_photo_selected(self, photo: Photo) -> None:
        self.coordinator.select_photo(photo)

    def _on_swap_failed(self, photo: Photo, error: DecodeFailure) -> None:
        logger.error("Could not show {}: {}", photo.name, error)
        self.statusBar().showMessage(f"Could not load {photo.name}", 5000)
        # Keep the list highlight on what is actually shown
        self.album_list.select_row_silently(self.vm.row_of(self.vm.current_photo))
