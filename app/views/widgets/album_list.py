from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QWidget

from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import LIST_PADDING_PX

PHOTO_ROLE: int = Qt.UserRole  # store the Photo on each item


class AlbumListWidget(QListWidget):
    """Album list; emits `photoSelected(photo)` when the user clicks a row."""

    photoSelected = Signal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSelectionMode(QListWidget.SingleSelection)
        self.setSpacing(2)
        self.setViewportMargins(0, LIST_PADDING_PX, 0, LIST_PADDING_PX)
        self.itemClicked.connect(self._on_item_clicked)

    def set_photos(self, items: list[PhotoVM]) -> None:
        """Replace the list contents with `items`, in order."""
        self.clear()
        for vm in items:
            item = QListWidgetItem(vm.list_text)
            item.setData(PHOTO_ROLE, vm.photo)
            self.addItem(item)

    def select_row_silently(self, row: int) -> None:
        """Highlight `row` without emitting `photoSelected`."""
        if 0 <= row < self.count():
            self.setCurrentRow(row)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        photo = item.data(PHOTO_ROLE)
        if photo is not None:
            self.photoSelected.emit(photo)
