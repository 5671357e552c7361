from __future__ import annotations

from PySide6.QtWidgets import QFormLayout, QLabel, QWidget

from app.viewmodels.photo_vm import PhotoVM
from core.models import Photo


class PhotoInfoPanel(QWidget):
    """Card showing the name and camera settings of the current photo."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        form = QFormLayout(self)
        form.setContentsMargins(8, 4, 8, 4)
        self.name_label = QLabel()
        self.name_label.setStyleSheet("font-weight: bold;")
        self.camera_label = QLabel()
        self.exposure_label = QLabel()
        self.aperture_label = QLabel()
        self.focal_label = QLabel()
        self.iso_label = QLabel()
        self.location_label = QLabel()
        form.addRow(self.name_label)
        form.addRow("Camera", self.camera_label)
        form.addRow("Exposure", self.exposure_label)
        form.addRow("Aperture", self.aperture_label)
        form.addRow("Focal length", self.focal_label)
        form.addRow("Sensitivity", self.iso_label)
        form.addRow("Location", self.location_label)

    def bind_photo(self, photo: Photo) -> None:
        vm = PhotoVM(photo)
        self.name_label.setText(vm.name)
        self.camera_label.setText(vm.camera)
        self.exposure_label.setText(vm.exposure_text)
        self.aperture_label.setText(vm.aperture_text)
        self.focal_label.setText(vm.focal_text)
        self.iso_label.setText(vm.iso_text)
        self.location_label.setText(vm.location_text)
