"""Photo stack widget and the Qt animation driver for stack transitions."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QEasingCurve, QPoint, QPropertyAnimation, QSize, Qt, Signal
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QLabel, QWidget
from loguru import logger

from app.views.constants import STACK_BACKGROUND
from core.models import StackEntry
from core.services.transitions import ENTER


class PhotoStackWidget(QWidget):
    """Overlapping photo views; the most recently added one is on top.

    Implements the `StackView` protocol. Clicking anywhere emits `clicked`.
    """

    clicked = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet(f"background-color: {STACK_BACKGROUND};")
        self._labels: list[QLabel] = []

    # StackView
    def clear(self) -> None:
        for label in self._labels:
            label.hide()
            label.deleteLater()
        self._labels = []

    def add_entry(self, entry: StackEntry) -> None:
        label = QLabel(self)
        label.setAlignment(Qt.AlignCenter)
        label.setStyleSheet("background: transparent;")
        label.setScaledContents(True)
        pixmap = _to_pixmap(entry.image)
        if pixmap is not None:
            label.setPixmap(pixmap)
        label.setProperty("photo_name", entry.photo.name)
        label.resize(self._fitted_size(label))
        label.move(self.rest_position(label))
        label.show()
        label.raise_()
        entry.view = label
        self._labels.append(label)

    def remove_entry(self, entry: StackEntry) -> None:
        label = entry.view
        entry.view = None
        if label is None:
            return
        if label in self._labels:
            self._labels.remove(label)
        label.hide()
        label.deleteLater()

    # Geometry
    @property
    def labels(self) -> list[QLabel]:
        """Labels bottom to top."""
        return list(self._labels)

    def rest_position(self, label: QLabel) -> QPoint:
        """Top-left position that centers `label` in the widget."""
        return QPoint(
            max(0, (self.width() - label.width()) // 2),
            max(0, (self.height() - label.height()) // 2),
        )

    def _fitted_size(self, label: QLabel) -> QSize:
        pm = label.pixmap()
        if pm is None or pm.isNull() or self.width() <= 0 or self.height() <= 0:
            return label.sizeHint()
        return pm.size().scaled(self.size(), Qt.KeepAspectRatio).boundedTo(pm.size())

    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt naming
        super().resizeEvent(event)
        for label in self._labels:
            label.resize(self._fitted_size(label))
            label.move(self.rest_position(label))

    def mousePressEvent(self, event) -> None:  # noqa: N802 - Qt naming
        self.clicked.emit()
        super().mousePressEvent(event)


def _to_pixmap(image: object) -> QPixmap | None:
    if isinstance(image, QPixmap):
        return image
    if isinstance(image, QImage) and not image.isNull():
        return QPixmap.fromImage(image)
    return None


class QtAnimationDriver:
    """Slide stack labels horizontally with `QPropertyAnimation`.

    Enter slides from the panel edge to the rest position; exit slides to
    twice the panel width. Implements the `AnimationDriver` protocol.
    """

    def __init__(self, stack: PhotoStackWidget, panel_width: Callable[[], int]) -> None:
        self._stack = stack
        self._panel_width = panel_width
        self._running: set[QPropertyAnimation] = set()

    def start(
        self, entry: StackEntry, kind: str, duration_ms: int, on_finished: Callable[[], None]
    ) -> QPropertyAnimation | None:
        label = entry.view
        if label is None:
            logger.debug("No view for {}, finishing {} immediately", entry.photo.name, kind)
            on_finished()
            return None

        rest = self._stack.rest_position(label)
        anim = QPropertyAnimation(label, b"pos")
        anim.setDuration(int(duration_ms))
        if kind == ENTER:
            anim.setStartValue(QPoint(rest.x() + self._panel_width() - label.width(), rest.y()))
            anim.setEndValue(rest)
            anim.setEasingCurve(QEasingCurve.OutCubic)
        else:
            anim.setStartValue(label.pos())
            anim.setEndValue(QPoint(rest.x() + self._panel_width() * 2, rest.y()))
            anim.setEasingCurve(QEasingCurve.InCubic)

        def _done() -> None:
            self._running.discard(anim)
            on_finished()

        anim.finished.connect(_done)
        self._running.add(anim)
        anim.start()
        return anim

    def stop(self, token: QPropertyAnimation | None) -> None:
        if token is None:
            return
        self._running.discard(token)
        # stop() does not emit finished
        token.stop()

    @property
    def running_count(self) -> int:
        return len(self._running)
