"""Location view: a lat/lon grid centered on the photo with a marker overlay."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QWidget

from app.views.constants import (
    LOCATION_DOT_RADIUS_PX,
    LOCATION_GRID_STEP_DEG,
    LOCATION_MIN_HEIGHT_PX,
    LOCATION_SPAN_DEG,
)
from core.models import GEO_SCALE


class LocationWidget(QWidget):
    """Equirectangular view around a center coordinate.

    Implements the `LocationView` protocol. Coordinates are micro-degrees.
    The marker is anchored at its bottom-center (the arrow tip).
    """

    def __init__(self, parent: QWidget | None = None, span_deg: float = LOCATION_SPAN_DEG) -> None:
        super().__init__(parent)
        self.setMinimumHeight(LOCATION_MIN_HEIGHT_PX)
        self._span = float(span_deg)
        self.center: tuple[int, int] = (0, 0)
        self.overlay: tuple[Any, int, int] | None = None

    def set_center(self, latitude: int, longitude: int) -> None:
        self.center = (int(latitude), int(longitude))
        self.update()

    def set_overlay(self, marker: Any, latitude: int, longitude: int) -> None:
        # A single overlay; a new binding replaces the previous one
        self.overlay = (marker, int(latitude), int(longitude))
        self.update()

    def to_widget(self, latitude: int, longitude: int) -> QPointF:
        """Map micro-degree coordinates to widget pixels."""
        scale = self.width() / self._span if self._span > 0 else 1.0
        c_lat, c_lon = self.center
        dx = (longitude - c_lon) / GEO_SCALE * scale
        dy = (c_lat - latitude) / GEO_SCALE * scale
        return QPointF(self.width() / 2 + dx, self.height() / 2 + dy)

    def paintEvent(self, event) -> None:  # noqa: N802 - Qt naming
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.fillRect(self.rect(), QColor(28, 44, 60))
            self._paint_grid(painter)
            self._paint_overlay(painter)
            painter.setPen(QColor(Qt.white))
            lat, lon = self.center
            painter.drawText(
                QRectF(4, 0, self.width() - 8, self.height() - 4),
                Qt.AlignBottom | Qt.AlignLeft,
                f"{lat / GEO_SCALE:.6f}, {lon / GEO_SCALE:.6f}",
            )
        finally:
            painter.end()

    def _paint_grid(self, painter: QPainter) -> None:
        pen = QPen(QColor(70, 95, 120))
        pen.setWidthF(1.0)
        painter.setPen(pen)
        step = int(LOCATION_GRID_STEP_DEG * GEO_SCALE)
        c_lat, c_lon = self.center
        half = int(self._span * GEO_SCALE)
        for lon in range((c_lon - half) // step * step, c_lon + half + step, step):
            x = self.to_widget(c_lat, lon).x()
            painter.drawLine(QPointF(x, 0), QPointF(x, self.height()))
        for lat in range((c_lat - half) // step * step, c_lat + half + step, step):
            y = self.to_widget(lat, c_lon).y()
            painter.drawLine(QPointF(0, y), QPointF(self.width(), y))

    def _paint_overlay(self, painter: QPainter) -> None:
        if self.overlay is None:
            return
        marker, lat, lon = self.overlay
        anchor = self.to_widget(lat, lon)
        if isinstance(marker, QImage) and not marker.isNull():
            painter.drawImage(
                QPointF(anchor.x() - marker.width() / 2, anchor.y() - marker.height()), marker
            )
        elif isinstance(marker, QPixmap) and not marker.isNull():
            painter.drawPixmap(
                QPointF(anchor.x() - marker.width() / 2, anchor.y() - marker.height()), marker
            )
        else:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(Qt.white))
            painter.drawEllipse(anchor, LOCATION_DOT_RADIUS_PX, LOCATION_DOT_RADIUS_PX)
