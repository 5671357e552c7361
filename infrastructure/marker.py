"""Location marker rendering from photo thumbnails."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath, QPen

FRAME_WIDTH = 2.0
ARROW_RATIO = 5.0


class QtMarkerRenderer:
    """Draw a framed half-size thumbnail with a pointing arrow below it.

    Pure function of the thumbnail; works on `QImage` so it may run on a
    worker thread. Non-`QImage` input is returned unchanged.
    """

    def make_marker(self, thumbnail: Any) -> Any:
        if not isinstance(thumbnail, QImage) or thumbnail.isNull():
            return thumbnail

        width = thumbnail.width() // 2
        height = thumbnail.height() // 2
        arrow = width / ARROW_RATIO

        marker = QImage(width + 2, int(height + 2 + arrow), QImage.Format_ARGB32_Premultiplied)
        marker.fill(Qt.transparent)

        painter = QPainter(marker)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.translate(1.0, 1.0)

            painter.save()
            painter.scale(0.5, 0.5)
            painter.drawImage(QPointF(0.0, 0.0), thumbnail)
            painter.restore()

            pen = QPen(QColor(Qt.white))
            pen.setWidthF(FRAME_WIDTH)
            painter.setPen(pen)
            painter.setBrush(Qt.NoBrush)
            painter.drawRect(QRectF(0.0, 0.0, width, height))

            path = QPainterPath()
            path.moveTo((width - arrow) * 0.5, height)
            path.lineTo((width + arrow) * 0.5, height)
            path.lineTo(width * 0.5, height + arrow)
            path.closeSubpath()
            painter.fillPath(path, QColor(Qt.white))
        finally:
            painter.end()
        return marker
