"""Placeholder artwork for the bundled demo album.

The demo catalog ships without photo files; this renders one gradient
image per photo (plus its thumbnail) into the resource directory so the
album can be browsed out of the box.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QImage, QLinearGradient, QPainter
from loguru import logger

from core.models import Photo

FULL_SIZE = (1024, 683)
THUMB_SIZE = (160, 107)


def _render(photo: Photo, width: int, height: int) -> QImage:
    img = QImage(width, height, QImage.Format_RGB32)
    hue = (photo.image_id * 37) % 360
    gradient = QLinearGradient(QPointF(0, 0), QPointF(width, height))
    gradient.setColorAt(0.0, QColor.fromHsv(hue, 160, 230))
    gradient.setColorAt(1.0, QColor.fromHsv((hue + 60) % 360, 200, 90))

    painter = QPainter(img)
    try:
        painter.fillRect(QRectF(0, 0, width, height), gradient)
        painter.setPen(QColor(Qt.white))
        font = QFont()
        font.setPixelSize(max(10, height // 10))
        painter.setFont(font)
        painter.drawText(QRectF(0, 0, width, height), Qt.AlignCenter, photo.name)
    finally:
        painter.end()
    return img


def ensure_demo_resources(resource_dir: str | Path, photos: list[Photo]) -> int:
    """Create missing `<id>.png` files for every photo and thumbnail.

    Returns the number of files written.
    """
    out = Path(resource_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = 0
    for photo in photos:
        for image_id, (w, h) in ((photo.image_id, FULL_SIZE), (photo.thumbnail_id, THUMB_SIZE)):
            target = out / f"{image_id}.png"
            if target.exists():
                continue
            if not _render(photo, w, h).save(str(target), "PNG"):
                logger.error("Failed to write demo resource {}", target)
                continue
            written += 1
    if written:
        logger.info("Generated {} demo resources in {}", written, out)
    return written
