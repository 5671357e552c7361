"""Full-image and thumbnail decoding for album resources.

Images are addressed by integer ids. An id resolves to a file either via an
explicit id -> path map or by looking for `<id>.<ext>` in a resource
directory. Decoding uses Qt's `QImageReader`, with Pillow as a fallback for
formats Qt cannot read (HEIF when pillow-heif is installed).
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QImageReader
from loguru import logger

from core.errors import DecodeFailure
from core.models import Photo

# Optional Pillow and HEIF support (top-level to satisfy linting)
try:  # pragma: no cover - import availability
    from PIL import Image, ImageOps  # type: ignore

    PIL_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    PIL_AVAILABLE = False
    Image = None  # type: ignore
    ImageOps = None  # type: ignore

try:  # pragma: no cover - optional dependency
    from pillow_heif import register_heif_opener  # type: ignore

    register_heif_opener()
    PIL_HEIF_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    PIL_HEIF_AVAILABLE = False

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".bmp", ".heic", ".heif")
THUMBNAIL_MAX_SIDE = 160


class ImageDecoder:
    """Decode album images by id into `QImage`.

    Safe to call from a worker thread: it only creates `QImage` objects and
    keeps no mutable state beyond the read-only path map.
    """

    def __init__(
        self,
        resource_dir: str | Path | None = None,
        paths: Mapping[int, str | Path] | None = None,
    ) -> None:
        self._resource_dir = Path(resource_dir) if resource_dir is not None else None
        self._paths = {int(k): Path(v) for k, v in (paths or {}).items()}
        self._pillow_available = bool(PIL_AVAILABLE)

    def resolve(self, image_id: int) -> Path | None:
        """Return the file backing `image_id`, or None when it cannot be found."""
        path = self._paths.get(int(image_id))
        if path is not None:
            return path if path.exists() else None
        if self._resource_dir is None:
            return None
        for ext in IMAGE_EXTENSIONS:
            candidate = self._resource_dir / f"{int(image_id)}{ext}"
            if candidate.exists():
                return candidate
        return None

    def decode(self, image_id: int) -> QImage:
        """Decode `image_id`; raise `DecodeFailure` when no usable image results."""
        path = self.resolve(image_id)
        if path is None:
            raise DecodeFailure(image_id, "no resource found")

        img = self._load_via_qt(path)
        if img is None and self._pillow_available:
            img = self._load_via_pillow(path)
        if img is None or img.isNull():
            raise DecodeFailure(image_id, f"cannot decode {path.name}")
        logger.debug("Decoded image {} from {} ({}x{})", image_id, path, img.width(), img.height())
        return img

    def _load_via_qt(self, path: Path) -> QImage | None:
        reader = QImageReader(str(path))
        reader.setAutoTransform(True)
        img = reader.read()
        if img is None or img.isNull():
            logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
            return None
        return img

    def _load_via_pillow(self, path: Path) -> QImage | None:
        """Load image with Pillow (HEIF supported if pillow-heif is registered)."""
        try:
            assert Image is not None and ImageOps is not None  # for type checkers
            with Image.open(path) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                return _pil_to_qimage(im)
        except (OSError, ValueError) as ex:
            logger.debug("Pillow load failed for {}: {}", path, ex)
            return None


class ThumbnailLoader:
    """Load the per-photo thumbnails used for location markers.

    Thumbnails live next to the full images under their own ids and are
    bounded to `max_side` pixels.
    """

    def __init__(
        self,
        resource_dir: str | Path | None = None,
        paths: Mapping[int, str | Path] | None = None,
        max_side: int = THUMBNAIL_MAX_SIDE,
    ) -> None:
        self._decoder = ImageDecoder(resource_dir, paths)
        self._max_side = int(max_side)

    def load_thumbnail(self, photo: Photo) -> QImage:
        """Decode the thumbnail of `photo`; raise `DecodeFailure` on failure."""
        img = self._decoder.decode(photo.thumbnail_id)
        if self._max_side > 0 and max(img.width(), img.height()) > self._max_side:
            img = img.scaled(
                self._max_side, self._max_side, Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
        return img


def _pil_to_qimage(pil_img: Any) -> QImage | None:
    """Convert a Pillow image to `QImage` and detach from the source buffer."""
    mode = pil_img.mode
    if mode not in ("RGBA", "RGB"):
        pil_img = pil_img.convert("RGBA")
        mode = pil_img.mode
    if mode == "RGB":
        data = pil_img.tobytes("raw", "RGB")
        qimg = QImage(data, pil_img.width, pil_img.height, pil_img.width * 3, QImage.Format_RGB888)
    else:
        data = pil_img.tobytes("raw", "RGBA")
        qimg = QImage(
            data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888
        )
    if qimg.isNull():
        return None
    return qimg.copy()
