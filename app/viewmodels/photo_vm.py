"""Lightweight view model wrapper around `Photo`."""

from __future__ import annotations

from dataclasses import dataclass

from app.views.constants import APERTURE_FORMAT, EXPOSURE_FORMAT, FOCAL_FORMAT, ISO_FORMAT
from core.models import Photo


def _fmt(template: str, value: str) -> str:
    return template.format(value) if value else ""


@dataclass
class PhotoVM:
    """Expose display strings for bindings."""

    photo: Photo

    @property
    def name(self) -> str:
        return self.photo.name

    @property
    def camera(self) -> str:
        return self.photo.camera

    @property
    def exposure_text(self) -> str:
        """Exposure time, e.g. "1/60 sec"."""
        return _fmt(EXPOSURE_FORMAT, self.photo.exposure)

    @property
    def aperture_text(self) -> str:
        return _fmt(APERTURE_FORMAT, self.photo.aperture)

    @property
    def focal_text(self) -> str:
        return _fmt(FOCAL_FORMAT, self.photo.focal)

    @property
    def iso_text(self) -> str:
        return _fmt(ISO_FORMAT, self.photo.iso)

    @property
    def location_text(self) -> str:
        """Latitude/longitude in decimal degrees with six places."""
        return f"{self.photo.latitude_deg:.6f}, {self.photo.longitude_deg:.6f}"

    @property
    def list_text(self) -> str:
        """Two-line label used by the album list."""
        details = " · ".join(t for t in (self.exposure_text, self.aperture_text) if t)
        return f"{self.name}\n{details}" if details else self.name
