"""Photo catalogs: CSV-backed album files and the bundled demo album.

CSV layout (extra columns are ignored):

    ImageId,ThumbnailId,Name,Camera,Exposure,Aperture,Focal,ISO,Latitude,Longitude

Latitude/Longitude are integer micro-degrees (degrees x 1e6).
"""

from __future__ import annotations

import csv
from pathlib import Path

from loguru import logger

from core.errors import CatalogError
from core.models import Photo

CSV_HEADERS = [
    "ImageId",
    "ThumbnailId",
    "Name",
    "Camera",
    "Exposure",
    "Aperture",
    "Focal",
    "ISO",
    "Latitude",
    "Longitude",
]


def _parse_int(value: str | None, field_name: str) -> int:
    """Parse a required integer column; raise ValueError naming the column."""
    s = str(value or "").strip()
    try:
        return int(s)
    except ValueError:
        raise ValueError(f"{field_name} is not an integer: {s!r}") from None


class CsvPhotoCatalog:
    """Load album photos from a CSV file. Rows are kept in file order."""

    def __init__(self, csv_path: str | Path) -> None:
        self._path = Path(csv_path)

    def load_all(self) -> list[Photo]:
        """Return every valid row as a `Photo`; malformed rows are logged and skipped."""
        if not self._path.exists():
            raise CatalogError(f"Album CSV not found: {self._path}")
        photos: list[Photo] = []
        with self._path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            missing = [h for h in CSV_HEADERS if h not in (reader.fieldnames or [])]
            if missing:
                raise CatalogError(f"CSV missing required headers: {missing}")

            for row in reader:
                try:
                    photos.append(
                        Photo(
                            image_id=_parse_int(row.get("ImageId"), "ImageId"),
                            thumbnail_id=_parse_int(row.get("ThumbnailId"), "ThumbnailId"),
                            name=(row.get("Name") or "").strip(),
                            camera=(row.get("Camera") or "").strip(),
                            exposure=(row.get("Exposure") or "").strip(),
                            aperture=(row.get("Aperture") or "").strip(),
                            focal=(row.get("Focal") or "").strip(),
                            iso=(row.get("ISO") or "").strip(),
                            latitude=_parse_int(row.get("Latitude"), "Latitude"),
                            longitude=_parse_int(row.get("Longitude"), "Longitude"),
                        )
                    )
                except ValueError as ex:
                    logger.error("CSV row error: {} | row={}", ex, row)
                    continue
        logger.info("Loaded {} photos from {}", len(photos), self._path)
        return photos


# name, camera, exposure, aperture, focal, iso, latitude, longitude
_DEMO_ALBUM = [
    ("Antelope Lights", "Canon 5D Mk II", "1.3", "10", "32", "320", 36879466, -111389393),
    ("The Photographer", "Canon 5D Mk II", "1/60", "3.5", "70", "800", 36878891, -111510672),
    ("Green Grass", "Canon 5D Mk II", "1/100", "3.2", "100", "1600", 37785372, -122402876),
    ("Electric Storm", "Canon 5D Mk II", "1/125", "2.8", "65", "3200", 35660992, 139700131),
    ("Electric Storm", "Canon 5D Mk II", "1/40", "2.8", "45", "2000", 35011228, 135765094),
    ("Fog Valley", "Canon 5D Mk II", "1/250", "8", "17", "200", 3663206, -118821945),
    ("Antelope Hallway", "Canon 5D Mk II", "2", "11", "22", "400", 36862609, -111374437),
    ("Green Highway", "Canon 5D Mk II", "1/800", "4", "70", "1250", 19809906, -155094637),
    ("Windmill Sunrise", "Canon 5D Mk II", "1/200", "8", "200", "1000", 37719218, -121657233),
    ("Sunset Hills", "Canon 5D Mk II", "1/100", "4", "98", "2000", 37322683, -122210696),
]

# Demo thumbnails live at image id + THUMBNAIL_OFFSET
THUMBNAIL_OFFSET = 100


class DemoPhotoCatalog:
    """The ten-photo sample album. Image ids are 1..10."""

    def load_all(self) -> list[Photo]:
        return [
            Photo(
                image_id=i,
                thumbnail_id=i + THUMBNAIL_OFFSET,
                name=name,
                camera=camera,
                exposure=exposure,
                aperture=aperture,
                focal=focal,
                iso=iso,
                latitude=lat,
                longitude=lon,
            )
            for i, (name, camera, exposure, aperture, focal, iso, lat, lon) in enumerate(
                _DEMO_ALBUM, start=1
            )
        ]
