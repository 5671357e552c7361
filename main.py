from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox
from loguru import logger

from app.views.main_window import AlbumWindow
from core.errors import AlbumError
from infrastructure.catalog import CsvPhotoCatalog, DemoPhotoCatalog
from infrastructure.demo_resources import ensure_demo_resources
from infrastructure.image_service import ImageDecoder, ThumbnailLoader
from infrastructure.logging import init_logging
from infrastructure.marker import QtMarkerRenderer
from infrastructure.settings import load_settings

BASE_DIR = Path(__file__).parent


def main() -> int:
    settings = load_settings(BASE_DIR / "settings.json")
    log_dir = init_logging(settings.log_dir, settings.log_level)
    logger.info("Logging to {}", log_dir)

    app = QApplication(sys.argv)

    if settings.catalog_csv is not None:
        catalog = CsvPhotoCatalog(settings.catalog_csv)
    else:
        catalog = DemoPhotoCatalog()
        ensure_demo_resources(settings.resource_dir, catalog.load_all())

    win = AlbumWindow(
        catalog=catalog,
        decoder=ImageDecoder(settings.resource_dir),
        marker_renderer=QtMarkerRenderer(),
        thumbnails=ThumbnailLoader(settings.resource_dir),
        settings=settings,
    )
    try:
        win.start()
    except AlbumError as ex:
        logger.exception("Album failed to start: {}", ex)
        QMessageBox.critical(None, "Photo Album", f"Cannot open the album:\n{ex}")
        return 1

    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
