"""Shared fixtures built on the in-memory fakes in `tests/fakes.py`."""

from __future__ import annotations

import os
from typing import Any

import pytest

from core.cache import ImageCache
from core.models import Photo
from core.services.swap_coordinator import SwapConfig, SwapCoordinator
from core.services.transitions import TransitionController
from core.services.workers import ImmediateWorker
from infrastructure.catalog import DemoPhotoCatalog
from tests.fakes import (
    FakeDecoder,
    FakeMarkerRenderer,
    FakeThumbnailSource,
    Harness,
    ListCatalog,
    ManualAnimationDriver,
    RecordingInfoView,
    RecordingLocationView,
    RecordingStackView,
)

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def photos() -> list[Photo]:
    """The ten demo photos, image ids 1..10."""
    return DemoPhotoCatalog().load_all()


@pytest.fixture
def make_harness(photos: list[Photo]):
    """Build a coordinator wired to fakes; keyword args override the defaults."""

    def _make(
        *,
        worker: Any | None = None,
        driver: Any | None = None,
        decoder: FakeDecoder | None = None,
        thumbnails: FakeThumbnailSource | None = None,
        capacity: int = 5,
        config: SwapConfig | None = None,
    ) -> Harness:
        decoder = decoder or FakeDecoder()
        thumbnails = thumbnails or FakeThumbnailSource()
        worker = worker if worker is not None else ImmediateWorker()
        driver = driver if driver is not None else ManualAnimationDriver()
        stack_view = RecordingStackView()
        location = RecordingLocationView()
        info = RecordingInfoView()
        coordinator = SwapCoordinator(
            cache=ImageCache(capacity),
            decoder=decoder,
            worker=worker,
            transitions=TransitionController(driver),
            stack_view=stack_view,
            location_view=location,
            marker_renderer=FakeMarkerRenderer(),
            thumbnails=thumbnails,
            info_view=info,
            config=config,
        )
        return Harness(
            coordinator=coordinator,
            decoder=decoder,
            thumbnails=thumbnails,
            worker=worker,
            driver=driver,
            stack_view=stack_view,
            location=location,
            info=info,
            photos=photos,
            catalog=ListCatalog(photos),
        )

    return _make
