"""Photo stack coordinator: selection, cached decoding and swap commits.

The coordinator is the only owner of the image cache and of the stack of
visible entries. Everything here runs on the interactive thread except the
job handed to the decode worker, whose result comes back through the
worker's `on_done` callback before it touches the cache.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
import itertools
from typing import Any

from loguru import logger

from core.cache import ImageCache
from core.errors import CatalogError, DecodeFailure
from core.models import EntryState, PendingSwap, Photo, StackEntry
from core.services.interfaces import (
    Decoder,
    DecodeWorker,
    LocationView,
    MarkerRenderer,
    PhotoCatalog,
    PhotoInfoView,
    StackView,
    ThumbnailSource,
)
from core.services.transitions import TransitionController

STALE_APPLY = "apply"
STALE_DISCARD = "discard"
FAILURE_DROP = "drop"
FAILURE_REPORT = "report"

FailureListener = Callable[[Photo, DecodeFailure], None]


@dataclass
class SwapConfig:
    """Policies for superseded and failed swaps.

    Attributes:
        stale_policy: "discard" skips pushing results superseded by a newer
            selection; "apply" pushes every completed swap.
        failure_policy: "drop" only logs a failed mid-session decode;
            "report" also notifies failure listeners.
    """

    stale_policy: str = STALE_DISCARD
    failure_policy: str = FAILURE_DROP

    def __post_init__(self) -> None:
        if self.stale_policy not in (STALE_APPLY, STALE_DISCARD):
            raise ValueError(f"Unknown stale policy: {self.stale_policy}")
        if self.failure_policy not in (FAILURE_DROP, FAILURE_REPORT):
            raise ValueError(f"Unknown failure policy: {self.failure_policy}")

    @classmethod
    def from_settings(cls, settings: Any) -> SwapConfig:
        """Build from an object exposing dotted `get(key, default)`."""
        stale = str(settings.get("swap.stale_policy", STALE_DISCARD) or STALE_DISCARD).lower()
        if stale not in (STALE_APPLY, STALE_DISCARD):
            logger.warning("Invalid swap.stale_policy {!r}, using {}", stale, STALE_DISCARD)
            stale = STALE_DISCARD
        failure = str(settings.get("swap.failure_policy", FAILURE_DROP) or FAILURE_DROP).lower()
        if failure not in (FAILURE_DROP, FAILURE_REPORT):
            logger.warning("Invalid swap.failure_policy {!r}, using {}", failure, FAILURE_DROP)
            failure = FAILURE_DROP
        return cls(stale_policy=stale, failure_policy=failure)


def _is_usable(image: Any) -> bool:
    if image is None:
        return False
    is_null = getattr(image, "isNull", None)
    return not (callable(is_null) and is_null())


class SwapCoordinator:
    """Keeps the photo stack, the cache and the location view in sync."""

    def __init__(
        self,
        *,
        cache: ImageCache,
        decoder: Decoder,
        worker: DecodeWorker,
        transitions: TransitionController,
        stack_view: StackView,
        location_view: LocationView,
        marker_renderer: MarkerRenderer,
        info_view: PhotoInfoView | None = None,
        thumbnails: ThumbnailSource | None = None,
        config: SwapConfig | None = None,
    ) -> None:
        self._cache = cache
        self._decoder = decoder
        self._worker = worker
        self._transitions = transitions
        self._stack_view = stack_view
        self._location_view = location_view
        self._marker_renderer = marker_renderer
        self._info_view = info_view
        self._thumbnails = thumbnails
        self._config = config or SwapConfig()

        self.photos: list[Photo] = []
        self._stack: list[StackEntry] = []
        self._pending: deque[PendingSwap] = deque()
        self._seq = itertools.count(1)
        self._latest_seq = 0
        self._failure_listeners: list[FailureListener] = []
        # Thumbnails by image id, loaded once per album
        self._thumbnails_by_id: dict[int, Any] = {}

        transitions.on_entered = self.on_entered

    # Accessors
    @property
    def cache(self) -> ImageCache:
        return self._cache

    @property
    def config(self) -> SwapConfig:
        return self._config

    @property
    def stack(self) -> tuple[StackEntry, ...]:
        """Current entries, bottom first."""
        return tuple(self._stack)

    @property
    def top(self) -> StackEntry | None:
        return self._stack[-1] if self._stack else None

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def add_failure_listener(self, listener: FailureListener) -> None:
        """Register `listener(photo, error)` for the "report" failure policy."""
        self._failure_listeners.append(listener)

    # Public API
    def initialize(self, catalog: PhotoCatalog, first_photo: Photo | None = None) -> StackEntry:
        """Load the catalog and show `first_photo` (default: first record) alone.

        Decodes synchronously and loads every thumbnail once.
        Raises `DecodeFailure` if the image cannot be decoded and
        `CatalogError` if the catalog is empty.
        """
        photos = list(catalog.load_all())
        if not photos:
            raise CatalogError("Photo catalog is empty")
        self.photos = photos
        photo = first_photo if first_photo is not None else photos[0]

        for old in self._stack:
            self._transitions.cancel(old.transition)
            old.state = EntryState.REMOVED
        self._stack.clear()
        self._pending.clear()
        self._stack_view.clear()

        image = self._cache.get(photo.image_id)
        if image is None:
            image = self._decode(photo.image_id)
        self._cache.put(photo.image_id, image)
        self._thumbnails_by_id = {p.image_id: self._load_thumbnail(p) for p in photos}

        entry = StackEntry(photo=photo, image=image, state=EntryState.VISIBLE)
        self._stack.append(entry)
        self._stack_view.add_entry(entry)
        self._bind(photo, self._build_marker(photo))
        logger.info("Album initialized with {} photos, showing {}", len(photos), photo.name)
        return entry

    def select_photo(self, photo: Photo) -> bool:
        """Request `photo` to become the stack top.

        Returns False when `photo` already is the latest requested photo,
        True when a swap was queued.
        """
        if not self._stack:
            raise RuntimeError("initialize() must be called before select_photo()")
        latest = self._pending[-1].photo if self._pending else self._stack[-1].photo
        if photo.same_photo(latest):
            logger.debug("Ignoring repeated selection of {}", photo.name)
            return False

        swap = PendingSwap(seq=next(self._seq), photo=photo)
        self._latest_seq = swap.seq
        self._pending.append(swap)

        image = self._cache.get(photo.image_id)
        if image is not None:
            logger.debug("Cache hit for {}", photo.name)
            swap.image = image
            swap.marker = self._build_marker(photo)
            swap.done = True
            self._drain()
        else:
            logger.debug("Cache miss for {}, decoding", photo.name)
            self._worker.submit(
                lambda: self._load(photo),
                lambda result, error: self._resolved(swap, result, error),
            )
        return True

    def on_entered(self, entry: StackEntry) -> None:
        """Remove every entry covered by `entry` now that it fully entered."""
        if entry not in self._stack:
            return
        index = self._stack.index(entry)
        covered = self._stack[:index]
        for old in covered:
            self._transitions.cancel(old.transition)
            old.state = EntryState.REMOVED
            self._stack_view.remove_entry(old)
        del self._stack[:index]

    # Internal helpers
    def _decode(self, image_id: int) -> Any:
        try:
            image = self._decoder.decode(image_id)
        except DecodeFailure:
            raise
        except Exception as ex:
            raise DecodeFailure(image_id, str(ex)) from ex
        if not _is_usable(image):
            raise DecodeFailure(image_id)
        return image

    def _load_thumbnail(self, photo: Photo) -> Any | None:
        if self._thumbnails is None:
            return None
        try:
            thumbnail = self._thumbnails.load_thumbnail(photo)
        except Exception as ex:
            logger.warning("No thumbnail for {}: {}", photo.name, ex)
            return None
        if not _is_usable(thumbnail):
            logger.warning("No thumbnail for {}: empty image", photo.name)
            return None
        return thumbnail

    def _build_marker(self, photo: Photo) -> Any | None:
        thumbnail = self._thumbnails_by_id.get(photo.image_id)
        if thumbnail is None:
            return None
        return self._marker_renderer.make_marker(thumbnail)

    def _load(self, photo: Photo) -> Any:
        # Runs on the worker; must not touch the cache or the stack
        return self._decode(photo.image_id)

    def _resolved(self, swap: PendingSwap, result: Any, error: Exception | None) -> None:
        swap.done = True
        if error is not None:
            if not isinstance(error, DecodeFailure):
                error = DecodeFailure(swap.photo.image_id, str(error))
            swap.error = error
        else:
            swap.image = result
            swap.marker = self._build_marker(swap.photo)
        self._drain()

    def _drain(self) -> None:
        while self._pending and self._pending[0].done:
            self._commit(self._pending.popleft())

    def _commit(self, swap: PendingSwap) -> None:
        photo = swap.photo
        if swap.error is not None:
            self._handle_failure(photo, swap.error)
            return

        self._cache.put(photo.image_id, swap.image)

        if self._config.stale_policy == STALE_DISCARD and swap.seq != self._latest_seq:
            logger.info("Discarding stale swap for {}", photo.name)
            # Keep the visible photo most-recently-used so stale results never evict it
            top = self._stack[-1]
            self._cache.put(top.photo.image_id, top.image)
            return

        previous = self._stack[-1]
        if photo.same_photo(previous.photo):
            logger.debug("{} already on top, nothing to push", photo.name)
            return

        entry = StackEntry(photo=photo, image=swap.image)
        self._stack.append(entry)
        self._stack_view.add_entry(entry)
        self._transitions.enter(entry)

        # Don't run a second animation on an entry that is still moving
        if previous.state is not EntryState.REMOVED and not previous.is_transitioning:
            self._transitions.exit(previous)

        self._bind(photo, swap.marker)
        logger.debug("Swapped to {} (stack depth {})", photo.name, len(self._stack))

    def _handle_failure(self, photo: Photo, error: Exception) -> None:
        logger.warning("Swap to {} failed: {}", photo.name, error)
        if self._config.failure_policy != FAILURE_REPORT:
            return
        for listener in list(self._failure_listeners):
            try:
                listener(photo, error)
            except Exception:
                # Later swaps still have to drain
                logger.exception("Failure listener raised for {}", photo.name)

    def _bind(self, photo: Photo, marker: Any | None) -> None:
        if self._info_view is not None:
            self._info_view.bind_photo(photo)
        self._location_view.set_center(photo.latitude, photo.longitude)
        self._location_view.set_overlay(marker, photo.latitude, photo.longitude)
