"""Bounded in-memory image cache with least-recently-used eviction."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable
from typing import Any

from loguru import logger

DEFAULT_CAPACITY = 5


class ImageCache:
    """Key -> decoded image store holding at most `capacity` entries.

    Both `get` hits and `put` mark a key most-recently-used. The entry at
    the front of the underlying `OrderedDict` is the next to be evicted.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if int(capacity) < 1:
            raise ValueError(f"cache capacity must be >= 1, got {capacity}")
        self._cap = int(capacity)
        self._data: OrderedDict[Hashable, Any] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._cap

    def get(self, key: Hashable) -> Any | None:
        """Return cached image for key, moving it to the MRU position."""
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        return self._data[key]

    def put(self, key: Hashable, image: Any) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = image
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("Image cache evicted {}", evicted)

    def keys(self) -> list[Hashable]:
        """Resident keys, least-recently-used first. Does not touch recency."""
        return list(self._data.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
