"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from core.cache import DEFAULT_CAPACITY
from core.services.swap_coordinator import SwapConfig
from core.services.transitions import DEFAULT_ENTER_MS, DEFAULT_EXIT_MS

DEFAULT_PANEL_MS = 250


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


class EmptySettings:
    """Stand-in used when no settings.json exists; every key is absent."""

    def get(self, key: str, default: Any | None = None) -> Any:  # pylint: disable=unused-argument
        return default


def _positive_int(settings: Any, key: str, default: int) -> int:
    try:
        value = int(settings.get(key, default) or default)
    except (ValueError, TypeError):
        logger.warning("Invalid {} in settings, using {}", key, default)
        return default
    if value < 1:
        logger.warning("{} must be positive, using {}", key, default)
        return default
    return value


@dataclass
class AlbumSettings:
    """Typed view over the album settings with defaults applied."""

    cache_capacity: int = DEFAULT_CAPACITY
    enter_ms: int = DEFAULT_ENTER_MS
    exit_ms: int = DEFAULT_EXIT_MS
    panel_ms: int = DEFAULT_PANEL_MS
    swap: SwapConfig | None = None
    catalog_csv: Path | None = None
    resource_dir: Path = Path("resources")
    log_dir: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_settings(cls, settings: Any, base_dir: Path | None = None) -> AlbumSettings:
        """Read typed values from a `JsonSettings`-like object.

        Relative paths are resolved against `base_dir` when given.
        """

        def _path(raw: Any) -> Path | None:
            if not isinstance(raw, str) or not raw.strip():
                return None
            p = Path(os.path.expandvars(os.path.expanduser(raw)))
            if base_dir is not None and not p.is_absolute():
                p = base_dir / p
            return p

        resource_dir = _path(settings.get("catalog.resource_dir", "resources"))
        log_dir = settings.get("logging.dir")
        return cls(
            cache_capacity=_positive_int(settings, "cache.capacity", DEFAULT_CAPACITY),
            enter_ms=_positive_int(settings, "transitions.enter_ms", DEFAULT_ENTER_MS),
            exit_ms=_positive_int(settings, "transitions.exit_ms", DEFAULT_EXIT_MS),
            panel_ms=_positive_int(settings, "panel.toggle_ms", DEFAULT_PANEL_MS),
            swap=SwapConfig.from_settings(settings),
            catalog_csv=_path(settings.get("catalog.csv_path")),
            resource_dir=resource_dir or Path("resources"),
            log_dir=os.path.expandvars(log_dir) if isinstance(log_dir, str) and log_dir else None,
            log_level=str(settings.get("logging.level", "INFO") or "INFO").upper(),
        )


def load_settings(settings_path: str | Path) -> AlbumSettings:
    """Load `settings_path` if present, otherwise return defaults."""
    path = Path(settings_path)
    raw: Any = JsonSettings(path) if path.exists() else EmptySettings()
    return AlbumSettings.from_settings(raw, base_dir=path.parent)
