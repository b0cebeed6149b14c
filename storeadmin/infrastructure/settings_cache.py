"""Time-boxed cache for site and store settings."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0


class SettingsCache:
    """Keep loaded settings for ``ttl_seconds`` per key.

    Instances are created by the application factory and handed to request
    handlers through a dependency. ``clock`` must be monotonic; tests pass a
    fake one to move time forward. There is no locking: two concurrent misses
    both load and both store the same value.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the fresh value stored under ``key`` or ``default``."""

        entry = self._entries.get(key)
        if entry is None:
            return default
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            return default
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def get_or_load(self, key: str, loader: Callable[[], T | None]) -> T | None:
        """Return the cached value or call ``loader`` and cache a non-``None`` result."""

        missing = object()
        cached = self.get(key, missing)
        if cached is not missing:
            return cached

        logger.debug("Settings cache miss for %s", key)
        value = loader()
        if value is not None:
            self.set(key, value)
        return value

    def clear(self, key: str | None = None) -> None:
        """Drop ``key`` or, when omitted, every cached entry."""

        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        missing = object()
        return self.get(key, missing) is not missing


__all__ = ["DEFAULT_TTL_SECONDS", "SettingsCache"]
