"""
Local storage implementation for development and single-process deployments.

Works without any external services.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from translator.storage.base import CacheStorage, DEFAULT_TTL_SECONDS, Ttl, ttl_seconds

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


# =============================================================================
# In-Memory Cache Storage
# =============================================================================


class InMemoryCacheStorage(CacheStorage):
    """
    In-memory cache with per-entry expiry.

    Entries expire lazily on read. Writes also sweep out every expired
    entry, at most once per ``sweep_interval`` seconds. When
    ``max_entries`` is set, the oldest entry is evicted once the cap is
    exceeded.
    """

    def __init__(
        self,
        default_ttl: Ttl = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
        sweep_interval: float = 60.0,
    ):
        self.default_ttl = ttl_seconds(default_ttl, DEFAULT_TTL_SECONDS)
        self.max_entries = max_entries
        self._clock = clock
        self.sweep_interval = sweep_interval
        self._cache: dict[str, CacheEntry] = {}
        self._next_sweep = clock() + sweep_interval

    def __len__(self) -> int:
        return len(self._cache)

    async def set(self, key: str, value: Any, ttl: Ttl | None = None) -> None:
        try:
            now = self._clock()
            self._sweep(now)
            seconds = ttl_seconds(ttl, self.default_ttl)
            expires_at = now + seconds if seconds > 0 else None
            self._cache.pop(key, None)
            self._cache[key] = CacheEntry(value, expires_at)
            self._evict()
        except Exception:
            logger.error("Failed to store cache value for key: %s", key, exc_info=True)

    async def get(self, key: str) -> Any | None:
        try:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                self._cache.pop(key, None)
                return None

            return entry.value
        except Exception:
            logger.error("Failed to read cache value for key: %s", key, exc_info=True)
            return None

    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._cache.clear()

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        self._next_sweep = now + self.sweep_interval
        expired = [key for key, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired:
            del self._cache[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))

    def _evict(self) -> None:
        if self.max_entries is None:
            return
        while len(self._cache) > self.max_entries:
            oldest = next(iter(self._cache))
            del self._cache[oldest]
