"""
Cache storage abstraction.

All cached translations go through this interface. This allows swapping
implementations (in-process dict → Redis) without changing the
orchestration code.

Contract:
- ``get`` returns ``None`` for a missing or expired key.
- ``set`` without a ``ttl`` applies the store's ``default_ttl``.
- Ordinary store-level failures are absorbed: ``get`` answers ``None``
  and ``set`` silently does nothing.
- Concurrent writers to the same key are not serialized; last write wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any


DEFAULT_TTL_SECONDS = 24 * 60 * 60

Ttl = int | float | timedelta


def ttl_seconds(ttl: Ttl | None, default: float) -> float:
    """Resolve an optional TTL to a number of seconds."""
    if ttl is None:
        return default
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class CacheStorage(ABC):
    """
    Fast key-value cache for translations.

    Shared Implementation: Redis
    Local Implementation: In-memory dict
    """

    default_ttl: float = DEFAULT_TTL_SECONDS

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Ttl | None = None) -> None:
        """Set a value with optional TTL (seconds or timedelta)."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key."""
        pass

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        return await self.get(key) is not None

    async def close(self) -> None:
        """Release any connections held by the store."""
        pass
