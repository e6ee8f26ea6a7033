"""
Storage abstractions.

Integration Points:
- CacheStorage → in-process dict (development, single worker)
- CacheStorage → Redis (shared across workers)
"""

from translator.storage.base import CacheStorage, DEFAULT_TTL_SECONDS
from translator.storage.local import InMemoryCacheStorage, CacheEntry
from translator.storage.factory import create_cache_storage

__all__ = [
    "CacheStorage",
    "DEFAULT_TTL_SECONDS",
    "InMemoryCacheStorage",
    "CacheEntry",
    "create_cache_storage",
]
