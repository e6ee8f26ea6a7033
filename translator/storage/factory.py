"""Pick a cache implementation from settings."""

from __future__ import annotations

import logging

from translator.config import Settings
from translator.storage.base import CacheStorage
from translator.storage.local import InMemoryCacheStorage

logger = logging.getLogger(__name__)


def create_cache_storage(settings: Settings) -> CacheStorage:
    """
    Create the cache storage for this process.

    Uses Redis when ``REDIS_URL`` is set, otherwise an in-memory store.
    """
    ttl = settings.translation_cache_ttl

    if settings.use_redis:
        from translator.storage.redis_cache import RedisCacheStorage

        logger.info("Using Redis translation cache")
        return RedisCacheStorage.from_url(settings.redis_url, default_ttl=ttl)

    logger.info("Using in-memory translation cache")
    return InMemoryCacheStorage(default_ttl=ttl, max_entries=settings.cache_max_entries)
