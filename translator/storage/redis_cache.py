"""Redis cache for sharing translations across workers."""

from __future__ import annotations

import logging
from typing import Any

import redis.asyncio as redis_asyncio
from redis.exceptions import RedisError

from translator.storage.base import CacheStorage, DEFAULT_TTL_SECONDS, Ttl, ttl_seconds

logger = logging.getLogger(__name__)

KEY_PREFIX = "translation:"


class RedisCacheStorage(CacheStorage):
    """
    Distributed cache backed by Redis.

    Values are stored as strings. Connection problems are logged and
    treated as a miss (``get``) or a no-op (``set``).
    """

    def __init__(
        self,
        client: redis_asyncio.Redis,
        default_ttl: Ttl = DEFAULT_TTL_SECONDS,
        prefix: str = KEY_PREFIX,
    ):
        self._client = client
        self.default_ttl = ttl_seconds(default_ttl, DEFAULT_TTL_SECONDS)
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisCacheStorage":
        client = redis_asyncio.from_url(url, decode_responses=True)
        return cls(client, **kwargs)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def set(self, key: str, value: Any, ttl: Ttl | None = None) -> None:
        millis = int(ttl_seconds(ttl, self.default_ttl) * 1000)
        try:
            if millis > 0:
                await self._client.set(self._key(key), value, px=millis)
            else:
                await self._client.set(self._key(key), value)
        except (RedisError, OSError) as e:
            logger.error("Redis set error for key %r: %s", key, e)

    async def get(self, key: str) -> Any | None:
        try:
            return await self._client.get(self._key(key))
        except (RedisError, OSError) as e:
            logger.error("Redis get error for key %r: %s", key, e)
            return None

    async def delete(self, key: str) -> bool:
        try:
            return await self._client.delete(self._key(key)) > 0
        except (RedisError, OSError) as e:
            logger.error("Redis delete error for key %r: %s", key, e)
            return False

    async def exists(self, key: str) -> bool:
        try:
            return await self._client.exists(self._key(key)) > 0
        except (RedisError, OSError) as e:
            logger.error("Redis exists error for key %r: %s", key, e)
            return False

    async def close(self) -> None:
        await self._client.aclose()
