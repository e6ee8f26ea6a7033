"""Tests for the cache storage implementations."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from translator.config import Settings
from translator.storage import InMemoryCacheStorage, create_cache_storage
from translator.storage.base import DEFAULT_TTL_SECONDS, ttl_seconds


class TestTtlSeconds:
    def test_default_when_missing(self):
        assert ttl_seconds(None, 60) == 60

    def test_timedelta(self):
        assert ttl_seconds(timedelta(minutes=2), 60) == 120

    def test_number(self):
        assert ttl_seconds(5, 60) == 5.0


# =============================================================================
# In-memory
# =============================================================================


class TestInMemoryCacheStorage:
    @pytest.mark.asyncio
    async def test_set_and_get(self):
        cache = InMemoryCacheStorage()
        await cache.set("Hello|es", "Hola")

        assert await cache.get("Hello|es") == "Hola"
        assert await cache.exists("Hello|es")

    @pytest.mark.asyncio
    async def test_missing_key(self):
        cache = InMemoryCacheStorage()

        assert await cache.get("nope") is None
        assert not await cache.exists("nope")

    @pytest.mark.asyncio
    async def test_default_ttl_is_24_hours(self, clock):
        cache = InMemoryCacheStorage(clock=clock)
        await cache.set("k", "v")

        clock.advance(DEFAULT_TTL_SECONDS - 1)
        assert await cache.get("k") == "v"

        clock.advance(1)
        assert await cache.get("k") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_explicit_ttl(self, clock):
        cache = InMemoryCacheStorage(clock=clock)
        await cache.set("k", "v", ttl=timedelta(seconds=30))

        clock.advance(29)
        assert await cache.get("k") == "v"
        clock.advance(1)
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_configured_default_ttl(self, clock):
        cache = InMemoryCacheStorage(default_ttl=timedelta(minutes=1), clock=clock)
        await cache.set("k", "v")

        clock.advance(60)
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_overwrite_last_write_wins(self):
        cache = InMemoryCacheStorage()
        await cache.set("k", "first")
        await cache.set("k", "second")

        assert await cache.get("k") == "second"
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_max_entries_evicts_oldest(self):
        cache = InMemoryCacheStorage(max_entries=2)
        await cache.set("a", "1")
        await cache.set("b", "2")
        await cache.set("c", "3")

        assert await cache.get("a") is None
        assert await cache.get("b") == "2"
        assert await cache.get("c") == "3"

    @pytest.mark.asyncio
    async def test_write_sweeps_expired_entries(self, clock):
        cache = InMemoryCacheStorage(clock=clock)
        for i in range(1000):
            await cache.set(f"key-{i}", "v", ttl=10)

        clock.advance(100)
        await cache.set("fresh", "v", ttl=10)

        assert len(cache) == 1
        assert await cache.get("fresh") == "v"

    @pytest.mark.asyncio
    async def test_sweep_waits_for_interval(self, clock):
        cache = InMemoryCacheStorage(clock=clock, sweep_interval=60)
        await cache.set("old", "v", ttl=10)

        clock.advance(30)
        await cache.set("new", "v", ttl=100)
        assert len(cache) == 2

        clock.advance(30)
        await cache.set("newer", "v", ttl=100)
        assert len(cache) == 2
        assert await cache.get("old") is None

    @pytest.mark.asyncio
    async def test_delete_and_clear(self):
        cache = InMemoryCacheStorage()
        await cache.set("a", "1")
        await cache.set("b", "2")

        assert await cache.delete("a")
        assert not await cache.delete("a")

        cache.clear()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_internal_failures_are_absorbed(self):
        cache = InMemoryCacheStorage()
        bad_key = ["not", "hashable"]

        await cache.set(bad_key, "v")
        assert await cache.get(bad_key) is None


# =============================================================================
# Redis
# =============================================================================


class TestRedisCacheStorage:
    @pytest.fixture
    def redis_client(self):
        pytest.importorskip("redis")
        return AsyncMock()

    @pytest.fixture
    def storage(self, redis_client):
        from translator.storage.redis_cache import RedisCacheStorage

        return RedisCacheStorage(redis_client, default_ttl=timedelta(hours=24))

    @pytest.mark.asyncio
    async def test_set_uses_prefix_and_default_ttl(self, storage, redis_client):
        await storage.set("Hello|es", "Hola")

        redis_client.set.assert_awaited_once_with("translation:Hello|es", "Hola", px=86_400_000)

    @pytest.mark.asyncio
    async def test_set_with_explicit_ttl(self, storage, redis_client):
        await storage.set("k", "v", ttl=timedelta(seconds=90))

        redis_client.set.assert_awaited_once_with("translation:k", "v", px=90_000)

    @pytest.mark.asyncio
    async def test_get(self, storage, redis_client):
        redis_client.get.return_value = "Hola"

        assert await storage.get("Hello|es") == "Hola"
        redis_client.get.assert_awaited_once_with("translation:Hello|es")

    @pytest.mark.asyncio
    async def test_connection_errors_are_absorbed(self, storage, redis_client, caplog):
        from redis.exceptions import ConnectionError as RedisConnectionError

        redis_client.get.side_effect = RedisConnectionError("down")
        redis_client.set.side_effect = RedisConnectionError("down")
        redis_client.exists.side_effect = RedisConnectionError("down")

        assert await storage.get("k") is None
        await storage.set("k", "v")
        assert not await storage.exists("k")

        messages = [r.getMessage() for r in caplog.records if r.name == "translator.storage.redis_cache"]
        assert "Redis get error for key 'k': down" in messages
        assert "Redis set error for key 'k': down" in messages

    @pytest.mark.asyncio
    async def test_delete(self, storage, redis_client):
        redis_client.delete.return_value = 1

        assert await storage.delete("k")
        redis_client.delete.assert_awaited_once_with("translation:k")


# =============================================================================
# Factory
# =============================================================================


class TestCreateCacheStorage:
    def test_in_memory_by_default(self):
        settings = Settings(_env_file=None, redis_url="", cache_max_entries=10)

        cache = create_cache_storage(settings)

        assert isinstance(cache, InMemoryCacheStorage)
        assert cache.max_entries == 10
        assert cache.default_ttl == DEFAULT_TTL_SECONDS

    def test_redis_when_url_set(self):
        pytest.importorskip("redis")
        from translator.storage.redis_cache import RedisCacheStorage

        settings = Settings(_env_file=None, redis_url="redis://localhost:6379/0")

        cache = create_cache_storage(settings)

        assert isinstance(cache, RedisCacheStorage)
