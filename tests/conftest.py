"""Shared fixtures and fakes for the translator tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from translator.storage.local import InMemoryCacheStorage


class FakeBackend:
    """Backend double that answers from a dict and records every call."""

    def __init__(
        self,
        translations: dict[tuple[str, str], str] | None = None,
        failures: dict[tuple[str, str], Exception] | None = None,
        delays: dict[tuple[str, str], float] | None = None,
    ):
        self.translations = translations or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def translate(self, text: str, target_language: str) -> str:
        key = (text, target_language)
        self.calls.append(key)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(key, 0))
            if key in self.failures:
                raise self.failures[key]
            return self.translations.get(key, f"{text} [{target_language}]")
        finally:
            self.in_flight -= 1


class RecordingCache(InMemoryCacheStorage):
    """In-memory cache that records reads and writes."""

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        self.gets: list[str] = []
        self.sets: list[tuple[str, Any, Any]] = []

    async def get(self, key: str) -> Any | None:
        self.gets.append(key)
        return await super().get(key)

    async def set(self, key: str, value: Any, ttl: Any = None) -> None:
        self.sets.append((key, value, ttl))
        await super().set(key, value, ttl)


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def backend():
    return FakeBackend(
        translations={
            ("Hello", "es"): "Hola",
            ("World", "fr"): "Monde",
        }
    )


@pytest.fixture
def cache():
    return RecordingCache()


@pytest.fixture
def clock():
    return FakeClock()
