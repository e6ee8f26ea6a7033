"""
Translation orchestration.

For each item in a batch: normalize a cache key, consult the cache, fall
back to the backend on a miss, write the result back, and isolate
failures so one bad item never aborts the batch.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Iterable, Protocol

from translator.core.errors import error_text
from translator.core.models import TranslationItem, TranslationResult
from translator.storage.base import CacheStorage

logger = logging.getLogger(__name__)


class TranslationBackend(Protocol):
    async def translate(self, text: str, target_language: str) -> str: ...


class TranslationService:
    """
    Cache-or-fetch translation over a batch of items.

    Usage:
        service = TranslationService(client, InMemoryCacheStorage())
        results = await service.translate_batch([
            TranslationItem(text="Hello", to="es"),
            TranslationItem(text="World", to="fr"),
        ])

    ``max_concurrency`` bounds how many items are in flight at once; the
    default of 1 processes items one after another. Results always come
    back in input order.
    """

    def __init__(
        self,
        client: TranslationBackend,
        cache: CacheStorage,
        cache_ttl: timedelta = timedelta(hours=24),
        max_concurrency: int = 1,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.client = client
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.max_concurrency = max_concurrency

    async def translate_batch(
        self, items: Iterable[TranslationItem] | None
    ) -> list[TranslationResult]:
        """
        Translate every item, one result per item, same order.

        Failures show up as ``ERROR: ...`` in ``translated_text``; nothing
        raised while handling an item escapes this call.
        """
        if not items:
            return []

        items = list(items)
        results: list[TranslationResult | None] = [None] * len(items)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(index: int, item: TranslationItem) -> None:
            async with semaphore:
                results[index] = await self.translate_one(item)

        await asyncio.gather(*(run(i, item) for i, item in enumerate(items)))
        return results  # type: ignore[return-value]

    async def translate_one(self, item: TranslationItem) -> TranslationResult:
        """Translate a single item, converting any failure into an error result."""
        try:
            translated = await self._cached_translate(item)
        except Exception as e:
            logger.error(
                "Error translating text %r to language %r",
                item.text,
                item.target_language,
                exc_info=True,
            )
            translated = error_text(str(e) or type(e).__name__)

        return TranslationResult(
            original_text=item.text,
            translated_text=translated,
            target_language=item.target_language,
        )

    async def _cached_translate(self, item: TranslationItem) -> str:
        cache_key = item.cache_key

        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.info("Cache hit for key: %s", cache_key)
            return cached

        logger.info("Cache miss for key: %s, calling translation backend", cache_key)
        translated = await self.client.translate(item.text, item.target_language)
        await self.cache.set(cache_key, translated, self.cache_ttl)
        return translated
