"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CACHE_TTL = timedelta(hours=24)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def parse_ttl(value: object) -> timedelta:
    """
    Parse a TTL given as seconds or as ``[D.]HH:MM:SS``.

    ``TRANSLATION_CACHE_TTL=3600`` and ``TRANSLATION_CACHE_TTL=01:00:00``
    are equivalent.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    raw = str(value).strip()
    if not raw:
        return DEFAULT_CACHE_TTL

    if ":" not in raw:
        return timedelta(seconds=float(raw))

    days = 0
    if "." in raw.split(":")[0]:
        day_part, raw = raw.split(".", 1)
        days = int(day_part)

    parts = raw.split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid TTL: {value!r}")
    hours, minutes, seconds = parts
    return timedelta(
        days=days,
        hours=int(hours),
        minutes=int(minutes),
        seconds=float(seconds),
    )


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    openai_api_key: str = ""
    openai_model_name: str = "gpt-3.5-turbo"
    openai_base_url: str = "https://api.openai.com/"
    openai_timeout: float = 30.0

    # ==========================================================================
    # Translation
    # ==========================================================================

    translation_cache_ttl: timedelta = DEFAULT_CACHE_TTL
    translation_max_concurrency: int = 1
    translation_max_retries: int = 3
    translation_initial_backoff: float = 0.5  # seconds

    # ==========================================================================
    # Cache
    # ==========================================================================

    cache_max_entries: int | None = None
    redis_url: str = ""

    @field_validator("translation_cache_ttl", mode="before")
    @classmethod
    def _parse_cache_ttl(cls, value: object) -> timedelta:
        return parse_ttl(value)

    @field_validator("translation_max_concurrency")
    @classmethod
    def _check_concurrency(cls, value: int) -> int:
        if value < 1:
            raise ValueError("translation_max_concurrency must be >= 1")
        return value

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def use_redis(self) -> bool:
        """Whether the shared Redis cache should be used."""
        return bool(self.redis_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | int = "INFO") -> None:
    """Install the process-wide log format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
