"""
Core data models for the translation service.

Items and results are pydantic models whose wire names match the JSON
the service has always emitted (``text``, ``to``, ``translatedText``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from translator.core.errors import is_error_text


# =============================================================================
# Cache keys
# =============================================================================


def normalize_text(text: str | None) -> str:
    """Trim surrounding whitespace. Case is significant for text."""
    return (text or "").strip()


def normalize_language(language: str | None) -> str:
    """Trim and lowercase a language code."""
    return (language or "").strip().lower()


def make_cache_key(text: str | None, language: str | None) -> str:
    """
    Build the cache key for a (text, language) pair.

    ``("  Hello  ", " ES ")`` and ``("Hello", "es")`` share the key
    ``"Hello|es"``; ``"hello"`` and ``"Hello"`` do not.
    """
    return f"{normalize_text(text)}|{normalize_language(language)}"


# =============================================================================
# Items and results
# =============================================================================


class TranslationItem(BaseModel):
    """A single piece of text to translate."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = ""
    target_language: str = Field(default="", alias="to")

    @field_validator("text", "target_language", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def cache_key(self) -> str:
        return make_cache_key(self.text, self.target_language)


class TranslationResult(BaseModel):
    """
    Outcome for one item.

    ``original_text`` and ``target_language`` echo the item exactly as
    submitted; ``translated_text`` holds the translation or an
    ``ERROR: ...`` sentinel.
    """

    model_config = ConfigDict(populate_by_name=True)

    original_text: str = Field(default="", alias="text")
    translated_text: str = Field(default="", alias="translatedText")
    target_language: str = Field(default="", alias="to")

    @property
    def is_error(self) -> bool:
        return is_error_text(self.translated_text)


# =============================================================================
# Envelopes
# =============================================================================


class TranslationRequest(BaseModel):
    items: list[TranslationItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value


class TranslationResponse(BaseModel):
    results: list[TranslationResult] = Field(default_factory=list)

    def to_wire(self) -> dict:
        """JSON-ready dict using the public camelCase names."""
        return self.model_dump(by_alias=True)
