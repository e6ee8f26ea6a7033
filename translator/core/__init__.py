"""
Core module - data models and error taxonomy.

This module contains:
- models: Items, results, request/response envelopes and cache keys
- errors: Exception hierarchy and ``ERROR: `` sentinel helpers
"""

from translator.core.models import (
    TranslationItem,
    TranslationResult,
    TranslationRequest,
    TranslationResponse,
    make_cache_key,
    normalize_language,
    normalize_text,
)
from translator.core.errors import (
    ERROR_PREFIX,
    EMPTY_TRANSLATION_MARKER,
    EMPTY_TRANSLATION_MESSAGE,
    TranslationError,
    BackendError,
    BackendStatusError,
    MalformedResponseError,
    EmptyTranslationError,
    RetryableBackendError,
    error_text,
    is_error_text,
)

__all__ = [
    "TranslationItem",
    "TranslationResult",
    "TranslationRequest",
    "TranslationResponse",
    "make_cache_key",
    "normalize_language",
    "normalize_text",
    "ERROR_PREFIX",
    "EMPTY_TRANSLATION_MARKER",
    "EMPTY_TRANSLATION_MESSAGE",
    "TranslationError",
    "BackendError",
    "BackendStatusError",
    "MalformedResponseError",
    "EmptyTranslationError",
    "RetryableBackendError",
    "error_text",
    "is_error_text",
]
