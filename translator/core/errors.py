"""
Error taxonomy for the translation pipeline.

Failures surface to callers in two ways: as exceptions (inside the
backend client and the orchestrator) and as sentinel strings prefixed
with ``ERROR: `` inside ``TranslationResult.translated_text``.
"""

from __future__ import annotations


ERROR_PREFIX = "ERROR: "

EMPTY_TRANSLATION_MESSAGE = "Se recibió una traducción vacía"

EMPTY_TRANSLATION_MARKER = ERROR_PREFIX + EMPTY_TRANSLATION_MESSAGE


def error_text(message: str) -> str:
    """Render a failure message as an inline sentinel string."""
    return f"{ERROR_PREFIX}{message}"


def is_error_text(value: str | None) -> bool:
    """True if ``value`` is a sentinel produced by ``error_text``."""
    return bool(value) and value.startswith(ERROR_PREFIX.rstrip())


class TranslationError(Exception):
    """Base class for all translation failures."""


class BackendError(TranslationError):
    """The translation backend could not produce a usable translation."""


class BackendStatusError(BackendError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"Error en API de OpenAI {detail}")


class MalformedResponseError(BackendError):
    """The response body was not JSON or lacked ``choices[0].message.content``."""


class EmptyTranslationError(BackendError):
    """The backend returned an empty translation."""


class RetryableBackendError(BackendError):
    """
    Transient failure talking to the backend (connection error or timeout).

    The only error class the client retries.
    """
