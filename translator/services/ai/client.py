"""
Chat-completion client used as the translation backend.

Talks to an OpenAI-compatible ``/v1/chat/completions`` endpoint over
httpx. Transient transport failures (connection errors, timeouts) are
retried with exponential backoff via tenacity; everything else yields an
immediate result.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from urllib.parse import urljoin

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from translator.core.errors import (
    BackendError,
    BackendStatusError,
    EmptyTranslationError,
    EMPTY_TRANSLATION_MESSAGE,
    MalformedResponseError,
    RetryableBackendError,
    error_text,
)

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a professional translator. "
    "Respond with only the translation, no explanations or additional text."
)

USER_PROMPT = 'Translate the following sentence into {target_language}: "{text}"'

TEMPERATURE = 0.3

# Transient failures worth another attempt. Other transport errors
# (unsupported scheme, local protocol misuse) come from configuration.
RETRYABLE_TRANSPORT_ERRORS = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.RemoteProtocolError,
)


# =============================================================================
# Request building and response parsing
# =============================================================================


def build_messages(text: str, target_language: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT.format(target_language=target_language, text=text),
        },
    ]


def build_payload(model: str, text: str, target_language: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": build_messages(text, target_language),
        "temperature": TEMPERATURE,
    }


def extract_content(body: str) -> str:
    """
    Pull ``choices[0].message.content`` out of a response body.

    Raises:
        MalformedResponseError: body is not JSON or has another shape
        EmptyTranslationError: the content field is null
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError("Response has no choices[0].message.content") from e

    if content is None:
        raise EmptyTranslationError("Response content is null")
    if not isinstance(content, str):
        raise MalformedResponseError(f"Response content is {type(content).__name__}, not str")
    return content


def clean_translation(content: str) -> str:
    """
    Trim whitespace and drop one pair of wrapping double quotes.

    ``'  "Hola"  '`` becomes ``'Hola'``; ``'""Hola""'`` becomes ``'"Hola"'``.
    """
    cleaned = content.strip()
    if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
        cleaned = cleaned[1:-1]
    return cleaned


@dataclass
class BackendReply:
    """Either a translation or the reason there is none."""

    text: str = ""
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def as_text(self) -> str:
        """Render as the translation string, using an ``ERROR: `` sentinel on failure."""
        if self.error is not None:
            return error_text(self.error)
        return self.text


# =============================================================================
# Client
# =============================================================================


class OpenAITranslationClient:
    """
    Translation backend over the chat-completions API.

    Usage:
        async with OpenAITranslationClient(api_key="sk-...") as client:
            text = await client.translate("Hello", "es")  # -> "Hola"
    """

    CHAT_COMPLETIONS_PATH = "v1/chat/completions"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/",
        timeout: float = 30.0,
        max_retries: int = 3,
        initial_backoff: float = 0.5,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = api_key
        self.model = model
        self.url = urljoin(base_url.rstrip("/") + "/", self.CHAT_COMPLETIONS_PATH)
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self._sleep = sleep
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "OpenAITranslationClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def translate(self, text: str, target_language: str) -> str:
        """
        Translate text into ``target_language``.

        Returns the cleaned translation, or an ``ERROR: ...`` string when
        the backend answered with an error status or an empty/unparsable
        body.

        Raises:
            RetryableBackendError: transient transport failures persisted past all retries
            BackendError: a non-transient transport failure or missing API key
        """
        reply = await self.complete(text, target_language)
        return reply.as_text()

    async def complete(self, text: str, target_language: str) -> BackendReply:
        """Like ``translate`` but keeps success and failure apart."""
        logger.info("Translating text to %s: %r", target_language, text)

        payload = build_payload(self.model, text, target_language)
        response = await self._send_with_retry(payload)
        body = response.text
        logger.debug("Backend response: %s", body)

        if not response.is_success:
            err = BackendStatusError(response.status_code, response.reason_phrase, body)
            logger.error("Backend returned %s: %s", response.status_code, body)
            return BackendReply(error=str(err))

        try:
            translated = clean_translation(extract_content(body))
            if not translated:
                raise EmptyTranslationError("Response content is blank")
        except MalformedResponseError as e:
            logger.error("Unexpected backend response format: %s", e)
            return BackendReply(error=EMPTY_TRANSLATION_MESSAGE)
        except EmptyTranslationError:
            logger.warning("Received an empty translation from the backend")
            return BackendReply(error=EMPTY_TRANSLATION_MESSAGE)

        logger.info("Translated %r -> %r", text, translated)
        return BackendReply(text=translated)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise BackendError("OPENAI_API_KEY not set")
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _send(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            return await self.http_client.post(self.url, json=payload, headers=self._headers())
        except RETRYABLE_TRANSPORT_ERRORS as e:
            raise RetryableBackendError(str(e) or type(e).__name__) from e
        except httpx.TransportError as e:
            raise BackendError(str(e) or type(e).__name__) from e

    async def _send_with_retry(self, payload: dict[str, Any]) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.initial_backoff),
            retry=retry_if_exception_type(RetryableBackendError),
            sleep=self._sleep,
            before_sleep=self._log_retry,
            reraise=True,
        )
        return await retrying(self._send, payload)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            "Backend call failed (attempt %d/%d), retrying in %dms: %s",
            retry_state.attempt_number,
            self.max_retries,
            int(delay * 1000),
            retry_state.outcome.exception() if retry_state.outcome else None,
        )
