"""
FastAPI application for the translation service.

Exposes batch translation over JSON or XML, plus a health check.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from translator.api.formats import XML, is_xml, negotiate, parse_xml_request, render_xml_response
from translator.config import configure_logging, get_settings
from translator.core.models import TranslationRequest, TranslationResponse
from translator.services.ai.client import OpenAITranslationClient
from translator.services.translation import TranslationService
from translator.storage import CacheStorage, create_cache_storage

logger = logging.getLogger(__name__)

EMPTY_REQUEST_DETAIL = "La solicitud debe contener al menos un elemento para traducir"


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""

    cache: CacheStorage
    client: OpenAITranslationClient
    translation_service: TranslationService


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()
    configure_logging(settings.log_level)

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set - every translation will fail")

    state.cache = create_cache_storage(settings)
    state.client = OpenAITranslationClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model_name,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        max_retries=settings.translation_max_retries,
        initial_backoff=settings.translation_initial_backoff,
    )
    state.translation_service = TranslationService(
        client=state.client,
        cache=state.cache,
        cache_ttl=settings.translation_cache_ttl,
        max_concurrency=settings.translation_max_concurrency,
    )

    logger.info("Translator API starting in %s mode", settings.environment)

    yield

    await state.client.aclose()
    await state.cache.close()
    logger.info("Translator API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="Translator API",
    description="Batch translation with caching in front of an AI backend",
    version="0.1.0",
    lifespan=lifespan,
)


# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Dependencies
# =============================================================================


def get_translation_service() -> TranslationService:
    return state.translation_service


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "Healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _parse_request(body: bytes, content_type: str | None) -> TranslationRequest:
    if is_xml(content_type):
        return parse_xml_request(body)
    if not body.strip():
        return TranslationRequest()
    return TranslationRequest.model_validate_json(body)


@app.post("/api/translate")
async def translate(
    request: Request,
    service: TranslationService = Depends(get_translation_service),
):
    """
    Translate a batch of items.

    Accepts and answers ``application/json`` or ``application/xml``.
    """
    content_type = request.headers.get("content-type")
    media_type = negotiate(request.headers.get("accept"), content_type)

    body = await request.body()
    try:
        payload = _parse_request(body, content_type)
    except ValueError as e:
        logger.warning("Rejected malformed translation request: %s", e)
        raise HTTPException(status_code=400, detail="Malformed translation request")

    if not payload.items:
        raise HTTPException(status_code=400, detail=EMPTY_REQUEST_DETAIL)

    logger.info("Translation request received with %d items", len(payload.items))

    started = time.perf_counter()
    try:
        results = await service.translate_batch(payload.items)
        response = TranslationResponse(results=results)
        if media_type == XML:
            rendered: Response = Response(content=render_xml_response(response), media_type=XML)
        else:
            rendered = JSONResponse(content=response.to_wire())
    except Exception:
        logger.error("Error processing translation request", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": 500,
                "title": "Error Interno del Servidor",
                "detail": "Ocurrió un error al procesar la solicitud de traducción.",
            },
        )
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("Translation completed in %.1f ms", elapsed_ms)

    return rendered
