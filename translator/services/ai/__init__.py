"""
AI translation backend.

Calls an OpenAI-compatible chat-completions endpoint with retry and
response cleanup.
"""

from translator.services.ai.client import (
    OpenAITranslationClient,
    BackendReply,
    build_messages,
    build_payload,
    clean_translation,
    extract_content,
)

__all__ = [
    "OpenAITranslationClient",
    "BackendReply",
    "build_messages",
    "build_payload",
    "clean_translation",
    "extract_content",
]
