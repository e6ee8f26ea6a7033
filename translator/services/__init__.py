"""
Services - translation orchestration and the AI backend client.
"""

from translator.services.translation import TranslationService, TranslationBackend

__all__ = [
    "TranslationService",
    "TranslationBackend",
]
