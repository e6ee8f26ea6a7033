"""
Cached, resilient batch translation service.

Translates batches of (text, target language) pairs through an AI
chat-completions backend, caching results to avoid repeated paid calls.
"""

__version__ = "0.1.0"
