"""
Services module - external API integrations
"""
from .base import TextProvider
from .gemini_provider import GeminiProvider, response_text

__all__ = [
    "TextProvider",
    "GeminiProvider",
    "response_text",
]
