"""Responders for the three resolution stages."""
from __future__ import annotations

from .documents import DocumentResponder, load_documents
from .fallback import FALLBACK_MESSAGE, FallbackResponder
from .faq import FaqResponder

__all__ = [
    "DocumentResponder",
    "FALLBACK_MESSAGE",
    "FallbackResponder",
    "FaqResponder",
    "load_documents",
]
