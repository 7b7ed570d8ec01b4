"""Matching core for the FAQ bot."""

from . import config, logging_utils, resolver, schemas  # noqa: F401
from .config import ResolverConfig
from .resolver import AnswerResolver, build_resolver, resolve
from .schemas import Answer, Document, FaqRow

__all__ = [
    "Answer",
    "AnswerResolver",
    "Document",
    "FaqRow",
    "ResolverConfig",
    "build_resolver",
    "config",
    "logging_utils",
    "resolve",
    "resolver",
    "schemas",
]
