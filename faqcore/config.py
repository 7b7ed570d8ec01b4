"""Centralized configuration for the matching core."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Final, Mapping, Optional, Tuple

from .schemas import SynonymGroup


DEFAULT_SYNONYM_GROUPS: Final[Tuple[SynonymGroup, ...]] = (
    ("開業", "創業"),
    ("送料", "配送料", "配送費"),
)

DEFAULT_SCORER: Final[str] = "weighted"

FAQ_CACHE_TTL_SEC: Final[int] = int(os.getenv("FAQ_CACHE_TTL_SEC", "60"))
PAGE_CACHE_TTL_SEC: Final[int] = int(os.getenv("PAGE_CACHE_TTL_SEC", "300"))
FETCH_TIMEOUT_SEC: Final[float] = float(os.getenv("FETCH_TIMEOUT_SEC", "10"))
FETCH_WORKERS: Final[int] = int(os.getenv("FETCH_WORKERS", "4"))

_TERM_SPLIT = re.compile(r"[\s,、]+")


def _truthy(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "on", "yes"}


def _optional_float(value: str | None) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


def parse_synonym_groups(raw: str | None) -> Tuple[SynonymGroup, ...]:
    """Parse ``"開業,創業;送料,配送料"`` into ordered synonym groups.

    Groups with fewer than two terms are ignored. An empty value yields the
    built-in groups.
    """

    if not raw or not raw.strip():
        return DEFAULT_SYNONYM_GROUPS

    groups: list[SynonymGroup] = []
    for chunk in raw.split(";"):
        terms: list[str] = []
        for term in _TERM_SPLIT.split(chunk):
            term = term.strip()
            if term and term not in terms:
                terms.append(term)
        if len(terms) >= 2:
            groups.append(tuple(terms))
    return tuple(groups)


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable settings injected into :class:`faqcore.resolver.AnswerResolver`."""

    sheet_csv_url: str = ""
    allow_urls: str = ""
    scorer: str = DEFAULT_SCORER
    faq_threshold: Optional[float] = None
    document_threshold: Optional[float] = None
    append_source: bool = True
    synonym_groups: Tuple[SynonymGroup, ...] = field(default=DEFAULT_SYNONYM_GROUPS)
    faq_cache_ttl: int = FAQ_CACHE_TTL_SEC
    page_cache_ttl: int = PAGE_CACHE_TTL_SEC
    fetch_workers: int = FETCH_WORKERS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ResolverConfig":
        env = os.environ if environ is None else environ
        return cls(
            sheet_csv_url=(env.get("SHEET_CSV_URL") or "").strip(),
            allow_urls=env.get("ALLOW_URLS") or "",
            scorer=(env.get("SCORER") or DEFAULT_SCORER).strip().lower(),
            faq_threshold=_optional_float(env.get("FAQ_THRESHOLD")),
            document_threshold=_optional_float(env.get("DOCUMENT_THRESHOLD")),
            append_source=_truthy(env.get("FAQ_APPEND_SOURCE"), default=True),
            synonym_groups=parse_synonym_groups(env.get("SYNONYM_GROUPS")),
            faq_cache_ttl=int(env.get("FAQ_CACHE_TTL_SEC") or FAQ_CACHE_TTL_SEC),
            page_cache_ttl=int(env.get("PAGE_CACHE_TTL_SEC") or PAGE_CACHE_TTL_SEC),
            fetch_workers=max(1, int(env.get("FETCH_WORKERS") or FETCH_WORKERS)),
        )


__all__ = [
    "DEFAULT_SCORER",
    "DEFAULT_SYNONYM_GROUPS",
    "FAQ_CACHE_TTL_SEC",
    "FETCH_TIMEOUT_SEC",
    "FETCH_WORKERS",
    "PAGE_CACHE_TTL_SEC",
    "ResolverConfig",
    "parse_synonym_groups",
]
