"""Value objects shared by the loaders, scorers and responders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple


SynonymGroup = Tuple[str, ...]

# "error" is never carried by an Answer; it marks a failed resolution in logs.
HitSource = Literal["faq", "document", "fallback", "error"]


@dataclass(frozen=True, slots=True)
class FaqRow:
    """A single public row of the FAQ sheet."""

    answer: str
    searchable_text: str
    question: str = ""
    category: str = ""
    keywords: str = ""
    source: str = ""
    visibility: str = "public"


@dataclass(frozen=True, slots=True)
class Document:
    """A fetched page or a single feed item."""

    url: str
    snippet: str
    joined: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Answer:
    """Resolved reply for one inbound question.

    ``text`` and ``url`` are what the user sees. The remaining fields are
    diagnostics for the HTTP endpoint and the interaction log.
    """

    text: str
    url: Optional[str] = None
    hit_source: HitSource = "fallback"
    score: float | None = None
    matched_question: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.hit_source == "faq"


__all__ = ["Answer", "Document", "FaqRow", "HitSource", "SynonymGroup"]
