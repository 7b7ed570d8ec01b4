"""Pluggable similarity scorers shared by the FAQ and document responders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from faqcore.schemas import FaqRow

from .normalize import bigrams, normalize_ja


ScoreFunc = Callable[[str, str], float]

FULL_MATCH_MIN = 30
WORD_MATCH_MIN = 8
BIGRAM_BONUS = 0.7


def bigram_similarity(query: str | None, target: str | None) -> float:
    """Return the bigram overlap of ``query`` and ``target`` in ``[0, 1]``.

    Counts the target's bigrams that also occur in the query and divides by
    the larger bigram count of the two strings.
    """

    q = normalize_ja(query)
    t = normalize_ja(target)
    if not q or not t:
        return 0.0
    if q == t:
        return 1.0
    if len(q) == 1:
        return 1.0 if q in t else 0.0

    query_set = set(bigrams(q))
    hits = sum(1 for bg in bigrams(t) if bg in query_set)
    return hits / max(len(q) - 1, len(t) - 1)


def weighted_containment(query: str | None, target: str | None) -> float:
    """Score ``target`` by how much of the expanded ``query`` it contains.

    The whole query found verbatim scores highest, then each whitespace
    separated word of the query (the synonym terms end up here). Bigram hits
    only count when neither of those matched anything.
    """

    t = normalize_ja(target)
    q = normalize_ja(query)
    if not t or not q:
        return 0.0

    score = 0.0
    if q in t:
        score += max(FULL_MATCH_MIN, len(q) * 2)

    for word in (query or "").split():
        n = normalize_ja(word)
        if n and n in t:
            score += max(WORD_MATCH_MIN, len(n) * 2)

    if score == 0 and len(q) > 1:
        score = sum(BIGRAM_BONUS for bg in bigrams(q) if bg in t)

    return score


@dataclass(frozen=True)
class Scorer:
    """A scoring strategy together with its acceptance thresholds."""

    name: str
    func: ScoreFunc
    faq_threshold: float
    document_threshold: float
    # Ratio scorers compare like with like: question against question.
    compare_question: bool = False

    def score(self, query: str, target: str) -> float:
        return float(self.func(query, target))

    def faq_target(self, row: FaqRow) -> str:
        if self.compare_question and row.question:
            return row.question
        return row.searchable_text

    @staticmethod
    def accepts(score: float, threshold: float) -> bool:
        return score > 0 and score >= threshold


SCORERS: Dict[str, Scorer] = {
    "weighted": Scorer(
        name="weighted",
        func=weighted_containment,
        faq_threshold=5,
        document_threshold=5,
    ),
    "bigram": Scorer(
        name="bigram",
        func=bigram_similarity,
        faq_threshold=0.45,
        document_threshold=0.05,
        compare_question=True,
    ),
}


def get_scorer(name: str | None) -> Scorer:
    """Return the scorer registered as ``name``."""

    key = (name or "weighted").strip().lower()
    try:
        return SCORERS[key]
    except KeyError:
        raise ValueError(f"unknown scorer: {name!r} (expected one of {sorted(SCORERS)})") from None


__all__ = [
    "SCORERS",
    "Scorer",
    "bigram_similarity",
    "get_scorer",
    "weighted_containment",
]
