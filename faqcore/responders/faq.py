"""Responder answering from the FAQ sheet."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from faqcore.schemas import Answer, FaqRow
from faqcore.search.scoring import Scorer


SOURCE_SEPARATOR = "\n—\n出典: "


@dataclass(frozen=True)
class FaqMatch:
    row: FaqRow
    score: float


class FaqResponder:
    """Pick the single best FAQ row for an expanded query."""

    def __init__(
        self,
        rows: Iterable[FaqRow],
        *,
        scorer: Scorer,
        threshold: float | None = None,
        append_source: bool = True,
    ) -> None:
        self._rows: List[FaqRow] = list(rows)
        self._scorer = scorer
        self._threshold = scorer.faq_threshold if threshold is None else threshold
        self._append_source = append_source

    def best_match(self, expanded_query: str) -> Optional[FaqMatch]:
        best: Optional[FaqMatch] = None
        for row in self._rows:
            score = self._scorer.score(expanded_query, self._scorer.faq_target(row))
            # Strictly greater: ties keep the earlier row.
            if best is None or score > best.score:
                best = FaqMatch(row=row, score=score)
        return best

    def respond(self, expanded_query: str, match: Optional[FaqMatch] = None) -> Optional[Answer]:
        match = match if match is not None else self.best_match(expanded_query)
        if match is None or not self._scorer.accepts(match.score, self._threshold):
            return None

        row = match.row
        text = row.answer
        if self._append_source and row.source:
            text = f"{text}{SOURCE_SEPARATOR}{row.source}"
        return Answer(
            text=text,
            url=None,
            hit_source="faq",
            score=match.score,
            matched_question=row.question or None,
        )


__all__ = ["FaqMatch", "FaqResponder", "SOURCE_SEPARATOR"]
