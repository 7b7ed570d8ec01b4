"""Fallback responder used when neither the FAQ nor the pages match."""
from __future__ import annotations

from faqcore.schemas import Answer


# "No matching answer was found. Please try rephrasing your question; a staff
# handoff is also possible."
FALLBACK_MESSAGE = (
    "該当する回答が見つかりませんでした。"
    "よろしければ、キーワードを変えてもう一度お試しください。担当者への取次も可能です。"
)


class FallbackResponder:
    """Responder that always answers with the fixed not-found message."""

    message: str = FALLBACK_MESSAGE

    def respond(self, *, score: float | None = None) -> Answer:
        return Answer(text=self.message, url=None, hit_source="fallback", score=score)


__all__ = ["FALLBACK_MESSAGE", "FallbackResponder"]
