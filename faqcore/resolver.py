"""Question → answer resolution: FAQ sheet, then pages, then fallback."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from faqcore.config import ResolverConfig
from faqcore.responders.documents import DocumentResponder, load_documents
from faqcore.responders.fallback import FallbackResponder
from faqcore.responders.faq import FaqResponder
from faqcore.schemas import Answer, FaqRow
from faqcore.search.documents import parse_allow_list
from faqcore.search.faq_table import load_faq_rows
from faqcore.search.normalize import expand_with_synonyms
from faqcore.search.scoring import Scorer, get_scorer


logger = logging.getLogger(__name__)

FetchText = Callable[..., str]


class AnswerResolver:
    """Resolve a question against the configured sources.

    Stages run in a fixed order and the first one that produces an answer
    wins: the FAQ sheet, the allow-listed pages and feeds, the fallback
    message. Errors fetching the FAQ sheet propagate to the caller; errors
    fetching individual pages are logged and skipped.
    """

    def __init__(self, config: ResolverConfig, fetch_text: FetchText) -> None:
        self.config = config
        self.scorer: Scorer = get_scorer(config.scorer)
        self._fetch_text = fetch_text
        self._fallback = FallbackResponder()

    def _faq_rows(self) -> List[FaqRow]:
        if not self.config.sheet_csv_url:
            return []
        return load_faq_rows(self.config.sheet_csv_url, self._fetch_text, ttl=self.config.faq_cache_ttl)

    def resolve(self, question: str | None) -> Answer:
        raw = (question or "").strip()
        expanded = expand_with_synonyms(raw, self.config.synonym_groups)

        faq = FaqResponder(
            self._faq_rows(),
            scorer=self.scorer,
            threshold=self.config.faq_threshold,
            append_source=self.config.append_source,
        )
        faq_match = faq.best_match(expanded)
        answer = faq.respond(expanded, faq_match)
        if answer is not None:
            logger.info("resolved from faq score=%.2f", answer.score or 0)
            return answer

        best_score: Optional[float] = faq_match.score if faq_match else None

        urls = parse_allow_list(self.config.allow_urls)
        if urls:
            documents = load_documents(
                urls,
                self._fetch_text,
                ttl=self.config.page_cache_ttl,
                workers=self.config.fetch_workers,
            )
            answer = DocumentResponder(
                documents,
                scorer=self.scorer,
                threshold=self.config.document_threshold,
            ).respond(expanded)
            if answer is not None:
                logger.info("resolved from document url=%s score=%.2f", answer.url, answer.score or 0)
                return answer

        logger.info("no match; fallback (best faq score=%s)", best_score)
        return self._fallback.respond(score=best_score)


def build_resolver(config: ResolverConfig | None = None, fetch_text: FetchText | None = None) -> AnswerResolver:
    """Return a resolver wired to the HTTP fetcher and environment config."""

    if fetch_text is None:
        from services.fetcher import fetch_text as http_fetch_text

        fetch_text = http_fetch_text
    return AnswerResolver(config or ResolverConfig.from_env(), fetch_text)


def resolve(question: str | None) -> Answer:
    return build_resolver().resolve(question)


__all__ = ["AnswerResolver", "build_resolver", "resolve"]
