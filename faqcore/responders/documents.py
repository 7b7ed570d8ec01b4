"""Responder pointing the user at an allow-listed page or feed article."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from faqcore.schemas import Answer, Document
from faqcore.search.documents import documents_from_body
from faqcore.search.scoring import Scorer


logger = logging.getLogger(__name__)

PAGE_INTRO = "この内容については、次のページに記載があります。"

FetchText = Callable[..., str]


def _fetch_documents(url: str, fetch_text: FetchText, ttl: int) -> List[Document]:
    try:
        body = fetch_text(url, ttl=ttl)
    except Exception as exc:
        logger.warning("document fetch failed, skipping %s: %s", url, exc)
        return []
    return documents_from_body(url, body)


def load_documents(
    urls: Sequence[str],
    fetch_text: FetchText,
    *,
    ttl: int,
    workers: int = 4,
) -> List[Document]:
    """Fetch every URL concurrently and return documents in allow-list order."""

    if not urls:
        return []
    if workers <= 1 or len(urls) == 1:
        batches = [_fetch_documents(url, fetch_text, ttl) for url in urls]
    else:
        with ThreadPoolExecutor(max_workers=min(workers, len(urls))) as executor:
            batches = list(executor.map(lambda url: _fetch_documents(url, fetch_text, ttl), urls))

    documents: List[Document] = []
    for batch in batches:
        documents.extend(batch)
    return documents


@dataclass(frozen=True)
class DocumentMatch:
    document: Document
    score: float


class DocumentResponder:
    """Pick the single best document for an expanded query."""

    def __init__(
        self,
        documents: Iterable[Document],
        *,
        scorer: Scorer,
        threshold: float | None = None,
    ) -> None:
        self._documents = list(documents)
        self._scorer = scorer
        self._threshold = scorer.document_threshold if threshold is None else threshold

    def best_match(self, expanded_query: str) -> Optional[DocumentMatch]:
        best: Optional[DocumentMatch] = None
        for document in self._documents:
            score = self._scorer.score(expanded_query, document.joined)
            if best is None or score > best.score:
                best = DocumentMatch(document=document, score=score)
        return best

    def respond(self, expanded_query: str) -> Optional[Answer]:
        match = self.best_match(expanded_query)
        if match is None or not self._scorer.accepts(match.score, self._threshold):
            return None

        document = match.document
        text = f"{document.snippet}\n\n{PAGE_INTRO}" if document.snippet else PAGE_INTRO
        return Answer(text=text, url=document.url, hit_source="document", score=match.score)


__all__ = [
    "DocumentMatch",
    "DocumentResponder",
    "PAGE_INTRO",
    "load_documents",
]
