"""Loader for the FAQ sheet published as CSV."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

from faqcore.schemas import FaqRow

from .normalize import collapse_whitespace


logger = logging.getLogger(__name__)

# Older sheets have no header for the answer column; it has always been the
# 4th ("D") column there.
LEGACY_ANSWER_COLUMN = 3

DEFAULT_VISIBILITY = "public"

FetchText = Callable[..., str]


def parse_csv(text: str | None) -> List[List[str]]:
    """Split CSV text into rows of raw fields.

    Fields may be wrapped in double quotes, in which case commas and line
    breaks are literal and ``""`` stands for one quote. CRLF, LF and a bare
    CR all end a row. Unbalanced quotes run to the end of the input.
    """

    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quote = False
    text = text or ""
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if in_quote:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    field.append('"')
                    i += 2
                    continue
                in_quote = False
            else:
                field.append(char)
            i += 1
            continue

        if char == '"':
            in_quote = True
        elif char == ",":
            row.append("".join(field))
            field = []
        elif char in "\r\n":
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            rows.append(row)
            row, field = [], []
        else:
            field.append(char)
        i += 1

    row.append("".join(field))
    rows.append(row)
    return rows


class _Columns:
    __slots__ = ("question", "category", "answer", "source", "keywords", "visibility", "legacy")

    def __init__(self, header: Sequence[str]):
        names: Dict[str, int] = {}
        for idx, name in enumerate(header):
            names.setdefault(name.strip().lower(), idx)

        self.question = names.get("question", -1)
        self.category = names.get("category_or_question", -1)
        self.answer = names.get("answer", LEGACY_ANSWER_COLUMN)
        self.source = names.get("source_url_or_note", -1)
        self.keywords = names.get("keywords(optional)", names.get("keywords", -1))
        self.visibility = names.get("visibility", -1)
        # 旧シート: 回答列の見出しも質問系の列もない。全列を検索対象にする
        self.legacy = "answer" not in names or max(self.question, self.category, self.keywords) < 0

    @staticmethod
    def pick(cols: Sequence[str], idx: int) -> str:
        if 0 <= idx < len(cols):
            return cols[idx]
        return ""


def rows_from_csv(text: str | None) -> List[FaqRow]:
    """Return the public, answerable rows of a CSV document."""

    table = parse_csv(text)
    if len(table) <= 1:
        return []

    columns = _Columns(table[0])
    items: List[FaqRow] = []
    skipped = 0

    for raw in table[1:]:
        cols = [(value or "").strip() for value in raw]

        visibility = columns.pick(cols, columns.visibility).lower() or DEFAULT_VISIBILITY
        answer = columns.pick(cols, columns.answer)
        if visibility != DEFAULT_VISIBILITY or not answer:
            skipped += 1
            continue

        question = columns.pick(cols, columns.question)
        category = columns.pick(cols, columns.category)
        keywords = columns.pick(cols, columns.keywords)
        if columns.legacy:
            searchable = collapse_whitespace(" ".join(cols))
        else:
            searchable = collapse_whitespace(" ".join([category, question, answer, keywords]))
        items.append(
            FaqRow(
                answer=answer,
                searchable_text=searchable,
                question=question,
                category=category,
                keywords=keywords,
                source=columns.pick(cols, columns.source),
                visibility=visibility,
            )
        )

    logger.debug("faq table parsed: rows=%d skipped=%d", len(items), skipped)
    return items


def load_faq_rows(url: str, fetch_text: FetchText, *, ttl: int | None = None) -> List[FaqRow]:
    """Fetch the sheet at ``url`` and parse it.

    ``fetch_text`` raises :class:`services.fetcher.FetchError` for failed
    requests; it is not caught here.
    """

    if ttl is None:
        body = fetch_text(url)
    else:
        body = fetch_text(url, ttl=ttl)
    return rows_from_csv(body)


__all__ = [
    "DEFAULT_VISIBILITY",
    "LEGACY_ANSWER_COLUMN",
    "load_faq_rows",
    "parse_csv",
    "rows_from_csv",
]
