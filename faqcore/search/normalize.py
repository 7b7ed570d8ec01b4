"""Text normalisation helpers for search modules."""
from __future__ import annotations

import re
from typing import Iterable, List, Sequence


# Punctuation and brackets (full and half width) ignored when matching.
_STRIP_PATTERN = re.compile(r"[！!？?。、．，,・･「」『』【】［］\[\]()（）\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_ja(text: str | None) -> str:
    """Return a canonical form of ``text`` used only for matching."""

    if not text:
        return ""
    return _STRIP_PATTERN.sub("", str(text).lower())


def collapse_whitespace(text: str | None) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def expand_with_synonyms(text: str | None, groups: Iterable[Sequence[str]]) -> str:
    """Append synonym terms to ``text`` for matching.

    A group fires when the original text contains any of its terms; its
    remaining terms are then appended in group order, skipping those the
    accumulating result already contains. The original text is always a
    prefix of the result.
    """

    if not text:
        return ""
    base = str(text)
    result = base
    for group in groups:
        if not any(term and term in base for term in group):
            continue
        for term in group:
            if term and term not in result:
                result += " " + term
    return result


def bigrams(text: str) -> List[str]:
    """Return the contiguous two-character substrings of ``text``."""

    return [text[i : i + 2] for i in range(len(text) - 1)]


__all__ = ["bigrams", "collapse_whitespace", "expand_with_synonyms", "normalize_ja"]
