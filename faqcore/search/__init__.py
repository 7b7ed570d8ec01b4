"""Search helpers: normalisation, loaders and scorers."""

from .documents import documents_from_body, html_to_text, parse_allow_list, parse_feed
from .faq_table import load_faq_rows, parse_csv, rows_from_csv
from .normalize import expand_with_synonyms, normalize_ja
from .scoring import Scorer, bigram_similarity, get_scorer, weighted_containment

__all__ = [
    "Scorer",
    "bigram_similarity",
    "documents_from_body",
    "expand_with_synonyms",
    "get_scorer",
    "html_to_text",
    "load_faq_rows",
    "normalize_ja",
    "parse_allow_list",
    "parse_csv",
    "parse_feed",
    "rows_from_csv",
    "weighted_containment",
]
