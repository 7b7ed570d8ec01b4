"""Plain-text extraction for allow-listed pages and syndication feeds."""
from __future__ import annotations

import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from lxml import etree

from faqcore.schemas import Document

from .normalize import collapse_whitespace


SNIPPET_CHARS = 200

_ALLOW_SPLIT = re.compile(r"[\s,]+")
_FEED_FIELDS = ("title", "description", "link")


def html_to_text(html: str | None) -> str:
    """Strip markup from ``html`` and return whitespace-collapsed text."""

    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for bad in soup(["script", "style"]):
        bad.decompose()
    return collapse_whitespace(soup.get_text(" "))


def _localname(el) -> str:
    if not isinstance(el.tag, str):
        return ""
    return etree.QName(el).localname.lower()


def _item_fields(item) -> Dict[str, str]:
    fields = dict.fromkeys(_FEED_FIELDS, "")
    for child in item:
        name = _localname(child)
        if name not in fields or fields[name]:
            continue
        value = "".join(child.itertext()).strip()
        if name == "link" and not value:
            # Atom 形式 <link href="..."/>
            value = (child.get("href") or "").strip()
        fields[name] = value
    return fields


def parse_feed(text: str | None) -> List[Dict[str, str]]:
    """Return ``title``/``description``/``link`` mappings for each feed item.

    Both ``<link>url</link>`` and ``<link href="url"/>`` are understood and
    CDATA sections come back unwrapped. Items with neither a title nor a
    description are dropped; text that is not well-formed XML has no items.
    """

    body = (text or "").strip()
    if not body:
        return []

    parser = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(body.encode("utf-8"), parser=parser)
    except (etree.XMLSyntaxError, ValueError):
        return []

    items: List[Dict[str, str]] = []
    for el in root.iter():
        if _localname(el) != "item":
            continue
        fields = _item_fields(el)
        if fields["title"] or fields["description"]:
            items.append(fields)
    return items


def is_feed_url(url: str) -> bool:
    lowered = (url or "").lower()
    return lowered.endswith("/rss") or "rss" in lowered or "feed" in lowered


def parse_allow_list(raw: str | None) -> List[str]:
    """Split the configured allow-list on runs of whitespace and commas."""

    return [item for item in _ALLOW_SPLIT.split(raw or "") if item]


def page_document(url: str, html: str) -> Optional[Document]:
    plain = html_to_text(html)
    if not plain:
        return None
    return Document(url=url, snippet=plain[:SNIPPET_CHARS], joined=plain)


def feed_documents(url: str, xml: str) -> List[Document]:
    documents: List[Document] = []
    for item in parse_feed(xml):
        title = collapse_whitespace(item["title"])
        # note の description は CDATA 内が HTML
        description = html_to_text(item["description"])
        documents.append(
            Document(
                url=item["link"] or url,
                title=title,
                snippet=description[:SNIPPET_CHARS],
                joined=collapse_whitespace(f"{title} {description}"),
            )
        )
    return documents


def documents_from_body(url: str, body: str) -> List[Document]:
    """Turn a fetched body into documents according to the URL kind."""

    if is_feed_url(url):
        return feed_documents(url, body)
    document = page_document(url, body)
    return [document] if document else []


__all__ = [
    "SNIPPET_CHARS",
    "documents_from_body",
    "feed_documents",
    "html_to_text",
    "is_feed_url",
    "page_document",
    "parse_allow_list",
    "parse_feed",
]
