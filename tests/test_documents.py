import pytest

from faqcore.search.documents import (
    SNIPPET_CHARS,
    documents_from_body,
    html_to_text,
    is_feed_url,
    parse_allow_list,
    parse_feed,
)


def test_html_to_text_strips_scripts_styles_and_tags():
    html = (
        "<html><head><style>.x { color: red; }</style>"
        "<script type='text/javascript'>var a = '<p>';</script></head>"
        "<body><h1>営業時間</h1>\n<p>10時&nbsp;〜&nbsp;18時 &amp; 土日&lt;休み&gt;</p></body></html>"
    )
    assert html_to_text(html) == "営業時間 10時 〜 18時 & 土日<休み>"


def test_html_to_text_is_best_effort_on_broken_markup():
    assert html_to_text("<div><p>閉じてない <b>太字") == "閉じてない 太字"
    assert html_to_text("<script>never closed") == ""
    assert html_to_text("前<p>後</div>") == "前 後"
    assert html_to_text("") == ""
    assert html_to_text(None) == ""


FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
  <title>ショップのブログ</title>
  <item>
    <title><![CDATA[開業しました]]></title>
    <description><![CDATA[本日  開業しました。
    よろしくお願いします。]]></description>
    <link>https://note.example/n/1</link>
  </item>
  <item>
    <title>送料改定のお知らせ</title>
    <link href="https://note.example/n/2"/>
  </item>
  <item>
    <link>https://note.example/n/3</link>
  </item>
</channel></rss>
"""


def test_parse_feed_extracts_items():
    items = parse_feed(FEED)
    assert items == [
        {
            "title": "開業しました",
            "description": "本日  開業しました。\n    よろしくお願いします。",
            "link": "https://note.example/n/1",
        },
        {"title": "送料改定のお知らせ", "description": "", "link": "https://note.example/n/2"},
    ]


@pytest.mark.parametrize("text", ["", None, "<rss><item><title>unterminated", "not xml at all"])
def test_parse_feed_malformed_yields_nothing(text):
    assert parse_feed(text) == []


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://note.com/shop/rss", True),
        ("https://example.com/RSS.xml", True),
        ("https://example.com/feed/", True),
        ("https://shop.example/about", False),
    ],
)
def test_is_feed_url(url, expected):
    assert is_feed_url(url) is expected


def test_parse_allow_list_splits_on_whitespace_and_commas():
    raw = " https://a.example/ ,https://b.example/rss\n\thttps://c.example,, "
    assert parse_allow_list(raw) == [
        "https://a.example/",
        "https://b.example/rss",
        "https://c.example",
    ]
    assert parse_allow_list("") == []
    assert parse_allow_list(None) == []


def test_documents_from_feed_body():
    docs = documents_from_body("https://note.example/rss", FEED)
    assert [doc.url for doc in docs] == ["https://note.example/n/1", "https://note.example/n/2"]
    assert docs[0].title == "開業しました"
    assert docs[0].snippet == "本日 開業しました。 よろしくお願いします。"
    assert docs[0].joined == "開業しました 本日 開業しました。 よろしくお願いします。"
    assert docs[1].snippet == ""


def test_feed_description_markup_is_stripped():
    body = (
        "<rss><channel><item>"
        "<title>送料改定</title>"
        '<description><![CDATA[<p>送料を<b>改定</b>しました<img src="x.png"/></p>]]></description>'
        "<link>https://note.example/n/9</link>"
        "</item></channel></rss>"
    )
    doc = documents_from_body("https://note.example/rss", body)[0]
    assert doc.snippet == "送料を 改定 しました"
    assert doc.joined == "送料改定 送料を 改定 しました"
    assert "<" not in doc.snippet


def test_parse_feed_reads_atom_namespaced_link():
    body = (
        '<rss xmlns:atom="http://www.w3.org/2005/Atom"><channel><item>'
        "<title>A</title>"
        '<atom:link href="http://x/1"/>'
        "</item></channel></rss>"
    )
    assert parse_feed(body) == [{"title": "A", "description": "", "link": "http://x/1"}]


def test_feed_item_without_link_uses_feed_url():
    body = "<rss><item><title>A</title></item></rss>"
    docs = documents_from_body("https://note.example/rss", body)
    assert [doc.url for doc in docs] == ["https://note.example/rss"]


def test_documents_from_page_body():
    body = "<p>" + "あ" * 300 + "</p>"
    docs = documents_from_body("https://shop.example/about", body)
    assert len(docs) == 1
    assert docs[0].url == "https://shop.example/about"
    assert docs[0].snippet == "あ" * SNIPPET_CHARS
    assert docs[0].joined == "あ" * 300


def test_empty_page_yields_no_document():
    assert documents_from_body("https://shop.example/blank", "<html><body> </body></html>") == []
