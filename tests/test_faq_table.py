import pytest

from faqcore.search.faq_table import LEGACY_ANSWER_COLUMN, load_faq_rows, parse_csv, rows_from_csv
from services.fetcher import FetchError

from tests.utils import SHEET_URL, SHIPPING_CSV, FakeFetch


def test_parse_csv_quoted_comma():
    assert parse_csv('"a,b",c') == [["a,b", "c"]]


def test_parse_csv_escaped_quote_and_multiline_field():
    text = 'q,a\n"彼は""こんにちは""と言った","1行目\n2行目"\n'
    assert parse_csv(text) == [
        ["q", "a"],
        ['彼は"こんにちは"と言った', "1行目\n2行目"],
        [""],
    ]


@pytest.mark.parametrize("newline", ["\r\n", "\n", "\r"])
def test_parse_csv_row_terminators(newline):
    text = newline.join(["a,b", "1,2", "3,4"])
    assert parse_csv(text) == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_parse_csv_unbalanced_quote_does_not_raise():
    assert parse_csv('a,"b,c\nd') == [["a", "b,c\nd"]]


def test_rows_from_csv_scenario_row():
    rows = rows_from_csv(SHIPPING_CSV)
    assert len(rows) == 1
    row = rows[0]
    assert row.question == "配送料はいくらですか"
    assert row.answer == "1000円です"
    assert row.visibility == "public"
    assert row.searchable_text == "配送料はいくらですか 1000円です"


def test_rows_from_csv_filters_visibility_and_empty_answers():
    text = (
        "Question,Answer,Visibility\n"
        "公開の質問,公開の回答,PUBLIC\n"
        "非公開の質問,非公開の回答,private\n"
        "回答なし,,public\n"
        "空欄は公開扱い,表示される,\n"
    )
    rows = rows_from_csv(text)
    assert [row.answer for row in rows] == ["公開の回答", "表示される"]
    assert all(row.visibility == "public" for row in rows)


def test_rows_from_csv_without_visibility_column_defaults_to_public():
    rows = rows_from_csv("question,answer\nQ1,A1\n")
    assert [(row.question, row.answer) for row in rows] == [("Q1", "A1")]


def test_rows_from_csv_full_header():
    text = (
        "category_or_question,question,answer,keywords(optional),source_url_or_note,visibility\n"
        "配送, 送料は？ ,全国一律1000円です,送料 配送,https://shop.example/law,public\n"
    )
    row = rows_from_csv(text)[0]
    assert row.category == "配送"
    assert row.question == "送料は？"
    assert row.keywords == "送料 配送"
    assert row.source == "https://shop.example/law"
    assert row.searchable_text == "配送 送料は？ 全国一律1000円です 送料 配送"


def test_rows_from_csv_plain_keywords_header():
    row = rows_from_csv("question,answer,keywords\nQ,A,キーワード\n")[0]
    assert row.keywords == "キーワード"


def test_rows_from_csv_legacy_answer_column():
    assert LEGACY_ANSWER_COLUMN == 3
    text = "A列,B列,C列,D列\n営業,営業時間,メモ,10時から18時です\n"
    rows = rows_from_csv(text)
    assert [row.answer for row in rows] == ["10時から18時です"]
    assert rows[0].searchable_text == "営業 営業時間 メモ 10時から18時です"


def test_rows_from_csv_answer_without_question_columns_searches_all_columns():
    row = rows_from_csv("メモ,answer\n配送について,1000円です\n")[0]
    assert row.answer == "1000円です"
    assert row.searchable_text == "配送について 1000円です"


def test_rows_from_csv_short_rows_are_tolerated():
    text = "question,answer,visibility\nonly-question\n,回答だけ\n"
    rows = rows_from_csv(text)
    assert [(row.question, row.answer) for row in rows] == [("", "回答だけ")]


@pytest.mark.parametrize("text", ["", "question,answer,visibility", None])
def test_rows_from_csv_header_only_is_empty(text):
    assert rows_from_csv(text) == []


def test_load_faq_rows_passes_ttl_to_fetcher():
    seen = {}

    def fetch(url, **kwargs):
        seen["url"] = url
        seen.update(kwargs)
        return SHIPPING_CSV

    rows = load_faq_rows(SHEET_URL, fetch, ttl=60)
    assert len(rows) == 1
    assert seen == {"url": SHEET_URL, "ttl": 60}


def test_load_faq_rows_propagates_fetch_error():
    fetch = FakeFetch({SHEET_URL: FetchError(SHEET_URL, status=404)})
    with pytest.raises(FetchError):
        load_faq_rows(SHEET_URL, fetch)
