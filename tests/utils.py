from typing import Dict, List, Union


SHEET_URL = "https://docs.example.com/sheet.csv"

SHIPPING_CSV = (
    "question,answer,visibility\n"
    '"配送料はいくらですか","1000円です","public"\n'
)


class FakeFetch:
    """Stand-in for ``services.fetcher.fetch_text`` serving canned bodies."""

    def __init__(self, pages: Dict[str, Union[str, Exception]]):
        self.pages = pages
        self.calls: List[str] = []

    def __call__(self, url, **kwargs):
        self.calls.append(url)
        body = self.pages[url]
        if isinstance(body, Exception):
            raise body
        return body


class DummyLineApi:
    def __init__(self):
        self.reply_calls = []

    def reply_message(self, token, messages, *args, **kwargs):
        self.reply_calls.append((token, messages))
