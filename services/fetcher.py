"""HTTP fetch helpers with a small in-process TTL cache."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

import requests

from faqcore.config import FETCH_TIMEOUT_SEC, PAGE_CACHE_TTL_SEC

LOGGER = logging.getLogger(__name__)

USER_AGENT = "faqbot/1.0"


class FetchError(RuntimeError):
    """Raised when a remote resource is unreachable or answers non-2xx."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        detail = f"status={status}" if status is not None else (reason or "unreachable")
        super().__init__(f"fetch failed: {url} ({detail})")


class TTLCache:
    """Thread-safe mapping whose entries expire after a per-entry TTL."""

    def __init__(self, time_func: Callable[[], float] = time.monotonic):
        self._items: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()
        self._time_func = time_func

    def get(self, key: str) -> Optional[str]:
        now = self._time_func()
        with self._lock:
            hit = self._items.get(key)
            if hit is None:
                return None
            expire_at, value = hit
            if expire_at <= now:
                del self._items[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: float) -> None:
        if ttl <= 0:
            return
        with self._lock:
            self._items[key] = (self._time_func() + ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


_CACHE = TTLCache()


def fetch_text(
    url: str,
    *,
    ttl: float = PAGE_CACHE_TTL_SEC,
    timeout: float = FETCH_TIMEOUT_SEC,
    cache: TTLCache | None = None,
) -> str:
    """GET ``url`` and return its body as text.

    Successful bodies are cached for ``ttl`` seconds. Connection errors and
    timeouts are raised as :class:`FetchError` like non-2xx responses.
    """

    store = _CACHE if cache is None else cache
    cached = store.get(url)
    if cached is not None:
        return cached

    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    except requests.RequestException as exc:
        raise FetchError(url, reason=str(exc)) from exc

    if not 200 <= response.status_code < 300:
        raise FetchError(url, status=response.status_code)

    if not response.encoding or response.encoding.lower() == "iso-8859-1":
        # Published sheets may omit the charset; requests then assumes latin-1.
        response.encoding = "utf-8"
    body = response.text
    store.set(url, body, ttl)
    LOGGER.debug("fetched %s bytes=%d ttl=%s", url, len(body), ttl)
    return body


def clear_cache() -> None:
    _CACHE.clear()


__all__ = ["FetchError", "TTLCache", "clear_cache", "fetch_text"]
