"""LINE webhook event handling: resolve text messages and reply."""

from __future__ import annotations

import logging
import time
from typing import Optional

from linebot import LineBotApi, WebhookHandler
from linebot.exceptions import LineBotApiError
from linebot.models import MessageEvent, TextMessage, TextSendMessage

from faqcore.logging_utils import log_interaction
from faqcore.resolver import AnswerResolver
from faqcore.schemas import Answer

LOGGER = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "内部処理でエラーが発生しました。お手数ですが、時間をおいて再度お試しください。"
TEXT_ONLY_MESSAGE = "テキストでご質問ください。"

# LINE rejects text messages longer than this.
MAX_TEXT_CHARS = 5000


def compose_reply_text(answer: Answer) -> str:
    text = answer.text
    if answer.url:
        text = f"{text}\n{answer.url}"
    if len(text) > MAX_TEXT_CHARS:
        text = text[: MAX_TEXT_CHARS - 1] + "…"
    return text


def _user_id(event) -> str:
    source = getattr(event, "source", None)
    return str(getattr(source, "user_id", "") or "")


def reply_text(line_bot_api: LineBotApi, reply_token: str, text: str) -> None:
    try:
        line_bot_api.reply_message(reply_token, TextSendMessage(text=text))
    except LineBotApiError:
        LOGGER.exception("LINE reply failed")


def handle_text_message(
    event,
    *,
    resolver: AnswerResolver,
    line_bot_api: LineBotApi,
    log_path: Optional[str] = None,
) -> Optional[Answer]:
    """Resolve the text of ``event`` and reply with the answer."""

    question = getattr(event.message, "text", "") or ""
    started = time.perf_counter()
    answer: Optional[Answer] = None
    errors: list[str] = []

    try:
        answer = resolver.resolve(question)
    except Exception as exc:
        LOGGER.exception("resolve failed for LINE message")
        errors.append(repr(exc))
        reply_text(line_bot_api, event.reply_token, INTERNAL_ERROR_MESSAGE)
    else:
        reply_text(line_bot_api, event.reply_token, compose_reply_text(answer))

    if log_path:
        log_interaction(
            log_path,
            answer,
            user_id=_user_id(event),
            channel="line",
            query=question,
            latency_ms=(time.perf_counter() - started) * 1000,
            errors=errors,
        )
    return answer


def handle_other_event(event, *, line_bot_api: LineBotApi) -> None:
    reply_token = getattr(event, "reply_token", None)
    if reply_token:
        reply_text(line_bot_api, reply_token, TEXT_ONLY_MESSAGE)


def register_handlers(
    handler: WebhookHandler,
    *,
    resolver: AnswerResolver,
    line_bot_api: LineBotApi,
    log_path: Optional[str] = None,
) -> WebhookHandler:
    """Attach the text and default event handlers to ``handler``."""

    @handler.add(MessageEvent, message=TextMessage)
    def _on_text(event):
        handle_text_message(event, resolver=resolver, line_bot_api=line_bot_api, log_path=log_path)

    @handler.default()
    def _on_other(event):
        handle_other_event(event, line_bot_api=line_bot_api)

    return handler


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "TEXT_ONLY_MESSAGE",
    "compose_reply_text",
    "handle_other_event",
    "handle_text_message",
    "register_handlers",
    "reply_text",
]
