from __future__ import annotations

import time
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request

from faqcore.logging_utils import log_interaction
from faqcore.schemas import Answer


bp = Blueprint("faq_api", __name__)

INTERNAL_ERROR_ANSWER = "内部エラーが発生しました。お手数ですが、お問い合わせフォームからご連絡ください。"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _json(payload: dict[str, Any], status: int) -> Response:
    resp = jsonify(payload)
    resp.status_code = status
    resp.headers.update(CORS_HEADERS)
    return resp


# -----------------------------
# HP 埋め込み用 FAQ エンドポイント
# -----------------------------
@bp.route("/faq-bot", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def faq_bot():
    # プレフライト
    if request.method == "OPTIONS":
        return Response(status=204, headers=CORS_HEADERS)

    if request.method != "POST":
        return _json({"error": "method_not_allowed", "message": "POST だけ受け付けます。"}, 405)

    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return _json({"error": "invalid_json", "message": "JSON 形式で送信してください。"}, 400)

    question = str(body.get("message") or "").strip()
    if not question:
        return _json({"error": "empty_question", "message": "質問が空です。"}, 400)

    resolver = current_app.extensions["faqbot.resolver"]
    if not resolver.config.sheet_csv_url:
        return _json({"error": "missing_env", "message": "SHEET_CSV_URL が設定されていません。"}, 500)

    started = time.perf_counter()
    try:
        answer = resolver.resolve(question)
    except Exception as exc:
        current_app.logger.exception("faq-bot error")
        _log(question, None, started=started, errors=[repr(exc)])
        return _json({"error": "internal_error", "answer": INTERNAL_ERROR_ANSWER}, 500)

    _log(question, answer, started=started)

    # フロントエンドは主に answer を使う
    return _json(
        {
            "answer": answer.text,
            "url": answer.url,
            "matched": answer.matched,
            "matched_question": answer.matched_question,
            "score": answer.score,
        },
        200,
    )


def _log(question: str, answer: Answer | None, *, started: float, errors: list[str] | None = None) -> None:
    path = current_app.config.get("INTERACTION_LOG_FILE")
    if not path:
        return
    log_interaction(
        path,
        answer,
        user_id=request.remote_addr,
        channel="web",
        query=question,
        latency_ms=(time.perf_counter() - started) * 1000,
        errors=errors,
    )
