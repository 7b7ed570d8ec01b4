from __future__ import annotations

from flask import Blueprint, abort, current_app, request
from linebot.exceptions import InvalidSignatureError


bp = Blueprint("line_webhook", __name__)


@bp.get("/callback")
def callback_ping():
    # 疎通確認用
    return "OK", 200


@bp.post("/callback")
def callback():
    signature = request.headers.get("X-Line-Signature", "")
    body = request.get_data(as_text=True)

    handler = current_app.extensions["faqbot.line_handler"]
    try:
        handler.handle(body, signature)
    except InvalidSignatureError:
        current_app.logger.warning("LINE signature mismatch")
        abort(400, description="signature mismatch")
    return "OK", 200
