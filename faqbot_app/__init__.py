import logging
import os
from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask, jsonify
from linebot import LineBotApi, WebhookHandler

import faq_api
import line_webhook
from config import get_config, validate_config
from faqcore.config import ResolverConfig
from faqcore.resolver import AnswerResolver, build_resolver
from faqcore.search.documents import parse_allow_list
from services.line_handlers import register_handlers

load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL") or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app.logger.setLevel(level)


def _resolver_config(app: Flask) -> ResolverConfig:
    env = dict(os.environ)
    # app.config の値（テストの上書き含む）を優先する
    for key in ("SHEET_CSV_URL", "ALLOW_URLS"):
        value = app.config.get(key)
        if value:
            env[key] = str(value)
    return ResolverConfig.from_env(env)


def _log_environment_config(app: Flask, resolver: AnswerResolver) -> None:
    cfg = resolver.config
    app.logger.info(
        "startup.config APP_ENV=%s SHEET_CSV_URL_set=%s allow_urls=%d scorer=%s LINE_set=%s",
        app.config.get("APP_ENV"),
        bool(cfg.sheet_csv_url),
        len(parse_allow_list(cfg.allow_urls)),
        resolver.scorer.name,
        bool(app.config.get("LINE_CHANNEL_SECRET") and app.config.get("LINE_CHANNEL_ACCESS_TOKEN")),
    )


def create_app(
    overrides: Mapping[str, Any] | None = None,
    *,
    resolver: AnswerResolver | None = None,
    line_bot_api: LineBotApi | None = None,
) -> Flask:
    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    validate_config(app.config.get("APP_ENV"), app.config)
    _configure_logging(app)

    resolver = resolver or build_resolver(_resolver_config(app))
    app.extensions["faqbot.resolver"] = resolver

    line_bot_api = line_bot_api or LineBotApi(app.config.get("LINE_CHANNEL_ACCESS_TOKEN") or "")
    handler = WebhookHandler(app.config.get("LINE_CHANNEL_SECRET") or "")
    register_handlers(
        handler,
        resolver=resolver,
        line_bot_api=line_bot_api,
        log_path=app.config.get("INTERACTION_LOG_FILE") or None,
    )
    app.extensions["faqbot.line_bot_api"] = line_bot_api
    app.extensions["faqbot.line_handler"] = handler

    app.register_blueprint(faq_api.bp)
    app.register_blueprint(line_webhook.bp)

    @app.get("/healthz")
    def _healthz():
        return "ok", 200

    @app.get("/readyz")
    def _readyz():
        errors = []
        if not resolver.config.sheet_csv_url:
            errors.append("missing_env:SHEET_CSV_URL")
        if not app.config.get("LINE_CHANNEL_SECRET"):
            errors.append("missing_env:LINE_CHANNEL_SECRET")
        if not app.config.get("LINE_CHANNEL_ACCESS_TOKEN"):
            errors.append("missing_env:LINE_CHANNEL_ACCESS_TOKEN")
        status = 200 if not errors else 503
        payload = {
            "ok": not errors,
            "errors": errors,
            "env": app.config.get("APP_ENV"),
            "scorer": resolver.scorer.name,
        }
        return jsonify(payload), status

    _log_environment_config(app, resolver)
    return app
