"""Application configuration defaults."""
from __future__ import annotations

import os
from typing import Any, Mapping


class ConfigValidationError(RuntimeError):
    """Raised when required configuration is missing or unsafe."""


def _app_env() -> str:
    return (os.getenv("APP_ENV") or "staging").strip().lower()


def validate_config(env: str | None = None, settings: Mapping[str, Any] | None = None) -> None:
    """
    Fail fast when required settings are missing.

    ``settings`` is usually ``app.config``; without it the process environment is used.

    - development は寛容（ローカルで動かしやすくする）
    - staging/production は FAQ シートと LINE の設定を必須にする
    """

    env = (env or _app_env()).lower()
    if env not in {"development", "staging", "production", "testing"}:
        raise ConfigValidationError(f"Unsupported APP_ENV value: {env!r}")

    if env in {"development", "testing"}:
        return

    source = os.environ if settings is None else settings
    errors: list[str] = []
    for key in ("SHEET_CSV_URL", "LINE_CHANNEL_SECRET", "LINE_CHANNEL_ACCESS_TOKEN"):
        if not str(source.get(key) or "").strip():
            errors.append(f"{key} is required in {env} environments")

    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n - " + "\n - ".join(errors)
        )


class BaseConfig:
    APP_ENV = _app_env()

    # FAQ sources
    SHEET_CSV_URL = os.getenv("SHEET_CSV_URL", "")
    ALLOW_URLS = os.getenv("ALLOW_URLS", "")

    # LINE
    LINE_CHANNEL_SECRET = os.getenv("LINE_CHANNEL_SECRET", "")
    LINE_CHANNEL_ACCESS_TOKEN = os.getenv("LINE_CHANNEL_ACCESS_TOKEN", "")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    INTERACTION_LOG_FILE = os.getenv("INTERACTION_LOG_FILE", "")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    APP_ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "testing"


class StagingConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "staging"


class ProductionConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "production"


def get_config():
    env = _app_env()
    if env == "production":
        return ProductionConfig
    if env == "development":
        return DevelopmentConfig
    if env == "testing":
        return TestingConfig
    return StagingConfig
