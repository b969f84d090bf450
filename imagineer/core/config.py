from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    ai_provider: str
    ai_model: str
    ai_temperature: float
    gemini_api_key: str | None
    openai_api_key: str | None
    openai_base_url: str | None
    relay_base_url: str
    generation_timeout_s: float
    sheet_webhook_url: str | None
    email_list_webhook_url: str | None
    webhook_timeout_s: float
    scoring_config_path: str | None


def load_settings() -> Settings:
    provider = (_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower()
    default_model = "gpt-4o-mini" if provider == "openai" else "gemini-2.5-flash"
    return Settings(
        rate_limit=_get_env("RATE_LIMIT", "20/minute") or "20/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
                "http://localhost:3001",
            ],
        ),
        cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
        ai_provider=provider,
        ai_model=(_get_env("AI_MODEL", default_model) or default_model).strip(),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.7),
        # API_KEY is the name the relay deployment has always used for the Gemini key.
        gemini_api_key=_get_env("GEMINI_API_KEY") or _get_env("API_KEY"),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        relay_base_url=_get_env("RELAY_BASE_URL", "http://localhost:3001") or "http://localhost:3001",
        generation_timeout_s=_get_env_float("GENERATION_TIMEOUT_S", 60.0),
        sheet_webhook_url=_get_env("SHEET_WEBHOOK_URL"),
        email_list_webhook_url=_get_env("EMAIL_LIST_WEBHOOK_URL"),
        webhook_timeout_s=_get_env_float("WEBHOOK_TIMEOUT_S", 10.0),
        scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    )


settings = load_settings()

if settings.ai_provider not in {"gemini", "openai", "relay"}:
    raise RuntimeError("AI_PROVIDER must be one of 'gemini', 'openai' or 'relay'.")

if settings.generation_timeout_s <= 0:
    raise RuntimeError("GENERATION_TIMEOUT_S must be a positive number of seconds.")
