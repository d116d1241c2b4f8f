"""
util/config.py

Environment-driven settings for the pulse service and CLI.

Environment variables:
- GEMINI_API_KEY     (required for AI summaries)
- GEMINI_API_URL     (default: https://generativelanguage.googleapis.com/v1beta)
- GEMINI_MODEL       (default: gemini-2.5-flash-preview-09-2025)
- GEMINI_OFFLINE     (set to 1/true to stub summaries without calling the API)
- PULSE_AI_ENABLED   (set to 0/false to show the placeholder instead of AI summaries)
- HTTP_TIMEOUT       (seconds per data-source call, default 8)
- LLM_TIMEOUT        (seconds per summarization call, default 30)
- PULSE_PORT         (default 3001)
- LOG_LEVEL          (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


# Read .env once per process; real environment variables win.
load_dotenv()

DEFAULT_HTTP_TIMEOUT = 8.0
DEFAULT_LLM_TIMEOUT = 30.0

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in TRUTHY:
        return True
    if raw in FALSY:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class Settings:
    gemini_api_key: str | None = None
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.5-flash-preview-09-2025"
    gemini_offline: bool = False
    ai_enabled: bool = True
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    llm_timeout: float = DEFAULT_LLM_TIMEOUT
    port: int = 3001
    log_level: str = "INFO"

    @property
    def has_ai_key(self) -> bool:
        return bool(self.gemini_api_key)


def get_settings() -> Settings:
    """Build settings from the process environment (.env was loaded at import)."""
    key = os.getenv("GEMINI_API_KEY", "").strip() or None
    return Settings(
        gemini_api_key=key,
        gemini_api_url=os.getenv("GEMINI_API_URL", Settings.gemini_api_url).rstrip("/"),
        gemini_model=os.getenv("GEMINI_MODEL", Settings.gemini_model),
        gemini_offline=_env_flag("GEMINI_OFFLINE", False),
        ai_enabled=_env_flag("PULSE_AI_ENABLED", True),
        http_timeout=_env_float("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        llm_timeout=_env_float("LLM_TIMEOUT", DEFAULT_LLM_TIMEOUT),
        port=_env_int("PULSE_PORT", 3001),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s: %(message)s",
    )
