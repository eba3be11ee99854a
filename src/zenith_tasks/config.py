# src/zenith_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the AI advisor reports "not configured" instead).
- Every value has a working default, malformed values fall back to it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "ZENITH"

DEFAULT_STORAGE_KEY = "zenith_tasks_v2"
DEFAULT_AI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_AI_MODEL = "gemini-2.5-flash"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides variables that are already set.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data ----
    data_dir: Path
    storage_key: str

    # ---- Task editing ----
    auto_status: bool

    # ---- AI advisor (OpenAI-compatible endpoint) ----
    ai_api_key: Optional[str]
    ai_base_url: str
    ai_model: str
    ai_language: str
    ai_subtask_count: int
    ai_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "zenith") or "zenith"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/zenith"))
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY

        # The checklist -> status rule is a policy, not an invariant.
        auto_status = _env_bool(_k("AUTO_STATUS"), True)

        # Accept the generic names too, the same key is often shared with other tools.
        ai_api_key = _first_env(_k("AI_API_KEY"), "GEMINI_API_KEY", "API_KEY", default=None)
        ai_base_url = _env(_k("AI_BASE_URL"), DEFAULT_AI_BASE_URL)
        ai_model = _env(_k("AI_MODEL"), DEFAULT_AI_MODEL).strip() or DEFAULT_AI_MODEL
        ai_language = _env(_k("AI_LANGUAGE"), "English").strip() or "English"

        ai_subtask_count = _env_int(_k("AI_SUBTASK_COUNT"), 5)
        if ai_subtask_count < 1:
            ai_subtask_count = 5

        ai_timeout_seconds = _env_float(_k("AI_TIMEOUT_SECONDS"), 30.0)
        if ai_timeout_seconds <= 0:
            ai_timeout_seconds = 30.0

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_key=storage_key,
            auto_status=auto_status,
            ai_api_key=ai_api_key,
            ai_base_url=ai_base_url,
            ai_model=ai_model,
            ai_language=ai_language,
            ai_subtask_count=ai_subtask_count,
            ai_timeout_seconds=ai_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
