# src/tidy_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a sane default; a bad value falls back to the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIDY"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_dir: Path

    # ---- Persistence ----
    persist: bool
    storage_key: str

    # ---- Animation timing ----
    animations: bool
    delete_duration_ms: int
    delete_slide_distance: float
    pulse_duration_ms: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tidy-tasks").strip() or "tidy-tasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tidy"))
        storage_dir = _env_path(_k("STORAGE_DIR"), data_dir / "storage")

        persist = _env_bool(_k("PERSIST"), True)
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        animations = _env_bool(_k("ANIMATIONS"), True)
        delete_duration_ms = max(0, _env_int(_k("DELETE_DURATION_MS"), 300))
        delete_slide_distance = _env_float(_k("DELETE_SLIDE_DISTANCE"), -300.0)
        pulse_duration_ms = max(0, _env_int(_k("PULSE_DURATION_MS"), 300))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_dir=storage_dir,
            persist=persist,
            storage_key=storage_key,
            animations=animations,
            delete_duration_ms=delete_duration_ms,
            delete_slide_distance=delete_slide_distance,
            pulse_duration_ms=pulse_duration_ms,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (never overriding the real environment) and return the cached Settings."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
