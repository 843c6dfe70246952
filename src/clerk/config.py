# src/clerk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing below the CLI reads configuration; values are passed into constructors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "CLERK"

# Documentation for `clerk --help` and the .env.example file.
ENV_VARS = {
    "CLERK_APP_NAME": "App display name used in logs (default: clerk).",
    "CLERK_LOG_LEVEL": "Console logging level (default: WARNING).",
    "CLERK_DATA_DIR": "Directory for the log file (default: ~/.clerk).",
    "CLERK_DB_PATH": "Task store JSON path (default: ~/.clerk-db).",
    "CLERK_LOG_TO_FILE": "Also write a debug log to <data_dir>/clerk.log (default: true).",
    "CLERK_TICK_SECONDS": "Refresh interval of the start timer (default: 1.0).",
}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


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
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path

    # ---- Timer ----
    tick_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        home = Path.home()
        data_dir = _env_path(_k("DATA_DIR"), home / ".clerk")

        return Settings(
            app_name=_env(_k("APP_NAME"), "clerk") or "clerk",
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_to_file=_env_bool(_k("LOG_TO_FILE"), True),
            data_dir=data_dir,
            db_path=_env_path(_k("DB_PATH"), home / ".clerk-db"),
            tick_seconds=_env_float(_k("TICK_SECONDS"), 1.0),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings; the local .env is read on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
