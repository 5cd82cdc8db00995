# src/tasklog/config.py

"""Process-level settings loaded from environment variables (+ optional .env).

These are the knobs that are not part of the per-directory config.json:
where the tasks directory lives by default, log verbosity and viewer binding.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLOG"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Paths ----
    default_dir: Path

    # ---- Logging ----
    log_level: str
    log_file_name: str

    # ---- Viewer ----
    viewer_host: str
    viewer_port: int

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            default_dir=_env_path(_k("DIR"), Path.home() / ".tasks"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_file_name=_env(_k("LOG_FILE_NAME"), "tasklog.log"),
            viewer_host=_env(_k("VIEWER_HOST"), "127.0.0.1"),
            viewer_port=_env_int(_k("VIEWER_PORT"), 8011),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
