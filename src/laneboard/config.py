# src/laneboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a working default, so the board runs with no configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "LANEBOARD"

DEFAULT_TEAM = ["Unassigned", "Alex Design", "Sam Dev", "Jordan PM", "Riley QA", "Project Lead"]


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
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    # Names contain spaces ("Sam Dev"), so only commas separate entries.
    return [p.strip() for p in raw.split(",") if p.strip()]


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
    board_path: Path
    storage_key: str

    # ---- Board ----
    monitor_interval_seconds: float
    current_user: str
    team: List[str]

    # ---- Console ----
    console_color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "laneboard") or "laneboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/laneboard"))
        board_path = _env_path(_k("BOARD_PATH"), data_dir / "board.json")
        storage_key = _env(_k("STORAGE_KEY"), "tasks_v5_simple") or "tasks_v5_simple"

        monitor_interval_seconds = max(0.05, _env_float(_k("MONITOR_INTERVAL"), 1.0))
        current_user = _env(_k("CURRENT_USER"), "Project Lead").strip() or "Project Lead"
        team = _env_list(_k("TEAM"), DEFAULT_TEAM)

        console_color = _env_bool(_k("CONSOLE_COLOR"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            board_path=board_path,
            storage_key=storage_key,
            monitor_interval_seconds=monitor_interval_seconds,
            current_user=current_user,
            team=team,
            console_color=console_color,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first use (after reading .env)."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
