# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from laneboard.cli.bootstrap import create_initial_state
from laneboard.core.state import AppState

from .fakes import MemoryPersistence, ScriptedDialogs


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="laneboard-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        board_path=tmp_path / "board.json",
        storage_key="tasks_v5_simple",
        monitor_interval_seconds=0.01,
        current_user="Project Lead",
        team=["Unassigned", "Alex Design", "Sam Dev"],
        console_color=False,
    )


@pytest.fixture()
def persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture()
def dialogs() -> ScriptedDialogs:
    return ScriptedDialogs()


@pytest.fixture()
def state(settings: SimpleNamespace, persistence: MemoryPersistence, dialogs: ScriptedDialogs) -> AppState:
    """AppState wired with in-memory persistence and scripted dialogs."""
    return create_initial_state(settings=settings, persistence=persistence, dialogs=dialogs)
