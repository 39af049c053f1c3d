# src/laneboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, store, engine and monitor into AppState.
"""

from __future__ import annotations

import logging

from rich.console import Console

from ..board.monitor import ExpirationMonitor
from ..board.rescue import RescueSession
from ..board.storage import JsonFileStorage
from ..board.task_store import TaskStore
from ..board.transitions import TransitionEngine
from ..config import get_settings
from ..connectors.console_connector import ConsoleDialogs
from ..core.ports import TaskPersistence, UserDialogs
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.board_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    persistence: TaskPersistence | None = None,
    dialogs: UserDialogs | None = None,
    console: Console | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Settings, persistence and dialogs are injectable for tests. If settings is
    None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if persistence is None:
        _ensure_local_dirs(settings)
        persistence = JsonFileStorage(settings.board_path, key=settings.storage_key)

    if dialogs is None:
        dialogs = ConsoleDialogs(console or Console(), settings.team)

    store = TaskStore(persistence)
    monitor = ExpirationMonitor(report_expired=store.replace_all)
    store.subscribe(monitor.push_snapshot)
    monitor.push_snapshot(store.get_all())

    session = RescueSession()
    engine = TransitionEngine(store, session, dialogs, actor=settings.current_user)

    return AppState(
        settings=settings,
        store=store,
        session=session,
        engine=engine,
        monitor=monitor,
        dialogs=dialogs,
    )
