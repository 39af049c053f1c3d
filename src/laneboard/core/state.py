# src/laneboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..board.monitor import ExpirationMonitor, MonitorBackgroundRunner
from ..board.rescue import RescueSession
from ..board.task_store import TaskStore
from ..board.transitions import TransitionEngine
from .ports import UserDialogs


@dataclass
class AppState:
    # Settings object (or a compatible namespace in tests).
    settings: Any

    store: TaskStore
    session: RescueSession
    engine: TransitionEngine
    monitor: ExpirationMonitor
    dialogs: UserDialogs

    # Set once the monitor thread is running.
    monitor_runner: MonitorBackgroundRunner | None = None
