# src/laneboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board core.

The store, engine and monitor depend on Protocols instead of concrete
implementations, so storage and the console UI stay swappable and tests can
plug in in-memory fakes.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..board.models import Task, TaskDraft

TaskSubscriber = Callable[[list[Task]], None]
# Invoked with the full task list after every committed store mutation.


class TaskPersistence(Protocol):
    """Durable key-value storage holding the serialized board."""

    def read(self) -> list[Task]: ...
    def write(self, tasks: Sequence[Task]) -> None: ...
    def clear(self) -> None: ...


class UserDialogs(Protocol):
    """
    Blocking user interaction.

    - alert: show a notice (rejections, rescue prompts)
    - confirm: yes/no question (delete, reset)
    - edit_task: run the edit dialog; None means the user closed it without saving
    """

    def alert(self, message: str) -> None: ...
    def confirm(self, question: str) -> bool: ...
    def edit_task(self, task: Task | None) -> TaskDraft | None: ...
