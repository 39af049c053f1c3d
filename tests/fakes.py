# tests/fakes.py

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Union

from laneboard.board.models import Task, TaskDraft

NOW = 1_800_000_000.0
HOUR = 3600.0
DAY = 86400.0

DraftStep = Union[TaskDraft, None, Callable[[Union[Task, None]], Union[TaskDraft, None]]]


class MemoryPersistence:
    """
    In-memory TaskPersistence used by store/engine tests.

    - read() returns the initial tasks
    - every write() is captured for assertions
    """

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self.tasks: list[Task] = list(tasks)
        self.writes: list[list[Task]] = []
        self.cleared = 0

    def read(self) -> list[Task]:
        return list(self.tasks)

    def write(self, tasks: Sequence[Task]) -> None:
        self.tasks = list(tasks)
        self.writes.append(list(tasks))

    def clear(self) -> None:
        self.tasks = []
        self.cleared += 1


@dataclass(slots=True)
class ScriptedDialogs:
    """
    Deterministic UserDialogs.

    - alerts are captured
    - confirm() answers with `confirm_answer`
    - edit_task() pops the next scripted step; a callable step receives the
      task being edited, None closes the dialog
    """

    drafts: list[DraftStep] = field(default_factory=list)
    confirm_answer: bool = True
    alerts: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)
    edited: list[Task | None] = field(default_factory=list)

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.confirm_answer

    def edit_task(self, task: Task | None) -> TaskDraft | None:
        self.edited.append(task)
        if not self.drafts:
            return None
        step = self.drafts.pop(0)
        if callable(step):
            return step(task)
        return step
