# src/laneboard/board/errors.py

"""Board error types. Messages are user-facing and shown as notices."""

from __future__ import annotations


class BoardError(RuntimeError):
    """Base class for rejections that leave the board untouched."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BoardError):
    """Submitted dialog values are not acceptable (empty title, stale due date)."""


class TransitionRejected(BoardError):
    """The requested lane move is not allowed for the task's current state."""


class TaskNotFound(BoardError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found.")
        self.task_id = task_id
