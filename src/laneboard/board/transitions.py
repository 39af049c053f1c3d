# src/laneboard/board/transitions.py

from __future__ import annotations

"""
Transition engine.

Decides what happens to a requested lane move and owns the edit-dialog
lifecycle that a deferred move depends on:

  drop -> blocked (expired) -> rescue session + edit dialog -> save with a new
  future due date -> committed in the target lane

Only the Expiration Monitor moves tasks without going through this module.
"""

import logging
import time
from dataclasses import replace
from enum import Enum

from ..core.ports import UserDialogs
from .errors import TaskNotFound, TransitionRejected, ValidationError
from .models import ACTIVE_LANES, Lane, LateStatus, Task, TaskDraft, normalize_assignees
from .rescue import RescueSession
from .task_store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "Project Lead"


class MoveOutcome(str, Enum):
    IGNORED = "ignored"
    COMMITTED = "committed"
    DEFERRED = "deferred"


def late_status_for(lane: Lane, task: Task, now: float) -> LateStatus:
    if lane == Lane.DONE:
        return LateStatus.LATE_DONE if task.is_expired(now) else LateStatus.NONE
    if lane == Lane.INCOMPLETE:
        return LateStatus.MISSED
    return LateStatus.NONE


class TransitionEngine:
    def __init__(
        self,
        store: TaskStore,
        session: RescueSession,
        dialogs: UserDialogs,
        *,
        actor: str = DEFAULT_ACTOR,
    ) -> None:
        self._store = store
        self._session = session
        self._dialogs = dialogs
        self._actor = actor

    @property
    def session(self) -> RescueSession:
        return self._session

    def _lookup(self, task_id: int) -> Task | None:
        try:
            return self._store.get(task_id)
        except TaskNotFound:
            logger.debug("Ignoring request for unknown task id=%s", task_id)
            return None

    # ---- moves ----

    def request_move(self, task_id: int, target: Lane, *, now: float | None = None) -> MoveOutcome:
        """
        Apply, reject or defer a lane move.

        Raises TransitionRejected when the move is not allowed; the board is
        left untouched in that case.
        """
        if now is None:
            now = time.time()

        task = self._lookup(task_id)
        if task is None or task.lane == target:
            return MoveOutcome.IGNORED

        if target == Lane.INCOMPLETE:
            if task.lane == Lane.DONE:
                raise TransitionRejected("Completed tasks cannot be moved to Incomplete.")
            if task.due is None or task.due > now:
                raise TransitionRejected("Only expired tasks can be moved to Incomplete.")

        needs_rescue = target in ACTIVE_LANES and (
            task.lane == Lane.INCOMPLETE or (task.lane == Lane.DONE and task.is_expired(now))
        )
        if needs_rescue:
            self._session.open(task.id, target)
            logger.info("Task %s move to %s deferred pending a new due date", task.id, target.value)
            self._dialogs.alert(f"Task is expired! Update the Due Date to move it to {target.value}.")
            return MoveOutcome.DEFERRED

        moved = task.with_entry(
            self._actor,
            f"Moved to {target.value}",
            now,
            lane=target,
            late_status=late_status_for(target, task, now),
        )
        self._store.update(moved)
        logger.info("Task %s %s -> %s", task.id, task.lane.value, target.value)
        return MoveOutcome.COMMITTED

    # ---- edit dialog lifecycle ----

    def begin_create(self) -> None:
        self._session.clear()

    def begin_edit(self, task_id: int) -> Task | None:
        if self._session.is_open and not self._session.applies_to(task_id):
            self._session.clear()
        return self._lookup(task_id)

    def cancel_edit(self) -> None:
        self._session.clear()

    def save_task(self, draft: TaskDraft, *, now: float | None = None) -> Task | None:
        """
        Commit the edit dialog.

        A pending rescue for the draft's task is resolved here: the new due
        date must lie strictly in the future, otherwise ValidationError is
        raised and the session stays open.
        """
        if now is None:
            now = time.time()

        title = (draft.title or "").strip()
        if not title:
            raise ValidationError("Title required")

        assignees = normalize_assignees(draft.assignees)

        if draft.task_id is None:
            self._session.clear()
            task = Task(
                id=self._store.allocate_id(now),
                title=title,
                assignees=assignees,
                due=draft.due,
            )
            self._store.add(task)
            return task

        rescuing = self._session.applies_to(draft.task_id)
        if rescuing and (draft.due is None or draft.due <= now):
            raise ValidationError(
                "To move a task out of Incomplete, you must update the Due Date to the future."
            )

        task = self._lookup(draft.task_id)
        if task is None:
            self._session.clear()
            return None

        edited = replace(task, title=title, assignees=assignees, due=draft.due)
        target = self._session.target_lane
        if rescuing and target is not None:
            updated = edited.with_entry(
                self._actor,
                f"Rescued to {target.value} (Date Updated)",
                now,
                lane=target,
                late_status=LateStatus.NONE,
            )
            logger.info("Task %s rescued to %s", task.id, target.value)
        else:
            updated = edited.with_entry(self._actor, "Updated", now)

        self._session.clear()
        self._store.update(updated)
        return updated

    def delete_task(self, task_id: int) -> bool:
        if self._lookup(task_id) is None:
            return False
        if not self._dialogs.confirm("Delete?"):
            return False
        if self._session.applies_to(task_id):
            self._session.clear()
        self._store.remove(task_id)
        return True
