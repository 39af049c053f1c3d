# src/laneboard/board/models.py

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"
SYSTEM_ACTOR = "System"


class Lane(StrEnum):
    """Board column a task currently sits in."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    INCOMPLETE = "incomplete"
    DONE = "done"

    @classmethod
    def from_db(cls, raw: str | None) -> Lane:
        if not raw:
            return cls.TODO
        if raw == "progress":  # legacy column id
            return cls.IN_PROGRESS
        try:
            return cls(raw)
        except ValueError:
            return cls.TODO


ACTIVE_LANES = (Lane.TODO, Lane.IN_PROGRESS)


class LateStatus(StrEnum):
    NONE = "none"
    MISSED = "missed"
    LATE_DONE = "late_done"

    @classmethod
    def from_db(cls, raw: str | None) -> LateStatus:
        if not raw:
            return cls.NONE
        try:
            return cls(raw)
        except ValueError:
            return cls.NONE


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    actor: str
    description: str
    timestamp: float


def normalize_assignees(names: Iterable[str] | None) -> tuple[str, ...]:
    """
    Deduplicate and clean assignee names, keeping input order.

    An empty selection becomes ("Unassigned",); the sentinel is dropped
    as soon as a real name is present.
    """
    out: list[str] = []
    for n in names or ():
        name = str(n).strip()
        if not name or name == UNASSIGNED or name in out:
            continue
        out.append(name)
    return tuple(out) if out else (UNASSIGNED,)


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    lane: Lane = Lane.TODO
    assignees: tuple[str, ...] = (UNASSIGNED,)
    due: float | None = None
    late_status: LateStatus = LateStatus.NONE
    history: tuple[HistoryEntry, ...] = field(default_factory=tuple)

    def is_expired(self, now: float) -> bool:
        return self.due is not None and self.due < now

    def with_entry(self, actor: str, description: str, timestamp: float, **changes: Any) -> Task:
        """Return a copy with `changes` applied and one history entry appended."""
        entry = HistoryEntry(actor=actor, description=description, timestamp=timestamp)
        return replace(self, history=self.history + (entry,), **changes)


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Values submitted from the edit dialog (task_id=None means create)."""

    title: str
    assignees: tuple[str, ...] = ()
    due: float | None = None
    task_id: int | None = None


# ---- persisted record format ----


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "team": list(task.assignees),
        "col": task.lane.value,
        "due": task.due,
        "lateStatus": task.late_status.value,
        "history": [
            {"user": h.actor, "action": h.description, "timestamp": h.timestamp}
            for h in task.history
        ],
    }


# Epoch values above this are milliseconds (1e11 s is far past year 5000).
_MS_THRESHOLD = 1e11


def _epoch_seconds(raw: Any) -> float | None:
    """Number, numeric string, or ISO local datetime -> epoch seconds."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        if not isinstance(raw, str):
            return None
        try:
            return dt.datetime.fromisoformat(raw).timestamp()
        except ValueError:
            return None
    return value / 1000.0 if abs(value) > _MS_THRESHOLD else value


def task_from_record(raw: dict[str, Any]) -> Task | None:
    """Build a Task from a stored record; returns None for unusable records."""
    try:
        task_id = int(raw["id"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Skipping stored task without a valid id: %r", raw.get("id"))
        return None

    title = str(raw.get("title") or "").strip()
    if not title:
        logger.warning("Skipping stored task %s without a title", task_id)
        return None

    team = raw.get("team")
    if isinstance(team, str):
        team = [team]

    history: list[HistoryEntry] = []
    for h in raw.get("history") or []:
        if not isinstance(h, dict):
            continue
        history.append(
            HistoryEntry(
                actor=str(h.get("user") or ""),
                description=str(h.get("action") or ""),
                timestamp=_epoch_seconds(h.get("timestamp")) or 0.0,
            )
        )

    raw_due = raw.get("due")
    due = _epoch_seconds(raw_due)
    if due is None and raw_due not in (None, ""):
        logger.warning("Stored task %s has an unreadable due date %r; loading it without one", task_id, raw_due)

    lane = Lane.from_db(raw.get("col"))
    late_status = LateStatus.from_db(raw.get("lateStatus"))
    if lane == Lane.INCOMPLETE and late_status != LateStatus.MISSED:
        late_status = LateStatus.MISSED

    return Task(
        id=task_id,
        title=title,
        lane=lane,
        assignees=normalize_assignees(team if isinstance(team, list) else None),
        due=due,
        late_status=late_status,
        history=tuple(history),
    )
