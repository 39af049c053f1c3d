# src/laneboard/board/analytics.py

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .models import Lane, LateStatus, Task


@dataclass(frozen=True, slots=True)
class BoardStats:
    total: int
    done: int
    on_time_pct: int
    late: int
    late_titles: tuple[str, ...]


def filter_tasks(tasks: Iterable[Task], query: str | None) -> list[Task]:
    """Case-insensitive match on title or any assignee name."""
    q = (query or "").strip().lower()
    if not q:
        return list(tasks)
    return [
        t
        for t in tasks
        if q in t.title.lower() or q in " ".join(t.assignees).lower()
    ]


def lane_counts(tasks: Iterable[Task]) -> dict[Lane, int]:
    counts = {lane: 0 for lane in Lane}
    for t in tasks:
        counts[t.lane] += 1
    return counts


def is_late(task: Task) -> bool:
    return task.lane == Lane.INCOMPLETE or task.late_status == LateStatus.LATE_DONE


def compute_stats(tasks: Iterable[Task]) -> BoardStats:
    items = list(tasks)
    done = [t for t in items if t.lane == Lane.DONE]
    on_time = [t for t in done if t.late_status == LateStatus.NONE]
    late = [t for t in items if is_late(t)]
    # Halves round up.
    pct = math.floor(len(on_time) / len(done) * 100 + 0.5) if done else 0
    return BoardStats(
        total=len(items),
        done=len(done),
        on_time_pct=pct,
        late=len(late),
        late_titles=tuple(t.title for t in late),
    )
