# src/laneboard/board/task_store.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable

from ..core.ports import TaskPersistence, TaskSubscriber
from .errors import TaskNotFound
from .models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Authoritative task collection for the process.

    Every mutation follows the same commit path:
    - swap in the new task list
    - persist it
    - notify subscribers (registration order) with the full list

    Thread-safety:
    - commits are serialized with a lock, so the expiration monitor thread and
      the console thread never interleave and subscribers never see a
      half-applied list
    - tasks are immutable values, so snapshots can be handed out freely
    """

    def __init__(self, persistence: TaskPersistence) -> None:
        self._persistence = persistence
        self._lock = threading.RLock()
        self._subscribers: list[TaskSubscriber] = []
        self._tasks: list[Task] = list(persistence.read())
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- low-level helpers ----

    def _commit(self, tasks: list[Task]) -> None:
        with self._lock:
            self._tasks = tasks
            self._persistence.write(tasks)
            snapshot = list(tasks)
            for cb in list(self._subscribers):
                cb(snapshot)

    def _index_of(self, task_id: int) -> int:
        for idx, t in enumerate(self._tasks):
            if t.id == task_id:
                return idx
        return -1

    # ---- public API ----

    def subscribe(self, callback: TaskSubscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def get_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def find(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx != -1 else None

    def get(self, task_id: int) -> Task:
        task = self.find(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def allocate_id(self, now: float | None = None) -> int:
        """Creation-time id in epoch milliseconds, bumped past existing ids."""
        if now is None:
            now = time.time()
        with self._lock:
            candidate = int(now * 1000)
            if self._tasks:
                candidate = max(candidate, max(t.id for t in self._tasks) + 1)
            return candidate

    def replace_all(self, tasks: Iterable[Task]) -> None:
        new_tasks = list(tasks)
        logger.debug("replace_all total=%s", len(new_tasks))
        self._commit(new_tasks)

    def add(self, task: Task) -> None:
        with self._lock:
            if self._index_of(task.id) != -1:
                raise ValueError(f"duplicate task id {task.id}")
            self._commit([*self._tasks, task])
        logger.info("Task added id=%s lane=%s", task.id, task.lane.value)

    def update(self, task: Task) -> None:
        with self._lock:
            idx = self._index_of(task.id)
            if idx == -1:
                logger.debug("update ignored, unknown task id=%s", task.id)
                return
            tasks = list(self._tasks)
            tasks[idx] = task
            self._commit(tasks)

    def remove(self, task_id: int) -> None:
        with self._lock:
            if self._index_of(task_id) == -1:
                logger.debug("remove ignored, unknown task id=%s", task_id)
                return
            self._commit([t for t in self._tasks if t.id != task_id])
        logger.info("Task removed id=%s", task_id)

    def clear(self) -> None:
        """Drop every task and the stored record (board reset)."""
        with self._lock:
            self._persistence.clear()
            self._tasks = []
            for cb in list(self._subscribers):
                cb([])
        logger.info("TaskStore cleared")
