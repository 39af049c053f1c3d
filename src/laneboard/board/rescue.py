# src/laneboard/board/rescue.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import Lane

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RescueSession:
    """
    A lane move that is waiting for the user to supply a new future due date.

    At most one exists per process. It is UI-session state only and is never
    persisted.
    """

    task_id: int | None = None
    target_lane: Lane | None = None

    @property
    def is_open(self) -> bool:
        return self.task_id is not None and self.target_lane is not None

    def applies_to(self, task_id: int | None) -> bool:
        return self.is_open and task_id is not None and self.task_id == task_id

    def open(self, task_id: int, target_lane: Lane) -> None:
        if self.is_open and self.task_id != task_id:
            logger.debug("Replacing rescue session for task %s", self.task_id)
        self.task_id = task_id
        self.target_lane = target_lane
        logger.debug("Rescue session opened task=%s target=%s", task_id, target_lane.value)

    def clear(self) -> None:
        if self.is_open:
            logger.debug("Rescue session cleared task=%s", self.task_id)
        self.task_id = None
        self.target_lane = None
