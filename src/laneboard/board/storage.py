# src/laneboard/board/storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .models import Task, task_from_record, task_to_record

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks_v5_simple"


class JsonFileStorage:
    """
    Key-value storage backed by a single JSON object on disk.

    The board is stored as an array of task records under one key, so other
    keys in the same file are left untouched. Writes go through a temp file
    and os.replace, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _load_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read board storage from %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Board storage %s is not a JSON object; ignoring it", self._path)
            return {}
        return data

    def _save_document(self, doc: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    # ---- public API ----

    def read(self) -> list[Task]:
        records = self._load_document().get(self._key)
        if not isinstance(records, list):
            return []

        tasks: list[Task] = []
        seen: set[int] = set()
        for raw in records:
            if not isinstance(raw, dict):
                continue
            task = task_from_record(raw)
            if task is None:
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate stored task id=%s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def write(self, tasks: Sequence[Task]) -> None:
        doc = self._load_document()
        doc[self._key] = [task_to_record(t) for t in tasks]
        self._save_document(doc)
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    def clear(self) -> None:
        doc = self._load_document()
        if doc.pop(self._key, None) is None:
            return
        self._save_document(doc)
        logger.info("Cleared board storage key=%s in %s", self._key, self._path)
