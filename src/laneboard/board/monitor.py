# src/laneboard/board/monitor.py

from __future__ import annotations

"""
Expiration monitor.

A small polling loop that:
- keeps its own working copy of the board, fed by store snapshots,
- moves every overdue task that is not done into "incomplete",
- reports the whole updated list back in one batch.

Snapshots travel through a thread-safe queue; the monitor never reads the
store's memory directly. The loop runs on its own event loop in a background
thread so expiration is detected while the console is blocked on input().
"""

import asyncio
import contextlib
import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .models import SYSTEM_ACTOR, Lane, LateStatus, Task

logger = logging.getLogger(__name__)

EXPIRED_DESCRIPTION = "Moved to incomplete (Expired)"

ExpiredReporter = Callable[[list[Task]], None]


def expire_overdue(tasks: Iterable[Task], now: float) -> tuple[list[Task], int]:
    """Return (updated task list, number of tasks moved to incomplete)."""
    out: list[Task] = []
    changed = 0
    for t in tasks:
        if t.is_expired(now) and t.lane not in (Lane.DONE, Lane.INCOMPLETE):
            t = t.with_entry(
                SYSTEM_ACTOR,
                EXPIRED_DESCRIPTION,
                now,
                lane=Lane.INCOMPLETE,
                late_status=LateStatus.MISSED,
            )
            changed += 1
        out.append(t)
    return out, changed


class ExpirationMonitor:
    def __init__(self, report_expired: ExpiredReporter) -> None:
        self._report_expired = report_expired
        self._inbox: queue.SimpleQueue[tuple[Task, ...]] = queue.SimpleQueue()
        self._tasks: tuple[Task, ...] | None = None

    def push_snapshot(self, tasks: Sequence[Task]) -> None:
        """Store -> monitor channel. Safe to call from any thread."""
        self._inbox.put(tuple(tasks))

    def _drain_inbox(self) -> None:
        while True:
            try:
                self._tasks = self._inbox.get_nowait()
            except queue.Empty:
                return

    def tick(self, now: float | None = None) -> int:
        """Run one scan; returns how many tasks expired."""
        if now is None:
            now = time.time()

        self._drain_inbox()
        if self._tasks is None:
            return 0

        updated, changed = expire_overdue(self._tasks, now)
        if not changed:
            return 0

        self._tasks = tuple(updated)
        logger.info("Expired %d task(s)", changed)
        self._report_expired(updated)
        return changed


async def run_expiration_monitor(monitor: ExpirationMonitor, *, interval_seconds: float = 1.0) -> None:
    """
    Poll forever at a fixed period.

    A failing tick is logged and retried on the next period.
    To stop the monitor, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        try:
            monitor.tick()
        except Exception:
            logger.exception("Expiration monitor tick failed")

        await asyncio.sleep(sleep_s)


@dataclass
class MonitorBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.task.cancel)
        except RuntimeError:
            logger.debug("Monitor loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_monitor_in_background(
    monitor: ExpirationMonitor,
    *,
    interval_seconds: float = 1.0,
) -> MonitorBackgroundRunner | None:
    """
    Start the monitor loop in a daemon thread with its own event loop.

    Why a thread: the console REPL is blocking (input()).
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        task = loop.create_task(run_expiration_monitor(monitor, interval_seconds=interval_seconds))

        holder["loop"] = loop
        holder["task"] = task
        ready.set()

        try:
            loop.run_until_complete(task)
        except asyncio.CancelledError:
            logger.info("Expiration monitor stopped.")
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="expiration-monitor", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    task = holder.get("task")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(task, asyncio.Task):
        logger.error("Expiration monitor thread did not initialize properly.")
        return None

    logger.info("Expiration monitor started (interval=%.2fs).", interval_seconds)
    return MonitorBackgroundRunner(thread=t, loop=loop, task=task)
