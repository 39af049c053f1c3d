# tests/test_commands.py

from __future__ import annotations

import time

from rich.table import Table

from laneboard.board.models import Lane, LateStatus, Task, TaskDraft
from laneboard.cli.commands import CommandRegistry, parse_lane, registry

from .fakes import DAY, HOUR


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    def handler(state, args):
        called["a"] += 1
        return " ".join(args)

    reg.register("alpha", handler, "alpha", aliases=["al"])

    assert reg.handle(state, "/alpha x y") == "x y"
    assert reg.handle(state, "/AL z") == "z"
    assert called["a"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    assert registry.handle(state, "hello") is None
    assert "Unknown command" in (registry.handle(state, "/nope") or "")
    assert "Empty command" in (registry.handle(state, "/") or "")


def test_lane_aliases() -> None:
    assert parse_lane("ip") == Lane.IN_PROGRESS
    assert parse_lane("progress") == Lane.IN_PROGRESS
    assert parse_lane("Done") == Lane.DONE
    assert parse_lane("archive") is None


def test_add_runs_edit_dialog(state, dialogs) -> None:
    dialogs.drafts = [TaskDraft(title="New card", assignees=("Sam Dev",))]

    reply = registry.handle(state, "/add")

    assert isinstance(reply, str) and reply.startswith("Saved task")
    (task,) = state.store.get_all()
    assert task.title == "New card"
    assert dialogs.edited == [None]


def test_add_with_empty_title_reprompts_then_cancel(state, dialogs) -> None:
    dialogs.drafts = [TaskDraft(title=""), None]

    assert registry.handle(state, "/add") == "Edit cancelled."
    assert dialogs.alerts == ["Title required"]
    assert state.store.get_all() == []


def test_rejected_move_reports_message(state) -> None:
    state.store.add(Task(id=1, title="a", lane=Lane.TODO, due=time.time() + DAY))

    reply = registry.handle(state, "/move 1 incomplete")

    assert reply == "Only expired tasks can be moved to Incomplete."
    assert state.store.get(1).lane == Lane.TODO


def test_move_commits(state) -> None:
    state.store.add(Task(id=1, title="a", lane=Lane.TODO))
    assert registry.handle(state, "/move 1 ip") == "Task 1 moved to in_progress."
    assert state.store.get(1).lane == Lane.IN_PROGRESS


def test_move_usage(state) -> None:
    assert (registry.handle(state, "/move x done") or "").startswith("Usage")
    assert (registry.handle(state, "/move 1 nowhere") or "").startswith("Usage")


def test_deferred_move_opens_dialog_and_rescues(state, dialogs) -> None:
    state.store.add(
        Task(id=1, title="Release notes", lane=Lane.INCOMPLETE, due=time.time() - HOUR, late_status=LateStatus.MISSED)
    )

    def still_past(task):
        return TaskDraft(title=task.title, assignees=task.assignees, due=task.due, task_id=task.id)

    def tomorrow(task):
        return TaskDraft(title=task.title, assignees=task.assignees, due=time.time() + DAY, task_id=task.id)

    dialogs.drafts = [still_past, tomorrow]

    reply = registry.handle(state, "/move 1 todo")

    assert reply == "Saved task 1 (todo)."
    task = state.store.get(1)
    assert task.lane == Lane.TODO
    assert task.late_status == LateStatus.NONE
    assert task.history[-1].description == "Rescued to todo (Date Updated)"
    assert dialogs.alerts[0] == "Task is expired! Update the Due Date to move it to todo."
    assert "Due Date to the future" in dialogs.alerts[1]
    assert not state.session.is_open


def test_deferred_move_cancelled_keeps_lane(state, dialogs) -> None:
    state.store.add(
        Task(id=1, title="Shipped", lane=Lane.DONE, due=time.time() - DAY, late_status=LateStatus.LATE_DONE)
    )
    dialogs.drafts = [None]

    assert registry.handle(state, "/move 1 ip") == "Edit cancelled."
    assert state.store.get(1).lane == Lane.DONE
    assert not state.session.is_open


def test_edit_unknown_task(state) -> None:
    assert registry.handle(state, "/edit 42") == "Task id 42 not found."


def test_delete_and_reset(state, dialogs) -> None:
    state.store.add(Task(id=1, title="a"))
    state.store.add(Task(id=2, title="b"))

    assert registry.handle(state, "/delete 1") == "Task 1 deleted."

    dialogs.confirm_answer = False
    assert registry.handle(state, "/reset") == "Reset cancelled."
    assert len(state.store.get_all()) == 1

    dialogs.confirm_answer = True
    assert registry.handle(state, "/reset") == "Board reset."
    assert state.store.get_all() == []


def test_board_and_search_render_tables(state) -> None:
    state.store.add(Task(id=1, title="Deploy", assignees=("Sam Dev",)))
    assert isinstance(registry.handle(state, "/board"), Table)
    assert isinstance(registry.handle(state, "/search sam"), Table)
    assert (registry.handle(state, "/search") or "").startswith("Usage")
