# src/laneboard/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.console import RenderableType

from ..board.analytics import compute_stats
from ..board.errors import BoardError, ValidationError
from ..board.models import Lane, Task
from ..board.transitions import MoveOutcome
from ..connectors.console_render import render_board, render_history, render_stats
from ..core.state import AppState

CommandReply = RenderableType
CommandHandler = Callable[[AppState, list[str]], CommandReply]

logger = logging.getLogger(__name__)

LANE_ALIASES = {
    "t": Lane.TODO,
    "todo": Lane.TODO,
    "ip": Lane.IN_PROGRESS,
    "progress": Lane.IN_PROGRESS,
    "in_progress": Lane.IN_PROGRESS,
    "in-progress": Lane.IN_PROGRESS,
    "i": Lane.INCOMPLETE,
    "incomplete": Lane.INCOMPLETE,
    "d": Lane.DONE,
    "done": Lane.DONE,
}


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /move, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> CommandReply | None:
        """
        Handle a string like "/command args".
        Returns a reply (text or rich renderable) or None if not a command.

        Board rejections are turned into their user-facing message.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except BoardError as e:
            logger.info("Command /%s rejected: %s", name, e.message)
            return e.message

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def parse_lane(raw: str) -> Lane | None:
    return LANE_ALIASES.get(raw.strip().lower())


def run_edit_dialog(state: AppState, task: Task | None) -> str:
    """
    Drive the edit dialog until it is saved or closed.

    A rejected save (e.g. a rescue without a future due date) shows a notice
    and re-opens the dialog; any pending rescue stays open meanwhile.
    Closing the dialog clears the rescue session.
    """
    while True:
        draft = state.dialogs.edit_task(task)
        if draft is None:
            state.engine.cancel_edit()
            return "Edit cancelled."
        try:
            saved = state.engine.save_task(draft)
        except ValidationError as e:
            state.dialogs.alert(e.message)
            continue
        if saved is None:
            return "Task no longer exists."
        return f"Saved task {saved.id} ({saved.lane.value})."


def cmd_help(state: AppState, args: list[str]) -> CommandReply:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str]) -> CommandReply:
    return render_board(state.store.get_all(), " ".join(args))


def cmd_add(state: AppState, args: list[str]) -> CommandReply:
    state.engine.begin_create()
    return run_edit_dialog(state, None)


def cmd_edit(state: AppState, args: list[str]) -> CommandReply:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    task = state.engine.begin_edit(task_id)
    if task is None:
        return f"Task id {task_id} not found."
    return run_edit_dialog(state, task)


def cmd_move(state: AppState, args: list[str]) -> CommandReply:
    task_id = _parse_id(args)
    lane = parse_lane(args[1]) if len(args) >= 2 else None
    if task_id is None or lane is None:
        return "Usage: /move <id> <todo|in_progress|incomplete|done>"

    outcome = state.engine.request_move(task_id, lane)
    if outcome == MoveOutcome.COMMITTED:
        return f"Task {task_id} moved to {lane.value}."
    if outcome == MoveOutcome.DEFERRED:
        task = state.engine.begin_edit(task_id)
        if task is None:
            state.engine.cancel_edit()
            return f"Task id {task_id} not found."
        return run_edit_dialog(state, task)
    return "Nothing to move."


def cmd_delete(state: AppState, args: list[str]) -> CommandReply:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if state.engine.delete_task(task_id):
        return f"Task {task_id} deleted."
    return "Nothing deleted."


def cmd_history(state: AppState, args: list[str]) -> CommandReply:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /history <id>"
    task = state.store.find(task_id)
    if task is None:
        return f"Task id {task_id} not found."
    return render_history(task)


def cmd_search(state: AppState, args: list[str]) -> CommandReply:
    if not args:
        return "Usage: /search <text>"
    return render_board(state.store.get_all(), " ".join(args))


def cmd_stats(state: AppState, args: list[str]) -> CommandReply:
    return render_stats(compute_stats(state.store.get_all()))


def cmd_reset(state: AppState, args: list[str]) -> CommandReply:
    if not state.dialogs.confirm("Reset data?"):
        return "Reset cancelled."
    state.engine.cancel_edit()
    state.store.clear()
    return "Board reset."


registry.register("help", cmd_help, "show this help")
registry.register("board", cmd_board, "show the board, optionally filtered: /board [text]", aliases=["b"])
registry.register("add", cmd_add, "create a task (opens the edit dialog)", aliases=["new"])
registry.register("edit", cmd_edit, "edit a task: /edit <id>", aliases=["e"])
registry.register("move", cmd_move, "move a task: /move <id> <todo|ip|incomplete|done>", aliases=["mv"])
registry.register("delete", cmd_delete, "delete a task: /delete <id>", aliases=["rm"])
registry.register("history", cmd_history, "show a task's activity log: /history <id>", aliases=["log"])
registry.register("search", cmd_search, "filter the board by title or assignee: /search <text>")
registry.register("stats", cmd_stats, "on-time rate and missed tasks")
registry.register("reset", cmd_reset, "delete every task")
