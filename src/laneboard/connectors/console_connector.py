# src/laneboard/connectors/console_connector.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.text import Text

from ..board.models import UNASSIGNED, Task, TaskDraft
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..util.timeparse import format_due, parse_due
from .console_render import render_board, render_history

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


class ConsoleDialogs:
    """
    UserDialogs over stdin/stdout.

    The edit dialog asks for title, team and due date in turn; an empty title
    (for a new task), "cancel" or EOF closes it without saving.
    """

    def __init__(self, console: Console, team: Sequence[str], input_fn: InputFn = input) -> None:
        self._console = console
        self._team = [n for n in team if n != UNASSIGNED]
        self._input = input_fn

    def alert(self, message: str) -> None:
        self._console.print(Text.assemble(("! ", "bold red"), message))

    def confirm(self, question: str) -> bool:
        try:
            answer = self._input(f"{question} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in {"y", "yes"}

    def _ask(self, label: str, current: str) -> str | None:
        """Prompt once; returns None when the dialog should close."""
        hint = f" [{current}]" if current else ""
        try:
            raw = self._input(f"{label}{hint}: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if raw.lower() == "cancel":
            return None
        return raw or current

    def _parse_team(self, raw: str) -> tuple[str, ...]:
        names: list[str] = []
        for part in raw.split(","):
            p = part.strip()
            if not p:
                continue
            if p.isdigit() and 1 <= int(p) <= len(self._team):
                names.append(self._team[int(p) - 1])
            elif p in self._team or p == UNASSIGNED:
                names.append(p)
            else:
                self.alert(f"Unknown team member ignored: {p}")
        return tuple(names)

    def edit_task(self, task: Task | None) -> TaskDraft | None:
        now = time.time()
        if task is not None:
            self._console.print(f"[bold]Editing task {task.id}[/] (type 'cancel' to close)")
            self._console.print(render_history(task))
        else:
            self._console.print("[bold]New task[/] (type 'cancel' to close)")

        title = self._ask("Title", task.title if task else "")
        if not title:
            return None

        options = ", ".join(f"{i}={n}" for i, n in enumerate(self._team, start=1))
        self._console.print(f"[dim]Team: {options}[/]")
        team_raw = self._ask("Team (comma separated)", ", ".join(task.assignees) if task else "")
        if team_raw is None:
            return None

        while True:
            due_raw = self._ask("Due (YYYY-MM-DD [HH:MM], +2h, +1d, none)", format_due(task.due) if task else "")
            if due_raw is None:
                return None
            try:
                due = parse_due(due_raw, now)
                break
            except ValueError as e:
                self.alert(str(e))

        return TaskDraft(
            title=title,
            assignees=self._parse_team(team_raw),
            due=due,
            task_id=task.id if task else None,
        )


def make_board_renderer(console: Console) -> Callable[[list[Task]], None]:
    """Store subscriber that redraws the board after every committed change."""

    def _render(tasks: list[Task]) -> None:
        console.print(render_board(tasks))

    return _render


def run_console_loop(state: AppState, console: Console) -> None:
    logger.info("Console connector started.")
    console.print("[bold]Task board.[/] Use /help for commands, /exit to quit.\n")
    console.print(render_board(state.store.get_all()))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."
        console.print(reply)

    logger.info("Console connector finished.")
