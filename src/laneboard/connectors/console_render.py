# src/laneboard/connectors/console_render.py

from __future__ import annotations

"""Rich renderables for the console: board columns, activity log, analytics."""

from collections.abc import Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..board.analytics import BoardStats, filter_tasks, lane_counts
from ..board.models import UNASSIGNED, Lane, LateStatus, Task
from ..util.timeparse import format_due, format_short

LANE_TITLES = {
    Lane.TODO: "TO DO",
    Lane.IN_PROGRESS: "IN PROGRESS",
    Lane.INCOMPLETE: "INCOMPLETE",
    Lane.DONE: "DONE",
}
LANE_STYLES = {
    Lane.TODO: "bold blue",
    Lane.IN_PROGRESS: "bold yellow",
    Lane.INCOMPLETE: "bold red",
    Lane.DONE: "bold green",
}


def initials(name: str) -> str:
    if name == UNASSIGNED:
        return "?"
    return "".join(part[0] for part in name.split() if part).upper()


def render_card(task: Task) -> Text:
    card = Text()
    if task.lane == Lane.INCOMPLETE:
        card.append("Late ", style="bold red")
    elif task.late_status == LateStatus.LATE_DONE:
        card.append("Late Done ", style="bold yellow")
    card.append(f"{task.id} ", style="dim")
    card.append(task.title, style="bold")
    meta = " ".join(initials(n) for n in task.assignees)
    due = format_short(task.due)
    card.append(f"\n  {meta}" + (f"  {due}" if due else ""), style="cyan")
    return card


def render_board(tasks: Sequence[Task], query: str = "") -> Table:
    visible = filter_tasks(tasks, query)
    counts = lane_counts(visible)

    table = Table(box=box.SIMPLE_HEAVY, expand=True, show_lines=False)
    for lane in Lane:
        table.add_column(
            f"{LANE_TITLES[lane]} ({counts[lane]})",
            header_style=LANE_STYLES[lane],
            ratio=1,
        )

    cells: list[Group | Text] = []
    for lane in Lane:
        cards = [render_card(t) for t in visible if t.lane == lane]
        cells.append(Group(*cards) if cards else Text("(empty)", style="dim"))
    table.add_row(*cells)
    return table


def render_history(task: Task) -> Table | Text:
    if not task.history:
        return Text("No activity.", style="dim")

    table = Table(title=Text(f"Activity: {task.title}"), box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("When", no_wrap=True)
    table.add_column("Who", style="bold")
    table.add_column("What")
    # Newest first; the stored history itself is never reordered.
    for h in reversed(task.history):
        table.add_row(format_due(h.timestamp), Text(h.actor), Text(h.description))
    return table


def render_stats(stats: BoardStats) -> Panel:
    t = Table.grid(padding=(0, 2), expand=False)
    t.add_column(style="bold cyan", no_wrap=True, justify="right")
    t.add_column(style="white")
    t.add_row("Total tasks", str(stats.total))
    t.add_row("Done on time", f"{stats.on_time_pct}%")
    t.add_row("Late / missed", str(stats.late))
    missed = "\n".join(stats.late_titles) if stats.late_titles else "None"
    t.add_row("Missed log", Text(missed))
    return Panel(t, title=Text("Analytics", style="bold cyan"), border_style="blue", expand=False)
