# src/zenith_tasks/cli/render.py

"""Plain-text rendering of the board / list / calendar views and the task form."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable
from datetime import date

from ..core.session import EditSession
from ..tasks import projection
from ..tasks.task_models import Task, TaskStatus

WEEKDAYS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")
CELL_WIDTH = 7
PREVIEW_WIDTH = 60


def render_card(task: Task) -> str:
    """One board card: title, preview, progress, priority and due date."""
    done_mark = "x" if task.status is TaskStatus.DONE else " "
    lines = [f"  [{done_mark}] {task.title}  ({task.id})"]

    preview = projection.preview(task).replace("\n", " ")
    lines.append("      " + textwrap.shorten(preview, width=PREVIEW_WIDTH, placeholder="..."))

    prog = projection.progress_view(task)
    if prog is not None:
        lines.append(f"      progress {prog.text} ({prog.percent}%)")

    prio = task.priority
    lines.append(f"      {prio.label} <{projection.style_class(prio)}>  due {task.due_date}")
    return "\n".join(lines)


def render_board(tasks: Iterable[Task]) -> str:
    out: list[str] = []
    for status, bucket in projection.group_by_status(tasks).items():
        out.append(f"== {status.label.upper()} ({len(bucket)}) <{projection.style_class(status)}>")
        if not bucket:
            out.append("  (empty)")
        out.extend(render_card(t) for t in bucket)
        out.append("")
    return "\n".join(out).rstrip()


def render_list(tasks: Iterable[Task]) -> str:
    rows = list(tasks)
    if not rows:
        return "No tasks."
    title_w = max(len("Task"), *(len(t.title) for t in rows))
    status_w = max(len("Status"), *(len(t.status.label) for t in rows))
    lines = [f"{'ID':<9}  {'Task':<{title_w}}  {'Status':<{status_w}}  Due"]
    for t in rows:
        lines.append(f"{t.id:<9}  {t.title:<{title_w}}  {t.status.label:<{status_w}}  {t.due_date}")
    return "\n".join(lines)


def render_calendar(tasks: Iterable[Task], year: int, month: int, today: date | None = None) -> str:
    grid = projection.month_grid(tasks, year, month)
    today_iso = (today or date.today()).isoformat()

    cells = [" " * CELL_WIDTH] * grid.leading_blanks
    for day in grid.days:
        num = int(day.date[-2:])
        mark = "*" if day.date == today_iso else " "
        count = f"({len(day.tasks)})" if day.tasks else ""
        cells.append(f"{mark}{num:>2}{count}".ljust(CELL_WIDTH))

    lines = [f"{date(year, month, 1):%B %Y}", " ".join(w.ljust(CELL_WIDTH) for w in WEEKDAYS)]
    for i in range(0, len(cells), 7):
        lines.append(" ".join(cells[i : i + 7]).rstrip())

    agenda = [d for d in grid.days if d.tasks]
    if agenda:
        lines.append("")
        for d in agenda:
            lines.append(f"{d.date}: " + ", ".join(t.title for t in d.tasks))
    return "\n".join(lines)


def render_session(session: EditSession) -> str:
    head = "Edit task" if session.task_id else "New task"
    lines = [
        f"{head}{f' ({session.task_id})' if session.task_id else ''}",
        f"  title:    {session.title or '<empty>'}",
        f"  status:   {session.status.label}",
        f"  priority: {session.priority.label}",
        f"  due:      {session.due_date}",
    ]
    if session.tokens_used:
        lines.append(f"  AI tokens used: {session.tokens_used}")

    lines.append("  description:")
    lines.extend(f"    | {line}" for line in (session.description or "").split("\n"))

    items = session.checklist()
    if items:
        lines.append("  checklist:")
        for i, item in enumerate(items, start=1):
            lines.append(f"    {i}. [{'x' if item.done else ' '}] {item.text}")

    if session.generating:
        lines.append("  AI: thinking...")
    if session.pending_suggestions:
        lines.append("  AI suggestions (/accept to insert):")
        lines.extend(f"    - {s}" for s in session.pending_suggestions)
    return "\n".join(lines)
