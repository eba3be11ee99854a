# src/zenith_tasks/tasks/projection.py

"""
Presentation-level facts derived from tasks (never persisted).

Board view   -> group_by_status()
Calendar     -> group_by_due_date() / month_grid()
Cards        -> progress_view(), preview(), style_class()
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from . import checklist
from .checklist import Progress
from .task_models import Task, TaskPriority, TaskStatus

STATUS_STYLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "neutral",
    TaskStatus.IN_PROGRESS: "info",
    TaskStatus.REVIEW: "warning",
    TaskStatus.DONE: "success",
}

PRIORITY_STYLES: dict[TaskPriority, str] = {
    TaskPriority.LOW: "muted",
    TaskPriority.NORMAL: "info",
    TaskPriority.HIGH: "warning",
    TaskPriority.URGENT: "critical",
}

def style_class(value: TaskStatus | TaskPriority) -> str:
    if isinstance(value, TaskStatus):
        return STATUS_STYLES[value]
    if isinstance(value, TaskPriority):
        return PRIORITY_STYLES[value]
    raise KeyError(value)


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    buckets: dict[TaskStatus, list[Task]] = {s: [] for s in TaskStatus}
    for t in tasks:
        buckets[t.status].append(t)
    return buckets


def group_by_due_date(tasks: Iterable[Task], due_date: str) -> list[Task]:
    return [t for t in tasks if t.due_date == due_date]


def progress_view(task: Task) -> Progress | None:
    return checklist.progress(task.description)


def preview(task: Task, empty_text: str = "No description") -> str:
    text = checklist.strip_markers(task.description).strip()
    return text or empty_text


@dataclass(slots=True)
class CalendarDay:
    date: str
    tasks: list[Task] = field(default_factory=list)


@dataclass(slots=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int  # empty cells before day 1 in a Monday-first week
    days: list[CalendarDay]


def month_grid(tasks: Iterable[Task], year: int, month: int) -> CalendarMonth:
    all_tasks = list(tasks)
    first_weekday, n_days = calendar.monthrange(year, month)  # Monday == 0
    days = []
    for day in range(1, n_days + 1):
        iso = date(year, month, day).isoformat()
        days.append(CalendarDay(date=iso, tasks=group_by_due_date(all_tasks, iso)))
    return CalendarMonth(year=year, month=month, leading_blanks=first_weekday, days=days)
