# src/zenith_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task workflow status, in board column order.

    Notes:
    - values are the persisted form
    - legacy collections stored the Russian display labels; from_raw() accepts them
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_raw(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.TODO
        s = str(raw).strip()
        try:
            return cls(s)
        except ValueError:
            pass
        return _STATUS_ALIASES.get(s.lower(), cls.TODO)


class TaskPriority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]

    @classmethod
    def from_raw(cls, raw: Any) -> TaskPriority:
        if not raw:
            return cls.NORMAL
        s = str(raw).strip()
        try:
            return cls(s)
        except ValueError:
            pass
        return _PRIORITY_ALIASES.get(s.lower(), cls.NORMAL)


_STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To-Do",
    TaskStatus.IN_PROGRESS: "In-Progress",
    TaskStatus.REVIEW: "Review",
    TaskStatus.DONE: "Done",
}

_PRIORITY_LABELS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "Low",
    TaskPriority.NORMAL: "Normal",
    TaskPriority.HIGH: "High",
    TaskPriority.URGENT: "Urgent",
}

_STATUS_ALIASES: dict[str, TaskStatus] = {
    "to-do": TaskStatus.TODO,
    "in-progress": TaskStatus.IN_PROGRESS,
    "progress": TaskStatus.IN_PROGRESS,
    # labels found in legacy data files
    "к выполнению": TaskStatus.TODO,
    "в работе": TaskStatus.IN_PROGRESS,
    "на проверке": TaskStatus.REVIEW,
    "готово": TaskStatus.DONE,
}

_PRIORITY_ALIASES: dict[str, TaskPriority] = {
    "низкий": TaskPriority.LOW,
    "средний": TaskPriority.NORMAL,
    "высокий": TaskPriority.HIGH,
    "срочно": TaskPriority.URGENT,
}


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str  # ISO "YYYY-MM-DD"
    created_at: int  # epoch milliseconds

    tokens_used: int | None = None

    def to_record(self) -> dict[str, Any]:
        """Persisted (camelCase) form."""
        rec: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
        }
        if self.tokens_used is not None:
            rec["tokensUsed"] = self.tokens_used
        return rec

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        """
        Build a Task from a persisted record.

        Raises ValueError when the record has no usable id or title.
        Everything else is normalized.
        """
        task_id = str(rec.get("id") or "").strip()
        title = str(rec.get("title") or "").strip()
        if not task_id or not title:
            raise ValueError("record has no id or title")

        try:
            created_at = int(rec.get("createdAt") or 0)
        except (TypeError, ValueError):
            created_at = 0

        tokens_raw = rec.get("tokensUsed")
        tokens_used: int | None
        try:
            tokens_used = max(0, int(tokens_raw)) if tokens_raw is not None else None
        except (TypeError, ValueError):
            tokens_used = None

        return cls(
            id=task_id,
            title=title,
            description=str(rec.get("description") or ""),
            status=TaskStatus.from_raw(rec.get("status")),
            priority=TaskPriority.from_raw(rec.get("priority")),
            due_date=str(rec.get("dueDate") or ""),
            created_at=created_at,
            tokens_used=tokens_used,
        )


@dataclass(slots=True)
class TaskDraft:
    """
    Partial task accepted by TaskStore.save().

    id=None creates a new task. For updates, None fields keep their prior values.
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: str | None = None
    tokens_used: int | None = None
