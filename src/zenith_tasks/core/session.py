# src/zenith_tasks/core/session.py

"""
Per-task edit context (the "task form").

An EditSession holds the draft values of one task while it is being edited:
checklist toggles, AI suggestions and their token usage all land in the draft
and reach the store only through to_draft() -> TaskStore.save().

Key invariants:
- at most one AI request is in flight per session (`generating`),
- a result that arrives after close() is discarded,
- AI errors never touch the draft.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date

from ..llm.advisor import AdvisorResult
from ..tasks import checklist
from ..tasks.checklist import ChecklistItem
from ..tasks.task_models import Task, TaskDraft, TaskPriority, TaskStatus
from .errors import SessionBusy
from .ports import SubtaskAdvisor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EditSession:
    task_id: str | None
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str

    auto_status: bool = True
    tokens_used: int | None = None

    generating: bool = False
    closed: bool = False
    pending_suggestions: list[str] = field(default_factory=list)
    last_error: AdvisorResult | None = None

    @classmethod
    def new(cls, title: str = "", *, auto_status: bool = True, today: str | None = None) -> EditSession:
        return cls(
            task_id=None,
            title=title,
            description="",
            status=TaskStatus.TODO,
            priority=TaskPriority.NORMAL,
            due_date=today or date.today().isoformat(),
            auto_status=auto_status,
        )

    @classmethod
    def for_task(cls, task: Task, *, auto_status: bool = True) -> EditSession:
        return cls(
            task_id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            auto_status=auto_status,
            tokens_used=task.tokens_used,
        )

    # ---- checklist ----

    def checklist(self) -> list[ChecklistItem]:
        return checklist.parse(self.description)

    def toggle(self, index: int) -> None:
        self.description = checklist.toggle(self.description, index)
        if self.auto_status:
            self.status = checklist.derive_status(self.description, self.status)

    def add_item(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        if self.checklist():
            self.description = f"{self.description}\n{checklist.PENDING_MARKER}{text}"
        else:
            self.description = checklist.append_items(self.description, [text])

    # ---- AI suggestions ----

    def _begin_request(self) -> bool:
        if not self.title.strip():
            # Nothing to ask about; the form keeps the button disabled.
            return False
        if self.generating:
            raise SessionBusy("an AI request is already running for this task")
        self.generating = True
        self.last_error = None
        return True

    def _finish_request(self, result: AdvisorResult) -> AdvisorResult:
        self.generating = False
        if self.closed:
            logger.debug("Discarding AI result for closed session task_id=%s", self.task_id)
            return result
        if result.ok:
            self.pending_suggestions = list(result.suggestions)
            if result.tokens:
                self.tokens_used = (self.tokens_used or 0) + result.tokens
        else:
            self.last_error = result
        return result

    def suggest(self, advisor: SubtaskAdvisor) -> AdvisorResult:
        if not self._begin_request():
            return AdvisorResult()
        try:
            result = advisor.suggest(self.title, self.description)
        except BaseException:
            self.generating = False
            raise
        return self._finish_request(result)

    async def suggest_async(self, advisor: SubtaskAdvisor) -> AdvisorResult:
        """Same as suggest(), with the blocking service call moved to a worker thread."""
        if not self._begin_request():
            return AdvisorResult()
        try:
            result = await asyncio.to_thread(advisor.suggest, self.title, self.description)
        except BaseException:
            self.generating = False
            raise
        return self._finish_request(result)

    def accept_suggestions(self) -> int:
        n = len(self.pending_suggestions)
        if n:
            self.description = checklist.append_items(self.description, self.pending_suggestions)
            self.pending_suggestions = []
        return n

    # ---- lifecycle ----

    def close(self) -> None:
        self.closed = True

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            id=self.task_id,
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
            tokens_used=self.tokens_used,
        )
