# src/zenith_tasks/tasks/task_store.py

from __future__ import annotations

import json
import logging
import secrets
import string
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import date
from typing import Any

from ..config import DEFAULT_STORAGE_KEY
from ..core.errors import StorageCorrupt, ValidationError
from ..core.ports import StorageSlot
from .task_models import Task, TaskDraft, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9


def _now_ms() -> int:
    return int(time.time() * 1000)


def _today_iso() -> str:
    return date.today().isoformat()


def encode_tasks(tasks: list[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def decode_tasks(payload: str) -> list[Task]:
    """
    Decode a persisted collection.

    Raises StorageCorrupt when the payload is not a JSON array.
    Malformed records inside a valid array are skipped.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise StorageCorrupt(f"payload is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageCorrupt(f"payload is a JSON {type(data).__name__}, expected an array")

    out: list[Task] = []
    seen: set[str] = set()
    for i, rec in enumerate(data):
        if not isinstance(rec, dict):
            logger.warning("Skipping stored record #%d: not an object", i)
            continue
        try:
            task = Task.from_record(rec)
        except ValueError as e:
            logger.warning("Skipping stored record #%d: %s", i, e)
            continue
        if task.id in seen:
            logger.warning("Skipping stored record #%d: duplicate id=%s", i, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class TaskStore:
    """
    In-memory task collection persisted as a whole to a storage slot.

    - new tasks are prepended, updates keep their position
    - the collection is written after every mutation
    - a missing or corrupt slot at start-up yields an empty collection
    """

    def __init__(
        self,
        slot: StorageSlot,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], int] = _now_ms,
        today: Callable[[], str] = _today_iso,
    ) -> None:
        self._slot = slot
        self._key = key
        self._clock = clock
        self._today = today
        self._tasks: list[Task] = self._load()
        logger.info("TaskStore ready key=%s total=%d", self._key, len(self._tasks))

    # ---- low-level helpers ----

    def _load(self) -> list[Task]:
        try:
            payload = self._slot.read(self._key)
        except Exception:
            logger.exception("Failed to read storage slot key=%s; starting empty.", self._key)
            return []
        if payload is None or not payload.strip():
            return []
        try:
            return decode_tasks(payload)
        except StorageCorrupt as e:
            logger.warning("Stored tasks are corrupt (key=%s): %s; starting empty.", self._key, e)
            return []

    def _persist(self) -> None:
        try:
            self._slot.write(self._key, encode_tasks(self._tasks))
        except Exception:
            logger.exception("Failed to persist %d tasks to key=%s", len(self._tasks), self._key)

    def _new_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            candidate = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
            if candidate not in taken:
                return candidate

    def _index_of(self, task_id: str | None) -> int | None:
        if not task_id:
            return None
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def list(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return self._tasks[idx] if idx is not None else None

    def save(self, draft: TaskDraft) -> Task:
        if draft.title is not None and not draft.title.strip():
            raise ValidationError("title is required")

        idx = self._index_of(draft.id)
        if idx is None:
            task = self._create(draft)
            self._tasks.insert(0, task)
            logger.debug("Task created id=%s status=%s due=%s", task.id, task.status, task.due_date)
        else:
            task = self._merge(self._tasks[idx], draft)
            self._tasks[idx] = task
            logger.debug("Task updated id=%s status=%s", task.id, task.status)

        self._persist()
        return task

    def _create(self, draft: TaskDraft) -> Task:
        if draft.title is None:
            raise ValidationError("title is required")

        tokens = draft.tokens_used
        return Task(
            id=self._new_id(),
            title=draft.title.strip(),
            description=draft.description or "",
            status=draft.status or TaskStatus.TODO,
            priority=draft.priority or TaskPriority.NORMAL,
            due_date=draft.due_date or self._today(),
            created_at=self._clock(),
            tokens_used=max(0, tokens) if tokens is not None else None,
        )

    @staticmethod
    def _merge(prior: Task, draft: TaskDraft) -> Task:
        changes: dict[str, Any] = {}
        if draft.title is not None:
            changes["title"] = draft.title.strip()
        if draft.description is not None:
            changes["description"] = draft.description
        if draft.status is not None:
            changes["status"] = draft.status
        if draft.priority is not None:
            changes["priority"] = draft.priority
        if draft.due_date is not None:
            changes["due_date"] = draft.due_date
        if draft.tokens_used is not None:
            # Usage only ever grows.
            changes["tokens_used"] = max(prior.tokens_used or 0, draft.tokens_used)
        return replace(prior, **changes)

    def search(self, query: str) -> list[Task]:
        q = (query or "").lower()
        if not q.strip():
            return list(self._tasks)
        return [t for t in self._tasks if q in t.title.lower() or q in t.description.lower()]

    def by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._tasks if t.status == status]

    def by_due_date(self, due_date: str) -> list[Task]:
        return [t for t in self._tasks if t.due_date == due_date]
