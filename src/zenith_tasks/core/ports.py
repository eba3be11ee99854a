# src/zenith_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/AI providers swappable and makes testing easier.
"""

from typing import Any, Protocol


class StorageSlot(Protocol):
    """Durable key-value slot holding one serialized payload per key."""

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, payload: str) -> None: ...


class SubtaskAdvisor(Protocol):
    """Brokers subtask suggestions from an external text-generation service."""

    def is_configured(self) -> bool: ...
    def suggest(self, title: str, description: str) -> Any: ...  # AdvisorResult


class TaskRepo(Protocol):
    def list(self) -> list[Any]: ...
    def get(self, task_id: str) -> Any | None: ...
    def save(self, draft: Any) -> Any: ...  # TaskDraft -> Task
    def search(self, query: str) -> list[Any]: ...
    def by_status(self, status: Any) -> list[Any]: ...
    def by_due_date(self, due_date: str) -> list[Any]: ...
