# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from zenith_tasks.core.state import AppState
from zenith_tasks.tasks.task_store import TaskStore

from .fakes import FakeAdvisor, FakeSlot


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="zenith-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_key="zenith_tasks_v2",
        auto_status=True,
        ai_api_key="test-key",
        ai_base_url="http://localhost:9/v1",
        ai_model="test-model",
        ai_language="English",
        ai_subtask_count=5,
        ai_timeout_seconds=1.0,
    )


@pytest.fixture()
def slot() -> FakeSlot:
    return FakeSlot()


@pytest.fixture()
def store(slot: FakeSlot) -> TaskStore:
    ticks = iter(range(1_700_000_000_000, 1_700_000_000_000 + 10_000))
    return TaskStore(slot, clock=lambda: next(ticks), today=lambda: "2025-03-14")


@pytest.fixture()
def advisor() -> FakeAdvisor:
    return FakeAdvisor()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, advisor: FakeAdvisor) -> AppState:
    """AppState wired with an in-memory slot and a deterministic advisor."""
    return AppState(settings=settings, store=store, advisor=advisor)
