# tests/test_bootstrap.py

from __future__ import annotations

from zenith_tasks.cli.bootstrap import create_initial_state
from zenith_tasks.llm.advisor import AdvisorErrorKind
from zenith_tasks.tasks.task_models import TaskDraft


def test_state_persists_between_runs(settings) -> None:
    state = create_initial_state(settings=settings)
    assert state.store.list() == []
    task = state.store.save(TaskDraft(title="Survives restart"))

    again = create_initial_state(settings=settings)
    assert [t.id for t in again.store.list()] == [task.id]
    assert (settings.data_dir / "zenith_tasks_v2.json").exists()


def test_unconfigured_advisor_does_not_break_startup(settings) -> None:
    settings.ai_api_key = ""
    state = create_initial_state(settings=settings)
    assert not state.advisor.is_configured()
    assert state.advisor.suggest("Title", "").error is AdvisorErrorKind.NOT_CONFIGURED
