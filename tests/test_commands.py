# tests/test_commands.py

from __future__ import annotations

import threading

from zenith_tasks.cli.commands import CommandRegistry, registry
from zenith_tasks.core.state import ViewType
from zenith_tasks.llm.advisor import AdvisorErrorKind, AdvisorResult
from zenith_tasks.tasks.task_models import TaskPriority, TaskStatus


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bb"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BB y", emit=lambda _: None) == "h3"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_new_edit_save_roundtrip(state) -> None:
    registry.handle(state, "/new Plan the party")
    registry.handle(state, "/set priority urgent")
    registry.handle(state, "/set due 2025-06-01")
    registry.handle(state, "/item invite friends")
    reply = registry.handle(state, "/save")

    assert reply is not None and reply.startswith("Saved")
    assert state.session is None
    (task,) = state.store.list()
    assert task.title == "Plan the party"
    assert task.priority is TaskPriority.URGENT
    assert task.due_date == "2025-06-01"
    assert task.description == "- [ ] invite friends"

    registry.handle(state, f"/edit {task.id}")
    registry.handle(state, "/check 1")
    registry.handle(state, "/save")
    assert state.store.get(task.id).status is TaskStatus.DONE


def test_save_without_title_is_reported(state) -> None:
    registry.handle(state, "/new")
    reply = registry.handle(state, "/save")
    assert reply is not None and "title is required" in reply
    assert state.store.list() == []
    assert state.session is not None


def test_suggest_and_accept(state, advisor) -> None:
    registry.handle(state, "/new Renovate kitchen")
    notes: list[str] = []
    reply = registry.handle(state, "/suggest", emit=notes.append)

    assert notes == ["[AI] Thinking..."]
    assert "2 suggestion(s)" in (reply or "")
    assert advisor.calls == [("Renovate kitchen", "")]

    registry.handle(state, "/accept")
    assert state.session.description == "- [ ] a\n- [ ] b"
    assert state.session.tokens_used == 10


def test_suggest_runs_the_advisor_off_the_console_thread(state, advisor, monkeypatch) -> None:
    threads: list[int] = []
    original = advisor.suggest

    def recording(title: str, description: str):
        threads.append(threading.get_ident())
        return original(title, description)

    monkeypatch.setattr(advisor, "suggest", recording)
    registry.handle(state, "/new Plan trip")
    reply = registry.handle(state, "/suggest")

    assert "2 suggestion(s)" in (reply or "")
    assert threads and threads[0] != threading.get_ident()
    assert state.session.generating is False


def test_suggest_reports_missing_configuration(state, advisor) -> None:
    advisor.result = AdvisorResult.failure(AdvisorErrorKind.NOT_CONFIGURED)
    registry.handle(state, "/new Something")
    reply = registry.handle(state, "/suggest")
    assert reply is not None and "not configured" in reply


def test_commands_need_an_open_task(state) -> None:
    for line in ("/set title x", "/check 1", "/suggest", "/accept", "/save", "/cancel"):
        assert "No task is open" in (registry.handle(state, line) or "")


def test_views_and_search(state) -> None:
    registry.handle(state, "/new Water plants")
    registry.handle(state, "/save")
    registry.handle(state, "/new Pay rent")
    registry.handle(state, "/set due 2025-02-03")
    registry.handle(state, "/save")

    board = registry.handle(state, "/view board") or ""
    assert "TO-DO (2)" in board

    registry.handle(state, "/search rent")
    listing = registry.handle(state, "/view list") or ""
    assert "Pay rent" in listing and "Water plants" not in listing

    cal = registry.handle(state, "/view calendar 2025-02") or ""
    assert state.view is ViewType.CALENDAR
    assert "February 2025" in cal
    assert "2025-02-03: Pay rent" in cal

    assert "Month must look like" in (registry.handle(state, "/view calendar feb") or "")


def test_help_lists_exit(state) -> None:
    reply = registry.handle(state, "/help") or ""
    assert "/exit" in reply
    assert "/quit" in reply
    assert "console prompt" in (registry.handle(state, "/quit") or "")
