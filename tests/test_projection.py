# tests/test_projection.py

from __future__ import annotations

import pytest

from zenith_tasks.tasks import projection
from zenith_tasks.tasks.task_models import Task, TaskPriority, TaskStatus


def make_task(task_id: str, *, status=TaskStatus.TODO, due="2025-02-10", description="") -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        description=description,
        status=status,
        priority=TaskPriority.NORMAL,
        due_date=due,
        created_at=0,
    )


def test_group_by_status_has_every_bucket_in_enum_order() -> None:
    tasks = [
        make_task("a", status=TaskStatus.DONE),
        make_task("b"),
        make_task("c", status=TaskStatus.DONE),
    ]
    groups = projection.group_by_status(tasks)

    assert list(groups) == [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.REVIEW, TaskStatus.DONE]
    assert [t.id for t in groups[TaskStatus.DONE]] == ["a", "c"]
    assert [t.id for t in groups[TaskStatus.TODO]] == ["b"]
    assert groups[TaskStatus.REVIEW] == []


def test_group_by_due_date_exact_match() -> None:
    tasks = [make_task("a"), make_task("b", due="2025-02-11"), make_task("c")]
    assert [t.id for t in projection.group_by_due_date(tasks, "2025-02-10")] == ["a", "c"]


def test_style_tables_are_exhaustive() -> None:
    assert {projection.style_class(s) for s in TaskStatus} <= {"neutral", "info", "warning", "success"}
    assert len({projection.style_class(p) for p in TaskPriority}) == len(TaskPriority)
    assert projection.style_class(TaskPriority.URGENT) == "critical"
    assert projection.style_class(TaskStatus.DONE) == "success"


def test_style_class_rejects_other_values() -> None:
    with pytest.raises(KeyError):
        projection.style_class("urgent")  # type: ignore[arg-type]


def test_progress_view_and_preview() -> None:
    task = make_task("a", description="Steps:\n- [x] one\n- [ ] two")
    prog = projection.progress_view(task)
    assert prog is not None and prog.percent == 50
    assert projection.preview(task) == "Steps:\none\ntwo"
    assert projection.progress_view(make_task("b")) is None
    assert projection.preview(make_task("b"), empty_text="-") == "-"


def test_month_grid_is_monday_first() -> None:
    # 1 Feb 2025 is a Saturday.
    grid = projection.month_grid([make_task("a"), make_task("b", due="2025-03-01")], 2025, 2)
    assert grid.leading_blanks == 5
    assert len(grid.days) == 28
    assert grid.days[9].date == "2025-02-10"
    assert [t.id for t in grid.days[9].tasks] == ["a"]
    assert sum(len(d.tasks) for d in grid.days) == 1
