# src/zenith_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

from ..tasks.task_models import Task
from .ports import SubtaskAdvisor, TaskRepo
from .session import EditSession


class ViewType(StrEnum):
    BOARD = "board"
    LIST = "list"
    CALENDAR = "calendar"


def _this_month() -> tuple[int, int]:
    today = date.today()
    return today.year, today.month


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskRepo
    advisor: SubtaskAdvisor

    view: ViewType = ViewType.BOARD
    search_query: str = ""
    session: EditSession | None = None
    calendar_month: tuple[int, int] = field(default_factory=_this_month)

    def visible_tasks(self) -> list[Task]:
        """Tasks shown by the board and list views (search-filtered)."""
        return self.store.search(self.search_query)

    def open_session(self, session: EditSession) -> EditSession:
        self.close_session()
        self.session = session
        return session

    def close_session(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
