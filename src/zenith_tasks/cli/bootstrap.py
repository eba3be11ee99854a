# src/zenith_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires concrete implementations into AppState (storage slot, task store, AI advisor).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..llm.advisor import OpenAISubtaskAdvisor
from ..tasks.storage import JsonFileSlot
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    store = TaskStore(JsonFileSlot(settings.data_dir), key=settings.storage_key)
    advisor = OpenAISubtaskAdvisor(settings)
    if not advisor.is_configured():
        logger.info("AI advisor not configured; /suggest will report it.")

    return AppState(settings=settings, store=store, advisor=advisor)
