# tests/test_logging_setup.py

from __future__ import annotations

import logging

from zenith_tasks.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_hides_library_noise() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("zenith_tasks.tasks.task_store", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("py.warnings", logging.ERROR))
    assert f.filter(_record("openai", logging.CRITICAL))
