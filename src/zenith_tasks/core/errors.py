# src/zenith_tasks/core/errors.py

from __future__ import annotations


class ZenithError(Exception):
    """Base class for errors raised by zenith_tasks."""


class ValidationError(ZenithError, ValueError):
    """A required field is empty; raised before any state is mutated."""


class StorageCorrupt(ZenithError):
    """The persisted payload could not be decoded into a task collection."""


class SessionBusy(ZenithError):
    """An AI request is already in flight for this edit session."""
