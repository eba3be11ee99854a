# src/zenith_tasks/tasks/storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileSlot:
    """
    Durable key-value slot backed by one JSON file per key.

    <directory>/<key>.json holds the payload verbatim. Writes go through a temp
    file + os.replace so a crash never leaves a half-written payload behind.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key in (".", ".."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def write(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(Exception):
            os.chmod(path, 0o600)
        logger.debug("Slot written key=%s bytes=%d", key, len(payload))
