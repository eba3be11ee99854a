# src/zenith_tasks/tasks/checklist.py

"""
Markdown-style checklist embedded in a task description.

A line is a checklist line iff, ignoring leading whitespace, it starts with
"- [ ] " (pending) or "- [x] " (done). Everything else in the description is
free text and passes through every operation untouched.

Items are never stored separately: they are recomputed from the description
on every read, so the description stays the single source of truth.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import TaskStatus

PENDING_MARKER = "- [ ] "
DONE_MARKER = "- [x] "


@dataclass(frozen=True, slots=True)
class ChecklistItem:
    done: bool
    text: str


@dataclass(frozen=True, slots=True)
class Progress:
    completed: int
    total: int

    @property
    def percent(self) -> int:
        # Half rounds up (2/3 -> 67, 1/8 -> 13).
        return (200 * self.completed + self.total) // (2 * self.total)

    @property
    def text(self) -> str:
        return f"{self.completed}/{self.total}"


def _split_marker(line: str) -> tuple[str, str, str] | None:
    """Return (indent, marker, rest) for a checklist line, None otherwise."""
    body = line.lstrip()
    for marker in (PENDING_MARKER, DONE_MARKER):
        if body.startswith(marker):
            indent = line[: len(line) - len(body)]
            return indent, marker, body[len(marker) :]
    return None


def parse(description: str) -> list[ChecklistItem]:
    items: list[ChecklistItem] = []
    for line in (description or "").split("\n"):
        parts = _split_marker(line)
        if parts is None:
            continue
        _, marker, rest = parts
        items.append(ChecklistItem(done=marker == DONE_MARKER, text=rest.rstrip("\r")))
    return items


def toggle(description: str, index: int) -> str:
    """
    Flip the marker of the index-th checklist line (0-based, checklist lines only).

    Out-of-range index -> description is returned unchanged.
    """
    if index < 0:
        return description

    lines = description.split("\n")
    seen = 0
    for i, line in enumerate(lines):
        parts = _split_marker(line)
        if parts is None:
            continue
        if seen == index:
            indent, marker, rest = parts
            flipped = PENDING_MARKER if marker == DONE_MARKER else DONE_MARKER
            lines[i] = f"{indent}{flipped}{rest}"
            return "\n".join(lines)
        seen += 1
    return description


def progress(description: str) -> Progress | None:
    items = parse(description)
    if not items:
        return None
    return Progress(completed=sum(1 for it in items if it.done), total=len(items))


def strip_markers(description: str) -> str:
    """Plain-text form: checklist markers removed, other lines untouched."""
    out: list[str] = []
    for line in (description or "").split("\n"):
        parts = _split_marker(line)
        if parts is None:
            out.append(line)
        else:
            indent, _, rest = parts
            # "- [x] - [ ] a" must not leave an item behind.
            while (inner := _split_marker(rest)) is not None:
                rest = inner[2]
            out.append(f"{indent}{rest}")
    return "\n".join(out)


def derive_status(description: str, current: TaskStatus) -> TaskStatus:
    """
    Status implied by the checklist:
    - all items done -> DONE
    - some items done -> IN_PROGRESS
    - otherwise (no items, or nothing done yet) -> current
    """
    items = parse(description)
    if not items:
        return current
    if all(it.done for it in items):
        return TaskStatus.DONE
    if any(it.done for it in items):
        return TaskStatus.IN_PROGRESS
    return current


def append_items(description: str, items: Iterable[str]) -> str:
    """Append items as pending checklist lines, separated from existing text by a blank line."""
    lines = [f"{PENDING_MARKER}{s.strip()}" for s in items if s and s.strip()]
    if not lines:
        return description
    checklist = "\n".join(lines)
    return f"{description}\n\n{checklist}" if description else checklist
