# src/zenith_tasks/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.errors import SessionBusy, ValidationError
from ..core.session import EditSession
from ..core.state import AppState, ViewType
from ..llm.advisor import friendly_advisor_message
from ..tasks.task_models import TaskPriority, TaskStatus
from . import render

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NO_SESSION = "No task is open. Use /new <title> or /edit <id>."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValidationError as e:
            return f"Invalid input: {e}"
        except SessionBusy as e:
            return f"Busy: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_status(raw: str) -> TaskStatus | None:
    key = raw.strip().lower().replace("-", "_")
    for s in TaskStatus:
        if key in (s.value, s.label.lower().replace("-", "_")):
            return s
    return None


def _parse_priority(raw: str) -> TaskPriority | None:
    key = raw.strip().lower()
    for p in TaskPriority:
        if key in (p.value, p.label.lower()):
            return p
    return None


def _parse_month(raw: str) -> tuple[int, int] | None:
    try:
        d = date.fromisoformat(f"{raw.strip()}-01")
    except ValueError:
        return None
    return d.year, d.month


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    ai = "active" if state.advisor.is_configured() else "not configured"
    s = state.settings
    return (
        "Status:\n"
        f"  Tasks: {len(state.store.list())}\n"
        f"  View: {state.view.value}\n"
        f"  Search: {state.search_query or '-'}\n"
        f"  AI: {ai} (model {getattr(s, 'ai_model', '?')}, language {getattr(s, 'ai_language', '?')})\n"
        f"  Auto status from checklist: {'ON' if getattr(s, 'auto_status', True) else 'OFF'}"
    )


def cmd_show(state: AppState, args: list[str]) -> str:
    if state.view is ViewType.CALENDAR:
        year, month = state.calendar_month
        return render.render_calendar(state.store.list(), year, month)
    if state.view is ViewType.LIST:
        return render.render_list(state.visible_tasks())
    return render.render_board(state.visible_tasks())


def cmd_view(state: AppState, args: list[str]) -> str:
    """
    /view board|list|calendar [YYYY-MM]
    """
    if not args:
        return f"Current view: {state.view.value}. Use /view board | list | calendar [YYYY-MM]."
    try:
        view = ViewType(args[0].lower())
    except ValueError:
        return "Usage: /view board | list | calendar [YYYY-MM]."

    if view is ViewType.CALENDAR and len(args) > 1:
        month = _parse_month(args[1])
        if month is None:
            return "Month must look like YYYY-MM."
        state.calendar_month = month

    state.view = view
    return cmd_show(state, [])


def cmd_search(state: AppState, args: list[str]) -> str:
    state.search_query = " ".join(args)
    n = len(state.visible_tasks())
    if not state.search_query:
        return f"Search cleared ({n} tasks)."
    return f"{n} task(s) match '{state.search_query}'."


def cmd_new(state: AppState, args: list[str]) -> str:
    auto = bool(getattr(state.settings, "auto_status", True))
    session = state.open_session(EditSession.new(" ".join(args), auto_status=auto))
    return render.render_session(session)


def cmd_edit(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /edit <id>."
    task = state.store.get(args[0])
    if task is None:
        return f"No task with id {args[0]}."
    auto = bool(getattr(state.settings, "auto_status", True))
    session = state.open_session(EditSession.for_task(task, auto_status=auto))
    return render.render_session(session)


def cmd_draft(state: AppState, args: list[str]) -> str:
    if state.session is None:
        return NO_SESSION
    return render.render_session(state.session)


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set title <text>
    /set desc <text>          (use \\n for line breaks)
    /set status todo|in_progress|review|done
    /set priority low|normal|high|urgent
    /set due YYYY-MM-DD
    """
    session = state.session
    if session is None:
        return NO_SESSION
    if not args:
        return "Usage: /set title|desc|status|priority|due <value>."

    field_name = args[0].lower()
    value = " ".join(args[1:])

    if field_name == "title":
        if not value.strip():
            raise ValidationError("title is required")
        session.title = value.strip()
    elif field_name in ("desc", "description"):
        session.description = value.replace("\\n", "\n")
    elif field_name == "status":
        status = _parse_status(value)
        if status is None:
            return "Status must be one of: " + ", ".join(s.value for s in TaskStatus) + "."
        session.status = status
    elif field_name == "priority":
        priority = _parse_priority(value)
        if priority is None:
            return "Priority must be one of: " + ", ".join(p.value for p in TaskPriority) + "."
        session.priority = priority
    elif field_name in ("due", "date"):
        try:
            session.due_date = date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            return "Due date must look like YYYY-MM-DD."
    else:
        return f"Unknown field: {field_name}. Use title | desc | status | priority | due."

    return render.render_session(session)


def cmd_item(state: AppState, args: list[str]) -> str:
    if state.session is None:
        return NO_SESSION
    if not args:
        return "Usage: /item <text>."
    state.session.add_item(" ".join(args))
    return render.render_session(state.session)


def cmd_check(state: AppState, args: list[str]) -> str:
    """/check <n> toggles the n-th checklist item (1-based)."""
    session = state.session
    if session is None:
        return NO_SESSION
    try:
        n = int(args[0])
    except (IndexError, ValueError):
        return "Usage: /check <n>."
    # Out-of-range positions leave the description untouched.
    session.toggle(n - 1)
    return render.render_session(session)


def cmd_suggest(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    session = state.session
    if session is None:
        return NO_SESSION
    if not session.title.strip():
        return "Set a title first: the AI needs something to break down."

    if emit:
        with contextlib.suppress(Exception):
            emit("[AI] Thinking...")

    logger.debug("AI suggestions requested task_id=%s", session.task_id)
    # The REPL is synchronous: drive the async path to completion here.
    result = asyncio.run(session.suggest_async(state.advisor))
    if not result.ok:
        return f"[AI] {friendly_advisor_message(result)}"
    if not result.suggestions:
        return "[AI] The service returned no suggestions."
    return f"[AI] {friendly_advisor_message(result)}\n" + render.render_session(session)


def cmd_accept(state: AppState, args: list[str]) -> str:
    session = state.session
    if session is None:
        return NO_SESSION
    n = session.accept_suggestions()
    if not n:
        return "No AI suggestions to insert. Use /suggest first."
    return render.render_session(session)


def cmd_save(state: AppState, args: list[str]) -> str:
    session = state.session
    if session is None:
        return NO_SESSION
    task = state.store.save(session.to_draft())
    state.close_session()
    return f"Saved {task.id}: {task.title} [{task.status.label}]"


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.session is None:
        return NO_SESSION
    state.close_session()
    return "Changes discarded."


def cmd_exit(state: AppState, args: list[str]) -> str:
    # The console loop stops on /exit before dispatching; other callers just get a hint.
    return "Type /exit at the console prompt to quit."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task count, view and AI status.")
registry.register("show", cmd_show, help_text="Render the current view.", aliases=["ls"])
registry.register(
    "view", cmd_view, help_text="Switch view: /view board | list | calendar [YYYY-MM]."
)
registry.register("search", cmd_search, help_text="Filter by text: /search <text> (empty clears).")
registry.register("new", cmd_new, help_text="Start a new task: /new <title>.")
registry.register("edit", cmd_edit, help_text="Open a task for editing: /edit <id>.")
registry.register("draft", cmd_draft, help_text="Show the task being edited.")
registry.register(
    "set", cmd_set, help_text="Edit a field: /set title|desc|status|priority|due <value>."
)
registry.register("item", cmd_item, help_text="Add a checklist item: /item <text>.")
registry.register("check", cmd_check, help_text="Toggle checklist item: /check <n>.")
registry.register("suggest", cmd_suggest, help_text="Ask the AI to break the task into subtasks.")
registry.register("accept", cmd_accept, help_text="Insert AI suggestions into the description.")
registry.register("save", cmd_save, help_text="Save the task being edited.")
registry.register("cancel", cmd_cancel, help_text="Close the editor without saving.")
registry.register(
    "exit", cmd_exit, help_text="Quit the console (also /quit). Unsaved edits are discarded.", aliases=["quit"]
)
