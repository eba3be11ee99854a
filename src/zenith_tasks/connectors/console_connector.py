# src/zenith_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    session = state.session
    if session is None:
        return f"[{state.view.value}] > "
    return f"[{session.task_id or 'new'}] > "


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (view=%s).", state.view.value)
    _print_ts("[CONSOLE] Use /help for commands, /show to render the board, /exit to quit.\n")
    print(command_registry.handle(state, "/show"))

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (AI request).
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            # Plain text: treat it as a quick search.
            response = command_registry.handle(state, f"/search {user_input}")
        print(response, flush=True)
        print()

    if state.session is not None:
        logger.info("Discarding unsaved edits for task_id=%s", state.session.task_id)
        state.close_session()
    logger.info("Console connector finished.")
