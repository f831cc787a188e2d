# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> list[str]:
    """
    One REPL step: run the command, then re-render if the store changed.

    Returns the printed blocks (handy for tests). The task list is rendered
    from a fresh projection after every mutation; nothing is cached.
    """
    out: list[str] = []
    changed = False

    def mark_changed() -> None:
        nonlocal changed
        changed = True

    def emit(text: str) -> None:
        out.append(text)

    unsubscribe = state.store.on_change(mark_changed)
    try:
        try:
            reply = command_registry.handle(state, line, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."
    finally:
        unsubscribe()

    if reply is None:
        reply = "Commands start with '/'. Use /help to list them."
    out.append(reply)

    if changed:
        out.append(render_task_list(state))
    return out


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todo"))
    _print_ts(f"[{app_name}] Use /help for commands, /exit to quit.\n")
    print(render_task_list(state))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit", "/q"):
            logger.info("Console exit command received.")
            break

        for block in handle_line(state, user_input):
            print(block)
        print()

    logger.info("Console connector finished.")
