# src/todo_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import cast

from ..core.state import AppState
from ..tasks.errors import TaskError, ValidationError
from ..tasks.task_models import Status, Task
from ..tasks.task_view import FILTER_OPTIONS, SortKey, TaskFilter, completion_ratio, progress_text
from ..tasks.validation import to_local_naive

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

DATE_FMT = "%Y-%m-%d %H:%M"

# Console glyphs for the status icon keys.
ICON_GLYPHS = {
    "circle": "○",
    "clock": "◔",
    "checkmark.circle.fill": "●",
}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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
        Recoverable task errors become the reply text.
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
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskError as e:
            logger.debug("/%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing helpers ----


def parse_due_date(text: str, *, now: datetime | None = None) -> datetime:
    """
    Accepts "YYYY-MM-DD", "YYYY-MM-DD HH:MM", "today", "tomorrow" or "+N" (days from now).
    """
    now = now or datetime.now()
    raw = (text or "").strip().lower()
    if not raw or raw in ("now", "today"):
        return now
    if raw == "tomorrow":
        return now + timedelta(days=1)
    if raw.startswith("+"):
        days = raw[1:].rstrip("d")
        if days.isdigit():
            return now + timedelta(days=int(days))
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError:
        raise ValidationError("due_date", f"cannot read date {text!r} (use YYYY-MM-DD HH:MM)") from None
    return to_local_naive(parsed)


def resolve_positions(state: AppState, tokens: list[str]) -> list[Task]:
    """
    Map 1-based display positions to tasks of the projection as it is *now*.

    Positions are only meaningful for the current filter/sort, so every
    command resolves them to ids before touching the store.
    """
    if not tokens:
        raise ValidationError("position", "missing task number (see /list)")
    visible = state.visible_tasks()
    out: list[Task] = []
    for tok in tokens:
        # isdigit() also accepts superscripts like "²", which int() rejects.
        if not tok.isdecimal():
            raise ValidationError("position", f"not a task number: {tok!r}")
        pos = int(tok)
        if pos < 1 or pos > len(visible):
            raise ValidationError("position", f"no task #{pos} in the current view")
        out.append(visible[pos - 1])
    return out


# ---- rendering ----


def format_task_row(pos: int, task: Task) -> str:
    glyph = ICON_GLYPHS.get(task.status.icon, "?")
    return f"{pos:>3}. {glyph} {task.title}  [{task.status.label}]  due {task.due_date.strftime(DATE_FMT)}"


def render_task_list(state: AppState) -> str:
    tasks = state.store.list()
    visible = state.visible_tasks()
    header = f"Tasks ({state.task_filter.label}, {state.sort_key.label})"
    lines = [header]
    if tasks:
        ratio = completion_ratio(tasks)
        bar_len = 20
        filled = int(round(ratio * bar_len))
        lines.append(f"  Progress [{'#' * filled}{'.' * (bar_len - filled)}] {progress_text(tasks)}")
    if not visible:
        lines.append("  (no tasks)")
    for pos, task in enumerate(visible, start=1):
        lines.append(format_task_row(pos, task))
    return "\n".join(lines)


def format_task_detail(task: Task) -> str:
    description = task.description or "(no description)"
    return (
        f"{task.title}\n"
        f"  Status: {ICON_GLYPHS.get(task.status.icon, '?')} {task.status.label}\n"
        f"  Due: {task.due_date.strftime(DATE_FMT)}\n"
        f"  Description: {description}\n"
        f"  Id: {task.id}"
    )


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list          -> current view
    /list <filter> -> set the filter, then show
    """
    if args:
        state.task_filter = TaskFilter.parse(" ".join(args))
    return render_task_list(state)


def cmd_show(state: AppState, args: list[str]) -> str:
    (task,) = resolve_positions(state, args[:1])
    return format_task_detail(state.store.get(task.id))


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title> [| description [| due [| status]]]
    """
    fields = [p.strip() for p in " ".join(args).split("|")]
    title = fields[0] if fields else ""
    description = fields[1] if len(fields) > 1 else ""
    due_date = parse_due_date(fields[2]) if len(fields) > 2 else datetime.now()
    status = Status.parse(fields[3]) if len(fields) > 3 and fields[3] else Status.NOT_STARTED

    task = state.store.add(title, description, due_date, status)
    return f"Added: {task.title}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n> title <text>
    /edit <n> desc <text>
    /edit <n> due <date>
    /edit <n> status <status>
    """
    if len(args) < 2:
        return "Usage: /edit <n> title|desc|due|status <value>"

    (task,) = resolve_positions(state, args[:1])
    field_name = args[1].lower()
    value = " ".join(args[2:])

    if field_name == "title":
        updated = state.store.update(task.id, title=value)
    elif field_name in ("desc", "description"):
        updated = state.store.update(task.id, description=value)
    elif field_name in ("due", "date", "due_date"):
        if not value.strip():
            raise ValidationError("due_date", "must not be empty (try today, tomorrow, +N or YYYY-MM-DD)")
        updated = state.store.update(task.id, due_date=parse_due_date(value))
    elif field_name == "status":
        updated = state.store.set_status(task.id, Status.parse(value))
    else:
        return f"Unknown field {field_name!r}. Use title, desc, due or status."

    return f"Updated: {updated.title}"


def cmd_status(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        options = ", ".join(s.value for s in Status)
        return f"Usage: /status <n> <status>  ({options})"
    (task,) = resolve_positions(state, args[:1])
    updated = state.store.set_status(task.id, Status.parse(" ".join(args[1:])))
    return f"{updated.title}: {updated.status.label}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    (task,) = resolve_positions(state, args[:1])
    updated = state.store.toggle_completed(task.id)
    return f"{updated.title}: {updated.status.label}"


def cmd_remove(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    targets = resolve_positions(state, args)
    removed = state.store.remove({t.id for t in targets})
    if emit:
        for t in targets:
            emit(f"Deleted: {t.title}")
    return f"Removed {removed} task(s)."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter        -> show options
    /filter <opt>  -> all | not_started | in_progress | completed
    """
    if not args:
        opts = ", ".join(
            f"{'*' if f == state.task_filter else ''}{f.key}" for f in FILTER_OPTIONS
        )
        return f"Filter: {state.task_filter.label}. Options: {opts}"
    state.task_filter = TaskFilter.parse(" ".join(args))
    return f"Filter: {state.task_filter.label}"


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Sort: {state.sort_key.label}. Use /sort asc or /sort desc."
    state.sort_key = SortKey.parse(args[0])
    return f"Sort: {state.sort_key.label}"


def cmd_progress(state: AppState, args: list[str]) -> str:
    tasks = state.store.list()
    return f"Progress: {progress_text(tasks)} ({completion_ratio(tasks):.0%})"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks: /list [all|<status>].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Task details: /show <n>.")
registry.register(
    "add",
    cmd_add,
    help_text="New task: /add <title> | <description> | <due> | <status>.",
    aliases=["new"],
)
registry.register("edit", cmd_edit, help_text="Edit a field: /edit <n> title|desc|due|status <value>.")
registry.register("status", cmd_status, help_text="Set status: /status <n> <status>.")
registry.register("toggle", cmd_toggle, help_text="Complete / reopen: /toggle <n>.", aliases=["done"])
registry.register("rm", cmd_remove, help_text="Delete tasks: /rm <n> [<n> ...].", aliases=["del"])
registry.register("filter", cmd_filter, help_text="Filter by status: /filter all|<status>.")
registry.register("sort", cmd_sort, help_text="Sort by due date: /sort asc|desc.")
registry.register("progress", cmd_progress, help_text="Show completion progress.")
