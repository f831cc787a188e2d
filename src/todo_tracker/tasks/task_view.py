# src/todo_tracker/tasks/task_view.py

"""
Derived views over the task list.

Pure functions only: same input -> same output, the input is never mutated.
Adapters recompute these after every store change instead of caching them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from .errors import ValidationError
from .task_models import Status, Task


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """Either "all" (status is None) or exactly one status."""

    status: Status | None = None

    @classmethod
    def all(cls) -> TaskFilter:
        return cls(None)

    @classmethod
    def only(cls, status: Status) -> TaskFilter:
        return cls(status)

    @property
    def key(self) -> str:
        return "all" if self.status is None else f"status-{self.status.value}"

    @property
    def label(self) -> str:
        return "All" if self.status is None else self.status.label

    def matches(self, task: Task) -> bool:
        return self.status is None or task.status is self.status

    @classmethod
    def parse(cls, text: str) -> TaskFilter:
        raw = (text or "").strip()
        if raw.lower() in ("all", "*", ""):
            return cls.all()
        if raw.lower().startswith("status-"):
            raw = raw[len("status-"):]
        try:
            return cls.only(Status.parse(raw))
        except ValidationError:
            raise ValidationError("filter", f"unknown filter {text!r}") from None


FILTER_OPTIONS: tuple[TaskFilter, ...] = (TaskFilter.all(), *(TaskFilter.only(s) for s in Status))


class SortKey(StrEnum):
    DUE_DATE_ASC = "due_date_asc"
    DUE_DATE_DESC = "due_date_desc"

    @property
    def label(self) -> str:
        return "Due date ↑" if self is SortKey.DUE_DATE_ASC else "Due date ↓"

    @classmethod
    def parse(cls, text: str) -> SortKey:
        raw = (text or "").strip().lower()
        if raw in ("asc", "up", "due_date_asc", "oldest"):
            return cls.DUE_DATE_ASC
        if raw in ("desc", "down", "due_date_desc", "newest"):
            return cls.DUE_DATE_DESC
        raise ValidationError("sort", f"unknown sort order {text!r} (use asc or desc)")


def project_tasks(tasks: Sequence[Task], task_filter: TaskFilter, sort_key: SortKey) -> list[Task]:
    selected = [t for t in tasks if task_filter.matches(t)]
    # sorted() is stable, also with reverse=True: equal due dates keep insertion order.
    return sorted(
        selected,
        key=lambda t: t.due_date,
        reverse=sort_key is SortKey.DUE_DATE_DESC,
    )


def project(tasks: Sequence[Task], task_filter: TaskFilter, sort_key: SortKey) -> list[str]:
    """Ids to display, filtered and stably sorted by due date."""
    return [t.id for t in project_tasks(tasks, task_filter, sort_key)]


def progress_counts(tasks: Sequence[Task]) -> tuple[int, int]:
    completed = sum(1 for t in tasks if t.status is Status.COMPLETED)
    return completed, len(tasks)


def completion_ratio(tasks: Sequence[Task]) -> float:
    """Share of completed tasks; 0.0 for an empty list."""
    completed, total = progress_counts(tasks)
    if total == 0:
        return 0.0
    return completed / total


def progress_text(tasks: Sequence[Task]) -> str:
    completed, total = progress_counts(tasks)
    return f"{completed} of {total} completed"
