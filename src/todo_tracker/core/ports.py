# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps persistence swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Task

ChangeListener = Callable[[], None]
# Called with no payload after a successful store mutation; re-pull via list().


class TaskRepository(Protocol):
    """Persistence collaborator: whole-collection load/save, order preserved."""

    def load(self) -> list[Task]: ...

    def save(self, tasks: Sequence[Task]) -> None: ...


class SnapshotSink(Protocol):
    """
    Where the store pushes post-mutation snapshots.

    Implementations must not block the caller for long and must not raise:
    a failed save never rolls back the in-memory mutation.
    """

    def submit(self, tasks: list[Task]) -> None: ...
    def flush(self) -> None: ...
    def shutdown(self) -> None: ...
