# src/todo_tracker/storage/memory_repo.py

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import replace

from ..tasks.task_models import Task


class InMemoryTaskRepository:
    """Process-local repository (persistence disabled, tests)."""

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self._lock = threading.Lock()
        self._tasks = [replace(t) for t in tasks]
        self.save_count = 0

    def load(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks]

    def save(self, tasks: Sequence[Task]) -> None:
        with self._lock:
            self._tasks = [replace(t) for t in tasks]
            self.save_count += 1
