# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from ..tasks.task_view import SortKey, TaskFilter, project


@dataclass
class AppState:
    """
    What a presentation adapter works with.

    The store is authoritative. task_filter / sort_key are transient view
    state: they are never persisted and reset on restart.
    """

    settings: object
    store: TaskStore

    task_filter: TaskFilter = field(default_factory=TaskFilter.all)
    sort_key: SortKey = SortKey.DUE_DATE_ASC

    def visible_tasks(self) -> list[Task]:
        """Fresh projection of the current store state (never cached)."""
        tasks = self.store.list()
        by_id = {t.id: t for t in tasks}
        return [by_id[tid] for tid in project(tasks, self.task_filter, self.sort_key)]
