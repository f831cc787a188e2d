# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the repository and snapshot writer into the TaskStore,
- seeds example tasks on a fresh install (optional).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..config import get_settings
from ..core.ports import SnapshotSink, TaskRepository
from ..core.state import AppState
from ..storage.memory_repo import InMemoryTaskRepository
from ..storage.persister import BackgroundPersister, InlinePersister
from ..storage.sqlite_repo import SQLiteTaskRepository
from ..tasks.errors import ValidationError
from ..tasks.task_models import Status
from ..tasks.task_store import TaskStore
from ..tasks.task_view import SortKey

logger = logging.getLogger(__name__)

# (title, description, days ahead, status)
EXAMPLE_TASKS: list[tuple[str, str, int, Status]] = [
    (
        "Write project description",
        "Short summary of the app's goals and features.",
        1,
        Status.IN_PROGRESS,
    ),
    (
        "Design the list view",
        "One row per task with a status icon.",
        2,
        Status.NOT_STARTED,
    ),
    (
        "Implement the detail view",
        "Show description, due date and status. Allow changing the status.",
        3,
        Status.NOT_STARTED,
    ),
    (
        "Polish and add filtering",
        "Bonus: filter, sorting, progress indicator.",
        4,
        Status.COMPLETED,
    ),
]


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_store(settings) -> TaskStore:
    repository: TaskRepository
    if settings.persistence_enabled:
        repository = SQLiteTaskRepository(settings.tasks_db_path)
    else:
        repository = InMemoryTaskRepository()

    sink: SnapshotSink
    if settings.async_save:
        sink = BackgroundPersister(repository)
    else:
        sink = InlinePersister(repository)

    return TaskStore(repository, sink=sink)


def seed_example_tasks(store: TaskStore, *, now: datetime | None = None) -> int:
    """Add the sample tasks to an empty store. Returns how many were added."""
    if len(store):
        return 0
    now = now or datetime.now()
    for title, description, days, status in EXAMPLE_TASKS:
        store.add(title, description, now + timedelta(days=days), status)
    logger.info("Seeded %d example tasks.", len(EXAMPLE_TASKS))
    return len(EXAMPLE_TASKS)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = build_store(settings)
    if getattr(settings, "seed_examples", False):
        seed_example_tasks(store)

    try:
        sort_key = SortKey.parse(getattr(settings, "default_sort", "asc"))
    except ValidationError:
        logger.warning("Bad default sort %r, using ascending.", settings.default_sort)
        sort_key = SortKey.DUE_DATE_ASC

    return AppState(settings=settings, store=store, sort_key=sort_key)
