# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.core.state import AppState
from todo_tracker.tasks.task_store import TaskStore

from .fakes import ChangeCounter


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        log_dir=tmp_path,
        persistence_enabled=True,
        async_save=False,
        seed_examples=False,
        default_sort="asc",
    )


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 10, 1, 12, 0)


@pytest.fixture()
def store() -> TaskStore:
    """Plain in-memory store (no persistence)."""
    return TaskStore()


@pytest.fixture()
def changes(store: TaskStore) -> ChangeCounter:
    counter = ChangeCounter()
    store.on_change(counter)
    return counter


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
