# tests/test_bootstrap.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest

from todo_tracker.cli.bootstrap import EXAMPLE_TASKS, create_initial_state, seed_example_tasks
from todo_tracker.config import Settings
from todo_tracker.logging_setup import _ConsoleNoiseFilter
from todo_tracker.tasks.task_models import Status
from todo_tracker.tasks.task_store import TaskStore
from todo_tracker.tasks.task_view import SortKey


def test_seed_examples_only_on_empty_store() -> None:
    store = TaskStore()
    now = datetime(2025, 10, 1, 9, 0)

    assert seed_example_tasks(store, now=now) == len(EXAMPLE_TASKS)
    assert seed_example_tasks(store, now=now) == 0

    tasks = store.list()
    assert [t.due_date.day for t in tasks] == [2, 3, 4, 5]
    assert tasks[-1].status is Status.COMPLETED


def test_state_persists_between_runs(settings) -> None:
    state = create_initial_state(settings=settings)
    state.store.add("Persist me", "", datetime(2025, 10, 1), Status.IN_PROGRESS)
    state.store.close()

    again = create_initial_state(settings=settings)
    assert [t.title for t in again.store.list()] == ["Persist me"]
    assert settings.tasks_db_path.exists()


def test_state_with_persistence_disabled_and_default_sort(settings) -> None:
    settings.persistence_enabled = False
    settings.async_save = True
    settings.seed_examples = True
    settings.default_sort = "desc"

    state = create_initial_state(settings=settings)
    try:
        assert len(state.store) == len(EXAMPLE_TASKS)
        assert state.sort_key is SortKey.DUE_DATE_DESC
        assert not settings.tasks_db_path.exists()
    finally:
        state.store.close()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TODO_ASYNC_SAVE", "no")
    monkeypatch.setenv("TODO_SEED_EXAMPLES", "0")
    monkeypatch.delenv("TODO_TASKS_DB_PATH", raising=False)
    monkeypatch.delenv("TODO_LOG_DIR", raising=False)

    s = Settings.from_env()

    assert s.data_dir == tmp_path / "data"
    assert s.tasks_db_path == tmp_path / "data" / "tasks.sqlite3"
    assert s.log_dir == tmp_path / "data"
    assert s.async_save is False
    assert s.seed_examples is False


def test_console_filter_keeps_app_logs_and_hides_noise() -> None:
    f = _ConsoleNoiseFilter()

    def rec(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert f.filter(rec("todo_tracker.tasks.task_store", logging.INFO))
    assert not f.filter(rec("todo_tracker.storage.persister", logging.INFO))
    assert f.filter(rec("todo_tracker.storage.persister", logging.WARNING))
    assert not f.filter(rec("todo_tracker.storage.sqlite_repo", logging.INFO))
    assert f.filter(rec("todo_tracker.connectors.console_connector", logging.INFO))
    assert f.filter(rec("todo_tracker.cli.commands", logging.DEBUG))
    assert not f.filter(rec("py.warnings", logging.WARNING))
    assert not f.filter(rec("urllib3", logging.WARNING))
    assert f.filter(rec("urllib3", logging.ERROR))
