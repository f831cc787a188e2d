# src/todo_tracker/storage/sqlite_repo.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from ..tasks.task_models import Status, Task
from ..tasks.validation import to_local_naive

logger = logging.getLogger(__name__)


class SQLiteTaskRepository:
    """
    SQLite persistence for the task collection.

    The store owns the ordered list; this repository only mirrors it:
    - save() replaces the whole table in one transaction
    - load() returns tasks ordered by their saved position

    The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SQLiteTaskRepository ready db=%s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    due_date TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'not_started'
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SQLiteTaskRepository migration: added column %s", name)

            add_col("position", "INTEGER NOT NULL DEFAULT 0")
            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'not_started'")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_position ON tasks(position)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task | None:
        try:
            due_date = to_local_naive(datetime.fromisoformat(str(row["due_date"])))
        except ValueError:
            logger.warning("Skipping task id=%s with unreadable due_date %r", row["id"], row["due_date"])
            return None
        title = str(row["title"] or "").strip()
        if not title:
            logger.warning("Skipping task id=%s with empty title", row["id"])
            return None
        return Task(
            id=str(row["id"]),
            title=title,
            description=str(row["description"] or ""),
            due_date=due_date,
            status=Status.from_db(row["status"]),
        )

    # ---- public API ----

    def load(self) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY position ASC, rowid ASC")
            rows = cur.fetchall()
        finally:
            conn.close()

        tasks = [t for t in (self._row_to_task(r) for r in rows) if t is not None]
        logger.debug("Loaded %d tasks from %s", len(tasks), self._db_path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    """
                    INSERT INTO tasks(id, position, title, description, due_date, status)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            t.id,
                            pos,
                            t.title,
                            t.description,
                            t.due_date.isoformat(),
                            t.status.value,
                        )
                        for pos, t in enumerate(tasks)
                    ],
                )
            logger.debug("Saved %d tasks to %s", len(tasks), self._db_path)
        finally:
            conn.close()

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()
