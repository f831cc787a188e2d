# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable

from ..core.ports import ChangeListener, SnapshotSink, TaskRepository
from .errors import NotFoundError
from .task_models import Status, Task
from .validation import (
    ensure_due_date,
    ensure_status,
    new_task_id,
    normalize_description,
    normalize_title,
)

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class TaskStore:
    """
    In-memory owner of the ordered task collection.

    - The only mutation surface: add / update / set_status / toggle_completed / remove.
    - Everything handed out is a copy; callers never hold the authoritative Task.
    - Observers registered with on_change() are called after each successful
      mutation, outside the lock, so they may call list() right away.

    Thread-safety:
    - one re-entrant lock covers every read and every read-modify-write,
      so reads never see a half-applied mutation.

    Persistence (optional):
    - repository.load() runs once in __init__
    - after each mutation a snapshot goes to the SnapshotSink (best-effort)
    """

    def __init__(
        self,
        repository: TaskRepository | None = None,
        *,
        sink: SnapshotSink | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._listeners: list[ChangeListener] = []
        self._sink = sink

        if repository is not None:
            try:
                loaded = repository.load()
            except Exception:
                logger.exception("Loading tasks failed; starting with an empty list.")
                loaded = []
            seen: set[str] = set()
            for task in loaded:
                if task.id in seen:
                    logger.warning("Dropping duplicate task id=%s from storage", task.id)
                    continue
                seen.add(task.id)
                self._tasks.append(replace(task, due_date=ensure_due_date(task.due_date)))

        logger.info("TaskStore ready total=%d persistent=%s", len(self._tasks), sink is not None)

    def close(self) -> None:
        """Flush and stop background persistence (if any)."""
        if self._sink is not None:
            self._sink.flush()
            self._sink.shutdown()

    def flush(self) -> None:
        if self._sink is not None:
            self._sink.flush()

    # ---- observers ----

    def on_change(self, callback: ChangeListener) -> Callable[[], None]:
        """Subscribe to "state changed"; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for cb in listeners:
            try:
                cb()
            except Exception:
                logger.exception("Change listener %r failed.", cb)

    # ---- low-level helpers (call with lock held) ----

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(task_id)

    def _persist_locked(self) -> None:
        if self._sink is None:
            return
        self._sink.submit([replace(t) for t in self._tasks])

    # ---- reads ----

    def list(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks]

    def get(self, task_id: str) -> Task:
        with self._lock:
            return replace(self._tasks[self._index_of(task_id)])

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- mutations ----

    def add(
        self,
        title: str,
        description: str = "",
        due_date: datetime | None = None,
        status: Status = Status.NOT_STARTED,
    ) -> Task:
        clean_title = normalize_title(title)
        clean_description = normalize_description(description)
        if due_date is None:
            due_date = datetime.now()
        due_date = ensure_due_date(due_date)
        ensure_status(status)

        with self._lock:
            task = Task(
                id=new_task_id({t.id for t in self._tasks}),
                title=clean_title,
                description=clean_description,
                due_date=due_date,
                status=status,
            )
            self._tasks.append(task)
            out = replace(task)
            self._persist_locked()

        logger.debug("Task added id=%s status=%s due=%s", out.id, out.status.value, out.due_date)
        self._notify()
        return out

    def update(
        self,
        task_id: str,
        *,
        title: str = _UNSET,
        description: str = _UNSET,
        due_date: datetime = _UNSET,
        status: Status = _UNSET,
    ) -> Task:
        changes: dict[str, Any] = {}
        if title is not _UNSET:
            changes["title"] = normalize_title(title)
        if description is not _UNSET:
            changes["description"] = normalize_description(description)
        if due_date is not _UNSET:
            changes["due_date"] = ensure_due_date(due_date)
        if status is not _UNSET:
            changes["status"] = ensure_status(status)

        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            if not changes:
                return replace(task)
            for name, value in changes.items():
                setattr(task, name, value)
            out = replace(task)
            self._persist_locked()

        logger.debug("Task updated id=%s fields=%s", task_id, ",".join(changes))
        self._notify()
        return out

    def set_status(self, task_id: str, status: Status) -> Task:
        return self.update(task_id, status=status)

    def toggle_completed(self, task_id: str) -> Task:
        """Complete an open task; reopen (NOT_STARTED) a completed one."""
        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            if task.status is Status.COMPLETED:
                task.status = Status.NOT_STARTED
            else:
                task.status = Status.COMPLETED
            out = replace(task)
            self._persist_locked()

        logger.debug("Task toggled id=%s status=%s", task_id, out.status.value)
        self._notify()
        return out

    def remove(self, ids: Iterable[str]) -> int:
        """Delete every task whose id is in `ids`; unknown ids are ignored."""
        if isinstance(ids, str):
            raise TypeError("remove() takes a collection of ids, not a single id string")
        doomed = set(ids)
        for task_id in doomed:
            if not isinstance(task_id, str):
                raise TypeError(f"task id must be str, got {task_id!r}")
        if not doomed:
            return 0

        with self._lock:
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if t.id not in doomed]
            removed = before - len(self._tasks)
            if removed:
                self._persist_locked()

        if removed:
            logger.debug("Removed %d task(s)", removed)
            self._notify()
        return removed
