# src/todo_tracker/storage/persister.py

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from ..core.ports import TaskRepository
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class InlinePersister:
    """
    Save snapshots on the caller's thread (best-effort, errors are logged).

    The store submits while holding its lock, so every mutation and every
    concurrent read waits for the disk write to finish. Use it where
    "saved when the call returns" matters more than latency (tests,
    TODO_ASYNC_SAVE=false); BackgroundPersister is the default.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository

    def submit(self, tasks: list[Task]) -> None:
        try:
            self.repository.save(tasks)
        except Exception:
            logger.exception("Saving %d tasks failed; in-memory state kept.", len(tasks))

    def flush(self) -> None:
        return

    def shutdown(self) -> None:
        return


class BackgroundPersister:
    """
    Best-effort snapshot writer.

    - Does not block the store: saves happen in a worker thread.
    - Snapshots are written in submission order; a backlog collapses to the
      newest snapshot since each one replaces the whole collection.
    - A failed save is logged and dropped. The next mutation retries with a
      fresh snapshot.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository
        self._queue: "queue.Queue[list[Task] | None]" = queue.Queue()
        self._stop_requested = False
        self._worker: Optional[threading.Thread] = threading.Thread(
            target=self._run, name="task-persister", daemon=True
        )
        self._worker.start()
        logger.debug("Persister worker started (repository=%s).", type(repository).__name__)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            stop = item is None
            latest = item
            skipped = 0
            try:
                # Coalesce: only the newest pending snapshot matters.
                while not stop:
                    try:
                        nxt = self._queue.get_nowait()
                    except queue.Empty:
                        break
                    skipped += 1
                    if nxt is None:
                        stop = True
                    else:
                        latest = nxt

                if latest is not None:
                    if skipped:
                        logger.debug("Persister coalesced %d snapshots.", skipped)
                    try:
                        self.repository.save(latest)
                    except Exception:
                        logger.exception("Background save of %d tasks failed.", len(latest))
            finally:
                for _ in range(skipped + 1):
                    self._queue.task_done()

            if stop:
                logger.debug("Persister worker received stop signal.")
                return

    def submit(self, tasks: list[Task]) -> None:
        if self._stop_requested:
            logger.warning("Persister already stopped; snapshot of %d tasks dropped.", len(tasks))
            return
        self._queue.put(tasks)

    def flush(self) -> None:
        """Block until every submitted snapshot has been handled."""
        if self._stop_requested:
            return
        self._queue.join()

    def shutdown(self) -> None:
        if self._stop_requested:
            return
        self._stop_requested = True

        logger.debug("Stopping persister worker...")
        self._queue.put(None)
        self._queue.join()

        if self._worker is not None:
            self._worker.join(timeout=2.0)
