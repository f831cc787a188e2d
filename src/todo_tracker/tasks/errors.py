# src/todo_tracker/tasks/errors.py

"""
Recoverable errors raised by the task core.

Adapters catch TaskError and show str(err) to the user; neither error is fatal
to the store. Contract violations (wrong types) raise TypeError instead.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for recoverable task errors."""


class ValidationError(TaskError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class NotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id
