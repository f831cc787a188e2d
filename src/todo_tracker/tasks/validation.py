# src/todo_tracker/tasks/validation.py

from __future__ import annotations

import uuid
from collections.abc import Container
from datetime import datetime
from typing import Any

from .errors import ValidationError
from .task_models import Status


def normalize_title(title: Any) -> str:
    """Trim a title; reject it if nothing is left."""
    if not isinstance(title, str):
        raise TypeError(f"title must be str, got {type(title).__name__}")
    clean = title.strip()
    if not clean:
        raise ValidationError("title", "must not be empty")
    return clean


def normalize_description(description: Any) -> str:
    if description is None:
        return ""
    if not isinstance(description, str):
        raise TypeError(f"description must be str, got {type(description).__name__}")
    return description.strip()


def ensure_status(status: Any) -> Status:
    # StrEnum members are str too, so a plain "completed" must not slip through.
    if not isinstance(status, Status):
        raise TypeError(f"status must be Status, got {status!r}")
    return status


def to_local_naive(moment: datetime) -> datetime:
    """Aware datetimes become naive local time; naive ones are taken as local already."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def ensure_due_date(due_date: Any) -> datetime:
    # The store only holds naive local times, so due dates always compare.
    if not isinstance(due_date, datetime):
        raise TypeError(f"due_date must be datetime, got {type(due_date).__name__}")
    return to_local_naive(due_date)


def new_task_id(taken: Container[str] = ()) -> str:
    """Fresh id that is not in `taken` (ids are never reused)."""
    while True:
        task_id = uuid.uuid4().hex
        if task_id not in taken:
            return task_id
