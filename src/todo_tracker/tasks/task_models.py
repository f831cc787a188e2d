# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from .errors import ValidationError

logger = logging.getLogger(__name__)


def _fold(text: str) -> str:
    return text.strip().lower().replace("-", "_").replace(" ", "_")


class Status(StrEnum):
    """
    Task lifecycle status.

    Presentation metadata (label, color key, icon key) lives in STATUS_INFO and
    is never persisted; only the value is.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def info(self) -> StatusInfo:
        return STATUS_INFO[self]

    @property
    def label(self) -> str:
        return STATUS_INFO[self].label

    @property
    def color(self) -> str:
        return STATUS_INFO[self].color

    @property
    def icon(self) -> str:
        return STATUS_INFO[self].icon

    @classmethod
    def parse(cls, text: str) -> Status:
        """
        Parse user input: value, name or label, case-insensitive.
        "in progress", "In-Progress" and "IN_PROGRESS" are all accepted.
        """
        key = _fold(text or "")
        for status in cls:
            if key in (status.value, _fold(status.label)):
                return status
        raise ValidationError("status", f"unknown status {text!r}")

    @classmethod
    def from_db(cls, raw: str | None) -> Status:
        if not raw:
            return cls.NOT_STARTED
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unknown stored status %r, using %s", raw, cls.NOT_STARTED.value)
            return cls.NOT_STARTED


@dataclass(frozen=True, slots=True)
class StatusInfo:
    label: str
    color: str
    icon: str


STATUS_INFO: dict[Status, StatusInfo] = {
    Status.NOT_STARTED: StatusInfo(label="Not started", color="gray", icon="circle"),
    Status.IN_PROGRESS: StatusInfo(label="In progress", color="blue", icon="clock"),
    Status.COMPLETED: StatusInfo(label="Completed", color="green", icon="checkmark.circle.fill"),
}


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    due_date: datetime
    status: Status
