# tests/test_task_view.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from todo_tracker.tasks.errors import ValidationError
from todo_tracker.tasks.task_models import STATUS_INFO, Status, Task
from todo_tracker.tasks.task_view import (
    FILTER_OPTIONS,
    SortKey,
    TaskFilter,
    completion_ratio,
    progress_text,
    project,
    project_tasks,
)

D = datetime(2025, 10, 10, 12, 0)


def _task(tid: str, due: datetime, status: Status = Status.NOT_STARTED) -> Task:
    return Task(id=tid, title=tid, description="", due_date=due, status=status)


def test_sort_is_stable_for_equal_due_dates() -> None:
    tasks = [_task("first", D), _task("second", D), _task("earlier", D - timedelta(days=1))]

    assert project(tasks, TaskFilter.all(), SortKey.DUE_DATE_ASC) == ["earlier", "first", "second"]
    assert project(tasks, TaskFilter.all(), SortKey.DUE_DATE_DESC) == ["first", "second", "earlier"]


def test_filter_selects_exactly_the_matching_status() -> None:
    tasks = [
        _task("a", D, Status.COMPLETED),
        _task("b", D + timedelta(hours=1), Status.IN_PROGRESS),
        _task("c", D - timedelta(hours=1), Status.COMPLETED),
        _task("d", D, Status.NOT_STARTED),
    ]

    for status in Status:
        ids = project(tasks, TaskFilter.only(status), SortKey.DUE_DATE_ASC)
        assert set(ids) == {t.id for t in tasks if t.status is status}

    assert project(tasks, TaskFilter.only(Status.COMPLETED), SortKey.DUE_DATE_ASC) == ["c", "a"]


def test_empty_projection_is_not_an_error() -> None:
    tasks = [_task("a", D, Status.NOT_STARTED)]

    assert project(tasks, TaskFilter.only(Status.COMPLETED), SortKey.DUE_DATE_DESC) == []
    assert project([], TaskFilter.all(), SortKey.DUE_DATE_ASC) == []


def test_projection_does_not_mutate_input() -> None:
    tasks = [_task("late", D + timedelta(days=2)), _task("soon", D)]
    before = list(tasks)

    result = project_tasks(tasks, TaskFilter.all(), SortKey.DUE_DATE_ASC)

    assert tasks == before
    assert [t.id for t in result] == ["soon", "late"]


def test_completion_ratio_boundaries() -> None:
    assert completion_ratio([]) == 0
    tasks = [
        _task("a", D, Status.COMPLETED),
        _task("b", D, Status.NOT_STARTED),
        _task("c", D, Status.IN_PROGRESS),
        _task("d", D, Status.NOT_STARTED),
    ]
    assert completion_ratio(tasks) == 0.25
    assert progress_text(tasks) == "1 of 4 completed"


def test_status_metadata_table_covers_every_status() -> None:
    assert set(STATUS_INFO) == set(Status)
    assert Status.NOT_STARTED.label == "Not started"
    assert Status.IN_PROGRESS.color == "blue"
    assert Status.COMPLETED.icon == "checkmark.circle.fill"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("completed", Status.COMPLETED),
        ("In Progress", Status.IN_PROGRESS),
        ("in-progress", Status.IN_PROGRESS),
        ("NOT_STARTED", Status.NOT_STARTED),
    ],
)
def test_status_parse_accepts_values_and_labels(text, expected) -> None:
    assert Status.parse(text) is expected


def test_status_parse_rejects_unknown() -> None:
    with pytest.raises(ValidationError) as exc:
        Status.parse("blocked")
    assert exc.value.field == "status"


def test_status_from_db_falls_back_to_not_started() -> None:
    assert Status.from_db("completed") is Status.COMPLETED
    assert Status.from_db(None) is Status.NOT_STARTED
    assert Status.from_db("archived") is Status.NOT_STARTED


def test_filter_options_and_parse() -> None:
    assert [f.key for f in FILTER_OPTIONS] == [
        "all",
        "status-not_started",
        "status-in_progress",
        "status-completed",
    ]
    assert TaskFilter.parse("all") == TaskFilter.all()
    assert TaskFilter.parse("status-completed") == TaskFilter.only(Status.COMPLETED)
    assert TaskFilter.parse("in progress").label == "In progress"
    with pytest.raises(ValidationError) as exc:
        TaskFilter.parse("someday")
    assert exc.value.field == "filter"


def test_sort_key_parse() -> None:
    assert SortKey.parse("asc") is SortKey.DUE_DATE_ASC
    assert SortKey.parse("DESC") is SortKey.DUE_DATE_DESC
    with pytest.raises(ValidationError):
        SortKey.parse("title")
