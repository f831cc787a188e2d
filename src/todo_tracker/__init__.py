"""
todo_tracker: personal task tracking.

Public API:
- TaskStore: owner of the ordered task collection (tasks/task_store.py)
- project / completion_ratio: derived views (tasks/task_view.py)
"""

from .tasks.errors import NotFoundError, TaskError, ValidationError
from .tasks.task_models import Status, Task
from .tasks.task_store import TaskStore
from .tasks.task_view import SortKey, TaskFilter, completion_ratio, project

__version__ = "0.1.0"

__all__ = [
    "NotFoundError",
    "SortKey",
    "Status",
    "Task",
    "TaskError",
    "TaskFilter",
    "TaskStore",
    "ValidationError",
    "completion_ratio",
    "project",
]
