"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TaskStore, ValidationError, parse_priority_suffix
from .filters import TaskFilter, visible
from .selection import Selection, task_id_at, view_index_of
from .dates import parse_due_date
from .report import TaskStats, compute_stats

__all__ = [
    # Tasks
    "Task",
    "TaskStore",
    "ValidationError",
    "parse_priority_suffix",
    # Filters
    "TaskFilter",
    "visible",
    # Selection
    "Selection",
    "task_id_at",
    "view_index_of",
    # Dates
    "parse_due_date",
    # Reports
    "TaskStats",
    "compute_stats",
]
