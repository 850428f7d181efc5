"""Read-only task filters."""

from datetime import datetime, timedelta
from enum import Enum

from .tasks import Task, TaskStore, utcnow

DEFAULT_SOON_WINDOW = timedelta(hours=24)


class TaskFilter(Enum):
    """Named predicates for narrowing the visible task set.

    Declaration order is the cycling order used by `next()`.
    """

    ALL = "All Tasks"
    PENDING = "Pending"
    COMPLETED = "Completed"
    HIGH_PRIORITY = "High Priority (4-5)"
    MEDIUM_PRIORITY = "Medium Priority (2-3)"
    LOW_PRIORITY = "Low Priority (1)"
    NO_PRIORITY = "No Priority"
    OVERDUE = "Overdue"
    DUE_TODAY = "Due Today"
    DUE_SOON = "Due Soon"
    HAS_DUE_DATE = "Has Due Date"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> "TaskFilter":
        members = list(TaskFilter)
        return members[(members.index(self) + 1) % len(members)]


def matches(
    task: Task,
    task_filter: TaskFilter,
    now: datetime,
    soon_window: timedelta = DEFAULT_SOON_WINDOW,
) -> bool:
    match task_filter:
        case TaskFilter.ALL:
            return True
        case TaskFilter.PENDING:
            return not task.completed
        case TaskFilter.COMPLETED:
            return task.completed
        case TaskFilter.HIGH_PRIORITY:
            return task.priority in (4, 5)
        case TaskFilter.MEDIUM_PRIORITY:
            return task.priority in (2, 3)
        case TaskFilter.LOW_PRIORITY:
            return task.priority == 1
        case TaskFilter.NO_PRIORITY:
            return task.priority is None
        case TaskFilter.OVERDUE:
            return task.is_overdue(now)
        case TaskFilter.DUE_TODAY:
            return task.is_due_today(now)
        case TaskFilter.DUE_SOON:
            return task.is_due_soon(now, soon_window)
        case TaskFilter.HAS_DUE_DATE:
            return task.due_date is not None
    return False


def visible(
    store: TaskStore,
    task_filter: TaskFilter,
    now: datetime | None = None,
    soon_window: timedelta = DEFAULT_SOON_WINDOW,
) -> list[tuple[int, Task]]:
    """
    Apply a filter to the store.

    Returns (store_index, task) pairs in store order. Pure function - no I/O.
    """
    now = now or utcnow()
    return [
        (idx, task)
        for idx, task in enumerate(store.todos)
        if matches(task, task_filter, now, soon_window)
    ]


# CLI names for `ticklist list --filter`
FILTER_NAMES: dict[str, TaskFilter] = {
    "all": TaskFilter.ALL,
    "pending": TaskFilter.PENDING,
    "completed": TaskFilter.COMPLETED,
    "high": TaskFilter.HIGH_PRIORITY,
    "medium": TaskFilter.MEDIUM_PRIORITY,
    "low": TaskFilter.LOW_PRIORITY,
    "none": TaskFilter.NO_PRIORITY,
    "overdue": TaskFilter.OVERDUE,
    "today": TaskFilter.DUE_TODAY,
    "soon": TaskFilter.DUE_SOON,
    "due": TaskFilter.HAS_DUE_DATE,
}
