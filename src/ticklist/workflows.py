"""Shared workflow layer between the CLI commands and the interactive session.

Each mutating function loads the store, applies one change, saves it back
through the repository and returns what the caller needs to report.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from .adapters.json_store import JsonTaskStore, StorageError, dumps, loads
from .config import Config
from .core.filters import FILTER_NAMES, TaskFilter, visible
from .core.report import to_csv, to_markdown, to_text
from .core.selection import View
from .core.tasks import Task, TaskStore, utcnow
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "markdown", "csv", "text")


class TaskNotFoundError(LookupError):
    """Raised when a command names an id that is not in the store."""

    def __init__(self, task_id: int):
        super().__init__(f"Task #{task_id} not found")
        self.task_id = task_id


def get_repository(config: Config, data_file: Path | str | None = None) -> JsonTaskStore:
    """Resolve the task file: explicit path first, then config."""
    return JsonTaskStore(Path(data_file) if data_file else config.data_file)


def _require(repository: TaskRepository, task_id: int):
    store = repository.load()
    task = store.find(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return store, task


def add_task(repository: TaskRepository, description: str, priority: int | None = None) -> Task:
    store = repository.load()
    task_id = store.add(description.strip(), priority)
    repository.save(store)
    logger.info(f"Added todo #{task_id}")
    return store.find(task_id)


def set_completed(repository: TaskRepository, task_id: int, done: bool) -> tuple[Task, bool]:
    """Mark a task done or pending. Returns the task and whether anything changed."""
    store, task = _require(repository, task_id)
    if task.completed == done:
        return task, False
    if done:
        task.complete()
    else:
        task.uncomplete()
    repository.save(store)
    return task, True


def delete_task(repository: TaskRepository, task_id: int) -> Task:
    store, task = _require(repository, task_id)
    store.remove(task_id)
    repository.save(store)
    logger.info(f"Deleted todo #{task_id}")
    return task


def clear_completed(repository: TaskRepository) -> int:
    store = repository.load()
    removed = store.retain_pending()
    if removed:
        repository.save(store)
    return removed


def list_tasks(
    repository: TaskRepository,
    filter_name: str = "all",
    now: datetime | None = None,
    soon_hours: int = 24,
) -> tuple[TaskStore, View]:
    """The whole store plus the tasks the named filter keeps."""
    store = repository.load()
    task_filter = FILTER_NAMES.get(filter_name, TaskFilter.ALL)
    return store, visible(store, task_filter, now or utcnow(), timedelta(hours=soon_hours))


def export_tasks(repository: TaskRepository, fmt: str) -> str:
    store = repository.load()
    match fmt:
        case "json":
            return dumps(store) + "\n"
        case "markdown":
            return to_markdown(store)
        case "csv":
            return to_csv(store)
        case "text":
            return to_text(store)
    raise ValueError(f"Unknown export format '{fmt}'")


def import_tasks(repository: TaskRepository, source: Path, merge: bool = False) -> int:
    """
    Load todos from another JSON file.

    With `merge`, incoming tasks are appended and renumbered; otherwise the
    current list is replaced outright.
    """
    try:
        text = Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Failed to read {source}: {e}")
    incoming = loads(text)

    if merge:
        store = repository.load()
        count = store.merge(incoming)
        repository.save(store)
    else:
        count = len(incoming)
        repository.save(incoming)
    logger.info(f"Imported {count} todos from {source} (merge={merge})")
    return count
