"""JSON file task storage adapter."""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from ticklist.core.tasks import Task, TaskStore, ValidationError, validate_description, validate_priority

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the task file cannot be read, parsed or written."""


def _parse_timestamp(value, field_name: str) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise StorageError(f"Field '{field_name}' must be a timestamp string")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise StorageError(f"Field '{field_name}' has invalid timestamp '{value}'")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat()


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "description": task.description,
        "details": task.details,
        "completed": task.completed,
        "created_at": _format_timestamp(task.created_at),
        "completed_at": _format_timestamp(task.completed_at),
        "due_date": _format_timestamp(task.due_date),
        "priority": task.priority,
    }


def task_from_dict(data: dict) -> Task:
    """Build a Task from its JSON form, rejecting anything inconsistent."""
    if not isinstance(data, dict):
        raise StorageError("Each todo must be a JSON object")
    try:
        task_id = data["id"]
        description = data["description"]
        created_at = _parse_timestamp(data["created_at"], "created_at")
    except KeyError as e:
        raise StorageError(f"Todo is missing required field {e}")

    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise StorageError(f"Todo id must be a positive integer, got {task_id!r}")
    if not isinstance(description, str):
        raise StorageError(f"Todo #{task_id} description must be a string")
    try:
        validate_description(description)
        priority = validate_priority(data.get("priority"))
    except ValidationError as e:
        raise StorageError(f"Todo #{task_id}: {e}")

    completed = data.get("completed", False)
    completed_at = _parse_timestamp(data.get("completed_at"), "completed_at")
    if not isinstance(completed, bool):
        raise StorageError(f"Todo #{task_id} 'completed' must be true or false")
    if completed != (completed_at is not None):
        raise StorageError(f"Todo #{task_id} has inconsistent completed/completed_at")

    details = data.get("details")
    if details is not None and not isinstance(details, str):
        raise StorageError(f"Todo #{task_id} details must be a string")

    return Task(
        id=task_id,
        description=description,
        details=details,
        completed=completed,
        created_at=created_at,
        completed_at=completed_at,
        due_date=_parse_timestamp(data.get("due_date"), "due_date"),
        priority=priority,
    )


def store_to_dict(store: TaskStore) -> dict:
    return {
        "todos": [task_to_dict(t) for t in store.todos],
        "next_id": store.next_id,
    }


def store_from_dict(data: dict) -> TaskStore:
    if not isinstance(data, dict) or not isinstance(data.get("todos"), list):
        raise StorageError("Expected an object with a 'todos' list")

    todos = [task_from_dict(item) for item in data["todos"]]
    ids = [t.id for t in todos]
    if len(ids) != len(set(ids)):
        raise StorageError("Duplicate todo ids in file")

    next_id = data.get("next_id", 1)
    if isinstance(next_id, bool) or not isinstance(next_id, int):
        raise StorageError(f"'next_id' must be an integer, got {next_id!r}")
    floor = max(ids, default=0) + 1
    if next_id < floor:
        logger.warning(f"next_id {next_id} is not above existing ids; using {floor}")
        next_id = floor

    return TaskStore(todos=todos, next_id=next_id)


def dumps(store: TaskStore) -> str:
    return json.dumps(store_to_dict(store), indent=2, ensure_ascii=False)


def loads(text: str) -> TaskStore:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"Failed to parse todo JSON: {e}")
    return store_from_dict(data)


class JsonTaskStore:
    """
    JSON file task storage.

    Implements TaskRepository protocol. The whole store is rewritten on
    every save via a temporary file and an atomic rename, so readers never
    see a half-written document.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> TaskStore:
        """Load the store. A missing file is an empty store, not an error."""
        if not self.path.exists():
            logger.info(f"No todo file at {self.path}, starting with empty list")
            return TaskStore()
        logger.debug(f"Loading todos from {self.path}")
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}")
        store = loads(text)
        logger.info(f"Loaded {len(store)} todos")
        return store

    def save(self, store: TaskStore) -> None:
        """Overwrite the file with the full store."""
        logger.debug(f"Saving {len(store)} todos to {self.path}")
        payload = dumps(store)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}")
        logger.info(f"Saved {len(store)} todos")

    def exists(self) -> bool:
        return self.path.exists()
