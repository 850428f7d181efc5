"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

MIN_PRIORITY = 1
MAX_PRIORITY = 5


class ValidationError(ValueError):
    """Raised when a task field would be set to an invalid value."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_description(description: str) -> str:
    if not description or not description.strip():
        raise ValidationError("Task description cannot be empty")
    return description


def validate_priority(priority: int | None) -> int | None:
    if priority is None:
        return None
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ValidationError(f"Priority must be an integer, got {priority!r}")
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValidationError(f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {priority}")
    return priority


@dataclass
class Task:
    """A single to-do record."""

    id: int
    description: str
    details: str | None = None
    completed: bool = False
    created_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None
    due_date: datetime | None = None
    priority: int | None = None

    def complete(self, now: datetime | None = None) -> None:
        """Mark done. `completed` and `completed_at` always change together."""
        stamp = now or utcnow()
        self.completed, self.completed_at = True, stamp

    def uncomplete(self) -> None:
        self.completed, self.completed_at = False, None

    def set_description(self, description: str) -> None:
        self.description = validate_description(description)

    def set_details(self, details: str | None) -> None:
        """Empty or whitespace-only details clear the field."""
        self.details = details if details and details.strip() else None

    def set_priority(self, priority: int | None) -> None:
        self.priority = validate_priority(priority)

    def set_due_date(self, due_date: datetime | None) -> None:
        self.due_date = due_date

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Not completed and past its due date."""
        if self.completed or self.due_date is None:
            return False
        now = now or utcnow()
        return self.due_date < now

    def is_due_today(self, now: datetime | None = None) -> bool:
        """Not completed and due on the current local calendar day."""
        if self.completed or self.due_date is None:
            return False
        now = now or utcnow()
        return self.due_date.astimezone().date() == now.astimezone().date()

    def is_due_soon(self, now: datetime | None = None, window: timedelta = timedelta(hours=24)) -> bool:
        """Due within `window` from now, excluding overdue and completed tasks."""
        if self.completed or self.due_date is None:
            return False
        now = now or utcnow()
        if self.is_overdue(now):
            return False
        return timedelta(0) <= self.due_date - now <= window

    def format_due_date(self, now: datetime | None = None) -> str | None:
        """Short due label: "Today", "Tomorrow" or e.g. "Mar 04"."""
        if self.due_date is None:
            return None
        today = (now or utcnow()).astimezone().date()
        due = self.due_date.astimezone().date()
        if due == today:
            return "Today"
        if due == today + timedelta(days=1):
            return "Tomorrow"
        return self.due_date.astimezone().strftime("%b %d")


@dataclass
class TaskStore:
    """
    Ordered collection of tasks plus the id counter.

    Insertion order is display order. `next_id` only ever grows, so ids are
    never handed out twice within a store's lifetime.
    """

    todos: list[Task] = field(default_factory=list)
    next_id: int = 1

    def __len__(self) -> int:
        return len(self.todos)

    def __iter__(self):
        return iter(self.todos)

    def add(
        self,
        description: str,
        priority: int | None = None,
        now: datetime | None = None,
    ) -> int:
        """Append a new pending task and return its id."""
        validate_description(description)
        validate_priority(priority)
        task = Task(
            id=self.next_id,
            description=description,
            priority=priority,
            created_at=now or utcnow(),
        )
        self.todos.append(task)
        self.next_id += 1
        return task.id

    def find(self, task_id: int) -> Task | None:
        for task in self.todos:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: int) -> int | None:
        for idx, task in enumerate(self.todos):
            if task.id == task_id:
                return idx
        return None

    def remove(self, task_id: int) -> bool:
        """Remove the task with this id. Returns False if there was none."""
        idx = self.index_of(task_id)
        if idx is None:
            return False
        del self.todos[idx]
        return True

    def complete(self, task_id: int, now: datetime | None = None) -> bool:
        task = self.find(task_id)
        if task is None:
            return False
        task.complete(now)
        return True

    def uncomplete(self, task_id: int) -> bool:
        task = self.find(task_id)
        if task is None:
            return False
        task.uncomplete()
        return True

    def toggle(self, task_id: int, now: datetime | None = None) -> bool | None:
        """Flip completion. Returns the new state, or None if the id is unknown."""
        task = self.find(task_id)
        if task is None:
            return None
        if task.completed:
            task.uncomplete()
        else:
            task.complete(now)
        return task.completed

    def retain_pending(self) -> int:
        """Drop every completed task. Returns how many were removed."""
        before = len(self.todos)
        self.todos = [t for t in self.todos if not t.completed]
        return before - len(self.todos)

    def merge(self, other: "TaskStore") -> int:
        """Append another store's tasks, renumbered from this store's counter."""
        for task in other.todos:
            task.id = self.next_id
            self.todos.append(task)
            self.next_id += 1
        return len(other.todos)

    def counts(self) -> tuple[int, int, int]:
        """(total, completed, pending)."""
        total = len(self.todos)
        completed = sum(1 for t in self.todos if t.completed)
        return total, completed, total - completed


def parse_priority_suffix(text: str) -> tuple[str, int | None]:
    """
    Split a trailing ":N" priority shorthand off a description.

    "Buy milk:4" -> ("Buy milk", 4). The suffix is only honoured when N is
    in 1-5; otherwise the text is returned untouched.
    """
    head, sep, tail = text.rpartition(":")
    if not sep:
        return text.strip(), None
    tail = tail.strip()
    # isdigit alone also accepts superscripts and other non-ASCII digits
    if not (tail.isascii() and tail.isdigit()):
        return text.strip(), None
    value = int(tail)
    if not MIN_PRIORITY <= value <= MAX_PRIORITY or not head.strip():
        return text.strip(), None
    return head.strip(), value
