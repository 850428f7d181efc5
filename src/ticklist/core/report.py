"""Pure report and export formatting - no I/O dependencies."""

import csv
import io
from dataclasses import dataclass, field

from .tasks import Task, TaskStore

PRIORITY_NAMES = {1: "Low", 2: "Normal", 3: "Medium", 4: "High", 5: "Critical"}


def format_priority(priority: int | None) -> str:
    if priority is None:
        return "No priority"
    name = PRIORITY_NAMES.get(priority)
    return f"{name} ({priority})" if name else f"Priority {priority}"


@dataclass
class TaskStats:
    """Summary numbers for `ticklist stats`."""

    total: int
    completed: int
    pending: int
    by_priority: dict[int | None, int] = field(default_factory=dict)
    oldest_pending: Task | None = None

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total * 100


def compute_stats(store: TaskStore) -> TaskStats:
    total, completed, pending = store.counts()
    by_priority: dict[int | None, int] = {}
    for task in store:
        by_priority[task.priority] = by_priority.get(task.priority, 0) + 1

    pending_tasks = [t for t in store if not t.completed]
    oldest = min(pending_tasks, key=lambda t: t.created_at) if pending_tasks else None

    return TaskStats(
        total=total,
        completed=completed,
        pending=pending,
        by_priority=by_priority,
        oldest_pending=oldest,
    )


def format_stats(stats: TaskStats) -> str:
    lines = [
        "Todo Statistics",
        "=" * 50,
        f"Total todos:      {stats.total}",
        f"Completed:        {stats.completed} ({stats.completion_rate:.1f}%)",
        f"Pending:          {stats.pending}",
        "",
        "Priority Breakdown:",
    ]
    if stats.by_priority.get(None):
        lines.append(f"  {'No priority':<16}{stats.by_priority[None]}")
    for level in range(1, 6):
        if stats.by_priority.get(level):
            lines.append(f"  {format_priority(level):<16}{stats.by_priority[level]}")

    if stats.oldest_pending:
        oldest = stats.oldest_pending
        lines.append("")
        lines.append("Oldest pending todo:")
        lines.append(f"  [#{oldest.id}] {oldest.description} (created {oldest.created_at:%Y-%m-%d})")

    lines.append("=" * 50)
    return "\n".join(lines)


def to_markdown(store: TaskStore) -> str:
    lines = ["# Todo List", ""]
    if not len(store):
        lines.append("No todos.")
        return "\n".join(lines) + "\n"

    lines += ["## Pending", ""]
    for task in store:
        if task.completed:
            continue
        line = f"- [ ] [#{task.id}] {task.description}"
        if task.priority:
            line += f" _{format_priority(task.priority)}_"
        if task.due_date:
            line += f" (due {task.due_date.astimezone():%Y-%m-%d})"
        lines.append(line)

    lines += ["", "## Completed", ""]
    for task in store:
        if task.completed:
            lines.append(f"- [x] [#{task.id}] {task.description}")

    return "\n".join(lines) + "\n"


def to_csv(store: TaskStore) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["ID", "Description", "Priority", "Completed", "Created", "Completed At", "Due"])
    for task in store:
        writer.writerow(
            [
                task.id,
                task.description,
                task.priority if task.priority is not None else "",
                str(task.completed).lower(),
                f"{task.created_at:%Y-%m-%d %H:%M:%S}",
                f"{task.completed_at:%Y-%m-%d %H:%M:%S}" if task.completed_at else "",
                f"{task.due_date:%Y-%m-%d %H:%M:%S}" if task.due_date else "",
            ]
        )
    return buffer.getvalue()


def to_text(store: TaskStore) -> str:
    return "".join(
        f"{'[DONE]' if t.completed else '[TODO]'} #{t.id}: {t.description}\n" for t in store
    )
