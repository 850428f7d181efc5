"""Selection cursor over the filtered view.

The cursor is an index into the *filtered* view, while every mutation needs
a store id. `task_id_at` and `view_index_of` are the only places where the
two are translated; action sites must resolve ids through them rather than
indexing the store with a view index.
"""

from dataclasses import dataclass

from .tasks import Task

View = list[tuple[int, Task]]


def task_id_at(view: View, index: int | None) -> int | None:
    """Store id of the task at a view position, or None if out of range."""
    if index is None or not 0 <= index < len(view):
        return None
    return view[index][1].id


def view_index_of(view: View, task_id: int | None) -> int | None:
    """Position of a task id within the view, or None if it is not shown."""
    if task_id is None:
        return None
    for position, (_, task) in enumerate(view):
        if task.id == task_id:
            return position
    return None


@dataclass
class Selection:
    """Highlighted row. `index` is None exactly when the view is empty."""

    index: int | None = None

    def sync(self, length: int) -> None:
        """Re-derive the index after the view length changed."""
        if length <= 0:
            self.index = None
        elif self.index is None:
            self.index = 0
        else:
            self.index = max(0, min(self.index, length - 1))

    def move(self, delta: int, length: int) -> None:
        """Move by delta, clamped to the view. Never wraps."""
        if length <= 0:
            self.index = None
            return
        current = 0 if self.index is None else self.index
        self.index = max(0, min(current + delta, length - 1))

    def to_top(self, length: int) -> None:
        if length > 0:
            self.index = 0

    def to_bottom(self, length: int) -> None:
        if length > 0:
            self.index = length - 1

    def select(self, index: int | None, length: int) -> None:
        self.index = index
        self.sync(length)

    def after_delete(self, deleted_index: int, length: int) -> None:
        """
        Adjust after removing the row at `deleted_index`.

        `length` is the view length after the removal. The same index now
        points at the following row; deleting the last row selects the new
        last row.
        """
        if length <= 0:
            self.index = None
        elif deleted_index >= length:
            self.index = length - 1
        else:
            self.index = deleted_index

    def follow(self, view: View, task_id: int | None) -> None:
        """Keep `task_id` selected if it is still visible, otherwise clamp."""
        position = view_index_of(view, task_id)
        if position is not None:
            self.index = position
        else:
            self.sync(len(view))
