"""Task repository interface."""

from typing import Protocol

from ticklist.core.tasks import TaskStore


class TaskRepository(Protocol):
    """Interface for loading and saving the whole task store."""

    def load(self) -> TaskStore:
        """Load the store. Returns an empty store when nothing was saved yet."""
        ...

    def save(self, store: TaskStore) -> None:
        """Overwrite the persisted store. Raises StorageError on failure."""
        ...
