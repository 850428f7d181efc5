"""Modal input handling for the interactive session.

Every committing action saves through the repository before the status
message acknowledges it. A failed save raises out of `handle_key` and ends
the session; validation problems only ever produce a status message.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from ticklist.core.dates import format_for_input, parse_due_date
from ticklist.core.filters import DEFAULT_SOON_WINDOW, TaskFilter, visible
from ticklist.core.report import PRIORITY_NAMES
from ticklist.core.selection import Selection, View, task_id_at
from ticklist.core.tasks import TaskStore, ValidationError, parse_priority_suffix, utcnow
from ticklist.ports.task_repo import TaskRepository

from . import keys
from .keys import KeyEvent
from .modes import (
    Browsing,
    Composing,
    EditingDetails,
    EditingDueDate,
    EditingTitle,
    LineBuffer,
    Mode,
    SettingPriority,
)

logger = logging.getLogger(__name__)

# Number row jumps straight to a filter. NoPriority is only reachable by cycling.
FILTER_KEYS: dict[str, TaskFilter] = {
    "1": TaskFilter.ALL,
    "2": TaskFilter.PENDING,
    "3": TaskFilter.COMPLETED,
    "4": TaskFilter.HIGH_PRIORITY,
    "5": TaskFilter.MEDIUM_PRIORITY,
    "6": TaskFilter.LOW_PRIORITY,
    "7": TaskFilter.OVERDUE,
    "8": TaskFilter.DUE_TODAY,
    "9": TaskFilter.DUE_SOON,
    "0": TaskFilter.HAS_DUE_DATE,
}

WELCOME = "Welcome! Press 'h' for help"


@dataclass
class Session:
    """All UI state for one interactive run."""

    store: TaskStore
    filter: TaskFilter = TaskFilter.ALL
    selection: Selection = field(default_factory=Selection)
    mode: Mode = field(default_factory=Browsing)
    show_details: bool = False
    show_help: bool = False
    status_message: str | None = WELCOME
    should_quit: bool = False


class Controller:
    """Translates key events into store mutations and mode transitions."""

    def __init__(
        self,
        session: Session,
        repository: TaskRepository,
        soon_window: timedelta = DEFAULT_SOON_WINDOW,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session = session
        self.repository = repository
        self.soon_window = soon_window
        self.clock = clock
        self.session.selection.sync(len(self.view()))

    # -------------------- helpers --------------------

    def view(self) -> View:
        return visible(self.session.store, self.session.filter, self.clock(), self.soon_window)

    def selected_id(self) -> int | None:
        return task_id_at(self.view(), self.session.selection.index)

    def save(self) -> None:
        self.repository.save(self.session.store)

    def _commit(self, message: str) -> None:
        self.save()
        self.session.status_message = message
        logger.debug(f"Committed: {message}")

    def _to_browsing(self, message: str | None = None) -> None:
        self.session.mode = Browsing()
        if message is not None:
            self.session.status_message = message

    # -------------------- dispatch --------------------

    def handle_key(self, key: KeyEvent) -> None:
        """Process one key event in the current mode."""
        match self.session.mode:
            case Browsing():
                self._handle_browsing(key)
            case Composing() as mode:
                self._handle_text(key, mode.buffer, self._submit_new, "Cancelled")
            case EditingTitle() as mode:
                self._handle_text(key, mode.buffer, lambda text: self._submit_title(mode.task_id, text), "Edit cancelled")
            case EditingDetails() as mode:
                self._handle_text(key, mode.buffer, lambda text: self._submit_details(mode.task_id, text), "Edit cancelled")
            case EditingDueDate() as mode:
                self._handle_text(
                    key, mode.buffer, lambda text: self._submit_due_date(mode.task_id, text), "Due date edit cancelled"
                )
            case SettingPriority() as mode:
                self._handle_priority(key, mode.task_id)
        self.session.selection.sync(len(self.view()))

    def _handle_browsing(self, key: KeyEvent) -> None:
        session = self.session
        length = len(self.view())

        if key.ctrl:
            if key.code == "c":
                session.should_quit = True
            return

        match key.code:
            case "j" | keys.DOWN:
                session.selection.move(1, length)
            case "k" | keys.UP:
                session.selection.move(-1, length)
            case "g" | keys.HOME:
                session.selection.to_top(length)
            case "G" | keys.END:
                session.selection.to_bottom(length)
            case "i" | "a":
                session.mode = Composing()
                session.status_message = "Enter todo description"
            case keys.ENTER | " ":
                self.toggle_complete()
            case "d" | keys.DELETE:
                self.delete_selected()
            case "C":
                self.clear_completed()
            case "e":
                self.start_editing_title()
            case "D":
                self.start_editing_details()
            case "u":
                self.start_editing_due_date()
            case "p":
                self.start_setting_priority()
            case "f":
                self.set_filter(session.filter.next())
            case code if code in FILTER_KEYS:
                self.set_filter(FILTER_KEYS[code])
            case "v":
                session.show_details = not session.show_details
                session.status_message = (
                    "Showing detailed descriptions" if session.show_details else "Hiding detailed descriptions"
                )
            case "h" | "?":
                session.show_help = not session.show_help
            case keys.ESC:
                session.show_help = False
            case "q":
                session.should_quit = True

    def _handle_text(
        self,
        key: KeyEvent,
        buffer: LineBuffer,
        submit: Callable[[str], None],
        cancel_message: str,
    ) -> None:
        """Shared key handling for every text-entry mode."""
        if key.code == keys.ESC:
            self._to_browsing(cancel_message)
        elif key.code == keys.ENTER:
            submit(buffer.text)
        else:
            buffer.handle(key)

    def _handle_priority(self, key: KeyEvent, task_id: int) -> None:
        if key.code == keys.ESC:
            self._to_browsing("Priority change cancelled")
            return
        if key.ctrl or key.code not in ("0", "1", "2", "3", "4", "5"):
            self.session.status_message = "Invalid priority. Press 1-5 to set, 0 to clear, Esc to cancel"
            return

        task = self.session.store.find(task_id)
        if task is None:
            self._to_browsing()
            return

        if key.code == "0":
            task.set_priority(None)
            self._commit("Priority cleared")
        else:
            priority = int(key.code)
            task.set_priority(priority)
            self._commit(f"Priority set to {priority} ({PRIORITY_NAMES[priority]})")
        self._to_browsing()

    # -------------------- browsing actions --------------------

    def set_filter(self, task_filter: TaskFilter) -> None:
        current = self.selected_id()
        self.session.filter = task_filter
        self.session.selection.follow(self.view(), current)
        self.session.status_message = f"Filter: {task_filter.label}"

    def toggle_complete(self) -> None:
        task_id = self.selected_id()
        if task_id is None:
            return
        completed = self.session.store.toggle(task_id, self.clock())
        if completed is None:
            return
        self._commit("Todo completed!" if completed else "Todo marked as pending")
        self.session.selection.follow(self.view(), task_id)

    def delete_selected(self) -> None:
        position = self.session.selection.index
        task_id = self.selected_id()
        if position is None or task_id is None:
            return
        task = self.session.store.find(task_id)
        if task is None or not self.session.store.remove(task_id):
            return
        self._commit(f"Deleted: {task.description}")
        self.session.selection.after_delete(position, len(self.view()))

    def clear_completed(self) -> None:
        current = self.selected_id()
        removed = self.session.store.retain_pending()
        if not removed:
            self.session.status_message = "No completed todos to clear"
            return
        self._commit(f"Cleared {removed} completed todo(s)")
        self.session.selection.follow(self.view(), current)

    def start_editing_title(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        self.session.mode = EditingTitle(task.id, LineBuffer.with_text(task.description))
        self.session.status_message = "Editing todo title"

    def start_editing_details(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        self.session.mode = EditingDetails(task.id, LineBuffer.with_text(task.details or ""))
        self.session.status_message = "Editing details (Enter to save, empty to clear)"

    def start_editing_due_date(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        self.session.mode = EditingDueDate(task.id, LineBuffer.with_text(format_for_input(task.due_date)))
        self.session.status_message = "Enter due date (today, tomorrow, +Nd, YYYY-MM-DD, or empty to clear)"

    def start_setting_priority(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        self.session.mode = SettingPriority(task.id)
        self.session.status_message = "Enter priority (1-5) or 0 to clear"

    def _selected_task(self):
        task_id = self.selected_id()
        task = self.session.store.find(task_id) if task_id is not None else None
        if task is None:
            self.session.status_message = "No todo selected"
        return task

    # -------------------- text submissions --------------------

    def _submit_new(self, text: str) -> None:
        if not text.strip():
            self.session.status_message = "Todo description cannot be empty"
            return
        description, priority = parse_priority_suffix(text)
        task_id = self.session.store.add(description, priority, self.clock())
        if priority is not None:
            self._commit(f"Added: {description} (priority {priority})")
        else:
            self._commit(f"Added: {description}")
        self._to_browsing()
        self.session.selection.follow(self.view(), task_id)

    def _submit_title(self, task_id: int, text: str) -> None:
        task = self.session.store.find(task_id)
        if task is None:
            self._to_browsing()
            return
        try:
            task.set_description(text.strip())
        except ValidationError as e:
            self.session.status_message = str(e)
            return
        self._commit("Todo title updated")
        self._to_browsing()

    def _submit_details(self, task_id: int, text: str) -> None:
        task = self.session.store.find(task_id)
        if task is None:
            self._to_browsing()
            return
        task.set_details(text.strip())
        self._commit("Details updated" if task.details else "Details cleared")
        self._to_browsing()

    def _submit_due_date(self, task_id: int, text: str) -> None:
        task = self.session.store.find(task_id)
        if task is None:
            self._to_browsing()
            return
        try:
            due = parse_due_date(text, self.clock())
        except ValidationError as e:
            self.session.status_message = str(e)
            return
        task.set_due_date(due)
        if due is None:
            self._commit("Due date cleared")
        else:
            self._commit(f"Due date set to {format_for_input(due)}")
        self._to_browsing()
