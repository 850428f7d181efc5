"""Input modes and the shared single-line text buffer."""

from dataclasses import dataclass, field
from typing import ClassVar

from . import keys
from .keys import KeyEvent


@dataclass
class LineBuffer:
    """Single-line text field. `cursor` always stays within [0, len(text)]."""

    text: str = ""
    cursor: int = 0

    @classmethod
    def with_text(cls, text: str) -> "LineBuffer":
        return cls(text=text, cursor=len(text))

    def insert(self, char: str) -> None:
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += len(char)

    def backspace(self) -> None:
        if self.cursor > 0:
            self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
            self.cursor -= 1

    def delete(self) -> None:
        if self.cursor < len(self.text):
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)

    def handle(self, key: KeyEvent) -> bool:
        """Apply an editing key. Returns False if the key is not an edit."""
        match key.code:
            case keys.BACKSPACE:
                self.backspace()
            case keys.DELETE:
                self.delete()
            case keys.LEFT:
                self.left()
            case keys.RIGHT:
                self.right()
            case keys.HOME:
                self.home()
            case keys.END:
                self.end()
            case "a" if key.ctrl:
                self.home()
            case "e" if key.ctrl:
                self.end()
            case "u" if key.ctrl:
                self.text, self.cursor = self.text[self.cursor :], 0
            case _:
                if not key.is_char:
                    return False
                self.insert(key.code)
        return True


@dataclass
class Browsing:
    name: ClassVar[str] = "NORMAL"
    prompt: ClassVar[str] = "Commands (press 'i' to add todo)"


@dataclass
class Composing:
    buffer: LineBuffer = field(default_factory=LineBuffer)

    name: ClassVar[str] = "INSERT"
    prompt: ClassVar[str] = "Adding Todo (use :1-5 for priority | Esc to cancel)"


@dataclass
class EditingTitle:
    task_id: int
    buffer: LineBuffer = field(default_factory=LineBuffer)

    name: ClassVar[str] = "EDIT"
    prompt: ClassVar[str] = "Editing Todo Title (Esc to cancel)"


@dataclass
class EditingDetails:
    task_id: int
    buffer: LineBuffer = field(default_factory=LineBuffer)

    name: ClassVar[str] = "DETAILS"
    prompt: ClassVar[str] = "Editing Todo Details/Notes (empty to clear | Esc to cancel)"


@dataclass
class EditingDueDate:
    task_id: int
    buffer: LineBuffer = field(default_factory=LineBuffer)

    name: ClassVar[str] = "DUE DATE"
    prompt: ClassVar[str] = "Set Due Date: today, tomorrow, +Nd or YYYY-MM-DD (Esc to cancel)"


@dataclass
class SettingPriority:
    task_id: int

    name: ClassVar[str] = "PRIORITY"
    prompt: ClassVar[str] = "Set Priority: 1-5 or 0 to clear (Esc to cancel)"


Mode = Browsing | Composing | EditingTitle | EditingDetails | EditingDueDate | SettingPriority
TextMode = Composing | EditingTitle | EditingDetails | EditingDueDate


def buffer_of(mode: Mode) -> LineBuffer | None:
    """The text buffer of a text-entry mode, None for the others."""
    if isinstance(mode, (Composing, EditingTitle, EditingDetails, EditingDueDate)):
        return mode.buffer
    return None
