"""Backend-independent key events."""

from dataclasses import dataclass

ENTER = "Enter"
ESC = "Esc"
BACKSPACE = "Backspace"
DELETE = "Delete"
LEFT = "Left"
RIGHT = "Right"
UP = "Up"
DOWN = "Down"
HOME = "Home"
END = "End"
TAB = "Tab"


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a single printable character or one of the names above."""

    code: str
    ctrl: bool = False

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1 and not self.ctrl and self.code.isprintable()
