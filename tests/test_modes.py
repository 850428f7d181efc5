"""Tests for the line buffer and mode helpers."""

from ticklist.tui import keys
from ticklist.tui.keys import KeyEvent
from ticklist.tui.modes import Browsing, Composing, LineBuffer, SettingPriority, buffer_of


class TestLineBuffer:
    def test_with_text_puts_cursor_at_end(self):
        buf = LineBuffer.with_text("hello")
        assert buf.cursor == 5

    def test_insert_in_middle(self):
        buf = LineBuffer.with_text("ac")
        buf.left()
        buf.insert("b")
        assert (buf.text, buf.cursor) == ("abc", 2)

    def test_backspace_at_start_is_noop(self):
        buf = LineBuffer("abc", 0)
        buf.backspace()
        assert (buf.text, buf.cursor) == ("abc", 0)

    def test_delete_at_end_is_noop(self):
        buf = LineBuffer.with_text("abc")
        buf.delete()
        assert buf.text == "abc"

    def test_cursor_is_clamped(self):
        buf = LineBuffer.with_text("ab")
        buf.right()
        assert buf.cursor == 2
        buf.home()
        buf.left()
        assert buf.cursor == 0

    def test_ctrl_shortcuts(self):
        buf = LineBuffer.with_text("hello world")
        buf.handle(KeyEvent("a", ctrl=True))
        assert buf.cursor == 0
        buf.handle(KeyEvent("e", ctrl=True))
        assert buf.cursor == 11
        for _ in range(5):
            buf.handle(KeyEvent(keys.LEFT))
        buf.handle(KeyEvent("u", ctrl=True))
        assert (buf.text, buf.cursor) == ("world", 0)

    def test_non_edit_keys_are_rejected(self):
        buf = LineBuffer()
        assert buf.handle(KeyEvent(keys.TAB)) is False
        assert buf.handle(KeyEvent("x", ctrl=True)) is False
        assert buf.text == ""


def test_buffer_of():
    assert buffer_of(Browsing()) is None
    assert buffer_of(SettingPriority(1)) is None
    mode = Composing()
    assert buffer_of(mode) is mode.buffer
