"""curses backend: key translation and painting of screen plans."""

import curses
import logging

from . import keys
from .keys import KeyEvent
from .render import Line, Region, ScreenPlan, clip, text_width
from .theme import BORDERS, RGB, Style

logger = logging.getLogger(__name__)

SPECIAL_KEYS = {
    curses.KEY_UP: keys.UP,
    curses.KEY_DOWN: keys.DOWN,
    curses.KEY_LEFT: keys.LEFT,
    curses.KEY_RIGHT: keys.RIGHT,
    curses.KEY_HOME: keys.HOME,
    curses.KEY_END: keys.END,
    curses.KEY_BACKSPACE: keys.BACKSPACE,
    curses.KEY_DC: keys.DELETE,
    curses.KEY_ENTER: keys.ENTER,
}

BASIC_COLORS: list[RGB] = [
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
]


def translate_key(raw: int | str) -> KeyEvent | None:
    """Map a curses `get_wch()` result to a KeyEvent. Unknown keys give None."""
    if isinstance(raw, int):
        code = SPECIAL_KEYS.get(raw)
        return KeyEvent(code) if code else None
    if raw in ("\n", "\r"):
        return KeyEvent(keys.ENTER)
    if raw == "\x1b":
        return KeyEvent(keys.ESC)
    if raw in ("\x7f", "\b"):
        return KeyEvent(keys.BACKSPACE)
    if raw == "\t":
        return KeyEvent(keys.TAB)
    if len(raw) == 1 and ord(raw) < 32:
        # Raw mode delivers Ctrl-<letter> as control characters 1-26
        return KeyEvent(chr(ord(raw) + 96), ctrl=True)
    return KeyEvent(raw)


def read_event(window: "curses.window") -> KeyEvent | None:
    """Wait up to the window timeout for one key. None on timeout."""
    try:
        raw = window.get_wch()
    except curses.error:
        return None
    return translate_key(raw)


def nearest_color(rgb: RGB | None, available: int) -> int:
    """Closest terminal color index for an RGB triple; -1 means terminal default."""
    if rgb is None:
        return -1
    r, g, b = rgb
    if available >= 256:
        def level(c: int) -> int:
            return round(c / 255 * 5)

        return 16 + 36 * level(r) + 6 * level(g) + level(b)
    distances = [(r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2 for cr, cg, cb in BASIC_COLORS]
    return distances.index(min(distances))


class CursesPainter:
    """Draws ScreenPlans onto a curses window."""

    def __init__(self, window: "curses.window"):
        self.window = window
        self.colors = curses.COLORS if curses.has_colors() else 0
        self._pairs: dict[tuple[int, int], int] = {}

    def attr(self, style: Style) -> int:
        value = 0
        if style.bold:
            value |= curses.A_BOLD
        if style.dim or style.crossed_out:
            value |= curses.A_DIM
        if style.italic:
            value |= getattr(curses, "A_ITALIC", 0)
        if style.underline:
            value |= curses.A_UNDERLINE
        if self.colors:
            value |= curses.color_pair(self._pair(style))
        return value

    def _pair(self, style: Style) -> int:
        key = (nearest_color(style.fg, self.colors), nearest_color(style.bg, self.colors))
        if key == (-1, -1):
            return 0
        if key not in self._pairs:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return 0
            try:
                curses.init_pair(pair, *key)
            except curses.error:
                logger.debug(f"init_pair failed for {key}")
                return 0
            self._pairs[key] = pair
        return self._pairs[key]

    def paint(self, plan: ScreenPlan) -> None:
        self.window.erase()
        for region in plan.regions:
            self.draw_region(region)
        if plan.overlay is not None:
            self.draw_region(plan.overlay)

        if plan.cursor is not None:
            self._set_cursor_visibility(1)
            x, y = plan.cursor
            try:
                self.window.move(y, x)
            except curses.error:
                pass
        else:
            self._set_cursor_visibility(0)
        self.window.refresh()

    def _set_cursor_visibility(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass

    def put(self, y: int, x: int, text: str, style: Style, limit: int) -> int:
        """Write clipped text; returns the number of cells used."""
        max_y, max_x = self.window.getmaxyx()
        if limit <= 0 or not 0 <= y < max_y or not 0 <= x < max_x:
            return 0
        text = clip(text, min(limit, max_x - x))
        try:
            self.window.addstr(y, x, text, self.attr(style))
        except curses.error:
            # Writing the bottom-right cell moves the cursor off-screen
            pass
        return text_width(text)

    def draw_region(self, region: Region) -> None:
        rect = region.rect
        if rect.width <= 0 or rect.height <= 0:
            return

        for row in range(rect.height):
            self.put(rect.y + row, rect.x, " " * rect.width, region.style, rect.width)

        border_style = region.style.patch(region.border_style)
        if region.border == "top":
            self.put(rect.y, rect.x, "─" * rect.width, border_style, rect.width)
        elif region.border in BORDERS and rect.height >= 2 and rect.width >= 2:
            self._draw_box(region, border_style)

        content = region.content
        for offset, line in enumerate(region.lines[: content.height]):
            self._draw_line(line, region, content.x, content.y + offset, content.width)

    def _draw_box(self, region: Region, style: Style) -> None:
        rect = region.rect
        chars = BORDERS[region.border]
        inner = rect.width - 2
        bottom = rect.y + rect.height - 1
        self.put(rect.y, rect.x, chars.top_left + chars.horizontal * inner + chars.top_right, style, rect.width)
        for row in range(rect.y + 1, bottom):
            self.put(row, rect.x, chars.vertical, style, 1)
            self.put(row, rect.x + rect.width - 1, chars.vertical, style, 1)
        self.put(bottom, rect.x, chars.bottom_left + chars.horizontal * inner + chars.bottom_right, style, rect.width)

        x = rect.x + 1
        for span in region.title:
            x += self.put(rect.y, x, span.text, region.style.patch(span.style), rect.x + rect.width - 1 - x)

    def _draw_line(self, line: Line, region: Region, x: int, y: int, width: int) -> None:
        base = region.style.patch(line.style)
        if line.style != Style():
            self.put(y, x, " " * width, base, width)
        if region.align == "center":
            x += max(0, (width - text_width(line.text)) // 2)
        end = x + width if region.align != "center" else region.content.x + width
        for span in line.spans:
            x += self.put(y, x, span.text, base.patch(span.style), end - x)
