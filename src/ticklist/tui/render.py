"""
Screen layout planning.

`plan_screen` maps session state to a `ScreenPlan`: rectangles holding
styled lines, plus where the text cursor goes. It draws nothing itself and
reads no clock; `now` is passed in and only used for due-date labels and
coloring.
"""

import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ticklist.core.filters import DEFAULT_SOON_WINDOW, visible
from ticklist.core.selection import View
from ticklist.core.tasks import Task

from .animation import progress_bar, scroll_marker
from .controller import Session
from .modes import (
    Browsing,
    Composing,
    EditingDetails,
    EditingDueDate,
    EditingTitle,
    Mode,
    SettingPriority,
    buffer_of,
)
from .theme import Icons, Style, Theme

APP_NAME = "Ticklist"
HIGHLIGHT_SYMBOL = f"{Icons.ARROW_RIGHT} "

TITLE_HEIGHT = 3
INPUT_HEIGHT = 3
STATUS_HEIGHT = 2
MARGIN = 1


def cell_width(char: str) -> int:
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def clip(text: str, width: int) -> str:
    """Cut text so it occupies at most `width` terminal cells."""
    used = 0
    out = []
    for char in text:
        w = cell_width(char)
        if used + w > width:
            break
        out.append(char)
        used += w
    return "".join(out)


def text_width(text: str) -> int:
    return sum(cell_width(c) for c in text)

MODE_ICONS = {
    Browsing: Icons.CIRCLE,
    Composing: Icons.ROCKET,
    EditingTitle: Icons.DIAMOND,
    EditingDetails: Icons.BULLET,
    EditingDueDate: Icons.CLOCK,
    SettingPriority: Icons.STAR,
}


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def inner(self) -> "Rect":
        """Area inside a full border."""
        return Rect(self.x + 1, self.y + 1, max(0, self.width - 2), max(0, self.height - 2))


@dataclass(frozen=True)
class Span:
    text: str
    style: Style = Style()


@dataclass
class Line:
    """A row of spans. `style` fills the whole row underneath the spans."""

    spans: list[Span] = field(default_factory=list)
    style: Style = Style()

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)


@dataclass
class Region:
    """
    A rectangular block of the screen.

    `border` is "rounded", "double", "top" (a rule above the content) or None.
    """

    name: str
    rect: Rect
    lines: list[Line] = field(default_factory=list)
    title: list[Span] = field(default_factory=list)
    border: str | None = "rounded"
    border_style: Style = Style()
    style: Style = Style()
    align: str = "left"

    @property
    def content(self) -> Rect:
        if self.border == "top":
            return Rect(self.rect.x, self.rect.y + 1, self.rect.width, max(0, self.rect.height - 1))
        if self.border:
            return self.rect.inner
        return self.rect


@dataclass
class ScreenPlan:
    width: int
    height: int
    regions: list[Region]
    overlay: Region | None = None
    cursor: tuple[int, int] | None = None

    def region(self, name: str) -> Region | None:
        for region in self.regions:
            if region.name == name:
                return region
        if self.overlay is not None and self.overlay.name == name:
            return self.overlay
        return None


def split_layout(width: int, height: int) -> dict[str, Rect]:
    """Stack title, task list, input and status bar vertically inside a margin."""
    x, y = MARGIN, MARGIN
    w = max(0, width - 2 * MARGIN)
    h = max(0, height - 2 * MARGIN)

    list_height = max(0, h - TITLE_HEIGHT - INPUT_HEIGHT - STATUS_HEIGHT)
    title = Rect(x, y, w, min(TITLE_HEIGHT, h))
    tasks = Rect(x, y + TITLE_HEIGHT, w, list_height)
    input_rect = Rect(x, tasks.y + list_height, w, INPUT_HEIGHT)
    status = Rect(x, input_rect.y + INPUT_HEIGHT, w, STATUS_HEIGHT)
    return {"title": title, "tasks": tasks, "input": input_rect, "status": status}


def centered_rect(percent_x: int, percent_y: int, width: int, height: int) -> Rect:
    popup_w = width * percent_x // 100
    popup_h = height * percent_y // 100
    return Rect((width - popup_w) // 2, (height - popup_h) // 2, popup_w, popup_h)


def plan_screen(
    session: Session,
    theme: Theme,
    width: int,
    height: int,
    now: datetime,
    spinner: str = "",
    soon_window: timedelta = DEFAULT_SOON_WINDOW,
) -> ScreenPlan:
    """Build the full screen layout for the current session state."""
    areas = split_layout(width, height)
    view = visible(session.store, session.filter, now, soon_window)

    regions = [
        plan_title(session, theme, areas["title"], spinner),
        plan_task_list(session, theme, areas["tasks"], view, now, soon_window),
    ]
    input_region, cursor = plan_input(session.mode, theme, areas["input"])
    regions.append(input_region)
    regions.append(plan_status_bar(session, theme, areas["status"]))

    overlay = plan_help(theme, width, height) if session.show_help else None
    if overlay is not None:
        cursor = None

    return ScreenPlan(width=width, height=height, regions=regions, overlay=overlay, cursor=cursor)


def plan_title(session: Session, theme: Theme, rect: Rect, spinner: str = "") -> Region:
    total, completed, _ = session.store.counts()
    ratio = completed / total if total else 0.0
    separator = Span("│", Style(fg=theme.bg_highlight))

    spans = [Span(" ")]
    if spinner:
        spans += [Span(spinner, Style(fg=theme.accent)), Span(" ")]
    spans += [
        Span(Icons.SPARKLE, Style(fg=theme.accent)),
        Span(" "),
        Span(APP_NAME, theme.title_style()),
        Span(" "),
        separator,
        Span(" Filter: "),
        Span(session.filter.label, Style(fg=theme.primary_light)),
        Span(" "),
        separator,
        Span(" "),
        Span(progress_bar(ratio, 10), Style(fg=theme.success)),
        Span(f" {ratio * 100:.0f}% ", Style(fg=theme.text_secondary)),
    ]

    return Region(
        name="title",
        rect=rect,
        lines=[Line(spans)],
        border="rounded",
        border_style=Style(fg=theme.primary),
        style=Style(fg=theme.text_primary, bg=theme.bg_secondary),
        align="center",
    )


def due_color(task: Task, theme: Theme, now: datetime, soon_window: timedelta = DEFAULT_SOON_WINDOW):
    if task.is_overdue(now):
        return theme.error
    if task.is_due_soon(now, soon_window):
        return theme.warning
    return theme.text_muted


def task_lines(
    task: Task,
    theme: Theme,
    now: datetime,
    show_details: bool,
    soon_window: timedelta = DEFAULT_SOON_WINDOW,
) -> list[Line]:
    """One visual block for a task: the main row and an optional details row."""
    checkbox = Icons.CHECKBOX_CHECKED if task.completed else Icons.CHECKBOX_EMPTY
    spans = [
        Span(checkbox, Style(fg=theme.success if task.completed else theme.text_muted)),
        Span(" "),
        Span(f"#{task.id}", Style(fg=theme.text_muted, dim=True)),
        Span(" "),
        Span(task.description, theme.completed_style() if task.completed else Style(fg=theme.text_primary)),
    ]

    if task.priority is not None:
        spans += [
            Span(" "),
            Span(Icons.SQUARE, Style(fg=theme.priority_color(task.priority), bold=True)),
            Span(f"[{task.priority}]", Style(fg=theme.text_muted, dim=True)),
        ]

    due_label = task.format_due_date(now)
    if due_label:
        color = due_color(task, theme, now, soon_window)
        spans += [
            Span(" "),
            Span(Icons.CLOCK, Style(fg=color)),
            Span(" "),
            Span(due_label, Style(fg=color)),
        ]

    lines = [Line(spans)]
    if show_details and task.details:
        lines.append(Line([Span("    "), Span(task.details, Style(fg=theme.text_secondary, italic=True))]))
    return lines


def scroll_offset(block_heights: list[int], selected: int | None, capacity: int) -> int:
    """First block to draw so the selected block fits in `capacity` rows."""
    if selected is None or capacity <= 0:
        return 0
    start = 0
    while start < selected and sum(block_heights[start : selected + 1]) > capacity:
        start += 1
    return start


def plan_task_list(
    session: Session,
    theme: Theme,
    rect: Rect,
    view: View,
    now: datetime,
    soon_window: timedelta = DEFAULT_SOON_WINDOW,
) -> Region:
    focused = isinstance(session.mode, Browsing)
    total = len(session.store)
    title = [
        Span(" "),
        Span(Icons.LIGHTNING, Style(fg=theme.warning)),
        Span(f" Tasks ({len(view)}/{total}) "),
    ]
    region = Region(
        name="tasks",
        rect=rect,
        title=title,
        border="rounded",
        border_style=theme.border_style(focused),
        style=Style(fg=theme.text_primary, bg=theme.bg_primary),
    )

    if not view:
        hint = "No tasks yet. Press 'i' to add one." if total == 0 else "No tasks match this filter."
        region.lines = [Line([Span(hint, Style(fg=theme.text_muted, italic=True))])]
        return region

    blocks = [task_lines(task, theme, now, session.show_details, soon_window) for _, task in view]
    selected = session.selection.index
    capacity = region.content.height
    start = scroll_offset([len(b) for b in blocks], selected, capacity)

    if start > 0 or sum(len(b) for b in blocks) > capacity:
        title.append(Span(scroll_marker(selected or 0, len(view)) + " ", Style(fg=theme.accent)))

    pad = " " * len(HIGHLIGHT_SYMBOL)
    for position in range(start, len(blocks)):
        is_selected = position == selected
        for row, line in enumerate(blocks[position]):
            prefix = HIGHLIGHT_SYMBOL if is_selected and row == 0 else pad
            line.spans.insert(0, Span(prefix, Style(fg=theme.accent) if is_selected else Style()))
            if is_selected:
                line.style = theme.selected_style()
            region.lines.append(line)
        if len(region.lines) >= capacity:
            break

    region.lines = region.lines[:capacity]
    return region


def plan_input(mode: Mode, theme: Theme, rect: Rect) -> tuple[Region, tuple[int, int] | None]:
    """Input box for the current mode, and the cursor position for text modes."""
    active = not isinstance(mode, Browsing)
    buffer = buffer_of(mode)

    region = Region(
        name="input",
        rect=rect,
        title=[
            Span(" "),
            Span(MODE_ICONS[type(mode)], Style(fg=theme.primary)),
            Span(" "),
            Span(mode.prompt, Style(fg=theme.text_secondary)),
            Span(" "),
        ],
        border="rounded",
        border_style=theme.border_style(active),
        style=Style(fg=theme.accent if active else theme.text_secondary, bg=theme.bg_secondary),
    )

    if buffer is None:
        return region, None

    field_width = max(1, region.content.width)
    # Scroll until the character under the cursor fits on screen
    under_cursor = cell_width(buffer.text[buffer.cursor]) if buffer.cursor < len(buffer.text) else 1
    offset = 0
    while offset < buffer.cursor and text_width(buffer.text[offset : buffer.cursor]) + under_cursor > field_width:
        offset += 1
    region.lines = [Line([Span(clip(buffer.text[offset:], field_width))])]
    cursor = (region.content.x + text_width(buffer.text[offset : buffer.cursor]), region.content.y)
    return region, cursor


def plan_status_bar(session: Session, theme: Theme, rect: Rect) -> Region:
    total, completed, pending = session.store.counts()
    separator = Span(" │ ", Style(fg=theme.bg_highlight))
    spans = [
        Span(" "),
        Span(MODE_ICONS[type(session.mode)], Style(fg=theme.accent)),
        Span(" "),
        Span(session.mode.name, Style(fg=theme.primary_light, bold=True)),
        separator,
        Span(Icons.CHECKBOX_EMPTY, Style(fg=theme.text_muted)),
        Span(f" {total} Total", Style(fg=theme.text_secondary)),
        separator,
        Span(Icons.CHECKBOX_CHECKED, Style(fg=theme.success)),
        Span(f" {completed} Done", Style(fg=theme.success)),
        separator,
        Span(Icons.CIRCLE, Style(fg=theme.warning)),
        Span(f" {pending} Pending", Style(fg=theme.warning)),
    ]
    if session.status_message:
        spans += [
            separator,
            Span(Icons.SPARKLE, Style(fg=theme.info)),
            Span(" "),
            Span(session.status_message, Style(fg=theme.info)),
        ]

    return Region(
        name="status",
        rect=rect,
        lines=[Line(spans)],
        border="top",
        border_style=Style(fg=theme.bg_highlight),
        style=Style(fg=theme.text_primary, bg=theme.bg_secondary),
    )


HELP_SECTIONS = [
    (
        "Navigation",
        [
            ("j/↓", "Move down"),
            ("k/↑", "Move up"),
            ("g", "Go to top"),
            ("G", "Go to bottom"),
        ],
    ),
    (
        "Actions",
        [
            ("i/a", "Insert new todo (add :N for priority)"),
            ("Enter", "Complete/uncomplete todo"),
            ("d", "Delete todo"),
            ("C", "Clear completed todos"),
            ("e", "Edit todo title"),
            ("D", "Edit details/notes"),
            ("u", "Set/edit due date"),
            ("p", "Set/change priority (1-5, 0 to clear)"),
            ("v", "Toggle detail view"),
        ],
    ),
    (
        "Filters",
        [
            ("f", "Cycle through all filters"),
            ("1", "All tasks"),
            ("2", "Pending tasks"),
            ("3", "Completed tasks"),
            ("4-6", "Priority filters (High/Med/Low)"),
            ("7-0", "Due date filters"),
        ],
    ),
    (
        "Other",
        [
            ("h/?", "Toggle this help"),
            ("q", "Save and quit"),
            ("Esc", "Cancel/close"),
        ],
    ),
]


def plan_help(theme: Theme, width: int, height: int) -> Region:
    key_style = Style(fg=theme.accent)
    lines = [
        Line(
            [
                Span(Icons.SPARKLE, Style(fg=theme.accent)),
                Span(" "),
                Span("Keyboard Shortcuts", theme.title_style()),
                Span(" "),
                Span(Icons.SPARKLE, Style(fg=theme.accent)),
            ]
        ),
    ]
    for heading, entries in HELP_SECTIONS:
        lines.append(Line())
        lines.append(
            Line(
                [
                    Span(Icons.ARROW_RIGHT, Style(fg=theme.primary)),
                    Span(" "),
                    Span(heading, theme.heading_style()),
                ]
            )
        )
        for key, description in entries:
            lines.append(Line([Span("    "), Span(f"{key:<8}", key_style), Span(description)]))

    return Region(
        name="help",
        rect=centered_rect(65, 85, width, height),
        lines=lines,
        title=[
            Span(" "),
            Span(Icons.LIGHTNING, Style(fg=theme.warning)),
            Span(" Help "),
            Span(Icons.LIGHTNING, Style(fg=theme.warning)),
            Span(" "),
        ],
        border="double",
        border_style=Style(fg=theme.primary),
        style=Style(fg=theme.text_primary, bg=theme.bg_primary),
    )
