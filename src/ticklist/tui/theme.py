"""Color themes, text styles and glyphs for the terminal interface."""

from dataclasses import dataclass, replace

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Style:
    """Foreground/background color plus text attributes for a run of text."""

    fg: RGB | None = None
    bg: RGB | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    crossed_out: bool = False

    def patch(self, other: "Style") -> "Style":
        """Layer `other` on top: its colors win where set, attributes add up."""
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            bold=self.bold or other.bold,
            dim=self.dim or other.dim,
            italic=self.italic or other.italic,
            underline=self.underline or other.underline,
            crossed_out=self.crossed_out or other.crossed_out,
        )


@dataclass(frozen=True)
class Theme:
    """A color palette. Passed explicitly to the render planner."""

    name: str

    primary: RGB
    primary_light: RGB
    accent: RGB

    bg_primary: RGB
    bg_secondary: RGB
    bg_highlight: RGB

    text_primary: RGB
    text_secondary: RGB
    text_muted: RGB

    success: RGB
    warning: RGB
    error: RGB
    info: RGB

    priority_colors: tuple[RGB, RGB, RGB, RGB, RGB]

    def priority_color(self, priority: int | None) -> RGB:
        if priority is None or not 1 <= priority <= 5:
            return self.text_muted
        return self.priority_colors[priority - 1]

    def completed_style(self) -> Style:
        return Style(fg=self.text_muted, dim=True, crossed_out=True)

    def selected_style(self) -> Style:
        return Style(fg=self.text_primary, bg=self.bg_highlight, bold=True)

    def border_style(self, focused: bool) -> Style:
        if focused:
            return Style(fg=self.accent, bold=True)
        return Style(fg=self.bg_highlight)

    def title_style(self) -> Style:
        return Style(fg=self.primary_light, bold=True)

    def heading_style(self) -> Style:
        return Style(fg=self.primary_light, bold=True)


MODERN_DARK = Theme(
    name="modern_dark",
    primary=(147, 51, 234),
    primary_light=(196, 181, 253),
    accent=(34, 211, 238),
    bg_primary=(17, 24, 39),
    bg_secondary=(31, 41, 55),
    bg_highlight=(55, 65, 81),
    text_primary=(243, 244, 246),
    text_secondary=(209, 213, 219),
    text_muted=(107, 114, 128),
    success=(34, 197, 94),
    warning=(251, 191, 36),
    error=(239, 68, 68),
    info=(59, 130, 246),
    priority_colors=((59, 130, 246), (34, 197, 94), (250, 204, 21), (251, 146, 60), (239, 68, 68)),
)

SOFT_PASTEL = replace(
    MODERN_DARK,
    name="soft_pastel",
    primary=(236, 72, 153),
    primary_light=(251, 207, 232),
    accent=(147, 197, 253),
    bg_primary=(249, 250, 251),
    bg_secondary=(243, 244, 246),
    bg_highlight=(229, 231, 235),
    text_primary=(17, 24, 39),
    text_secondary=(55, 65, 81),
    text_muted=(107, 114, 128),
    success=(134, 239, 172),
    warning=(253, 224, 71),
    error=(252, 165, 165),
    info=(165, 180, 252),
    priority_colors=((191, 219, 254), (167, 243, 208), (253, 230, 138), (254, 215, 170), (254, 202, 202)),
)

CYBERPUNK = replace(
    MODERN_DARK,
    name="cyberpunk",
    primary=(255, 0, 255),
    primary_light=(255, 182, 255),
    accent=(0, 255, 255),
    bg_primary=(13, 2, 33),
    bg_secondary=(25, 7, 51),
    bg_highlight=(49, 10, 101),
    text_primary=(255, 255, 255),
    text_secondary=(0, 255, 255),
    text_muted=(147, 51, 234),
    success=(57, 255, 20),
    warning=(255, 255, 0),
    error=(255, 0, 0),
    info=(0, 149, 255),
    priority_colors=((0, 255, 255), (0, 255, 127), (255, 255, 0), (255, 127, 0), (255, 0, 127)),
)

THEMES = {theme.name: theme for theme in (MODERN_DARK, SOFT_PASTEL, CYBERPUNK)}


def get_theme(name: str) -> Theme:
    """Look up a theme by name, falling back to modern_dark."""
    return THEMES.get(name, MODERN_DARK)


@dataclass(frozen=True)
class BorderSet:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str


BORDERS = {
    "rounded": BorderSet("╭", "╮", "╰", "╯", "─", "│"),
    "double": BorderSet("╔", "╗", "╚", "╝", "═", "║"),
}


class Icons:
    CHECKBOX_EMPTY = "□"
    CHECKBOX_CHECKED = "▣"
    STAR = "★"
    ARROW_RIGHT = "❯"
    BULLET = "•"
    SPARKLE = "◆"
    ROCKET = "▶"
    LIGHTNING = "⚡"
    DIAMOND = "◇"
    CIRCLE = "●"
    SQUARE = "■"
    CLOCK = "⏰"
