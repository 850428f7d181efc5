"""Small animation helpers for the title bar."""

from dataclasses import dataclass


@dataclass
class Spinner:
    """Frame cycler driven by an externally supplied monotonic clock."""

    frames: tuple[str, ...]
    frame_duration: float
    current_frame: int = 0
    last_update: float | None = None

    @classmethod
    def modern(cls) -> "Spinner":
        return cls(frames=("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), frame_duration=0.08)

    @classmethod
    def circle(cls) -> "Spinner":
        return cls(frames=("◐", "◓", "◑", "◒"), frame_duration=0.12)

    def tick(self, now: float) -> str:
        """Advance one frame if `frame_duration` has passed since the last advance."""
        if self.last_update is None:
            self.last_update = now
        elif now - self.last_update >= self.frame_duration:
            self.current_frame = (self.current_frame + 1) % len(self.frames)
            self.last_update = now
        return self.frames[self.current_frame]


PARTIAL_BLOCKS = " ▏▎▍▌▋▊▉"


def progress_bar(progress: float, width: int) -> str:
    """Render a 0.0-1.0 fraction as a bar of `width` cells with eighth-block precision."""
    progress = max(0.0, min(1.0, progress))
    exact = progress * width
    filled = int(exact)
    partial = int((exact - filled) * 8)

    cells = []
    for i in range(width):
        if i < filled:
            cells.append("█")
        elif i == filled and partial > 0:
            cells.append(PARTIAL_BLOCKS[partial])
        else:
            cells.append("░")
    return "".join(cells)


def scroll_marker(current: int, total: int) -> str:
    """One-character position hint for a scrolled list."""
    if total <= 0:
        return ""
    blocks = "▁▂▃▄▅▆▇█"
    ratio = current / max(total - 1, 1)
    return blocks[int(ratio * (len(blocks) - 1))]
