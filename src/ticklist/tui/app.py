"""Interactive session: terminal setup, the poll loop and shutdown."""

import curses
import locale
import logging
import os
import time
from datetime import timedelta

from ticklist.config import Config
from ticklist.core.tasks import utcnow
from ticklist.ports.task_repo import TaskRepository

from .animation import Spinner
from .controller import Controller, Session
from .render import plan_screen
from .terminal import CursesPainter, read_event
from .theme import Theme, get_theme

logger = logging.getLogger(__name__)


def run(repository: TaskRepository, config: Config) -> None:
    """
    Run the full-screen session until the user quits.

    The store is loaded before the terminal switches modes so a corrupt file
    is reported on a normal screen. `curses.wrapper` restores the terminal on
    every exit path, including exceptions from a failed save.
    """
    store = repository.load()
    session = Session(store=store, show_details=config.show_details)
    controller = Controller(session, repository, soon_window=timedelta(hours=config.due_soon_hours))
    theme = get_theme(config.theme)

    locale.setlocale(locale.LC_ALL, "")
    # Esc should register immediately rather than after curses' default 1s wait
    os.environ.setdefault("ESCDELAY", "25")

    logger.info(f"Starting interactive session with {len(store)} todos")
    curses.wrapper(_main_loop, controller, theme, config.poll_interval_ms)
    logger.info("Interactive session ended")


def _main_loop(window: "curses.window", controller: Controller, theme: Theme, poll_ms: int) -> None:
    curses.raw()
    window.keypad(True)
    window.timeout(poll_ms)
    if curses.has_colors():
        try:
            curses.use_default_colors()
        except curses.error:
            logger.debug("Terminal does not support default colors")

    painter = CursesPainter(window)
    spinner = Spinner.modern()
    session = controller.session

    while True:
        height, width = window.getmaxyx()
        plan = plan_screen(
            session,
            theme,
            width,
            height,
            utcnow(),
            spinner=spinner.tick(time.monotonic()),
            soon_window=controller.soon_window,
        )
        painter.paint(plan)

        event = read_event(window)
        if event is not None:
            controller.handle_key(event)

        if session.should_quit:
            controller.save()
            break
