"""Curses frontend: display sink, key handling and the main loop."""

import curses
import logging
import time
from typing import Callable, Optional, Protocol, Tuple

from ..core.game import GameOfLife
from ..core.grid import Grid, RandomFill, dimensions_for_terminal
from ..core.settings import Settings
from .render import Display, render_frame

logger = logging.getLogger(__name__)

# Foreground per color tier, all on a white background
TIER_COLORS = {
    1: curses.COLOR_RED,
    2: curses.COLOR_GREEN,
    3: curses.COLOR_BLUE,
    4: curses.COLOR_YELLOW,
}


class InteractiveDisplay(Display, Protocol):
    """Display that can also be polled for key presses."""

    def poll_key(self) -> Optional[int]:
        ...


class DisplayError(RuntimeError):
    """The terminal cannot be used for drawing."""


class CursesDisplay:
    """Display sink and key poller on top of a curses window."""

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.stdscr.nodelay(True)
        self.stdscr.timeout(0)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.noecho()
        self._setup_colors()

    def _setup_colors(self) -> None:
        if not curses.has_colors():
            logger.error("Your terminal does not support color!")
            raise DisplayError("Your terminal does not support color")

        curses.start_color()
        for tier, color in TIER_COLORS.items():
            curses.init_pair(tier, color, curses.COLOR_WHITE)

    def current_terminal_size(self) -> Tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return rows, cols

    def draw_cell(self, row: int, col: int, glyph: str, color_tier: Optional[int]) -> None:
        attr = curses.color_pair(color_tier) if color_tier else curses.A_NORMAL
        try:
            self.stdscr.addstr(row, col, glyph, attr)
        except curses.error:
            pass

    def draw_text(self, row: int, col: int, text: str) -> None:
        # Writing the bottom-right corner raises after the text is drawn
        try:
            self.stdscr.addstr(row, col, text)
        except curses.error:
            pass

    def clear(self) -> None:
        self.stdscr.erase()

    def present(self) -> None:
        self.stdscr.refresh()

    def poll_key(self) -> Optional[int]:
        """Return the pending key code, or None if no key was pressed."""
        try:
            key = self.stdscr.getch()
        except curses.error:
            return None
        return None if key == -1 else key


def handle_key(key: int, game: GameOfLife, settings: Settings) -> bool:
    """Apply one key press.

    Returns:
        False if the key asks to quit, True otherwise
    """
    if key == ord("q"):
        logger.info("Quit requested")
        return False
    elif key == ord("p"):
        game.toggle_pause()
    elif key == ord("i"):
        settings.show_info = not settings.show_info
    elif key == ord("c"):
        settings.use_colors = not settings.use_colors
    elif key == ord("h"):
        settings.show_history = not settings.show_history
    elif key == ord("2"):
        settings.double_height = not settings.double_height
        logger.info("Double-height mode %s", "on" if settings.double_height else "off")
    elif key == ord("r"):
        # The key also reseeds; a plain reset() keeps the cells
        game.reset(reseed=True)
    return True


def create_game(display: Display, settings: Settings) -> GameOfLife:
    """Create a randomly populated game sized to the display."""
    rows, cols = display.current_terminal_size()
    height, width = dimensions_for_terminal(rows, cols, settings.double_height)
    grid = Grid(height, width, random_fill=RandomFill(settings.seed), randomize=True)
    logger.info("Created %dx%d grid (seed=%s)", height, width, settings.seed)
    return GameOfLife(grid, history_size=settings.history_size)


def run_loop(
    display: InteractiveDisplay,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: Optional[int] = None,
) -> GameOfLife:
    """Run the simulation until quit (or ``max_ticks`` ticks).

    Each tick resizes the grid to the terminal, steps unless paused, draws
    the frame and then handles at most one pending key.

    Args:
        display: Display sink that also provides ``poll_key()``
        settings: Runtime settings, mutated by key toggles
        sleep: Called with ``settings.delay`` after each tick
        max_ticks: Stop after this many ticks (unbounded if None)

    Returns:
        The game, in its final state
    """
    game = create_game(display, settings)
    ticks = 0

    while True:
        rows, cols = display.current_terminal_size()
        game.tick(dimensions_for_terminal(rows, cols, settings.double_height))
        render_frame(display, game, settings)

        key = display.poll_key()
        if key is not None and not handle_key(key, game, settings):
            break

        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            break
        sleep(settings.delay)

    logger.info("Stopped after %d iterations", game.iteration_count)
    return game


def run(stdscr: "curses.window", settings: Settings) -> GameOfLife:
    """Entry point for ``curses.wrapper``."""
    display = CursesDisplay(stdscr)
    return run_loop(display, settings)
