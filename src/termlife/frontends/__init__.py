"""Terminal frontend for the Game of Life."""

from .curses_ui import CursesDisplay, run
from .cli import main

__all__ = ["CursesDisplay", "run", "main"]
