"""Core simulation and telemetry logic."""

from .grid import Grid, RandomFill, dimensions_for_terminal
from .history import History, downsample
from .game import GameOfLife
from .settings import Settings

__all__ = ["Grid", "RandomFill", "dimensions_for_terminal", "History", "downsample", "GameOfLife", "Settings"]
