"""Terminal Conway's Game of Life with live step-duration telemetry."""

__version__ = "0.1.0"

from .core.grid import Grid, RandomFill
from .core.history import History, downsample
from .core.game import GameOfLife

__all__ = ["Grid", "RandomFill", "History", "downsample", "GameOfLife"]
