"""Simulation loop: resize, timed step and step-duration telemetry."""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from .grid import Grid
from .history import History

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life engine with step timing.

    Each tick optionally resizes the grid to the current terminal, then, unless
    paused, steps the grid, records how long the step took and folds it into
    the running average.
    """

    def __init__(
        self,
        grid: Optional[Grid],
        history_size: int = 100,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate; ticks are skipped while it is None
            history_size: Window capacity of the step-duration history
            clock: Monotonic clock used to time steps

        Raises:
            ValueError: If history_size is 10 or less
        """
        self.grid: Optional[Grid] = grid
        self.history: Optional[History] = History(history_size)
        self.clock = clock
        self.paused = False
        self.iteration_count = 0
        self.last_step_duration = 0.0
        self.average_step_duration = 0.0

    @property
    def generation(self) -> int:
        """Number of steps since the last reset."""
        return self.iteration_count

    @property
    def population(self) -> int:
        """Current number of living cells."""
        if self.grid is None:
            return 0
        return self.grid.population

    def toggle_pause(self) -> bool:
        """Flip between running and paused.

        Returns:
            The new paused state
        """
        self.paused = not self.paused
        logger.info("Simulation %s", "paused" if self.paused else "resumed")
        return self.paused

    def tick(self, size: Optional[Tuple[int, int]] = None) -> bool:
        """Run one iteration of the loop.

        Args:
            size: Target (height, width) of the grid; resizing happens before stepping

        Returns:
            True if a step was taken, False if paused or there is no grid
        """
        if self.grid is None:
            return False

        if size is not None:
            self.grid.resize(*size)

        if self.paused:
            return False

        self.step()
        return True

    def step(self) -> None:
        """Advance the grid one generation and record its duration."""
        if self.grid is None:
            return

        start = self.clock()
        self.grid.step()
        self.last_step_duration = self.clock() - start

        if self.history is not None:
            self.history.record(self.last_step_duration, self.iteration_count)

        self.iteration_count += 1
        n = self.iteration_count
        self.average_step_duration = (self.average_step_duration * (n - 1) + self.last_step_duration) / n

    def reset(self, reseed: bool = False) -> None:
        """Reset counters and telemetry.

        Args:
            reseed: Whether to also re-randomize every cell of the grid
        """
        if reseed and self.grid is not None:
            self.grid.randomize()

        self.iteration_count = 0
        self.last_step_duration = 0.0
        self.average_step_duration = 0.0
        if self.history is not None:
            self.history = self.history.reset()

        logger.info("Simulation reset (reseed=%s)", reseed)

    def get_statistics(self) -> Dict:
        """Get the values shown in the info panel.

        Returns:
            Dictionary with grid size, timing and iteration statistics
        """
        grid = self.grid
        return {
            "grid_size": (grid.width, grid.height) if grid is not None else (0, 0),
            "cell_count": grid.size if grid is not None else 0,
            "population": self.population,
            "iterations": self.iteration_count,
            "last_step_duration": self.last_step_duration,
            "average_step_duration": self.average_step_duration,
            "paused": self.paused,
        }
