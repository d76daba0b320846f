"""Grid data structure for the terminal Game of Life."""

import logging
from typing import Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)


def dimensions_for_terminal(rows: int, cols: int, double_height: bool) -> Tuple[int, int]:
    """Map a terminal size to grid dimensions.

    In double-height mode two vertically stacked cells share one terminal row
    (drawn with half-block glyphs). Otherwise every cell is two characters wide.

    Args:
        rows: Terminal rows
        cols: Terminal columns
        double_height: Whether double-height mode is enabled

    Returns:
        Tuple of (height, width) in cells
    """
    rows = max(rows, 0)
    cols = max(cols, 0)
    if double_height:
        return rows * 2, cols
    return rows, cols // 2


class RandomFill:
    """Source of 50/50 alive/dead values for newly exposed cells."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def fill(self, shape: Tuple[int, int]) -> np.ndarray:
        """Draw a boolean array where each cell is alive with probability 1/2."""
        return self._rng.integers(0, 2, size=shape, dtype=np.int8).astype(bool)


class Grid:
    """A bounded 2D grid of cells with per-cell alive-duration counters.

    Cells are stored row-major as two numpy arrays of shape (height, width):
    the alive bits and the number of consecutive steps each cell has been
    alive. Edges are hard boundaries, there is no wraparound.
    """

    def __init__(
        self,
        height: int,
        width: int,
        random_fill: Optional[RandomFill] = None,
        randomize: bool = False,
    ) -> None:
        """Initialize a new grid.

        Args:
            height: Number of rows
            width: Number of columns
            random_fill: Source for random cells (a fresh unseeded one if omitted)
            randomize: Whether to populate the grid randomly instead of leaving it empty

        Raises:
            ValueError: If a dimension is negative
        """
        if height < 0 or width < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {height}x{width}")

        self.height = height
        self.width = width
        self.random_fill = random_fill if random_fill is not None else RandomFill()
        self._alive = np.zeros((height, width), dtype=bool)
        self._ages = np.zeros((height, width), dtype=np.int32)

        # Single intra-op thread keeps the step deterministic and cheap to start
        torch.set_num_threads(1)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )
        self._allocate_buffers()

        if randomize:
            self.randomize()

    def _allocate_buffers(self) -> None:
        self._torch_input = torch.zeros(1, 1, self.height, self.width, dtype=torch.float32)

    @property
    def alive(self) -> np.ndarray:
        """Get the alive-bit array (height x width)."""
        return self._alive

    @property
    def ages(self) -> np.ndarray:
        """Get the alive-for-iterations counters (height x width)."""
        return self._ages

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (height, width)."""
        return (self.height, self.width)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.height * self.width

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._alive))

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds")

    def get_cell(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return bool(self._alive[row, col])

    def get_age(self, row: int, col: int) -> int:
        """Get how many consecutive steps a cell has been alive."""
        self._check_bounds(row, col)
        return int(self._ages[row, col])

    def set_cell(self, row: int, col: int, alive: bool) -> None:
        """Set the state of a cell.

        Killing a cell resets its counter. Reviving a dead cell leaves the
        counter at 0 until it survives a step.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        self._alive[row, col] = alive
        if not alive:
            self._ages[row, col] = 0

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._alive.fill(False)
        self._ages.fill(0)

    def randomize(self) -> None:
        """Repopulate every cell from the random source and zero all counters."""
        self._alive = self.random_fill.fill((self.height, self.width))
        self._ages.fill(0)

    def count_neighbors(self, row: int, col: int) -> int:
        """Count living neighbors of a cell.

        Offsets falling outside the grid are skipped.

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue

                nr, nc = row + dr, col + dc
                if 0 <= nr < self.height and 0 <= nc < self.width:
                    count += int(self._alive[nr, nc])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells with a zero-padded torch convolution.

        Returns:
            2D int8 array (height x width) with neighbor counts for each cell
        """
        if self.height == 0 or self.width == 0:
            return np.zeros((self.height, self.width), dtype=np.int8)

        self._torch_input[0, 0] = torch.from_numpy(self._alive.astype(np.float32))
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def step(self) -> None:
        """Advance every cell by one generation using rule B3/S23.

        Neighbor counts are taken from the alive bits as they were before the
        step, so no cell sees a neighbor that was already updated.
        """
        if self.height == 0 or self.width == 0:
            return

        neighbors = self.count_all_neighbors()
        alive = self._alive

        survives = alive & ((neighbors == 2) | (neighbors == 3))
        born = ~alive & (neighbors == 3)
        dies = alive & ~survives
        next_alive = survives | born

        self._ages[next_alive] += 1
        self._ages[dies] = 0
        self._alive = next_alive

    def resize(self, new_height: int, new_width: int) -> bool:
        """Resize the grid, keeping the overlapping cells.

        Height is adjusted first: new rows have the old width. Width is then
        adjusted on every row. Every cell exposed by growth is drawn fresh from
        the random source with a zero counter.

        Args:
            new_height: Target number of rows
            new_width: Target number of columns

        Returns:
            True if the dimensions changed, False if they were already equal

        Raises:
            ValueError: If a dimension is negative
        """
        if new_height < 0 or new_width < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {new_height}x{new_width}")

        old_height, old_width = self.height, self.width
        if new_height == old_height and new_width == old_width:
            return False

        logger.info("Size-update: (%dx%d)->(%dx%d)", old_height, old_width, new_height, new_width)

        alive, ages = self._alive, self._ages

        if new_height > old_height:
            extra = self.random_fill.fill((new_height - old_height, old_width))
            alive = np.vstack([alive, extra])
            ages = np.vstack([ages, np.zeros(extra.shape, dtype=ages.dtype)])
        elif new_height < old_height:
            alive = alive[:new_height]
            ages = ages[:new_height]

        if new_width > old_width:
            extra = self.random_fill.fill((new_height, new_width - old_width))
            alive = np.hstack([alive, extra])
            ages = np.hstack([ages, np.zeros(extra.shape, dtype=ages.dtype)])
        elif new_width < old_width:
            alive = alive[:, :new_width]
            ages = ages[:, :new_width]

        # Copies drop references to the discarded rows and columns
        self._alive = np.array(alive, dtype=bool)
        self._ages = np.array(ages, dtype=np.int32)
        self.height = new_height
        self.width = new_width
        self._allocate_buffers()
        return True

    def to_list(self) -> list:
        """Convert the alive bits to a nested list (row-major)."""
        return self._alive.tolist()

    def __eq__(self, other: object) -> bool:
        """Check if two grids hold identical cells and counters."""
        if not isinstance(other, Grid):
            return False
        return (
            self.shape == other.shape
            and np.array_equal(self._alive, other._alive)
            and np.array_equal(self._ages, other._ages)
        )

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join("".join("*" if cell else "." for cell in row) for row in self._alive)
