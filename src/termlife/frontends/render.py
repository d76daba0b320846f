"""Render model: turns grid and history state into glyphs and text."""

import math
from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np

from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.settings import Settings

ALIVE_STRING = "██"
CHAR_FULL_BLOCK = "█"
CHAR_UPPER_HALF = "▀"  # top cell alive
CHAR_LOWER_HALF = "▄"  # bottom cell alive
GRAPH_DOT = "•"

GRAPH_OFFSET = 40  # first graph column inside the info box
GRAPH_MIN_WIDTH = 15  # columns a graph needs to be drawn at all
GRAPH_LABEL_WIDTH = 8  # axis label column width
GRAPH_SPACING = 10


class Display(Protocol):
    """Drawing surface the render model writes to."""

    def current_terminal_size(self) -> Tuple[int, int]:
        ...

    def draw_cell(self, row: int, col: int, glyph: str, color_tier: Optional[int]) -> None:
        ...

    def draw_text(self, row: int, col: int, text: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def present(self) -> None:
        ...


def color_tier(age: int) -> int:
    """Map a cell's alive-for-iterations counter to a color tier (1-4)."""
    if age < 1:
        return 1
    if age < 10:
        return 2
    if age < 30:
        return 3
    return 4


def half_block_glyph(top: bool, bottom: bool) -> Optional[str]:
    """Glyph for a terminal row holding two stacked cells, None if both are dead."""
    if top and bottom:
        return CHAR_FULL_BLOCK
    if top:
        return CHAR_UPPER_HALF
    if bottom:
        return CHAR_LOWER_HALF
    return None


def draw_game_field(display: Display, grid: Grid, settings: Settings) -> None:
    """Draw every live cell of the grid.

    In double-height mode two rows share one terminal row and no colors are
    used. Otherwise each cell is two characters wide and, when colors are on,
    tinted by its age.
    """
    alive = grid.alive

    if settings.double_height:
        pairs = grid.height // 2
        top = alive[0 : pairs * 2 : 2]
        bottom = alive[1 : pairs * 2 : 2]
        rows, cols = np.nonzero(top | bottom)
        for r, c in zip(rows.tolist(), cols.tolist()):
            glyph = half_block_glyph(bool(top[r, c]), bool(bottom[r, c]))
            display.draw_cell(r, c, glyph, None)
        return

    ages = grid.ages
    rows, cols = np.nonzero(alive)
    for r, c in zip(rows.tolist(), cols.tolist()):
        tier = color_tier(int(ages[r, c])) if settings.use_colors else None
        display.draw_cell(r, c * 2, ALIVE_STRING, tier)


def graph_rows(data: Sequence[float], height: int) -> Tuple[List[float], List[Tuple[int, int]]]:
    """Lay out a dot graph of ``data`` in ``height`` rows.

    Row 0 is the top. Each row covers an equal slice of the data range and is
    labelled with the value at its centre.

    Returns:
        Tuple of (row labels, list of (row, column) dot positions)
    """
    if height <= 0 or len(data) == 0:
        return [], []

    values = np.asarray(data, dtype=np.float64)
    low = float(values.min())
    high = float(values.max())
    scale = (high - low) / height

    labels = [low + (height - i - 0.5) * scale for i in range(height)]

    dots = []
    for col, value in enumerate(values.tolist()):
        if scale == 0:
            row = height - 1
        else:
            bucket = min(int(math.floor((value - low) / scale)), height - 1)
            row = height - 1 - bucket
        dots.append((row, col))

    return labels, dots


def _draw_box(display: Display, top: int, height: int, width: int) -> None:
    if height < 2 or width < 2:
        return
    inner = width - 2
    display.draw_text(top, 0, "┌" + "─" * inner + "┐")
    for row in range(top + 1, top + height - 1):
        display.draw_text(row, 0, "│")
        display.draw_text(row, width - 1, "│")
    display.draw_text(top + height - 1, 0, "└" + "─" * inner + "┘")


def draw_info_box(display: Display, game: GameOfLife, settings: Settings) -> None:
    """Draw the info panel along the bottom of the terminal."""
    rows, cols = display.current_terminal_size()
    box_height = settings.info_box_height
    top = rows - box_height
    if top < 0:
        return

    stats = game.get_statistics()
    width, height = stats["grid_size"]
    state = " (paused)" if game.paused else ""

    _draw_box(display, top, box_height, cols)
    display.draw_text(top, 1, "[i]")
    display.draw_text(top + 1, 1, "Game of Life")
    display.draw_text(top + 2, 1, f"Grid: {width}x{height} ({stats['cell_count']})")
    display.draw_text(top + 3, 1, f"Last calculation time   : {game.last_step_duration:.6f} sec")
    display.draw_text(top + 4, 1, f"Average calculation time: {game.average_step_duration:.6f} sec")
    display.draw_text(top + 5, 1, f"Iterations: {game.iteration_count}{state}")
    display.draw_text(top + box_height - 3, 1, "[q]uit [r]eset [p]ause")
    display.draw_text(top + box_height - 2, 1, "[c]olors [h]istory [2]mode")

    history = game.history
    if not settings.show_history or history is None:
        return

    series = [history.ordered_recent(game.iteration_count), history.downsampled()]
    graph_height = box_height - 2
    offset = GRAPH_OFFSET

    for data in series:
        if offset + GRAPH_MIN_WIDTH >= cols:
            break

        labels, dots = graph_rows(data, graph_height)
        for i, label in enumerate(labels):
            display.draw_text(top + i + 1, offset, f"{label:.6f}")
        for row, col in dots:
            if col + offset + GRAPH_LABEL_WIDTH >= cols - 1:
                continue
            display.draw_text(top + row + 1, col + offset + GRAPH_LABEL_WIDTH, GRAPH_DOT)

        offset += history.window_capacity + GRAPH_SPACING


def render_frame(display: Display, game: GameOfLife, settings: Settings) -> None:
    """Clear, draw the field and (optionally) the info panel, then present."""
    display.clear()
    if game.grid is not None:
        draw_game_field(display, game.grid, settings)
    if settings.show_info:
        draw_info_box(display, game, settings)
    display.present()
