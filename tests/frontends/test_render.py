"""Tests for the render model."""

import pytest

from termlife.core.game import GameOfLife
from termlife.core.grid import Grid
from termlife.core.settings import Settings
from termlife.frontends.render import (
    ALIVE_STRING,
    CHAR_FULL_BLOCK,
    CHAR_LOWER_HALF,
    CHAR_UPPER_HALF,
    GRAPH_DOT,
    color_tier,
    draw_game_field,
    draw_info_box,
    graph_rows,
    half_block_glyph,
    render_frame,
)


class TestColorTier:
    """Test cases for age to color-tier mapping."""

    @pytest.mark.parametrize(
        "age, tier",
        [(0, 1), (1, 2), (9, 2), (10, 3), (29, 3), (30, 4), (1000, 4)],
    )
    def test_boundaries(self, age, tier):
        """Test tier boundaries at 1, 10 and 30."""
        assert color_tier(age) == tier


class TestGameField:
    """Test cases for drawing the grid."""

    def test_half_block_glyph(self):
        """Test the four top/bottom combinations."""
        assert half_block_glyph(True, True) == CHAR_FULL_BLOCK
        assert half_block_glyph(True, False) == CHAR_UPPER_HALF
        assert half_block_glyph(False, True) == CHAR_LOWER_HALF
        assert half_block_glyph(False, False) is None

    def test_single_height_colored(self, make_display):
        """Each live cell is two characters wide and tinted by age."""
        grid = Grid(4, 4)
        for r, c in [(1, 1), (1, 2), (2, 1), (2, 2)]:
            grid.set_cell(r, c, True)
        grid.step()
        grid.set_cell(0, 3, True)
        display = make_display()

        draw_game_field(display, grid, Settings())

        assert sorted(display.cells) == [
            (0, 6, ALIVE_STRING, 1),
            (1, 2, ALIVE_STRING, 2),
            (1, 4, ALIVE_STRING, 2),
            (2, 2, ALIVE_STRING, 2),
            (2, 4, ALIVE_STRING, 2),
        ]

    def test_single_height_without_colors(self, make_display):
        """Test that disabling colors drops the tier."""
        grid = Grid(2, 2)
        grid.set_cell(1, 0, True)
        display = make_display()

        draw_game_field(display, grid, Settings(use_colors=False))

        assert display.cells == [(1, 0, ALIVE_STRING, None)]

    def test_double_height(self, make_display):
        """Two rows share one terminal row, drawn with half blocks."""
        grid = Grid(4, 2)
        grid.set_cell(0, 0, True)
        grid.set_cell(1, 0, True)
        grid.set_cell(2, 1, True)
        grid.set_cell(3, 0, True)
        display = make_display()

        draw_game_field(display, grid, Settings(double_height=True))

        assert sorted(display.cells) == [
            (0, 0, CHAR_FULL_BLOCK, None),
            (1, 0, CHAR_LOWER_HALF, None),
            (1, 1, CHAR_UPPER_HALF, None),
        ]

    def test_double_height_odd_rows(self, make_display):
        """A trailing unpaired row is not drawn."""
        grid = Grid(3, 1)
        grid.set_cell(2, 0, True)
        display = make_display()

        draw_game_field(display, grid, Settings(double_height=True))

        assert display.cells == []


class TestGraphRows:
    """Test cases for the graph layout."""

    def test_layout(self):
        """Each value lands in the row covering its slice of the range."""
        labels, dots = graph_rows([0, 1, 2, 3, 4], 4)

        assert labels == pytest.approx([3.5, 2.5, 1.5, 0.5])
        assert dots == [(3, 0), (2, 1), (1, 2), (0, 3), (0, 4)]

    def test_flat_data(self):
        """Constant data sits on the bottom row."""
        labels, dots = graph_rows([2.0, 2.0, 2.0], 3)

        assert labels == [2.0, 2.0, 2.0]
        assert dots == [(2, 0), (2, 1), (2, 2)]

    def test_empty(self):
        """Test that no data or no height gives nothing."""
        assert graph_rows([], 5) == ([], [])
        assert graph_rows([1.0, 2.0], 0) == ([], [])


class TestInfoBox:
    """Test cases for the info panel."""

    def make_game(self):
        grid = Grid(4, 5)
        game = GameOfLife(grid, history_size=20)
        for _ in range(3):
            game.tick()
        return game

    def test_text_lines(self, make_display):
        """Test the statistics lines and the key help."""
        game = self.make_game()
        display = make_display(rows=30, cols=120)

        draw_info_box(display, game, Settings(show_history=False))

        assert "[i]" in display.text_at(20)
        assert "Game of Life" in display.text_at(21)
        assert "Grid: 5x4 (20)" in display.text_at(22)
        assert any(text.startswith("Last calculation time") for text in display.text_at(23))
        assert any(text.startswith("Average calculation time") for text in display.text_at(24))
        assert "Iterations: 3" in display.text_at(25)
        assert "[q]uit [r]eset [p]ause" in display.text_at(27)
        assert "[c]olors [h]istory [2]mode" in display.text_at(28)
        assert not any(text == GRAPH_DOT for _, _, text in display.texts)

    def test_paused_marker(self, make_display):
        """Test that the iteration line shows when the loop is paused."""
        game = self.make_game()
        game.toggle_pause()
        display = make_display()

        draw_info_box(display, game, Settings(show_history=False))

        assert "Iterations: 3 (paused)" in display.text_at(25)

    def test_graphs(self, make_display):
        """Both graphs are drawn on a wide terminal."""
        game = self.make_game()
        display = make_display(rows=30, cols=200)

        draw_info_box(display, game, Settings())

        dots = [(r, c) for r, c, text in display.texts if text == GRAPH_DOT]
        # 20 dots for the recent window and 20 for the long-range series
        assert len(dots) == 40
        assert all(21 <= r <= 28 for r, _ in dots)
        label_columns = {c for _, c, text in display.texts if text.count(".") == 1 and text[0].isdigit()}
        assert label_columns == {40, 70}

    def test_narrow_terminal_skips_graphs(self, make_display):
        """Graphs are omitted when the terminal is too narrow."""
        game = self.make_game()
        display = make_display(rows=30, cols=55)

        draw_info_box(display, game, Settings())

        assert not any(text == GRAPH_DOT for _, _, text in display.texts)

    def test_second_graph_skipped(self, make_display):
        """Test that only the first graph fits on a medium terminal."""
        game = self.make_game()
        display = make_display(rows=30, cols=80)

        draw_info_box(display, game, Settings())

        dot_columns = [c for _, c, text in display.texts if text == GRAPH_DOT]
        assert dot_columns
        assert max(dot_columns) < 80 - 1
        assert all(c < 70 for c in dot_columns)

    def test_short_terminal(self, make_display):
        """Nothing is drawn when the panel does not fit."""
        game = self.make_game()
        display = make_display(rows=5, cols=120)

        draw_info_box(display, game, Settings())

        assert display.texts == []


class TestRenderFrame:
    """Test cases for whole frames."""

    def test_frame_with_info(self, make_display):
        """Test that a frame clears, draws and presents once."""
        grid = Grid(3, 3)
        grid.set_cell(1, 1, True)
        game = GameOfLife(grid)
        display = make_display()

        render_frame(display, game, Settings())

        assert display.clears == 1
        assert display.presents == 1
        assert display.cells
        assert display.texts

    def test_frame_without_info(self, make_display):
        """Test that hiding the info panel draws no text."""
        game = GameOfLife(Grid(3, 3))
        display = make_display()

        render_frame(display, game, Settings(show_info=False))

        assert display.texts == []

    def test_frame_without_grid(self, make_display):
        """A game without a grid draws only the info panel."""
        game = GameOfLife(Grid(3, 3))
        game.grid = None
        display = make_display()

        render_frame(display, game, Settings())

        assert display.cells == []
        assert "Grid: 0x0 (0)" in display.text_at(22)
        assert display.presents == 1
