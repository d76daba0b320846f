"""Shared fixtures for frontend tests."""

import pytest


class FakeDisplay:
    """Records draw calls instead of writing to a terminal."""

    def __init__(self, rows=30, cols=120, keys=()):
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.cells = []
        self.texts = []
        self.clears = 0
        self.presents = 0

    def current_terminal_size(self):
        return self.rows, self.cols

    def draw_cell(self, row, col, glyph, color_tier):
        self.cells.append((row, col, glyph, color_tier))

    def draw_text(self, row, col, text):
        self.texts.append((row, col, text))

    def clear(self):
        self.clears += 1
        self.cells = []
        self.texts = []

    def present(self):
        self.presents += 1

    def poll_key(self):
        return self.keys.pop(0) if self.keys else None

    def text_at(self, row):
        return [text for r, _, text in self.texts if r == row]


@pytest.fixture
def make_display():
    """Factory for fake displays."""
    return FakeDisplay
