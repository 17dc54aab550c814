"""
Shared fixtures for the TermSnake test suite.

The game only talks to the terminal through the console adapter, so the
tests swap in a recording fake that keeps a cell map of what was drawn and
plays back scripted key presses and typed lines.
"""

import os
import sys
from collections import deque

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termsnake.data_access.score_repository import ScoreRepository  # noqa: E402


class FakeConsole:
    """In-memory stand-in for CursesConsole."""

    def __init__(self, keys=None, lines=None):
        self.keys = deque(keys or [])
        self.lines = deque(lines or [])
        self.cells = {}
        self.writes = []
        self.clears = 0
        self.refreshes = 0
        self.cursor_visible = True

    def clear(self):
        self.cells.clear()
        self.clears += 1

    def write(self, row, col, text):
        self.writes.append((row, col, text))
        for offset, char in enumerate(text):
            self.cells[(row, col + offset)] = char

    def refresh(self):
        self.refreshes += 1

    def key_available(self):
        return bool(self.keys)

    def read_key(self):
        if not self.keys:
            raise AssertionError("read_key called with no scripted keys left")
        return self.keys.popleft()

    def read_line(self, row, col, prompt, max_length=20):
        self.write(row, col, prompt)
        return self.lines.popleft() if self.lines else ""

    def hide_cursor(self):
        self.cursor_visible = False

    def show_cursor(self):
        self.cursor_visible = True

    def char_at(self, row, col):
        return self.cells.get((row, col), " ")

    def written_text(self):
        """Everything ever written, one write per line."""
        return "\n".join(text for _, _, text in self.writes)


@pytest.fixture
def console():
    return FakeConsole()


@pytest.fixture
def repository(tmp_path):
    return ScoreRepository(tmp_path / "snake_scores.txt", tmp_path / "snake_highscore.txt")
