"""
Incremental terminal rendering for TermSnake.

Screen layout (zero-based rows/cols) for a width x height board:
    row 0              top border
    rows 1..height     '|' + playfield + '|'
    row height + 1     bottom border
    row height + 2     score line
Board cell (x, y) lives at screen row y + 1, column x + 1.

After the first full frame, each tick only touches the border, the score
line, the cell the tail left, the new head and the food cells. Exactly one
segment is added and at most one removed per tick, so that is enough to keep
the screen in sync without a full redraw. The renderer reads GameState but
never changes it.
"""

import logging
from typing import Tuple

from .domain.game_state import GameState
from .domain.score_record import ScoreRecord

logger = logging.getLogger(__name__)

HORIZONTAL_BORDER = "-"
VERTICAL_BORDER = "|"
SNAKE_GLYPH = "O"
FOOD_GLYPH = "X"
EMPTY_GLYPH = " "
PAUSE_LABEL = "PAUSED"


class Renderer:
    """
    Draws GameState snapshots onto a console adapter.

    Attributes:
        console: object with write(row, col, text) and refresh()
        width, height: board dimensions
    """

    def __init__(self, console, width: int, height: int):
        self.console = console
        self.width = width
        self.height = height

    @property
    def viewport(self) -> Tuple[int, int]:
        """(columns, rows) the game needs on screen."""
        return (self.width + 2, self.height + 3)

    def draw_border(self) -> None:
        rule = HORIZONTAL_BORDER * (self.width + 2)
        self.console.write(0, 0, rule)
        for row in range(1, self.height + 1):
            self.console.write(row, 0, VERTICAL_BORDER)
            self.console.write(row, self.width + 1, VERTICAL_BORDER)
        self.console.write(self.height + 1, 0, rule)

    def draw_score(self, score: int, high_score: ScoreRecord) -> None:
        line = f"Score: {score}  High Score: {high_score.score} by {high_score.name}"
        # Pad so a shorter line fully covers the previous one
        self.console.write(self.height + 2, 0, line.ljust(self.width + 2))

    def draw_cell(self, position: Tuple[int, int], glyph: str) -> None:
        x, y = position
        self.console.write(y + 1, x + 1, glyph)

    def draw_full(self, state: GameState, high_score: ScoreRecord) -> None:
        """Draw the complete board; used for the first frame of a session."""
        self.console.clear()
        self.draw_border()
        for segment in state.snake.positions:
            self.draw_cell(segment, SNAKE_GLYPH)
        for food in state.foods:
            self.draw_cell(food, FOOD_GLYPH)
        self.draw_score(state.score, high_score)
        self.console.refresh()

    def render(self, state: GameState, high_score: ScoreRecord) -> None:
        """Draw the difference between the previous tick and ``state``."""
        self.draw_border()
        self.draw_score(state.score, high_score)

        # When the snake grew the old tail cell is still part of the body
        if state.previous_tail is not None and state.previous_tail not in state.snake:
            self.draw_cell(state.previous_tail, EMPTY_GLYPH)

        self.draw_cell(state.snake.head, SNAKE_GLYPH)

        for food in state.foods:
            self.draw_cell(food, FOOD_GLYPH)

        self.console.refresh()

    def pause_origin(self) -> Tuple[int, int]:
        """Screen (row, col) where the pause label starts, centred on the board."""
        row = 1 + self.height // 2
        col = 1 + self.width // 2 - len(PAUSE_LABEL) // 2
        return row, col

    def show_pause(self, state: GameState) -> None:
        """Write or blank the pause label according to ``state.paused``."""
        row, col = self.pause_origin()
        if state.paused:
            self.console.write(row, col, PAUSE_LABEL)
        else:
            self.console.write(row, col, EMPTY_GLYPH * len(PAUSE_LABEL))
            self._restore_under_label(state, row, col)
        self.console.refresh()

    def _restore_under_label(self, state: GameState, row: int, col: int) -> None:
        # Blanking the label may have wiped body or food cells
        y = row - 1
        covered = {(x, y) for x in range(col - 1, col - 1 + len(PAUSE_LABEL))}
        for segment in state.snake.positions:
            if segment in covered:
                self.draw_cell(segment, SNAKE_GLYPH)
        for food in state.foods:
            if food in covered:
                self.draw_cell(food, FOOD_GLYPH)
