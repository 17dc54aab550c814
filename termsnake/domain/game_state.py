"""
GameState entity - everything a single play session owns.
"""

from typing import Optional, Set, Tuple

from .snake import Snake


class GameState:
    """
    The state of one play session, passed through the loop and returned by
    every transition.

    Attributes:
        width, height: board dimensions
        snake: the player's Snake
        foods: set of (x, y) food positions, disjoint from the snake
        score: points earned this session
        tick_number: how many steps have been applied (0-based)
        paused: whether the simulation is suspended
        game_over: set once the head runs into the body
        previous_tail: cell the tail occupied before the last step; only the
            renderer reads it
    """

    def __init__(
        self,
        width: int,
        height: int,
        snake: Snake,
        foods: Set[Tuple[int, int]],
        score: int = 0,
        tick_number: int = 0,
        paused: bool = False,
        game_over: bool = False,
        previous_tail: Optional[Tuple[int, int]] = None
    ):
        self.width = width
        self.height = height
        self.snake = snake
        self.foods = foods
        self.score = score
        self.tick_number = tick_number
        self.paused = paused
        self.game_over = game_over
        self.previous_tail = previous_tail

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        * = food
        o = snake body
        O = snake head
        Rows are printed top to bottom, matching the terminal.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for fx, fy in self.foods:
            board[fy][fx] = '*'

        for pos_idx, (x, y) in enumerate(self.snake.positions):
            board[y][x] = 'O' if pos_idx == 0 else 'o'

        return "\n".join("".join(row) for row in board)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, score={self.score}, "
            f"foods={sorted(self.foods)}, snake={self.snake!r}, game_over={self.game_over}>"
        )
