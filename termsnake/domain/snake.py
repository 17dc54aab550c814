"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple

from .constants import INITIAL_DIRECTION, OPPOSITES, VALID_MOVES


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: the committed direction consulted by the next step
    """

    def __init__(self, positions: List[Tuple[int, int]], direction: str = INITIAL_DIRECTION):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction: {direction}")
        self.positions = deque(positions)
        self.direction = direction

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def set_direction(self, requested: str) -> bool:
        """
        Commit a new direction unless it is the exact reverse of the current one.

        Several calls between two steps are allowed; the last accepted one wins.

        Returns:
            True if the direction was accepted, False if it was rejected.
        """
        if requested not in VALID_MOVES:
            raise ValueError(f"Unknown direction: {requested}")
        if requested == OPPOSITES[self.direction]:
            return False
        self.direction = requested
        return True

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, position) -> bool:
        return position in self.positions

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self)}, direction={self.direction}>"
