"""
Wrap-around coordinate arithmetic for the fixed-size board.
"""

from typing import Tuple

from .constants import DELTAS

Position = Tuple[int, int]


def wrap(coord: int, dimension: int) -> int:
    """Normalize ``coord`` into ``[0, dimension)``; never negative."""
    return coord % dimension


def move(position: Position, direction: str, width: int, height: int) -> Position:
    """
    Advance ``position`` one cell in ``direction``, wrapping each axis
    independently.

    Args:
        position: (x, y) cell to move from
        direction: One of "UP", "DOWN", "LEFT", "RIGHT"
        width, height: board dimensions

    Returns:
        The wrapped (x, y) of the neighbouring cell.
    """
    dx, dy = DELTAS[direction]
    x, y = position
    return (wrap(x + dx, width), wrap(y + dy, height))
