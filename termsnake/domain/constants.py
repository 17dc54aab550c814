"""
Game constants for TermSnake.
"""

from typing import Dict, Tuple

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES: Dict[str, str] = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Terminal rows grow downwards, so UP => y - 1
DELTAS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

VERTICAL_MOVES = {UP, DOWN}

# Board settings
BOARD_WIDTH = 40
BOARD_HEIGHT = 20

# Game settings
INITIAL_LENGTH = 5
INITIAL_DIRECTION = RIGHT
INITIAL_FOODS = 3
FOOD_POINTS = 5

# Tick cadence in milliseconds. Terminal cells are taller than wide, so
# vertical moves run slower to look the same speed on screen.
VERTICAL_DELAY_MS = 125
HORIZONTAL_DELAY_MS = 75
PAUSE_DELAY_MS = 100

DEFAULT_HIGH_SCORE_NAME = "No Name"
