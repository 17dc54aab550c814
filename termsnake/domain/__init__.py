"""
Domain entities for the TermSnake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (terminal, score files, configuration).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    BOARD_WIDTH, BOARD_HEIGHT, FOOD_POINTS, INITIAL_FOODS, INITIAL_LENGTH,
)
from .errors import TermSnakeError, BoardFullError, ScoreStoreError, ConfigError
from .geometry import wrap, move
from .snake import Snake
from .game_state import GameState
from .score_record import ScoreRecord, DEFAULT_HIGH_SCORE

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES',
    'BOARD_WIDTH', 'BOARD_HEIGHT', 'FOOD_POINTS', 'INITIAL_FOODS', 'INITIAL_LENGTH',
    'TermSnakeError', 'BoardFullError', 'ScoreStoreError', 'ConfigError',
    'wrap', 'move',
    'Snake',
    'GameState',
    'ScoreRecord', 'DEFAULT_HIGH_SCORE',
]
