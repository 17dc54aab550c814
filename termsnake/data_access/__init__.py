"""
Data access layer for TermSnake score files.
"""

from .base import BaseRepository
from .score_repository import (
    DEFAULT_HIGH_SCORE,
    ScoreRecord,
    ScoreRepository,
    parse_record,
)

__all__ = [
    'BaseRepository',
    'DEFAULT_HIGH_SCORE',
    'ScoreRecord',
    'ScoreRepository',
    'parse_record',
]
