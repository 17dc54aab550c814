"""
ScoreRecord value - a player name with the score they finished on.
"""

from typing import NamedTuple

from .constants import DEFAULT_HIGH_SCORE_NAME


class ScoreRecord(NamedTuple):
    name: str
    score: int


DEFAULT_HIGH_SCORE = ScoreRecord(DEFAULT_HIGH_SCORE_NAME, 0)
