"""
Exceptions raised by the TermSnake game engine and its collaborators.
"""


class TermSnakeError(Exception):
    """Base class for all TermSnake errors."""


class BoardFullError(TermSnakeError):
    """Raised when food cannot be placed because no free cell is left."""


class ScoreStoreError(TermSnakeError):
    """Raised when the score files cannot be read or written."""


class ConfigError(TermSnakeError):
    """Raised when a configuration value cannot be parsed."""
