"""
Runtime settings for TermSnake.

Values come from the environment (optionally seeded from a ``.env`` file)
with defaults suitable for a local install.
"""

import os
from pathlib import Path
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .domain.constants import HORIZONTAL_DELAY_MS, PAUSE_DELAY_MS, VERTICAL_DELAY_MS
from .domain.errors import ConfigError


class Settings(NamedTuple):
    scores_file: Path
    highscore_file: Path
    vertical_delay: float
    horizontal_delay: float
    pause_delay: float
    log_level: str
    log_file: Path


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def get_data_dir() -> Path:
    """
    Directory that holds the score and log files.

    Uses TERMSNAKE_DATA_DIR when set, otherwise the user's home directory.
    """
    data_dir = os.getenv('TERMSNAKE_DATA_DIR')
    if data_dir:
        return Path(data_dir).expanduser()
    return Path.home()


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Read settings from the environment.

    Args:
        env_file: Optional path to a .env file; by default python-dotenv
            searches from the working directory upwards.

    Raises:
        ConfigError: If a numeric setting cannot be parsed.
    """
    load_dotenv(env_file)

    data_dir = get_data_dir()
    scores_file = os.getenv('TERMSNAKE_SCORES_FILE') or str(data_dir / 'snake_scores.txt')
    highscore_file = os.getenv('TERMSNAKE_HIGHSCORE_FILE') or str(data_dir / 'snake_highscore.txt')
    log_file = os.getenv('TERMSNAKE_LOG_FILE') or str(data_dir / 'termsnake.log')

    log_level = os.getenv('TERMSNAKE_LOG_LEVEL', 'WARNING').upper()
    if log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        raise ConfigError(f"TERMSNAKE_LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(
        scores_file=Path(scores_file).expanduser(),
        highscore_file=Path(highscore_file).expanduser(),
        vertical_delay=_get_int('TERMSNAKE_VERTICAL_DELAY_MS', VERTICAL_DELAY_MS) / 1000,
        horizontal_delay=_get_int('TERMSNAKE_HORIZONTAL_DELAY_MS', HORIZONTAL_DELAY_MS) / 1000,
        pause_delay=_get_int('TERMSNAKE_PAUSE_DELAY_MS', PAUSE_DELAY_MS) / 1000,
        log_level=log_level,
        log_file=Path(log_file).expanduser(),
    )
