"""
Score persistence for TermSnake.

Two plain-text files are used:
- the scores file, one ``name,score`` line per finished session (append-only)
- the high score file, a single ``name,score`` record that is overwritten
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..domain.constants import DEFAULT_HIGH_SCORE_NAME
from ..domain.score_record import DEFAULT_HIGH_SCORE, ScoreRecord
from .base import BaseRepository

logger = logging.getLogger(__name__)


def clean_name(name: Optional[str]) -> str:
    """Make a player name safe for the ``name,score`` format."""
    cleaned = (name or "").replace(",", " ").replace("\n", " ").replace("\r", " ").strip()
    return cleaned or DEFAULT_HIGH_SCORE_NAME


def format_record(record: ScoreRecord) -> str:
    return f"{clean_name(record.name)},{record.score}\n"


def parse_record(line: str) -> Optional[ScoreRecord]:
    """
    Parse a ``name,score`` line.

    Returns:
        The record, or None if the line has no comma or a non-numeric score.
    """
    line = line.strip()
    if "," not in line:
        return None
    name, raw_score = line.rsplit(",", 1)
    try:
        score = int(raw_score.strip())
    except ValueError:
        return None
    return ScoreRecord(name.strip(), score)


class ScoreRepository(BaseRepository):
    """
    Reads and writes score records.

    All methods raise ScoreStoreError on I/O failure; callers decide how to
    degrade.
    """

    def __init__(self, scores_file: Path, highscore_file: Path):
        self.scores_file = Path(scores_file)
        self.highscore_file = Path(highscore_file)

    def load_high_score(self) -> ScoreRecord:
        """
        Load the current high score, or the default record when there is none.

        A malformed high score file is logged and treated as missing.
        """
        if not self.highscore_file.exists():
            return DEFAULT_HIGH_SCORE

        with self.open_for_read(self.highscore_file) as f:
            first_line = f.readline()

        record = parse_record(first_line)
        if record is None:
            logger.warning(
                f"Ignoring malformed high score record in {self.highscore_file}: {first_line.strip()!r}"
            )
            return DEFAULT_HIGH_SCORE
        return record

    def save_high_score(self, record: ScoreRecord) -> None:
        """Replace the high score record."""
        with self.open_for_write(self.highscore_file) as f:
            f.write(format_record(record))
        logger.info(f"Saved high score {record.score} by {clean_name(record.name)}")

    def append_score(self, record: ScoreRecord) -> None:
        """Append a finished session to the scores file."""
        with self.open_for_write(self.scores_file, append=True) as f:
            f.write(format_record(record))
        logger.info(f"Recorded score {record.score} by {clean_name(record.name)}")

    def list_scores(self) -> List[ScoreRecord]:
        """
        Return every recorded score, highest first.

        Malformed lines are skipped with a warning.
        """
        if not self.scores_file.exists():
            return []

        records: List[ScoreRecord] = []
        with self.open_for_read(self.scores_file) as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                record = parse_record(line)
                if record is None:
                    logger.warning(
                        f"Skipping malformed score line {line_number} in {self.scores_file}: {line.strip()!r}"
                    )
                    continue
                records.append(record)

        return sorted(records, key=lambda r: r.score, reverse=True)
