"""
Base repository with file handle management.

Provides context managers for score files that handle:
- Creating the parent directory before writing
- Closing the file in all cases
- Converting OS errors into ScoreStoreError
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, TextIO

from ..domain.errors import ScoreStoreError

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Base class for file-backed repositories.

    Subclasses should use self.open_for_read() / self.open_for_write() to
    get file handles.
    """

    @contextmanager
    def open_for_write(self, path: Path, append: bool = False) -> Generator[TextIO, None, None]:
        """
        Context manager for writing a text file.

        Args:
            path: File to write
            append: If True, add to the end instead of truncating.

        Yields:
            An open text file handle.

        Raises:
            ScoreStoreError: If the file cannot be opened or written.

        Example:
            with self.open_for_write(path, append=True) as f:
                f.write("name,10\\n")
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a" if append else "w", encoding="utf-8") as f:
                yield f
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise ScoreStoreError(str(e)) from e

    @contextmanager
    def open_for_read(self, path: Path) -> Generator[TextIO, None, None]:
        """
        Context manager for reading a text file.

        Yields:
            An open text file handle.

        Raises:
            ScoreStoreError: If the file cannot be opened or read.
        """
        try:
            with path.open("r", encoding="utf-8") as f:
                yield f
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise ScoreStoreError(str(e)) from e
