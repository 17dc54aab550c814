"""
Curses-backed console adapter.

The game loop and renderer only talk to the small surface defined here:
cursor-addressed writes, clearing, a non-blocking key check, blocking key
and line reads, and cursor visibility. Raw curses key codes are translated
into logical key names so nothing above this module imports curses.
"""

import curses
import logging
from typing import Optional

from .domain.constants import DOWN, LEFT, RIGHT, UP

logger = logging.getLogger(__name__)

# Logical keys besides the four directions and menu digits
PAUSE = "PAUSE"
ENTER = "ENTER"

ESCAPE_CODE = 27

KEY_MAP = {
    curses.KEY_UP: UP,
    ord("w"): UP,
    ord("W"): UP,
    curses.KEY_DOWN: DOWN,
    ord("s"): DOWN,
    ord("S"): DOWN,
    curses.KEY_LEFT: LEFT,
    ord("a"): LEFT,
    ord("A"): LEFT,
    curses.KEY_RIGHT: RIGHT,
    ord("d"): RIGHT,
    ord("D"): RIGHT,
    ord("p"): PAUSE,
    ord("P"): PAUSE,
    ESCAPE_CODE: PAUSE,
    curses.KEY_ENTER: ENTER,
    10: ENTER,
    13: ENTER,
}


def translate_key(code: int) -> Optional[str]:
    """
    Map a curses key code to a logical key.

    Returns the direction name, PAUSE, ENTER, the character itself for other
    printable keys (menu digits included), or None for anything else.
    """
    if code in KEY_MAP:
        return KEY_MAP[code]
    if 32 <= code < 127:
        return chr(code)
    return None


class CursesConsole:
    """
    Console surface over a curses window.

    Rows and columns are zero-based screen cells.
    """

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        if hasattr(curses, "set_escdelay"):
            curses.set_escdelay(25)

    def clear(self) -> None:
        self.stdscr.clear()
        self.stdscr.refresh()

    def write(self, row: int, col: int, text: str) -> None:
        try:
            self.stdscr.addstr(row, col, text)
        except curses.error:
            # addstr fails after writing the bottom-right cell or when the
            # window is smaller than the board; the text is clipped.
            logger.debug("Clipped write at row %d col %d", row, col)

    def refresh(self) -> None:
        self.stdscr.refresh()

    def key_available(self) -> bool:
        """Non-blocking check for a pending keystroke."""
        self.stdscr.nodelay(True)
        code = self.stdscr.getch()
        self.stdscr.nodelay(False)
        if code == -1:
            return False
        curses.ungetch(code)
        return True

    def read_key(self) -> Optional[str]:
        """Block until a key is pressed and return its logical name."""
        self.stdscr.nodelay(False)
        return translate_key(self.stdscr.getch())

    def read_line(self, row: int, col: int, prompt: str, max_length: int = 20) -> str:
        """Show ``prompt`` and read an echoed line of text."""
        self.write(row, col, prompt)
        self.stdscr.nodelay(False)
        curses.echo()
        self.show_cursor()
        try:
            raw = self.stdscr.getstr(row, col + len(prompt), max_length)
        finally:
            curses.noecho()
            self.hide_cursor()
        return raw.decode("utf-8", errors="replace").strip()

    def hide_cursor(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal does not support hiding the cursor")

    def show_cursor(self) -> None:
        try:
            curses.curs_set(1)
        except curses.error:
            logger.debug("Terminal does not support showing the cursor")
