"""
Game loop driver for TermSnake.

States:
    main_menu -> playing -> {paused <-> playing} -> game_over -> main_menu

The menu, instructions, score list and game-over prompts block on a key
press; while playing, input is polled without blocking once per iteration
and the only suspension is the sleep at the end of the iteration.
"""

import argparse
import curses
import logging
import random
import sys
import time
from typing import Callable, Dict, Optional

from . import __version__
from .config import load_settings
from .console import ENTER, PAUSE, CursesConsole
from .data_access.score_repository import ScoreRepository, clean_name
from .domain.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    HORIZONTAL_DELAY_MS,
    PAUSE_DELAY_MS,
    VALID_MOVES,
    VERTICAL_DELAY_MS,
    VERTICAL_MOVES,
)
from .domain.errors import ConfigError, ScoreStoreError
from .domain.game_state import GameState
from .domain.score_record import DEFAULT_HIGH_SCORE, ScoreRecord
from .engine import new_game, tick
from .render import Renderer

logger = logging.getLogger(__name__)

# Loop states
MAIN_MENU = "main_menu"
INSTRUCTIONS = "instructions"
VIEW_SCORES = "view_scores"
PLAYING = "playing"
PAUSED = "paused"
GAME_OVER = "game_over"
EXIT = "exit"

MENU_CHOICES = {
    "1": PLAYING,
    "2": INSTRUCTIONS,
    "3": VIEW_SCORES,
    "4": EXIT,
}

INSTRUCTION_LINES = [
    "Instructions:",
    "Use W, A, S, D or arrow keys to move the snake.",
    "Eat the food to grow and gain points.",
    "Avoid running into yourself.",
    "Press P or ESC to pause/resume the game.",
    "Press any key to return to the main menu...",
]


class SnakeApp:
    """
    Manages:
      - The menu / play / game-over state machine
      - The current GameState (one per session)
      - The high score shown on the score line
      - Reporting finished sessions to the score repository
    """

    def __init__(
        self,
        console,
        repository: ScoreRepository,
        width: int = BOARD_WIDTH,
        height: int = BOARD_HEIGHT,
        vertical_delay: float = VERTICAL_DELAY_MS / 1000,
        horizontal_delay: float = HORIZONTAL_DELAY_MS / 1000,
        pause_delay: float = PAUSE_DELAY_MS / 1000,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.console = console
        self.repository = repository
        self.width = width
        self.height = height
        self.vertical_delay = vertical_delay
        self.horizontal_delay = horizontal_delay
        self.pause_delay = pause_delay
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.renderer = Renderer(console, width, height)

        self.state = MAIN_MENU
        self.game: Optional[GameState] = None
        self.high_score: ScoreRecord = DEFAULT_HIGH_SCORE
        # Shown once on the next menu draw
        self.load_error: Optional[str] = None

        self.handlers: Dict[str, Callable[[], str]] = {
            MAIN_MENU: self.main_menu,
            INSTRUCTIONS: self.show_instructions,
            VIEW_SCORES: self.show_scores,
            PLAYING: self.play_iteration,
            PAUSED: self.play_iteration,
            GAME_OVER: self.game_over,
        }

    def run(self) -> None:
        """Run until Exit is chosen from the main menu."""
        self.high_score = self.load_high_score()
        self.state = MAIN_MENU
        while self.state != EXIT:
            self.state = self.handlers[self.state]()
        logger.info("Exit selected from the main menu")

    def load_high_score(self) -> ScoreRecord:
        try:
            return self.repository.load_high_score()
        except ScoreStoreError as e:
            logger.warning(f"Failed to load high score: {e}")
            self.load_error = f"Failed to load high score: {e}"
            return DEFAULT_HIGH_SCORE

    # ------------------------------------------------------------------ menus
    def main_menu(self) -> str:
        self.console.clear()
        lines = [
            "Welcome to Snake Game!",
            "1. Start Game",
            "2. Instructions",
            "3. View Scores",
            "4. Exit",
            "",
            "",
            f"TermSnake v{__version__}",
        ]
        for row, line in enumerate(lines):
            self.console.write(row, 0, line)
        if self.load_error:
            self.console.write(len(lines) + 1, 0, self.load_error)
            self.load_error = None
        self.console.refresh()

        next_state = MENU_CHOICES.get(self.console.read_key(), MAIN_MENU)
        if next_state == PLAYING:
            self.start_session()
        return next_state

    def show_instructions(self) -> str:
        self.console.clear()
        for row, line in enumerate(INSTRUCTION_LINES):
            self.console.write(row, 0, line)
        self.console.refresh()
        self.console.read_key()
        return MAIN_MENU

    def show_scores(self) -> str:
        self.console.clear()
        self.console.write(0, 0, "High Scores:")
        row = 1
        try:
            records = self.repository.list_scores()
        except ScoreStoreError as e:
            logger.error(f"Failed to read scores: {e}")
            self.console.write(row, 0, f"Failed to read scores: {e}")
            records = None
            row += 1

        if records == []:
            self.console.write(row, 0, "No scores available.")
            row += 1
        for record in records or []:
            self.console.write(row, 0, f"{record.name}: {record.score}")
            row += 1

        self.console.write(row, 0, "Press any key to return to the main menu...")
        self.console.refresh()
        self.console.read_key()
        return MAIN_MENU

    # --------------------------------------------------------------- gameplay
    def start_session(self) -> GameState:
        self.game = new_game(self.width, self.height, self.rng)
        logger.info("Session started")
        self.renderer.draw_full(self.game, self.high_score)
        return self.game

    def handle_key(self, key: Optional[str]) -> None:
        """Apply one key press to the running session."""
        if key in VALID_MOVES:
            accepted = self.game.snake.set_direction(key)
            if not accepted:
                logger.debug("Rejected reversing into %s", key)
        elif key == PAUSE:
            self.game.paused = not self.game.paused
            self.renderer.show_pause(self.game)

    def tick_delay(self) -> float:
        if self.game.snake.direction in VERTICAL_MOVES:
            return self.vertical_delay
        return self.horizontal_delay

    def play_iteration(self) -> str:
        """
        One iteration of the playing loop:
          1) Read at most one pending key
          2) If paused, wait and stay paused
          3) Otherwise tick, render and wait for the direction's cadence
          4) Move to game_over if the snake hit itself
        """
        if self.console.key_available():
            self.handle_key(self.console.read_key())

        if self.game.paused:
            self.sleep(self.pause_delay)
            return PAUSED

        tick(self.game, self.rng)
        self.renderer.render(self.game, self.high_score)
        self.sleep(self.tick_delay())

        if self.game.game_over:
            return GAME_OVER
        return PLAYING

    # ------------------------------------------------------------- game over
    def game_over(self) -> str:
        score = self.game.score
        logger.info(f"Game over with score {score}")

        self.console.clear()
        self.console.write(0, 0, "Game Over!")
        self.console.write(1, 0, f"Your score: {score}")
        row = 2

        new_high = score > self.high_score.score
        if new_high:
            self.console.write(row, 0, "New High Score!")
            row += 1

        name = self.console.read_line(row, 0, "Enter your name: ")
        row += 1
        record = ScoreRecord(clean_name(name), score)

        try:
            if new_high:
                self.repository.save_high_score(record)
            else:
                self.repository.append_score(record)
        except ScoreStoreError as e:
            logger.error(f"Failed to save score: {e}")
            self.console.write(row, 0, f"Failed to save score: {e}")
            row += 1

        if new_high:
            self.high_score = record

        self.console.write(row, 0, "Press Enter to return to the main menu...")
        self.console.refresh()
        while self.console.read_key() != ENTER:
            pass

        self.game = None
        return MAIN_MENU


def run_app(stdscr, settings) -> None:
    console = CursesConsole(stdscr)
    console.hide_cursor()

    app = SnakeApp(
        console,
        ScoreRepository(settings.scores_file, settings.highscore_file),
        vertical_delay=settings.vertical_delay,
        horizontal_delay=settings.horizontal_delay,
        pause_delay=settings.pause_delay,
    )

    rows, cols = stdscr.getmaxyx()
    needed_cols, needed_rows = app.renderer.viewport
    if rows < needed_rows or cols < needed_cols:
        logger.warning(
            f"Terminal is {cols}x{rows}, the board needs {needed_cols}x{needed_rows}; drawing will be clipped"
        )

    app.run()


def main():
    parser = argparse.ArgumentParser(
        description="Play Snake in the terminal. Everything is menu driven; "
                    "settings are read from TERMSNAKE_* environment variables or a .env file."
    )
    parser.parse_args()

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    # The terminal belongs to curses, so logs go to a file
    try:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(settings.log_file),
            level=getattr(logging, settings.log_level),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    except OSError as e:
        print(f"Cannot open log file {settings.log_file}: {e}", file=sys.stderr)
        sys.exit(1)

    curses.wrapper(run_app, settings)


if __name__ == "__main__":
    main()
