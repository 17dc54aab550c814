"""
Simulation layer for TermSnake.

Pure game rules with no terminal or file I/O: starting a session, placing
food, advancing the snake one tick and detecting self-collision.
"""

import logging
import random
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from .domain.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    FOOD_POINTS,
    INITIAL_DIRECTION,
    INITIAL_FOODS,
    INITIAL_LENGTH,
)
from .domain.errors import BoardFullError
from .domain.game_state import GameState
from .domain.geometry import move, wrap
from .domain.snake import Snake

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class StepResult(NamedTuple):
    snake: Snake
    foods: Set[Position]
    ate_food: bool
    previous_tail: Position


def new_game(
    width: int = BOARD_WIDTH,
    height: int = BOARD_HEIGHT,
    rng: Optional[random.Random] = None
) -> GameState:
    """
    Create a fresh session: a horizontal snake centred on the board heading
    right, three foods and a zero score.
    """
    rng = rng or random.Random()
    head_x, head_y = width // 2, height // 2
    positions = [(wrap(head_x - i, width), head_y) for i in range(INITIAL_LENGTH)]
    snake = Snake(positions, INITIAL_DIRECTION)

    foods = set(place_foods(INITIAL_FOODS, snake.positions, set(), width, height, rng))
    logger.debug("New game on %dx%d board, foods at %s", width, height, sorted(foods))

    return GameState(width=width, height=height, snake=snake, foods=foods)


def place_foods(
    count: int,
    snake_positions: Iterable[Position],
    existing: Iterable[Position],
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None
) -> List[Position]:
    """
    Return ``count`` new food cells, none on the snake, on existing food or
    on each other.

    Each food is found by sampling uniformly over the whole board until a
    free cell turns up. Sampling gives up after ``max_attempts`` tries
    (default: four times the board area) and falls back to picking from a
    scan of the remaining free cells.

    Raises:
        BoardFullError: if there is no free cell left for a food.
    """
    rng = rng or random.Random()
    if max_attempts is None:
        max_attempts = width * height * 4

    occupied = set(snake_positions) | set(existing)
    placed: List[Position] = []

    for _ in range(count):
        cell = None
        for _ in range(max_attempts):
            candidate = (rng.randrange(width), rng.randrange(height))
            if candidate not in occupied:
                cell = candidate
                break

        if cell is None:
            free_cells = [
                (x, y)
                for y in range(height)
                for x in range(width)
                if (x, y) not in occupied
            ]
            if not free_cells:
                raise BoardFullError(
                    f"No free cell left for food ({len(placed)} of {count} placed)."
                )
            cell = rng.choice(free_cells)

        occupied.add(cell)
        placed.append(cell)

    return placed


def step(
    snake: Snake,
    direction: str,
    foods: Set[Position],
    width: int,
    height: int
) -> StepResult:
    """
    Advance the snake one cell.

    The new head is prepended. If it lands on food, that food is removed and
    the tail is kept (growth); otherwise the tail is dropped. The inputs are
    left untouched.

    Returns:
        StepResult with the moved snake, the remaining foods, whether food was
        eaten, and the cell the tail held before the move.
    """
    new_head = move(snake.head, direction, width, height)
    new_positions = [new_head] + list(snake.positions)
    previous_tail = snake.tail

    remaining = set(foods)
    ate_food = new_head in remaining
    if ate_food:
        remaining.discard(new_head)
    else:
        new_positions.pop()

    return StepResult(
        snake=Snake(new_positions, direction),
        foods=remaining,
        ate_food=ate_food,
        previous_tail=previous_tail,
    )


def check_collision(snake: Snake) -> bool:
    """True iff the head shares a cell with any other segment."""
    head = snake.head
    return any(segment == head for segment in list(snake.positions)[1:])


def tick(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """
    Run one simulation tick on ``state`` and return it.

    Steps the snake in its committed direction, scores and replaces eaten
    food, then runs the collision check. Paused or finished sessions are
    returned unchanged.
    """
    if state.paused or state.game_over:
        return state

    result = step(state.snake, state.snake.direction, state.foods, state.width, state.height)
    state.snake = result.snake
    state.foods = result.foods
    state.previous_tail = result.previous_tail

    if result.ate_food:
        state.score += FOOD_POINTS
        try:
            state.foods.update(
                place_foods(1, state.snake.positions, state.foods, state.width, state.height, rng)
            )
        except BoardFullError as e:
            logger.warning(f"Could not place replacement food: {e}")
        logger.debug("Ate food at %s, score now %d", state.snake.head, state.score)

    state.game_over = check_collision(state.snake)
    state.tick_number += 1

    if state.game_over:
        logger.info(f"Snake ran into itself at {state.snake.head} on tick {state.tick_number}")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Board after tick %d:\n%s", state.tick_number, state.print_board())

    return state
