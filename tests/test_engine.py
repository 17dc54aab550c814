"""
Tests for the simulation layer: geometry, Snake, GameState and the engine.
"""

import logging
import random
from collections import deque

import pytest

from termsnake.domain import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    BOARD_WIDTH, BOARD_HEIGHT, FOOD_POINTS, INITIAL_FOODS, INITIAL_LENGTH,
    BoardFullError,
    GameState,
    Snake,
    move,
    wrap,
)
from termsnake.engine import check_collision, new_game, place_foods, step, tick


def foodless_game(width=BOARD_WIDTH, height=BOARD_HEIGHT, seed=1):
    """A new game with the food cleared so nothing is eaten by accident."""
    state = new_game(width, height, random.Random(seed))
    state.foods = set()
    return state


class TestGeometry:
    """Tests for wrap() and move()."""

    def test_wrap_keeps_in_range_values(self):
        """Coordinates already on the board are left alone."""
        assert wrap(0, 10) == 0
        assert wrap(9, 10) == 9

    def test_wrap_is_true_modulo(self):
        """Negative coordinates wrap to the far edge, never stay negative."""
        assert wrap(-1, 10) == 9
        assert wrap(-11, 10) == 9
        assert wrap(10, 10) == 0
        assert wrap(23, 10) == 3

    @pytest.mark.parametrize("direction", sorted(VALID_MOVES))
    def test_move_stays_in_bounds_from_every_cell(self, direction):
        """A single-unit move in any direction never leaves the board."""
        width, height = 5, 3
        for y in range(height):
            for x in range(width):
                nx, ny = move((x, y), direction, width, height)
                assert 0 <= nx < width
                assert 0 <= ny < height

    def test_move_wraps_each_axis(self):
        """Leaving any edge re-enters from the opposite edge."""
        assert move((9, 4), RIGHT, 10, 5) == (0, 4)
        assert move((0, 4), LEFT, 10, 5) == (9, 4)
        assert move((3, 0), UP, 10, 5) == (3, 4)
        assert move((3, 4), DOWN, 10, 5) == (3, 0)

    def test_up_moves_towards_row_zero(self):
        """Terminal rows grow downwards."""
        assert move((3, 3), UP, 10, 10) == (3, 2)
        assert move((3, 3), DOWN, 10, 10) == (3, 4)


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        """Positions are kept head first in a deque; direction defaults to RIGHT."""
        positions = [(5, 5), (4, 5), (3, 5)]
        snake = Snake(positions)
        assert list(snake.positions) == positions
        assert snake.direction == RIGHT
        assert isinstance(snake.positions, deque)

    def test_head_and_tail(self):
        """Head is the first position, tail the last."""
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        assert snake.head == (5, 5)
        assert snake.tail == (3, 5)
        assert len(snake) == 3

    def test_empty_snake_raises(self):
        """A snake needs at least one segment."""
        with pytest.raises(ValueError):
            Snake([])

    @pytest.mark.parametrize("current", sorted(VALID_MOVES))
    def test_reverse_direction_rejected(self, current):
        """The exact reverse of the committed direction is a no-op."""
        snake = Snake([(5, 5)], current)
        assert snake.set_direction(OPPOSITES[current]) is False
        assert snake.direction == current

    def test_perpendicular_direction_accepted(self):
        """A quarter turn is accepted."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)
        assert snake.set_direction(UP) is True
        assert snake.direction == UP

    def test_same_direction_accepted(self):
        """Repeating the current direction is accepted."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)
        assert snake.set_direction(RIGHT) is True
        assert snake.direction == RIGHT

    def test_last_accepted_change_wins(self):
        """Several changes before a step: only the last accepted one counts."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)
        snake.set_direction(UP)
        snake.set_direction(DOWN)  # reverse of UP, rejected
        snake.set_direction(RIGHT)
        assert snake.direction == RIGHT

    def test_unknown_direction_raises(self):
        """A direction outside the four moves raises ValueError."""
        snake = Snake([(5, 5)])
        with pytest.raises(ValueError):
            snake.set_direction("SIDEWAYS")


class TestGameState:
    """Tests for the GameState class."""

    def test_print_board_marks_snake_and_food(self):
        """The text dump shows the head as O, body as o and food as *."""
        state = GameState(
            width=5,
            height=3,
            snake=Snake([(2, 1), (1, 1)]),
            foods={(4, 0)},
        )
        assert state.print_board() == "....*\n.oO..\n....."

    def test_defaults(self):
        """A new state starts unscored, running and without a vacated tail."""
        state = GameState(width=5, height=3, snake=Snake([(2, 1)]), foods=set())
        assert state.score == 0
        assert state.paused is False
        assert state.game_over is False
        assert state.previous_tail is None

    def test_repr(self):
        """repr names the class and the score."""
        state = GameState(width=5, height=3, snake=Snake([(2, 1)]), foods={(0, 0)})
        text = repr(state)
        assert "GameState" in text
        assert "score=0" in text


class TestNewGame:
    """Tests for new_game()."""

    def test_initial_snake_is_centred_and_heading_right(self):
        """Five horizontal segments with the head at the board centre, moving right."""
        state = new_game(40, 20, random.Random(0))
        assert state.snake.head == (20, 10)
        assert list(state.snake.positions) == [(20, 10), (19, 10), (18, 10), (17, 10), (16, 10)]
        assert len(state.snake) == INITIAL_LENGTH
        assert state.snake.direction == RIGHT

    def test_initial_food_and_score(self):
        """Three foods off the snake and a zero score."""
        state = new_game(40, 20, random.Random(0))
        assert len(state.foods) == INITIAL_FOODS
        assert state.foods.isdisjoint(state.snake.positions)
        assert state.score == 0
        assert state.game_over is False

    def test_same_seed_same_food(self):
        """Seeded generators give the same food layout."""
        first = new_game(40, 20, random.Random(42))
        second = new_game(40, 20, random.Random(42))
        assert first.foods == second.foods


class TestPlaceFoods:
    """Tests for place_foods()."""

    def test_returns_exactly_n_disjoint_positions(self):
        """N distinct on-board cells, none on the snake or existing food."""
        snake = [(5, 5), (4, 5), (3, 5)]
        existing = {(0, 0), (1, 1)}
        foods = place_foods(10, snake, existing, 10, 10, random.Random(7))

        assert len(foods) == 10
        assert len(set(foods)) == 10
        assert set(foods).isdisjoint(snake)
        assert set(foods).isdisjoint(existing)
        for x, y in foods:
            assert 0 <= x < 10
            assert 0 <= y < 10

    def test_reproducible_with_seed(self):
        """The same seed places food on the same cells."""
        snake = [(5, 5)]
        assert place_foods(3, snake, set(), 10, 10, random.Random(9)) == \
            place_foods(3, snake, set(), 10, 10, random.Random(9))

    def test_zero_count(self):
        """Asking for no food returns an empty list."""
        assert place_foods(0, [(0, 0)], set(), 3, 3, random.Random(0)) == []

    def test_falls_back_to_scanning_free_cells(self):
        """With no sampling attempts allowed the free-cell scan still finds a spot."""
        snake = [(0, 0), (1, 0), (2, 0)]
        foods = place_foods(2, snake, {(0, 1)}, 3, 2, random.Random(0), max_attempts=0)
        assert sorted(foods) == [(1, 1), (2, 1)]

    def test_last_free_cell_found(self):
        """The only cell left free is the one returned."""
        snake = [(x, 0) for x in range(4)] + [(x, 1) for x in range(3)]
        assert place_foods(1, snake, set(), 4, 2, random.Random(3)) == [(3, 1)]

    def test_full_board_raises(self):
        """No free cell left raises BoardFullError."""
        snake = [(0, 0), (1, 0)]
        with pytest.raises(BoardFullError):
            place_foods(1, snake, {(0, 1), (1, 1)}, 2, 2, random.Random(0))


class TestStep:
    """Tests for step()."""

    def test_move_without_food_keeps_length(self):
        """A plain move drops the tail and reports where it was."""
        snake = Snake([(5, 5), (4, 5), (3, 5)], RIGHT)
        result = step(snake, RIGHT, {(0, 0)}, 10, 10)

        assert list(result.snake.positions) == [(6, 5), (5, 5), (4, 5)]
        assert len(result.snake) == 3
        assert result.ate_food is False
        assert result.previous_tail == (3, 5)
        assert result.snake.tail != result.previous_tail
        assert result.foods == {(0, 0)}

    def test_previous_tail_is_tail_before_move(self):
        """The reported vacated cell is the input snake's tail."""
        snake = Snake([(2, 2), (2, 3), (3, 3)], UP)
        result = step(snake, UP, set(), 10, 10)
        assert result.previous_tail == snake.tail

    def test_eating_grows_and_removes_food(self):
        """Landing on food keeps the tail and removes only that food."""
        snake = Snake([(5, 5), (4, 5), (3, 5)], RIGHT)
        result = step(snake, RIGHT, {(6, 5), (0, 0)}, 10, 10)

        assert list(result.snake.positions) == [(6, 5), (5, 5), (4, 5), (3, 5)]
        assert result.ate_food is True
        assert result.foods == {(0, 0)}
        # The tail that would have been dropped stays part of the body
        assert result.previous_tail == (3, 5)
        assert result.previous_tail in result.snake

    def test_inputs_are_not_mutated(self):
        """The snake and food set passed in stay as they were."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)
        foods = {(6, 5)}
        step(snake, RIGHT, foods, 10, 10)
        assert list(snake.positions) == [(5, 5), (4, 5)]
        assert foods == {(6, 5)}

    def test_head_wraps_at_edge(self):
        """Stepping off the right edge puts the head in column zero."""
        snake = Snake([(9, 5), (8, 5)], RIGHT)
        result = step(snake, RIGHT, set(), 10, 10)
        assert result.snake.head == (0, 5)

    def test_uses_given_direction(self):
        """The direction argument drives the move and is carried on the result."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)
        result = step(snake, UP, set(), 10, 10)
        assert result.snake.head == (5, 4)
        assert result.snake.direction == UP


class TestCheckCollision:
    """Tests for check_collision()."""

    def test_no_collision_for_straight_snake(self):
        """A straight snake does not touch itself."""
        assert check_collision(Snake([(5, 5), (4, 5), (3, 5)])) is False

    def test_single_segment_never_collides(self):
        """A one-segment snake has no body to hit."""
        assert check_collision(Snake([(5, 5)])) is False

    def test_head_on_body_collides(self):
        """A head sharing a cell with a body segment is a collision."""
        assert check_collision(Snake([(4, 5), (5, 5), (5, 6), (4, 6), (4, 5)])) is True

    def test_straight_run_then_turning_back_into_body(self):
        """Four straight ticks are safe; curling back into the body ends the game."""
        state = foodless_game()
        for _ in range(4):
            tick(state)
            assert state.game_over is False
            assert check_collision(state.snake) is False

        for direction in (DOWN, LEFT, UP):
            assert state.snake.set_direction(direction) is True
            tick(state)

        assert state.game_over is True
        assert check_collision(state.snake) is True


class TestTick:
    """Tests for tick()."""

    def test_one_tick_moves_head_right(self):
        """40x20 board, snake of 5 heading right, no food underfoot."""
        state = new_game(40, 20, random.Random(5))
        state.foods.discard((21, 10))
        head_x, head_y = state.snake.head

        returned = tick(state, random.Random(5))

        assert returned is state
        assert state.snake.head == (wrap(head_x + 1, 40), head_y)
        assert len(state.snake) == 5
        assert state.score == 0
        assert state.tick_number == 1
        assert state.previous_tail == (16, 10)

    def test_eating_scores_and_replaces_food(self):
        """Eating adds five points, grows the snake and keeps three foods on the board."""
        state = new_game(40, 20, random.Random(5))
        state.foods = {(21, 10), (0, 0), (1, 1)}

        tick(state, random.Random(5))

        assert state.score == FOOD_POINTS
        assert len(state.snake) == INITIAL_LENGTH + 1
        assert (21, 10) not in state.foods
        assert len(state.foods) == 3
        assert state.foods.isdisjoint(state.snake.positions)
        for x, y in state.foods:
            assert 0 <= x < 40
            assert 0 <= y < 20

    def test_score_never_decreases(self):
        """The score only ever goes up across ticks."""
        state = new_game(10, 10, random.Random(11))
        last_score = 0
        for _ in range(30):
            tick(state, random.Random(11))
            assert state.score >= last_score
            last_score = state.score
            if state.game_over:
                break

    def test_paused_state_is_unchanged(self):
        """A paused session does not move or count ticks."""
        state = foodless_game()
        state.paused = True
        before = list(state.snake.positions)
        tick(state)
        assert list(state.snake.positions) == before
        assert state.tick_number == 0

    def test_finished_state_is_unchanged(self):
        """A finished session does not move."""
        state = foodless_game()
        state.game_over = True
        before = list(state.snake.positions)
        tick(state)
        assert list(state.snake.positions) == before

    def test_full_board_leaves_no_replacement_food(self):
        """Eating the last free cell scores without placing new food."""
        state = GameState(width=3, height=1, snake=Snake([(1, 0), (0, 0)], RIGHT), foods={(2, 0)})

        tick(state, random.Random(0))

        assert state.score == FOOD_POINTS
        assert state.foods == set()
        assert len(state.snake) == 3
        assert state.game_over is False

    def test_board_dumped_at_debug_level(self, caplog):
        """With DEBUG logging on, each tick logs a text picture of the board."""
        caplog.set_level(logging.DEBUG, logger="termsnake.engine")
        state = GameState(width=5, height=3, snake=Snake([(1, 1), (0, 1)], RIGHT), foods={(4, 0)})

        tick(state)

        assert "Board after tick 1" in caplog.text
        assert "....*\n.oO..\n....." in caplog.text

    def test_no_board_dump_above_debug(self, caplog):
        """At INFO the board picture is not logged."""
        caplog.set_level(logging.INFO, logger="termsnake.engine")
        tick(foodless_game())
        assert "Board after tick" not in caplog.text
