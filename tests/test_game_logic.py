"""
Tests for the core rules: offsets, input buffering, collisions, apples and ticks.
"""

import os
import random
import sys
from collections import deque

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from game_logic import (  # noqa: E402
    Cell,
    Direction,
    GameConfig,
    SnakeGame,
    offset_from_direction,
)


def place(game, cells, direction, apple=Cell(0, 0)):
    """Overwrite the snake body/heading for a scenario."""
    game.snake = deque(Cell(*c) for c in cells)
    game.snake_set = set(game.snake)
    game.direction = direction
    game.direction_queue.clear()
    game.apple = apple


def test_offsets_are_distinct_unit_vectors():
    offsets = [offset_from_direction(d) for d in Direction]
    for dx, dy in offsets:
        assert abs(dx) + abs(dy) == 1
    assert len(set(offsets)) == 4
    assert offset_from_direction(Direction.UP) == (0, -1)
    assert offset_from_direction(Direction.RIGHT) == (1, 0)


def test_reverse_and_parse():
    assert Direction.UP.reverse is Direction.DOWN
    assert Direction.LEFT.reverse is Direction.RIGHT
    assert Direction.parse(" Left ") is Direction.LEFT
    with pytest.raises(ValueError):
        Direction.parse("sideways")


def test_config_validation():
    with pytest.raises(ValueError):
        GameConfig(width=2)
    with pytest.raises(ValueError):
        GameConfig(move_interval=0.0)
    with pytest.raises(ValueError):
        GameConfig(apple_strategy="teleport")
    with pytest.raises(ValueError):
        GameConfig(width=5, height=5, initial_length=4)
    with pytest.raises(ValueError):
        GameConfig(queue_capacity=0)
    with pytest.raises(ValueError):
        GameConfig(seed=-1)
    assert GameConfig(seed=0).seed == 0


def test_initial_state_is_centred():
    game = SnakeGame(GameConfig(seed=1))
    assert list(game.snake) == [(12, 12), (11, 12), (10, 12)]
    assert game.direction is Direction.RIGHT
    assert game.apple is not None
    assert game.apple not in game.snake


def test_queue_rules():
    game = SnakeGame(GameConfig(seed=1))
    assert game.queue_direction(Direction.LEFT) is False   # reverse of current
    assert game.queue_direction(Direction.RIGHT) is True   # same as current is allowed
    assert game.queue_direction(Direction.RIGHT) is False  # duplicate of last queued
    assert game.queue_direction(Direction.UP) is True
    assert game.queue_direction(Direction.DOWN) is False   # reverse of last queued
    assert game.queue_direction(Direction.LEFT) is True
    assert game.queue_direction(Direction.DOWN) is False   # queue full
    assert list(game.direction_queue) == [Direction.RIGHT, Direction.UP, Direction.LEFT]


def test_queue_invariants_hold_for_random_input():
    rng = random.Random(1234)
    game = SnakeGame(GameConfig(seed=3))
    for _ in range(500):
        if rng.random() < 0.3:
            game.tick()
        game.queue_direction(rng.choice(list(Direction)))

        queue = list(game.direction_queue)
        assert len(queue) <= 3
        previous = game.direction
        for i, direction in enumerate(queue):
            if i > 0:
                assert direction != queue[i - 1]
            assert direction != previous.reverse
            previous = direction


def test_queue_consumed_one_per_tick():
    game = SnakeGame(GameConfig(seed=1))
    game.apple = Cell(0, 0)
    game.queue_direction(Direction.UP)
    game.queue_direction(Direction.LEFT)
    game.update()
    assert game.direction is Direction.UP
    assert game.head == (12, 11)
    game.update()
    assert game.direction is Direction.LEFT
    assert game.head == (11, 11)
    assert not game.direction_queue


def test_is_game_over_bounds_and_body():
    game = SnakeGame(GameConfig(seed=1))
    assert game.is_game_over(Cell(-1, 0))
    assert game.is_game_over(Cell(25, 3))
    assert game.is_game_over(Cell(3, 25))
    assert game.is_game_over(Cell(3, -1))
    assert game.is_game_over(Cell(11, 12))
    assert game.is_game_over(Cell(10, 12))  # tail counts too
    assert not game.is_game_over(Cell(13, 12))
    assert not game.is_game_over(Cell(0, 0))
    assert not game.is_game_over(Cell(24, 24))


def test_move_without_apple_drops_tail():
    game = SnakeGame(GameConfig(seed=1))
    place(game, [(12, 12), (11, 12), (10, 12)], Direction.RIGHT, apple=Cell(0, 0))
    assert game.update() is False
    assert list(game.snake) == [(13, 12), (12, 12), (11, 12)]
    assert Cell(10, 12) not in game.snake_set
    assert game.score == 0


def test_eating_apple_grows_and_relocates():
    game = SnakeGame(GameConfig(seed=1))
    place(game, [(12, 12), (11, 12), (10, 12)], Direction.RIGHT, apple=Cell(13, 12))
    assert game.update() is False
    assert list(game.snake) == [(13, 12), (12, 12), (11, 12), (10, 12)]
    assert game.score == 1
    assert game.best_length == 4
    assert game.apple is not None
    assert game.apple not in game.snake


def test_right_wall_ends_game_and_tick_resets():
    game = SnakeGame(GameConfig(seed=1))
    place(game, [(24, 5), (23, 5), (22, 5)], Direction.RIGHT)
    assert game.update() is True
    # Collision leaves the body untouched.
    assert list(game.snake) == [(24, 5), (23, 5), (22, 5)]

    assert game.tick() is True
    assert game.deaths == 1
    assert list(game.snake) == [(12, 12), (11, 12), (10, 12)]
    assert game.apple not in game.snake


def test_self_collision():
    game = SnakeGame(GameConfig(seed=1))
    place(game, [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)], Direction.LEFT)
    assert game.queue_direction(Direction.DOWN)
    assert game.update() is True


def test_moving_into_tail_is_a_collision():
    game = SnakeGame(GameConfig(seed=1))
    place(game, [(5, 5), (5, 6), (6, 6), (6, 5)], Direction.UP)
    assert game.queue_direction(Direction.RIGHT)
    assert game.update() is True


def test_reset_moves_apple_off_snake():
    game = SnakeGame(GameConfig(seed=5))
    game.apple = Cell(12, 12)
    game.reset()
    assert list(game.snake) == [(12, 12), (11, 12), (10, 12)]
    assert game.apple not in game.snake


def test_reset_keeps_heading_and_clears_queue():
    game = SnakeGame(GameConfig(seed=5))
    game.queue_direction(Direction.UP)
    game.update()
    game.queue_direction(Direction.LEFT)
    game.reset()
    assert game.direction is Direction.UP
    assert list(game.snake) == [(12, 12), (12, 13), (12, 14)]
    assert not game.direction_queue
    assert game.score == 0


@pytest.mark.parametrize("strategy", ["enumerate", "sample"])
@pytest.mark.parametrize("free_count", [1, 2, 3, 10])
def test_apple_never_on_snake(strategy, free_count):
    game = SnakeGame(GameConfig(width=5, height=5, apple_strategy=strategy, seed=11))
    cells = [Cell(x, y) for y in range(5) for x in range(5)]
    body, free = cells[: 25 - free_count], set(cells[25 - free_count :])
    place(game, body, Direction.RIGHT)
    for _ in range(50):
        apple = game.new_apple_position()
        assert apple in free


@pytest.mark.parametrize("strategy", ["enumerate", "sample"])
def test_full_board_has_no_apple(strategy):
    game = SnakeGame(GameConfig(width=5, height=5, apple_strategy=strategy, seed=2))
    place(game, [Cell(x, y) for y in range(5) for x in range(5)], Direction.RIGHT)
    assert game.new_apple_position() is None
    assert len(game.free_cells()) == 0


def test_filling_the_board_wins():
    game = SnakeGame(GameConfig(width=5, height=5, seed=2))
    # Every cell but (4, 4) is body; the head sits next to the last free cell.
    cells = [Cell(x, y) for y in range(5) for x in range(5) if (x, y) != (4, 4)]
    cells.remove(Cell(3, 4))
    place(game, [Cell(3, 4)] + cells, Direction.RIGHT, apple=Cell(4, 4))
    assert game.update() is False
    assert game.won
    assert len(game.snake) == 25


def test_seed_makes_apples_reproducible():
    a = SnakeGame(GameConfig(seed=42))
    b = SnakeGame(GameConfig(seed=42))
    assert a.apple == b.apple
    for _ in range(5):
        assert a.new_apple_position() == b.new_apple_position()
