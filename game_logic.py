# Core Snake game state and rules, independent from GUI/simulation code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
from typing import NamedTuple

import numpy as np


logger = logging.getLogger(__name__)

# Bounds used when validating configuration from the command line.
MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 100
MIN_MOVE_INTERVAL = 0.02
MAX_MOVE_INTERVAL = 2.0
MIN_INITIAL_LENGTH = 1
MAX_QUEUE_CAPACITY = 8
APPLE_STRATEGIES = ("enumerate", "sample")


class Cell(NamedTuple):
    """One grid coordinate; compares by value like a plain (x, y) tuple."""
    x: int
    y: int


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def reverse(self) -> Direction:
        return REVERSE_DIRECTION[self]

    @classmethod
    def parse(cls, raw: str) -> Direction:
        """Accept 'up', 'LEFT', ... and reject anything else."""
        value = str(raw).strip().lower()
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown direction: {raw!r}") from None


REVERSE_DIRECTION = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

DIRECTION_OFFSETS = {
    Direction.UP: Cell(0, -1),
    Direction.DOWN: Cell(0, 1),
    Direction.LEFT: Cell(-1, 0),
    Direction.RIGHT: Cell(1, 0),
}


def offset_from_direction(direction: Direction) -> Cell:
    """Unit grid delta for one step in the given direction."""
    return DIRECTION_OFFSETS[direction]


@dataclass(frozen=True)
class GameConfig:
    """Immutable rules/settings shared between the logic layer and its callers."""
    width: int = 25
    height: int = 25
    move_interval: float = 0.1  # seconds between ticks
    initial_length: int = 3
    initial_direction: Direction = Direction.RIGHT
    queue_capacity: int = 3
    apple_strategy: str = "enumerate"  # enumerate | sample
    seed: int | None = None

    def __post_init__(self) -> None:
        for label, value in (("Width", self.width), ("Height", self.height)):
            if not (MIN_GRID_SIZE <= value <= MAX_GRID_SIZE):
                raise ValueError(f"{label} must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
        if not (MIN_MOVE_INTERVAL <= self.move_interval <= MAX_MOVE_INTERVAL):
            raise ValueError(
                f"Move interval must be between {MIN_MOVE_INTERVAL} and {MAX_MOVE_INTERVAL} seconds."
            )
        # The starting body must fit between the centre and the wall behind it.
        max_length = (min(self.width, self.height) + 1) // 2
        if not (MIN_INITIAL_LENGTH <= self.initial_length <= max_length):
            raise ValueError(f"Initial length must be between {MIN_INITIAL_LENGTH} and {max_length}.")
        if not (1 <= self.queue_capacity <= MAX_QUEUE_CAPACITY):
            raise ValueError(f"Queue capacity must be between 1 and {MAX_QUEUE_CAPACITY}.")
        if self.apple_strategy not in APPLE_STRATEGIES:
            raise ValueError(f"Apple strategy must be one of: {', '.join(APPLE_STRATEGIES)}.")
        if not isinstance(self.initial_direction, Direction):
            raise ValueError(f"Unknown initial direction: {self.initial_direction!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError("Seed must be a non-negative integer.")


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.direction = self.config.initial_direction
        self.best_length = 0
        self.deaths = 0
        self.reset()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def won(self) -> bool:
        """True once the body covers every cell and no apple can be placed."""
        return self.apple is None

    def reset(self) -> None:
        """Re-centre a fresh snake (keeping the current heading) and place a new apple."""
        self.snake: deque[Cell] = deque()        # ordered body, head at index 0
        self.snake_set: set[Cell] = set()        # O(1) body collision lookup
        self.direction_queue: deque[Direction] = deque()  # pending input, one consumed per tick
        self.score = 0

        self.spawn_snake(self.config.initial_length)
        self.apple: Cell | None = self.new_apple_position()
        self.best_length = max(self.best_length, len(self.snake))
        logger.debug("Reset: head=%s direction=%s apple=%s", self.head, self.direction.value, self.apple)

    def spawn_snake(self, length: int) -> None:
        """Place the head at the board centre with the body trailing behind it."""
        center = Cell(self.width // 2, self.height // 2)
        dx, dy = offset_from_direction(self.direction)
        for i in range(length):
            cell = Cell(center.x - dx * i, center.y - dy * i)
            self.snake.append(cell)
            self.snake_set.add(cell)

    def queue_direction(self, new_direction: Direction) -> bool:
        """Buffer an input direction; returns False when it is rejected."""
        if len(self.direction_queue) >= self.config.queue_capacity:
            return False
        if self.direction_queue:
            last = self.direction_queue[-1]
            if new_direction == last:
                return False
        else:
            last = self.direction
        if new_direction == last.reverse:
            return False
        self.direction_queue.append(new_direction)
        return True

    def _in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def is_game_over(self, new_head: Cell) -> bool:
        """Wall hit or the new head lands on any current body cell (tail included)."""
        if not self._in_bounds(new_head):
            return True
        return new_head in self.snake_set

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Translate the current head by one tile."""
        dx, dy = offset_from_direction(direction or self.direction)
        return Cell(self.head.x + dx, self.head.y + dy)

    def new_apple_position(self) -> Cell | None:
        """Pick a cell outside the snake, or None when the board is full."""
        if self.config.apple_strategy == "sample":
            return self._sample_apple()
        return self._enumerate_apple()

    def free_cells(self) -> np.ndarray:
        """(x, y) rows for every cell not covered by the snake."""
        occupied = np.zeros((self.height, self.width), dtype=bool)
        if self.snake:
            xs, ys = zip(*self.snake)
            occupied[list(ys), list(xs)] = True
        rows = np.argwhere(~occupied)  # (y, x) pairs
        return rows[:, ::-1]

    def _enumerate_apple(self) -> Cell | None:
        free = self.free_cells()
        if len(free) == 0:
            logger.info("Board is full (length %d); no apple placed.", len(self.snake))
            return None
        x, y = free[self.rng.integers(len(free))]
        return Cell(int(x), int(y))

    def _sample_apple(self) -> Cell | None:
        # Bounded retries; the board can get too crowded for sampling to finish quickly.
        attempts = self.width * self.height * 4
        for _ in range(attempts):
            cell = Cell(int(self.rng.integers(self.width)), int(self.rng.integers(self.height)))
            if cell not in self.snake_set:
                return cell
        logger.debug("Apple sampling gave up after %d attempts; enumerating free cells.", attempts)
        return self._enumerate_apple()

    def update(self) -> bool:
        """Advance one tick. Returns True on game over (state is left untouched)."""
        if self.direction_queue:
            self.direction = self.direction_queue.popleft()

        new_head = self.next_head()
        if self.is_game_over(new_head):
            return True

        self.snake.appendleft(new_head)
        self.snake_set.add(new_head)

        if new_head == self.apple:
            self.score += 1
            self.best_length = max(self.best_length, len(self.snake))
            self.apple = self.new_apple_position()
        else:
            old_tail = self.snake.pop()
            self.snake_set.discard(old_tail)
        return False

    def tick(self) -> bool:
        """One loop step: update, and reset in place on game over. Returns True if reset."""
        if not self.update():
            return False
        self.deaths += 1
        logger.info("Game over at length %d (apples: %d); resetting.", len(self.snake), self.score)
        self.reset()
        return True
