# Shared headless helpers: scripted policies, episode simulation and chunked stats.
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

try:
    from .game_logic import Cell, Direction, GameConfig, SnakeGame
except ImportError:
    from game_logic import Cell, Direction, GameConfig, SnakeGame


ACTIONS = tuple(Direction)

Policy = Callable[[SnakeGame], "Direction | None"]


@dataclass
class EpisodeResult:
    length: int
    apples: int
    steps: int
    died: bool


def _manhattan(a: Cell, b: Cell) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def valid_actions(current: Direction) -> list[Direction]:
    """All directions except the instant 180-degree turn."""
    return [action for action in ACTIONS if action != current.reverse]


def random_policy(game: SnakeGame) -> Direction:
    """Uniformly random legal turn, using the game's own RNG."""
    options = valid_actions(game.direction)
    return options[int(game.rng.integers(len(options)))]


def greedy_policy(game: SnakeGame) -> Direction:
    """
    Step towards the apple, preferring moves that survive the next tick.
    Falls back to the current heading when every move is fatal.
    """
    options = valid_actions(game.direction)
    safe = [d for d in options if not game.is_game_over(game.next_head(d))]
    if not safe:
        return game.direction
    if game.apple is None:
        return safe[0]
    apple = game.apple
    # Ties keep the current heading first so the snake does not zig-zag.
    return min(
        safe,
        key=lambda d: (_manhattan(game.next_head(d), apple), d != game.direction),
    )


POLICIES: dict[str, Policy] = {
    "random": random_policy,
    "greedy": greedy_policy,
}


def make_game(
    width: int = 25,
    height: int = 25,
    apple_strategy: str = "enumerate",
    seed: int | None = None,
) -> SnakeGame:
    return SnakeGame(GameConfig(width=width, height=height, apple_strategy=apple_strategy, seed=seed))


def run_episode(
    game: SnakeGame,
    policy: Policy,
    max_steps: int = 1000,
    on_step: Callable[[SnakeGame, int], None] | None = None,
) -> EpisodeResult:
    """Play one game from a fresh reset until death, a full board or max_steps."""
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")

    game.reset()
    died = False
    steps = 0
    for step in range(max_steps):
        direction = policy(game)
        if direction is not None:
            game.queue_direction(direction)
        died = game.update()
        steps = step + 1
        if on_step is not None:
            on_step(game, step)
        if died or game.won:
            break
    return EpisodeResult(length=len(game.snake), apples=game.score, steps=steps, died=died)


def chunked_mean(values: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute mean value per fixed-size chunk."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty

    starts = np.arange(0, arr.size, chunk_size)
    ends = np.minimum(starts + chunk_size, arr.size)
    means = np.add.reduceat(arr, starts) / (ends - starts)
    return ends.astype(np.float32), means.astype(np.float32)


def summarize(values: list[float]) -> dict[str, float]:
    """Summary statistics printed in the comparison table."""
    if not values:
        raise ValueError("values cannot be empty")
    arr = np.asarray(values, dtype=np.float32)
    return {
        "Mean length": float(arr.mean()),
        "Median length": float(np.median(arr)),
        "Max length": float(arr.max()),
        "Min length": float(arr.min()),
        "Std dev": float(arr.std()),
        "25th percentile": float(np.percentile(arr, 25)),
        "75th percentile": float(np.percentile(arr, 75)),
    }
