"""Run scripted Snake policies headlessly and compare their final lengths."""
from __future__ import annotations

import argparse
import logging
import os

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import matplotlib.pyplot as plt
import numpy as np

try:
    from .game_logic import APPLE_STRATEGIES
    from .utils import POLICIES, chunked_mean, make_game, run_episode, summarize
except ImportError:
    from game_logic import APPLE_STRATEGIES
    from utils import POLICIES, chunked_mean, make_game, run_episode, summarize


logger = logging.getLogger(__name__)


def _print_progress_bar(done: int, total: int, label: str, bar_length: int = 40) -> None:
    """Print a compact progress bar in the terminal."""
    fraction = min(1.0, done / max(1, total))
    bar = ("#" * int(bar_length * fraction)).ljust(bar_length, "-")
    print(f"\r{label:<8} [{bar}] {done}/{total} episodes", end="", flush=True)


def simulate_policy(
    policy_name: str,
    episodes: int,
    width: int = 25,
    height: int = 25,
    max_steps: int = 1000,
    apple_strategy: str = "enumerate",
    seed: int | None = None,
    show_progress: bool = True,
) -> list[float]:
    """Play `episodes` games with one policy and return the final lengths."""
    if episodes <= 0:
        raise ValueError("episodes must be > 0")
    if policy_name not in POLICIES:
        raise ValueError(f"Unknown policy: {policy_name}")

    policy = POLICIES[policy_name]
    game = make_game(width, height, apple_strategy=apple_strategy, seed=seed)
    lengths: list[float] = []
    for episode in range(1, episodes + 1):
        result = run_episode(game, policy, max_steps=max_steps)
        lengths.append(float(result.length))
        logger.debug(
            "%s episode %d: length=%d apples=%d steps=%d died=%s",
            policy_name, episode, result.length, result.apples, result.steps, result.died,
        )
        if show_progress and (episode % 10 == 0 or episode == episodes):
            _print_progress_bar(episode, episodes, policy_name)
    if show_progress:
        print()
    return lengths


def print_comparison(results: dict[str, list[float]]) -> None:
    names = list(results)
    stats = {name: summarize(values) for name, values in results.items()}
    width = 22 + 15 * len(names)

    print("=" * width)
    print("COMPARISON RESULTS")
    print("=" * width)
    print(f"{'Metric':<22}" + "".join(f"{name:>15}" for name in names))
    print("-" * width)
    for metric in stats[names[0]]:
        print(f"{metric:<22}" + "".join(f"{stats[name][metric]:>15.2f}" for name in names))
    print("=" * width)

    if len(names) > 1:
        means = {name: stats[name]["Mean length"] for name in names}
        best = max(means, key=means.get)
        print(f"Best mean length: {best} ({means[best]:.2f})")


def plot_results(results: dict[str, list[float]], save_path: str | None = None, show: bool = True) -> None:
    fig, (ax_trend, ax_hist) = plt.subplots(1, 2, figsize=(12, 4.5))

    ax_trend.set_title("Final Length (Average per 10 Episodes)")
    ax_trend.set_xlabel("Episode")
    ax_trend.set_ylabel("Length")
    ax_trend.grid(alpha=0.25)

    ax_hist.set_title("Final Length Distribution")
    ax_hist.set_xlabel("Length")
    ax_hist.set_ylabel("Count")
    ax_hist.grid(alpha=0.2)

    max_length = int(max(max(values) for values in results.values()))
    bins = np.arange(0.5, max_length + 1.5, 1.0)
    for name, values in results.items():
        x10, mean10 = chunked_mean(values, chunk_size=10)
        if x10.size > 0:
            ax_trend.plot(x10, mean10, linewidth=2.0, marker="o", markersize=3, label=name)
        ax_hist.hist(values, bins=bins, alpha=0.6, label=name)  # type: ignore

    ax_trend.legend(loc="upper left")
    ax_hist.legend(loc="upper right")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path)
        print(f"Saved plot to: {save_path}")
    if show:
        plt.show()
    plt.close(fig)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare scripted Snake policies without a window")
    parser.add_argument(
        "--policy",
        nargs="+",
        choices=sorted(POLICIES),
        default=["greedy", "random"],
        help="Policies to run",
    )
    parser.add_argument("--episodes", type=int, default=100, help="Number of episodes per policy")
    parser.add_argument("--width", type=int, default=25, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=25, help="Grid height in cells")
    parser.add_argument("--max-steps", type=int, default=1000, help="Step cap per episode")
    parser.add_argument("--apple-strategy", choices=APPLE_STRATEGIES, default="enumerate")
    parser.add_argument("--seed", type=int, default=None, help="Seed shared by every policy's game")
    parser.add_argument("--plot", action="store_true", help="Show a matplotlib trend + histogram")
    parser.add_argument("--save-plot", default=None, help="Write the figure to this path")
    parser.add_argument("--verbose", action="store_true", help="Log every episode")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.episodes <= 0:
        raise SystemExit("--episodes must be > 0.")
    if args.max_steps <= 0:
        raise SystemExit("--max-steps must be > 0.")

    print(f"Running {args.episodes} episodes on a {args.width}x{args.height} grid...")
    results: dict[str, list[float]] = {}
    try:
        for name in dict.fromkeys(args.policy):
            results[name] = simulate_policy(
                name,
                args.episodes,
                width=args.width,
                height=args.height,
                max_steps=args.max_steps,
                apple_strategy=args.apple_strategy,
                seed=args.seed,
            )
    except ValueError as exc:
        raise SystemExit(f"Invalid settings: {exc}")

    print_comparison(results)
    if args.plot or args.save_plot:
        plot_results(results, save_path=args.save_plot, show=args.plot)


if __name__ == "__main__":
    main()
