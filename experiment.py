"""Replay a strategy tree against every secret and report how it performs."""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

from codespace import Code, CodeSpace, format_code
from mastermind_env import MastermindEnv, Score, filter_candidates
from strategy_tree import StrategyNode

RESULTS_DIR = Path(__file__).resolve().parent / "results"


class TreePlayer:
    """Plays by looking up the next guess in a precomputed strategy tree."""

    def __init__(self, root: StrategyNode) -> None:
        self._root = root

    def guess(self, history: list[tuple[Code, Score]]) -> Code:
        node = self._root.follow(score for _, score in history)
        return node.guess


def run_experiment(
    root: StrategyNode,
    space: CodeSpace,
    secrets: list[Code] | None = None,
    max_guesses: int | None = None,
    verbose: bool = False,
) -> list[dict]:
    """Play the tree against each secret (all of them by default)."""
    if secrets is None:
        secrets = list(space.codes)
    if max_guesses is None:
        max_guesses = len(space)

    player = TreePlayer(root)
    env = MastermindEnv(space, max_guesses=max_guesses)
    logs: list[dict] = []

    for i, secret in enumerate(secrets, 1):
        env.reset(secret)
        candidates = list(space.codes)
        game_log: list[dict] = []

        if verbose:
            print(f"\n--- Game {i}/{len(secrets)} | Secret: {format_code(secret)} ---")

        while not env.game_over():
            code = player.guess(env.history)
            score = env.guess(code)
            if not env.is_solved():
                candidates = filter_candidates(candidates, code, score)
            step = {
                "guess": format_code(code),
                "feedback": list(score),
                "remaining": 0 if env.is_solved() else len(candidates),
            }
            game_log.append(step)

            if verbose:
                print(f"  Guess {len(game_log)}: {format_code(code)}  "
                      f"B{score.exact} W{score.partial}  "
                      f"remaining={step['remaining']}")

        logs.append({
            "game": i,
            "secret": format_code(secret),
            "solved": env.is_solved(),
            "num_guesses": len(env.history),
            "steps": game_log,
        })

    return logs


def summarize(logs: list[dict]) -> dict:
    n = len(logs)
    solved = sum(1 for g in logs if g["solved"])
    guesses = [g["num_guesses"] for g in logs]
    dist = Counter(g["num_guesses"] for g in logs if g["solved"])
    return {
        "games": n,
        "solved": solved,
        "mean_guesses": round(sum(guesses) / n, 4) if n else 0,
        "max_guesses": max(guesses) if guesses else 0,
        "total_guesses": sum(guesses),
        "guess_distribution": {str(k): dist[k] for k in sorted(dist)},
    }


def print_experiment_summary(logs: list[dict]) -> None:
    s = summarize(logs)
    n = s["games"]
    print(f"\n=== Knuth minimax — {n} games ===")
    if not n:
        return
    print(f"  Solved: {s['solved']}/{n} ({100 * s['solved'] / n:.1f}%)")
    print(f"  Guesses — mean: {s['mean_guesses']:.3f}, max: {s['max_guesses']}, "
          f"total: {s['total_guesses']}")
    for k, v in s["guess_distribution"].items():
        print(f"    {k}: {v}")


def plot_distribution(logs: list[dict], path: Path | None = None) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("[warn] matplotlib not installed — skipping plot", file=sys.stderr)
        return

    guesses = [g["num_guesses"] for g in logs]
    mx = max(guesses) if guesses else 5
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(guesses, bins=bins, edgecolor="black", align="left")
    ax.set_title("Knuth minimax — guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Secrets")
    fig.tight_layout()

    dest = path or RESULTS_DIR / "guess_distribution.png"
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {dest}")
