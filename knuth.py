#!/usr/bin/env python3
"""Build Knuth's minimax strategy tree for Mastermind.

Plays one deterministic game per possible secret, printing each row, then
prints the merged strategy as an indented outline.

Usage:
    python3 knuth.py                        # 4 pegs, 6 colours, repeats
    python3 knuth.py --no-repeats           # 360-code variant (opens 1234)
    python3 knuth.py --digits 3 --symbols 4 # small board
    python3 knuth.py --secret 3456          # solve one secret only
    python3 knuth.py --quiet --json results/tree.json --plot results/dist.png
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from codespace import GameConfig, build_codespace, format_code, parse_code
from experiment import plot_distribution, print_experiment_summary, run_experiment, summarize
from solver import SolveStep, build_strategy, solve
from strategy_tree import depth, node_count, render_tree, save_tree_json


def _print_step(step: SolveStep) -> None:
    print(f"{step.row}: {format_code(step.guess)} : "
          f"B{step.score.exact} W{step.score.partial}")


def _print_solution(secret) -> None:
    print(f"Solution: {format_code(secret)}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Knuth minimax strategy for Mastermind",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python3 knuth.py                          # classic 4x6 board with repeats
  python3 knuth.py --no-repeats             # no repeated colours
  python3 knuth.py --secret 1123            # trace a single game
  python3 knuth.py --quiet --no-tree        # summary only
""")
    parser.add_argument("--digits", type=int, default=4,
                        help="Pegs per code (default: 4)")
    parser.add_argument("--symbols", type=int, default=6,
                        help="Colours / digits available (default: 6)")
    parser.add_argument("--no-repeats", action="store_true",
                        help="Disallow repeated digits within a code")
    parser.add_argument("--secret", type=str, default=None,
                        help="Solve only this secret and print its trace")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not print per-row progress")
    parser.add_argument("--no-tree", action="store_true",
                        help="Do not print the strategy outline")
    parser.add_argument("--json", type=str, default=None,
                        help="Save the strategy tree as JSON")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a guess-count histogram to this path")
    args = parser.parse_args(argv)

    try:
        config = GameConfig(
            digits_in_code=args.digits,
            digits_possible=args.symbols,
            repeats=not args.no_repeats,
        )
    except ValueError as exc:
        parser.error(str(exc))

    space = build_codespace(config)

    if args.secret is not None:
        try:
            secret = parse_code(args.secret, config)
        except ValueError as exc:
            parser.error(str(exc))
        _print_solution(secret)
        solve(secret, space, on_step=_print_step)
        return

    print(f"Codes: {len(space)} ({config.digits_in_code} pegs, "
          f"{config.digits_possible} colours, "
          f"repeats {'on' if config.repeats else 'off'})", file=sys.stderr)
    print(f"Opening guess: {format_code(space.first_guess)}", file=sys.stderr)

    t0 = time.time()
    if args.quiet:
        root = build_strategy(space)
    else:
        root = build_strategy(
            space,
            on_solution=_print_solution,
            on_step=_print_step,
            on_done=lambda secret, trace: print(),
        )
    elapsed = time.time() - t0

    if not args.no_tree:
        for line in render_tree(root):
            print(line)

    print(f"\nTree: {node_count(root)} nodes, depth {depth(root)} "
          f"[{elapsed:.1f}s]", file=sys.stderr)

    logs = run_experiment(root, space)
    print_experiment_summary(logs)

    config_dict = {
        "digits_in_code": config.digits_in_code,
        "digits_possible": config.digits_possible,
        "repeats": config.repeats,
        "first_guess": format_code(space.first_guess),
    }
    if args.json:
        save_tree_json(root, args.json, config=config_dict)
        print(f"JSON saved to {args.json}")
        summary_path = Path(args.json).with_suffix(".summary.json")
        summary_path.write_text(
            json.dumps({"config": config_dict, "summary": summarize(logs)},
                       indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        print(f"Summary saved to {summary_path}")

    if args.plot:
        plot_distribution(logs, Path(args.plot))


if __name__ == "__main__":
    main()
