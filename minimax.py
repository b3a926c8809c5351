"""Minimax next-guess selection (Knuth's worst-case rule).

Each possible guess partitions the remaining candidates by the score it
would receive.  The best guess is the one whose largest partition is
smallest.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from codespace import Code
from mastermind_env import Score, feedback


def partition_sizes(guess: Code, candidates: Iterable[Code]) -> Counter[Score]:
    """Histogram of scores *guess* would get against each candidate."""
    return Counter(feedback(guess, c) for c in candidates)


def worst_case(guess: Code, candidates: Iterable[Code]) -> int:
    """Size of the largest feedback class *guess* leaves behind."""
    sizes = partition_sizes(guess, candidates)
    return max(sizes.values()) if sizes else 0


def select_next(candidates: Sequence[Code], untried: Iterable[Code]) -> Code:
    """Return the untried guess minimising the worst-case remaining candidates.

    *untried* must be in universe order.  On a tie the incumbent is only
    replaced when it can no longer be the secret and the challenger can.
    """
    if not candidates:
        raise ValueError("candidate set is empty")

    candidate_set = set(candidates)
    best_guess: Code | None = None
    best_worst = 0
    best_is_cand = False

    for g in untried:
        worst = worst_case(g, candidates)
        is_cand = g in candidate_set
        if best_guess is None or worst < best_worst or (
            worst == best_worst and is_cand and not best_is_cand
        ):
            best_worst = worst
            best_guess = g
            best_is_cand = is_cand

    if best_guess is None:
        raise ValueError("no untried guesses left")
    return best_guess
