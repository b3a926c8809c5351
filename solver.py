"""Play Knuth's minimax game for every secret and merge the traces into one tree.

Each game starts from the opening guess with the whole universe as
candidates.  After every score the candidates are pruned and the next
guess is picked by the minimax rule, until the secret is hit.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from codespace import Code, CodeSpace
from mastermind_env import Score, feedback, filter_candidates, is_solved_score
from minimax import select_next
from strategy_tree import StrategyNode


class SolveStep(NamedTuple):
    row: int
    guess: Code
    score: Score


StepCallback = Callable[[SolveStep], None]


def solve(
    secret: Code,
    space: CodeSpace,
    root: StrategyNode | None = None,
    recompute: bool = False,
    max_rows: int | None = None,
    on_step: StepCallback | None = None,
) -> list[SolveStep]:
    """Play one full game against *secret* and extend the tree under *root*.

    When the tree already holds a guess for the current feedback history
    that guess is played directly; games are deterministic so the selector
    would pick the same one.  With ``recompute=True`` the selector runs
    anyway and a mismatch raises ``AssertionError``.

    Returns the ``(row, guess, score)`` trace.
    """
    if root is None:
        root = StrategyNode(space.first_guess)
    elif root.guess != space.first_guess:
        raise ValueError(
            f"tree root {root.guess} does not match opening guess {space.first_guess}"
        )
    if max_rows is None:
        max_rows = len(space)

    n = space.config.digits_in_code
    guess = space.first_guess
    candidates = list(space.codes)
    untried = list(space.codes)
    node = root
    row = 1
    trace: list[SolveStep] = []

    while True:
        untried.remove(guess)
        score = feedback(secret, guess)
        step = SolveStep(row, guess, score)
        trace.append(step)
        if on_step is not None:
            on_step(step)

        if is_solved_score(score, n):
            return trace

        candidates = filter_candidates(candidates, guess, score)

        known = node.child(score)
        if known is None or recompute:
            guess = select_next(candidates, untried)
            if known is not None and known.guess != guess:
                raise AssertionError(
                    f"row {row + 1}: tree holds {known.guess} but selector chose {guess}"
                )
        else:
            guess = known.guess

        node = node.add_guess(score, guess)
        row += 1
        if row > max_rows:
            raise RuntimeError(
                f"secret {secret} not solved within {max_rows} rows"
            )


def build_strategy(
    space: CodeSpace,
    on_solution: Callable[[Code], None] | None = None,
    on_step: StepCallback | None = None,
    on_done: Callable[[Code, list[SolveStep]], None] | None = None,
) -> StrategyNode:
    """Solve every secret in universe order and return the shared tree root.

    Runs are sequential: later secrets reuse the nodes earlier ones created.
    """
    root = StrategyNode(space.first_guess)
    for secret in space.codes:
        if on_solution is not None:
            on_solution(secret)
        trace = solve(secret, space, root, on_step=on_step)
        if on_done is not None:
            on_done(secret, trace)
    return root
