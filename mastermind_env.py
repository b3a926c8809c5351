"""Mastermind environment: peg scoring, candidate pruning and a single game."""

from __future__ import annotations

from typing import Iterable, NamedTuple

from codespace import Code, CodeSpace


class Score(NamedTuple):
    """Feedback for one guess.

    ``exact`` counts right digit in the right place (black pegs);
    ``partial`` counts right digit in the wrong place among what is left
    (white pegs).
    """
    exact: int
    partial: int


def feedback(a: Code, b: Code) -> Score:
    """Return the peg score of *a* against *b*.

    Symmetric: ``feedback(guess, secret) == feedback(secret, guess)``.
    """
    n = len(a)
    if len(b) != n:
        raise ValueError(f"code lengths differ ({n} != {len(b)})")

    left: list[int | None] = list(a)
    right: list[int | None] = list(b)

    # Pass 1 – exact matches
    exact = 0
    for i in range(n):
        if left[i] == right[i]:
            exact += 1
            left[i] = None
            right[i] = None

    # Pass 2 – partial matches, first free match left to right
    partial = 0
    for i in range(n):
        if left[i] is None:
            continue
        for j in range(n):
            if right[j] is not None and left[i] == right[j]:
                partial += 1
                left[i] = None
                right[j] = None
                break

    if exact + partial > n:
        raise AssertionError(
            f"feedback({a}, {b}) gave {exact}+{partial} pegs for {n} positions"
        )
    return Score(exact, partial)


def filter_candidates(
    candidates: Iterable[Code],
    guess: Code,
    observed: Score | tuple[int, int],
) -> list[Code]:
    """Keep only candidates consistent with the *observed* score.

    The guess itself is always dropped: a played guess is never offered again.
    """
    return [c for c in candidates if c != guess and feedback(guess, c) == observed]


def is_solved_score(score: Score | tuple[int, int], digits_in_code: int) -> bool:
    return score[0] == digits_in_code


class MastermindEnv:
    """A single Mastermind game against a fixed secret.

    Parameters
    ----------
    space : CodeSpace
        The universe of legal codes; secrets and guesses must belong to it.
    max_guesses : int or None
        Maximum allowed guesses before the game is lost (None = unlimited).
    """

    def __init__(self, space: CodeSpace, max_guesses: int | None = None) -> None:
        self._space = space
        self._codes = frozenset(space.codes)
        self._max_guesses = max_guesses

        # Game state (set by reset)
        self._secret: Code | None = None
        self._history: list[tuple[Code, Score]] = []
        self._solved = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reset(self, secret: Code) -> None:
        """Start a new game against *secret*."""
        secret = tuple(secret)
        if secret not in self._codes:
            raise ValueError(f"secret {secret} is not a legal code")
        self._secret = secret
        self._history = []
        self._solved = False

    def guess(self, code: Code) -> Score:
        """Submit a guess and receive its score.

        Raises
        ------
        RuntimeError
            If no game is in progress or the game is over.
        ValueError
            If *code* is not a legal code.
        """
        if self._secret is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        code = tuple(code)
        if code not in self._codes:
            raise ValueError(f"{code} is not a legal code")

        score = feedback(self._secret, code)
        self._history.append((code, score))
        if is_solved_score(score, self._space.config.digits_in_code):
            self._solved = True
        return score

    def is_solved(self) -> bool:
        return self._solved

    def game_over(self) -> bool:
        if self._solved:
            return True
        return (self._max_guesses is not None
                and len(self._history) >= self._max_guesses)

    @property
    def history(self) -> list[tuple[Code, Score]]:
        return list(self._history)

    @property
    def max_guesses(self) -> int | None:
        return self._max_guesses
