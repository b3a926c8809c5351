"""Code-space utilities: configuration and enumeration of every legal code.

A code is a tuple of small integers, one per peg, each in
``1..digits_possible``.  Digit 0 is never used.
"""

from __future__ import annotations

from dataclasses import dataclass


Code = tuple[int, ...]

# Digits are printed as a compact decimal string ("1122").
MAX_DIGITS_POSSIBLE = 9

_REPEATS_OPENING = (1, 1, 2, 2)


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------

@dataclass(frozen=True)
class GameConfig:
    """Everything that determines the universe, the first guess and the search.

    Attributes
    ----------
    digits_in_code : int
        Number of pegs in a code.
    digits_possible : int
        Alphabet size; digits run from 1 to this value.
    repeats : bool
        If True, a code may use the same digit more than once.
    """

    digits_in_code: int = 4
    digits_possible: int = 6
    repeats: bool = True

    def __post_init__(self) -> None:
        if self.digits_in_code <= 0:
            raise ValueError(
                f"digits_in_code must be positive, got {self.digits_in_code}"
            )
        if not 0 < self.digits_possible <= MAX_DIGITS_POSSIBLE:
            raise ValueError(
                f"digits_possible must be in 1..{MAX_DIGITS_POSSIBLE}, "
                f"got {self.digits_possible}"
            )
        if not self.repeats and self.digits_possible < self.digits_in_code:
            raise ValueError(
                f"Without repeats, digits_possible ({self.digits_possible}) "
                f"must be >= digits_in_code ({self.digits_in_code})"
            )


@dataclass(frozen=True)
class CodeSpace:
    """The sorted universe of codes plus the fixed opening guess."""
    config: GameConfig
    codes: tuple[Code, ...]
    first_guess: Code

    def __len__(self) -> int:
        return len(self.codes)


# ------------------------------------------------------------------
# Enumeration
# ------------------------------------------------------------------

def generate_codes(config: GameConfig) -> list[Code]:
    """Return every legal code for *config*, sorted ascending."""
    codes: list[Code] = []

    def add_digit(prefix: list[int]) -> None:
        if len(prefix) == config.digits_in_code:
            codes.append(tuple(prefix))
            return
        for digit in range(1, config.digits_possible + 1):
            if not config.repeats and digit in prefix:
                continue
            prefix.append(digit)
            add_digit(prefix)
            prefix.pop()

    add_digit([])
    codes.sort()
    return codes


def first_guess(config: GameConfig) -> Code:
    """Canonical opening guess for *config*.

    With repeats this is ``1122`` cycled to the code length; without repeats
    it is ``1234...``.  Digits are clamped to the alphabet so that tiny
    alphabets still get a legal code.
    """
    n = config.digits_in_code
    if config.repeats:
        pattern = [_REPEATS_OPENING[i % len(_REPEATS_OPENING)] for i in range(n)]
    else:
        pattern = list(range(1, n + 1))
    return tuple(min(d, config.digits_possible) for d in pattern)


def build_codespace(config: GameConfig | None = None) -> CodeSpace:
    """Enumerate the universe for *config* (defaults: 4 pegs, 6 colours, repeats)."""
    if config is None:
        config = GameConfig()
    return CodeSpace(
        config=config,
        codes=tuple(generate_codes(config)),
        first_guess=first_guess(config),
    )


# ------------------------------------------------------------------
# Text conversion
# ------------------------------------------------------------------

def format_code(code: Code) -> str:
    return "".join(str(d) for d in code)


def parse_code(text: str, config: GameConfig | None = None) -> Code:
    """Parse a digit string such as ``"1122"`` into a code.

    If *config* is given the result is validated against it.
    """
    text = text.strip()
    if not text.isdigit():
        raise ValueError(f"code must be a string of digits, got {text!r}")
    code = tuple(int(ch) for ch in text)
    if config is not None:
        if len(code) != config.digits_in_code:
            raise ValueError(
                f"code length ({len(code)}) != digits_in_code "
                f"({config.digits_in_code})"
            )
        bad = [d for d in code if not 1 <= d <= config.digits_possible]
        if bad:
            raise ValueError(
                f"digits out of range 1..{config.digits_possible}: {bad}"
            )
        if not config.repeats and len(set(code)) != len(code):
            raise ValueError(f"{text!r} repeats a digit but repeats are disabled")
    return code
