"""Tests for peg scoring and candidate filtering.

Property tests use Hypothesis to check the scoring invariants over random
codes: symmetry, the peg bound and self-match.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from codespace import GameConfig, generate_codes
from mastermind_env import Score, feedback, filter_candidates


def codes(length=4, colours=6):
    return st.lists(
        st.integers(min_value=1, max_value=colours),
        min_size=length, max_size=length,
    ).map(tuple)


# ── Known scores ───────────────────────────────────────────


@pytest.mark.parametrize("secret, guess, expected", [
    ((3, 4, 5, 6), (1, 1, 2, 2), (0, 0)),
    ((1, 1, 2, 3), (1, 1, 2, 2), (3, 0)),
    ((2, 2, 1, 1), (1, 1, 2, 2), (0, 4)),
    ((1, 1, 2, 2), (1, 2, 1, 3), (1, 2)),
    ((1, 2, 3, 4), (4, 3, 2, 1), (0, 4)),
    ((6, 6, 6, 1), (1, 6, 6, 6), (2, 2)),
    ((1, 1, 1, 1), (1, 2, 2, 2), (1, 0)),
])
def test_known_scores(secret, guess, expected):
    assert feedback(secret, guess) == expected


def test_score_fields():
    s = feedback((1, 1, 2, 3), (1, 1, 2, 2))
    assert isinstance(s, Score)
    assert s.exact == 3
    assert s.partial == 0


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        feedback((1, 2, 3), (1, 2, 3, 4))


# ── Properties ─────────────────────────────────────────────


@given(a=codes(), b=codes())
@settings(max_examples=300)
def test_symmetry(a, b):
    assert feedback(a, b) == feedback(b, a)


@given(a=codes(), b=codes())
@settings(max_examples=300)
def test_peg_bound(a, b):
    exact, partial = feedback(a, b)
    assert exact >= 0 and partial >= 0
    assert exact + partial <= len(a)


@given(a=codes(length=5, colours=8))
def test_self_match(a):
    assert feedback(a, a) == (len(a), 0)


@given(a=codes(), b=codes())
def test_pegs_match_common_digit_count(a, b):
    exact, partial = feedback(a, b)
    common = sum(min(a.count(d), b.count(d)) for d in set(a))
    assert exact + partial == common


# ── Filtering ──────────────────────────────────────────────


def test_filter_small_board():
    universe = generate_codes(GameConfig(2, 3, True))
    kept = filter_candidates(universe, (1, 2), (1, 0))
    assert kept == [(1, 1), (1, 3), (2, 2), (3, 2)]


def test_filter_drops_guess_even_on_solved_score():
    universe = generate_codes(GameConfig(2, 3, True))
    assert filter_candidates(universe, (1, 2), (2, 0)) == []


def test_filter_does_not_mutate_input():
    universe = generate_codes(GameConfig(3, 3, True))
    before = list(universe)
    filter_candidates(universe, (1, 1, 2), (0, 1))
    assert universe == before


@given(secret=codes(3, 4), guess=codes(3, 4))
def test_filter_keeps_secret(secret, guess):
    universe = generate_codes(GameConfig(3, 4, True))
    score = feedback(secret, guess)
    kept = filter_candidates(universe, guess, score)
    assert guess not in kept
    if secret != guess:
        assert secret in kept
