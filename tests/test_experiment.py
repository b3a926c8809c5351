"""Tests for the environment, tree replay and summaries."""

import pytest

from experiment import TreePlayer, plot_distribution, run_experiment, summarize
from mastermind_env import MastermindEnv
from solver import solve


# ── Environment ────────────────────────────────────────────


def test_env_plays_a_game(small_space):
    env = MastermindEnv(small_space, max_guesses=3)
    env.reset((1, 2, 3))
    assert env.guess((1, 1, 2)) == (1, 1)
    assert not env.is_solved()
    assert env.guess((1, 2, 3)) == (3, 0)
    assert env.is_solved()
    assert env.game_over()
    assert env.history == [((1, 1, 2), (1, 1)), ((1, 2, 3), (3, 0))]


def test_env_requires_reset(small_space):
    env = MastermindEnv(small_space)
    with pytest.raises(RuntimeError):
        env.guess((1, 1, 1))


def test_env_rejects_illegal_codes(small_space):
    env = MastermindEnv(small_space)
    with pytest.raises(ValueError):
        env.reset((5, 5, 5))
    env.reset((1, 1, 1))
    with pytest.raises(ValueError):
        env.guess((1, 1))


def test_env_guess_limit(small_space):
    env = MastermindEnv(small_space, max_guesses=1)
    env.reset((4, 4, 4))
    env.guess((1, 1, 1))
    assert env.game_over()
    assert not env.is_solved()
    with pytest.raises(RuntimeError):
        env.guess((4, 4, 4))


# ── Replay ─────────────────────────────────────────────────


def test_tree_player_follows_tree(small_space, small_tree):
    player = TreePlayer(small_tree)
    assert player.guess([]) == small_space.first_guess
    trace = solve((2, 4, 1), small_space)
    history = [(s.guess, s.score) for s in trace[:1]]
    assert player.guess(history) == trace[1].guess


def test_run_experiment_solves_everything(small_space, small_tree):
    logs = run_experiment(small_tree, small_space)
    assert len(logs) == len(small_space)
    assert all(g["solved"] for g in logs)
    for g in logs:
        assert g["steps"][-1]["guess"] == g["secret"]
        assert g["steps"][-1]["remaining"] == 0
        remaining = [s["remaining"] for s in g["steps"]]
        assert remaining == sorted(remaining, reverse=True)


def test_replay_matches_solver(small_space, small_tree):
    secrets = [(3, 3, 1), (2, 4, 4)]
    logs = run_experiment(small_tree, small_space, secrets=secrets)
    for secret, log in zip(secrets, logs):
        assert log["num_guesses"] == len(solve(secret, small_space))


def test_summarize():
    logs = [
        {"solved": True, "num_guesses": 3},
        {"solved": True, "num_guesses": 5},
        {"solved": True, "num_guesses": 3},
        {"solved": False, "num_guesses": 6},
    ]
    s = summarize(logs)
    assert s["games"] == 4
    assert s["solved"] == 3
    assert s["max_guesses"] == 6
    assert s["total_guesses"] == 17
    assert s["mean_guesses"] == 4.25
    assert s["guess_distribution"] == {"3": 2, "5": 1}


def test_summarize_empty():
    assert summarize([])["games"] == 0


def test_plot_distribution(tmp_path):
    pytest.importorskip("matplotlib")
    out = tmp_path / "dist.png"
    plot_distribution([{"num_guesses": 2}, {"num_guesses": 3}], out)
    assert out.exists()
