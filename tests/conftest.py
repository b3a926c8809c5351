"""Shared pytest fixtures for knuth-mastermind tests."""

import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parents[1]))

from codespace import GameConfig, build_codespace
from solver import build_strategy


@pytest.fixture(scope="session")
def small_space():
    """3 pegs, 4 colours, repeats: 64 codes."""
    return build_codespace(GameConfig(digits_in_code=3, digits_possible=4, repeats=True))


@pytest.fixture(scope="session")
def small_tree(small_space):
    return build_strategy(small_space)


@pytest.fixture(scope="session")
def classic_space():
    return build_codespace(GameConfig())


@pytest.fixture(scope="session")
def classic_tree(classic_space):
    """The full 1296-secret strategy; built once per session."""
    return build_strategy(classic_space)
