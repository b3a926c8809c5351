"""Shared decision tree of guesses keyed by feedback score.

The root holds the opening guess.  Each edge is labelled by the score the
parent's guess received; the child holds the guess to play next.  Every
secret's game walks the same tree, so identical feedback histories share
nodes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Iterator

from codespace import Code, format_code
from mastermind_env import Score


class StrategyNode:
    """One guess in the strategy, with a child per observed score."""

    __slots__ = ("guess", "children")

    def __init__(self, guess: Code) -> None:
        self.guess: Code = tuple(guess)
        self.children: dict[Score, StrategyNode] = {}

    def __repr__(self) -> str:
        return f"StrategyNode({format_code(self.guess)}, children={len(self.children)})"

    def add_guess(self, score: Score | tuple[int, int], guess: Code) -> StrategyNode:
        """Return the child under *score*, creating it with *guess* if absent."""
        score = Score(*score)
        node = self.children.get(score)
        if node is None:
            node = StrategyNode(guess)
            self.children[score] = node
        return node

    def child(self, score: Score | tuple[int, int]) -> StrategyNode | None:
        return self.children.get(Score(*score))

    def ordered_children(self) -> list[tuple[Score, StrategyNode]]:
        """Children with most exact, then most partial pegs first."""
        return sorted(
            self.children.items(),
            key=lambda kv: (-kv[0].exact, -kv[0].partial),
        )

    def follow(self, scores: Iterable[Score | tuple[int, int]]) -> StrategyNode:
        """Descend along a sequence of scores.

        Raises
        ------
        KeyError
            If the tree has no branch for some score in the sequence.
        """
        node = self
        for score in scores:
            nxt = node.child(score)
            if nxt is None:
                raise KeyError(
                    f"no branch for score {tuple(score)} under guess "
                    f"{format_code(node.guess)}"
                )
            node = nxt
        return node


# ------------------------------------------------------------------
# Traversal
# ------------------------------------------------------------------

def walk(root: StrategyNode) -> Iterator[tuple[int, Score | None, StrategyNode]]:
    """Depth-first ``(depth, incoming score, node)`` in canonical child order."""
    stack: list[tuple[int, Score | None, StrategyNode]] = [(0, None, root)]
    while stack:
        depth, score, node = stack.pop()
        yield depth, score, node
        for child_score, child in reversed(node.ordered_children()):
            stack.append((depth + 1, child_score, child))


def node_count(root: StrategyNode) -> int:
    return sum(1 for _ in walk(root))


def depth(root: StrategyNode) -> int:
    """Number of guesses on the longest path (the root alone counts as 1)."""
    return max(d for d, _, _ in walk(root)) + 1


# ------------------------------------------------------------------
# Output
# ------------------------------------------------------------------

def render_tree(root: StrategyNode) -> list[str]:
    """Indented outline: the root guess, then ``B#W# guess`` per child."""
    lines: list[str] = []
    for d, score, node in walk(root):
        if score is None:
            lines.append(format_code(node.guess))
        else:
            indent = "\t" * d
            lines.append(
                f"{indent}B{score.exact}W{score.partial} {format_code(node.guess)}"
            )
    return lines


def tree_to_dict(node: StrategyNode) -> dict:
    """Nested dict for JSON export; children keyed by ``"B#W#"``."""
    return {
        "guess": format_code(node.guess),
        "children": {
            f"B{score.exact}W{score.partial}": tree_to_dict(child)
            for score, child in node.ordered_children()
        },
    }


def save_tree_json(root: StrategyNode, path: str | Path, config: dict | None = None) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "config": config or {},
        "nodes": node_count(root),
        "depth": depth(root),
        "tree": tree_to_dict(root),
    }
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
