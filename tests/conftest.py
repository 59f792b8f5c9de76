"""
Pytest configuration and fixtures shared by the agent and match tests.

Provides explicit game trees for search tests and heuristics that record
how often they are called.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from _01_simulator.game import Game, Player
from _01_simulator.randomness import Randomness


@dataclass(frozen=True, eq=False)
class TreeGame(Game):
    """Game given as an explicit tree.

    Inner nodes are `(player, {move: child})` tuples, leaves are result dicts.
    """

    tree: Any
    roles: tuple[Player, ...] = ("A", "B", "C")
    name = "TreeGame"

    @property
    def players(self) -> tuple[Player, ...]:
        return self.roles

    @property
    def active_players(self) -> tuple[Player, ...]:
        return () if isinstance(self.tree, dict) else (self.tree[0],)

    def moves(self) -> dict[Player, list[Any]] | None:
        if isinstance(self.tree, dict):
            return None
        player, children = self.tree
        return {player: list(children)}

    def next(self, moves: Mapping[Player, Any]) -> TreeGame:
        player, children = self.tree
        return TreeGame(children[moves[player]], self.roles)

    def result(self) -> dict[Player, float] | None:
        return dict(self.tree) if isinstance(self.tree, dict) else None


@dataclass(frozen=True, eq=False)
class StuckGame(Game):
    """Unfinished game whose active player has no moves."""

    name = "StuckGame"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("A", "B")

    @property
    def active_players(self) -> tuple[Player, ...]:
        return ("A",)

    def moves(self) -> dict[Player, list[Any]] | None:
        return {"A": []}

    def next(self, moves: Mapping[Player, Any]) -> StuckGame:
        return self

    def result(self) -> dict[Player, float] | None:
        return None


class CountingHeuristic:
    """Constant heuristic that counts its calls."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.calls = 0

    def __call__(self, game: Game, player: Player) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def rng():
    """Seeded randomness source."""
    return Randomness(seed=12345)


@pytest.fixture
def counting_heuristic():
    return CountingHeuristic()


@pytest.fixture
def three_player_tree():
    """A moves first; the branch with A's best leaf is not the one A gets.

    After `x`, B prefers `p` (B=2) over `q` (B=1), leaving A with 1.
    After `y`, A gets 3, so MaxN makes A play `y`.
    """
    return TreeGame(
        (
            "A",
            {
                "x": ("B", {"p": {"A": 1, "B": 2, "C": 0}, "q": {"A": 5, "B": 1, "C": 3}}),
                "y": {"A": 3, "B": 0, "C": 0},
            },
        )
    )
