"""Uniform random baseline agent."""
from __future__ import annotations

from typing import Any

from _01_simulator.game import Game, Player

from .base import Agent


class RandomAgent(Agent):
    """Agent that samples uniformly from the available legal moves."""

    def decision(self, game: Game, player: Player) -> Any:
        return self.rng.choice(self.moves_for(game, player))


__all__ = ["RandomAgent"]
