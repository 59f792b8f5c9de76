"""Base agent interface and type definitions."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Union

from _01_simulator.exceptions import NoLegalMovesError
from _01_simulator.game import Game, Player
from _01_simulator.randomness import Randomness, resolve_rng

Decision = Union[Any, Awaitable[Any]]
AgentFn = Callable[[Game, Player], Decision]


class Agent(ABC):
    """Abstract base class for agents that decide moves in turn-based games.

    Agents keep no per-game state: one instance may play several games, and
    several decisions at once.
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        rng: Randomness | None = None,
        seed: int | None = None,
    ) -> None:
        self._name = name
        self.rng = resolve_rng(rng, seed)

    @abstractmethod
    def decision(self, game: Game, player: Player) -> Decision:
        """Select one of the moves `player` can make in `game`.

        Args:
            game: The current game state.
            player: The player the decision is made for.

        Returns:
            The selected move, or an awaitable resolving to it.
        """
        ...

    def __call__(self, game: Game, player: Player) -> Decision:
        """Make the agent callable to satisfy AgentFn interface."""
        return self.decision(game, player)

    def is_compatible_with(self, game: Game) -> bool:
        """Whether this agent can play `game`. Every game by default."""
        return True

    def moves_for(self, game: Game, player: Player) -> list[Any]:
        """Legal moves of `player` in `game`.

        Raises:
            NoLegalMovesError: If the game has ended or the player cannot move.
        """
        moves = game.moves()
        if not moves or not moves.get(player):
            raise NoLegalMovesError(player)
        return list(moves[player])

    @property
    def name(self) -> str:
        """Return the agent's name for display purposes."""
        return self._name or self.__class__.__name__

    def __str__(self) -> str:
        return self.name


async def resolve_decision(agent: Agent, game: Game, player: Player) -> Any:
    """Await the agent's decision if it is deferred, for asynchronous drivers."""
    decision = agent.decision(game, player)
    if inspect.isawaitable(decision):
        return await decision
    return decision


__all__ = ["Agent", "AgentFn", "Decision", "resolve_decision"]
