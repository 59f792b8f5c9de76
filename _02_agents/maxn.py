"""MaxN search agent.

MaxN generalizes MiniMax to games of more than two players without assuming
a zero-sum outcome: every state is evaluated as a vector with one value per
player, and at each ply the active player picks the child that maximizes its
own coordinate. Search stops at quiescent states, which by default are
finished games and states at the agent's horizon.

The search is a plain synchronous depth-first recursion bounded by the
horizon, so heuristics used by this agent must return numbers, not
awaitables.
"""

from __future__ import annotations

import inspect
from typing import Any

from _01_simulator.exceptions import (
    ConfigError,
    ContingentStateError,
    GameInvariantError,
    IncompatibleGameError,
)
from _01_simulator.game import Game, Player
from _01_simulator.randomness import Randomness

from .base import Decision
from .evaluation import HeuristicFn
from .heuristic import HeuristicAgent

DEFAULT_HORIZON = 4


def _coerce_horizon(horizon: Any) -> int:
    try:
        value = int(horizon)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Horizon must be an integer, got {horizon!r}") from exc
    if (isinstance(horizon, float) and not horizon.is_integer()) or value < 0:
        raise ConfigError(f"Horizon must be a non-negative integer, got {horizon!r}")
    return value


class MaxNAgent(HeuristicAgent):
    """Heuristic agent that evaluates states with a MaxN search.

    Not usable with simultaneous or non-deterministic games.
    """

    def __init__(
        self,
        heuristic: HeuristicFn | None = None,
        *,
        horizon: int = DEFAULT_HORIZON,
        name: str | None = None,
        rng: Randomness | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(heuristic, name=name, rng=rng, seed=seed)
        self.horizon = _coerce_horizon(horizon)

    @property
    def name(self) -> str:
        return self._name or f"MaxNAgent(horizon={self.horizon})"

    def is_compatible_with(self, game: Game) -> bool:
        return not game.is_simultaneous and game.is_deterministic

    def decision(self, game: Game, player: Player) -> Decision:
        if not self.is_compatible_with(game):
            raise IncompatibleGameError(self, game)
        return super().decision(game, player)

    def state_evaluation(self, game: Game, player: Player) -> float:
        """The `player` coordinate of the MaxN evaluation of `game`."""
        if game.is_contingent:
            raise ContingentStateError(game)
        return self.max_n(game, player, 0)[player]

    def heuristics(self, game: Game) -> dict[Player, float]:
        """Heuristic value of `game` for every player."""
        values = {}
        for role in game.players:
            value = self.heuristic(game, role)
            if inspect.isawaitable(value):
                close = getattr(value, "close", None)
                if close is not None:
                    close()
                raise TypeError(f"{self.name} requires synchronous heuristics")
            values[role] = value
        return values

    def quiescence(self, game: Game, player: Player, depth: int) -> dict[Player, float] | None:
        """Evaluations for a quiescent state, or None if search must go on.

        Finished games are always quiescent and evaluate to their result.
        States at or beyond the horizon evaluate to their heuristics.
        """
        result = game.result()
        if result is not None:
            return dict(result)
        if depth >= self.horizon:
            return self.heuristics(game)
        return None

    def max_n(self, game: Game, player: Player, depth: int) -> dict[Player, float]:
        """Evaluations of `game` for every player, each maximizing its own.

        Among children that tie on the active player's value, the first one
        enumerated wins.
        """
        values = self.quiescence(game, player, depth)
        if values is not None:
            return values

        active = game.active_player()
        moves = game.moves()
        options = moves.get(active) if moves else None
        if not options:
            raise GameInvariantError(f"No moves for unfinished game {game}.")

        best: dict[Player, float] | None = None
        for move in options:
            child = self.max_n(game.next({active: move}), player, depth + 1)
            if best is None or child[active] > best[active]:
                best = child
        return best


__all__ = ["DEFAULT_HORIZON", "MaxNAgent"]
