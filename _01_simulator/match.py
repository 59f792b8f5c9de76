"""Match driver: runs agents against each other on a game."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigError, IncompatibleGameError
from .game import Game, Player
from .randomness import Randomness, resolve_rng

if TYPE_CHECKING:
    from _02_agents.base import Agent

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 10_000


@dataclass(frozen=True, slots=True)
class PlyRecord:
    """Moves applied at one ply, with the time the agents took to decide."""

    ply: int
    moves: dict[Player, Any]
    ms: float


@dataclass(frozen=True, slots=True)
class MatchResult:
    game: str
    result: dict[Player, float] | None
    plies: int
    history: list[PlyRecord]
    final_state: Game

    @property
    def finished(self) -> bool:
        return self.result is not None


def _resolve(decision: Any) -> Any:
    if inspect.isawaitable(decision):
        return asyncio.run(_await(decision))
    return decision


async def _await(decision: Awaitable[Any]) -> Any:
    return await decision


def play_match(
    game: Game,
    agents: Mapping[Player, Agent],
    *,
    max_plies: int = DEFAULT_MAX_PLIES,
    rng: Randomness | None = None,
    seed: int | None = None,
) -> MatchResult:
    """
    Play `game` to the end with one agent per player.

    Contingent states are resolved with the match's randomness source before
    any agent is asked to move. Asynchronous decisions are awaited on a fresh
    event loop, so this function must not be called from a running loop.

    Raises:
        ConfigError: If a player has no agent.
        IncompatibleGameError: If an agent cannot play this game.
    """
    missing = [player for player in game.players if player not in agents]
    if missing:
        raise ConfigError(f"No agent for player(s): {', '.join(missing)}")
    for agent in agents.values():
        if not agent.is_compatible_with(game):
            raise IncompatibleGameError(agent, game)

    chance = resolve_rng(rng, seed)
    history: list[PlyRecord] = []
    logger.info("Match of %s begins: %s", game.name, ", ".join(f"{p}={a.name}" for p, a in agents.items()))

    for ply in range(1, max_plies + 1):
        while game.is_contingent:
            game = game.random_next(chance)

        if game.result() is not None:
            return _finish(game, ply - 1, history)

        t0 = time.perf_counter()
        decisions = {player: _resolve(agents[player].decision(game, player)) for player in game.active_players}
        ms = (time.perf_counter() - t0) * 1000.0

        logger.debug("Ply %d of %s: %s (%.1f ms)", ply, game.name, decisions, ms)
        history.append(PlyRecord(ply=ply, moves=decisions, ms=ms))
        game = game.next(decisions)

    while game.is_contingent:
        game = game.random_next(chance)
    if game.result() is not None:
        return _finish(game, max_plies, history)
    logger.warning("Match of %s stopped after %d plies without a result", game.name, max_plies)
    return MatchResult(game=game.name, result=None, plies=max_plies, history=history, final_state=game)


def _finish(game: Game, plies: int, history: list[PlyRecord]) -> MatchResult:
    result = game.result()
    logger.info("Match of %s ends after %d plies: %s", game.name, plies, result)
    return MatchResult(game=game.name, result=result, plies=plies, history=history, final_state=game)


__all__ = ["DEFAULT_MAX_PLIES", "MatchResult", "PlyRecord", "play_match"]
