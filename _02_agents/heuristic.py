"""Heuristic-based agent implementation."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any

from _01_simulator.game import Game, Player
from _01_simulator.randomness import Randomness

from . import evaluation
from .base import Agent, Decision
from .evaluation import Evaluation, HeuristicFn, Pending, Ready, as_evaluation

logger = logging.getLogger(__name__)


class HeuristicAgent(Agent):
    """Agent that plays the best evaluated moves of each state.

    Every legal move is scored with `move_evaluation`, and the decision is
    drawn uniformly among the moves tied for the best score, so equal moves
    are chosen without bias. Evaluations may be immediate numbers or
    awaitables; when all of them are immediate no event loop is involved.
    """

    def __init__(
        self,
        heuristic: HeuristicFn | None = None,
        *,
        name: str | None = None,
        rng: Randomness | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(name=name, rng=rng, seed=seed)
        self._heuristic = heuristic

    def heuristic(self, game: Game, player: Player) -> float | Awaitable[float]:
        """Evaluation of an unfinished `game` for `player`.

        Without a configured heuristic this returns a random number in
        [-0.5, 0.5), which is only useful for testing.
        """
        if self._heuristic is not None:
            return self._heuristic(game, player)
        return self.rng.random(-0.5, 0.5)

    def state_evaluation(self, game: Game, player: Player) -> float | Awaitable[float]:
        """The player's result if the game has ended, else its heuristic value."""
        result = game.result()
        if result is not None:
            return result[player]
        return self.heuristic(game, player)

    def move_evaluation(self, move: Any, game: Game, player: Player) -> float | Awaitable[float]:
        """Evaluate the state reached when `player` makes `move`."""
        return self.state_evaluation(game.next({player: move}), player)

    def best_moves(self, evaluated_moves: Iterable[tuple[Any, float]]) -> Iterable[Any]:
        """Moves tied for the highest evaluation, in input order."""
        return evaluation.best_moves(evaluated_moves)

    def select_moves(
        self,
        moves: Sequence[Any],
        game: Game,
        player: Player,
    ) -> list[Any] | Awaitable[list[Any]]:
        """Return the best evaluated moves.

        The result is a list when every evaluation was immediate, else an
        awaitable that gathers the deferred evaluations concurrently before
        picking the best moves.
        """
        evaluated: list[tuple[Any, Evaluation]] = []
        try:
            for move in moves:
                evaluated.append((move, as_evaluation(self.move_evaluation(move, game, player))))
        except BaseException:
            _discard(e for _, e in evaluated)
            raise
        if all(isinstance(e, Ready) for _, e in evaluated):
            logger.debug("%s evaluated %s", self.name, [(m, e.value) for m, e in evaluated])
            return list(self.best_moves((m, e.value) for m, e in evaluated))
        return self._select_pending(evaluated)

    async def _select_pending(self, evaluated: list[tuple[Any, Evaluation]]) -> list[Any]:
        tasks = [asyncio.ensure_future(_settle(e)) for _, e in evaluated]
        try:
            values = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        pairs = [(move, value) for (move, _), value in zip(evaluated, values)]
        logger.debug("%s evaluated %s", self.name, pairs)
        return list(self.best_moves(pairs))

    def decision(self, game: Game, player: Player) -> Decision:
        moves = self.moves_for(game, player)
        selected = self.select_moves(moves, game, player)
        if inspect.isawaitable(selected):
            return self._choose_later(selected)
        return self._choose(selected)

    async def _choose_later(self, selected: Awaitable[list[Any]]) -> Any:
        return self._choose(await selected)

    def _choose(self, selected: list[Any]) -> Any:
        move = self.rng.choice(selected)
        logger.debug("%s chose %r among %d best move(s)", self.name, move, len(selected))
        return move


async def _settle(e: Evaluation) -> float:
    if isinstance(e, Pending):
        return await e.awaitable
    return e.value


def _discard(evaluations: Iterable[Evaluation]) -> None:
    """Release deferred evaluations that will never be awaited."""
    for e in evaluations:
        if not isinstance(e, Pending):
            continue
        if inspect.iscoroutine(e.awaitable):
            e.awaitable.close()
        elif isinstance(e.awaitable, asyncio.Future):
            e.awaitable.cancel()


__all__ = ["HeuristicAgent"]
