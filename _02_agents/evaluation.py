"""Evaluation helpers for agent decision making."""
from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from _01_simulator.game import Game, Player

HeuristicFn = Callable[[Game, Player], Union[float, Awaitable[float]]]


@dataclass(frozen=True, slots=True)
class Ready:
    """An evaluation that is already known."""

    value: float


@dataclass(frozen=True, slots=True)
class Pending:
    """An evaluation still being computed; await `awaitable` for its value."""

    awaitable: Awaitable[float]


Evaluation = Union[Ready, Pending]


def as_evaluation(value: float | Awaitable[float]) -> Evaluation:
    """Wrap a raw evaluation, telling deferred results from immediate ones."""

    if inspect.isawaitable(value):
        return Pending(value)
    return Ready(value)


def best_moves(evaluated_moves: Iterable[tuple[Any, float]]) -> Iterator[Any]:
    """Yield the moves whose evaluation equals the maximum, in input order.

    Ties are exact equality. An empty input yields nothing.
    """

    pairs = list(evaluated_moves)
    if not pairs:
        return
    best = max(value for _, value in pairs)
    for move, value in pairs:
        if value == best:
            yield move


__all__ = [
    "Evaluation",
    "HeuristicFn",
    "Pending",
    "Ready",
    "as_evaluation",
    "best_moves",
]
