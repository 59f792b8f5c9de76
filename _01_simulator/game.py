"""Abstract game interface consumed by agents and match drivers."""

from __future__ import annotations

import abc
from collections.abc import Hashable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from .exceptions import GameFinishedError, MultipleActivePlayersError

if TYPE_CHECKING:
    from .randomness import Randomness

Player = str
Move = Hashable
Moves = Mapping[Player, Sequence[Any]]
Results = Mapping[Player, float]


class Game(abc.ABC):
    """One immutable state of a turn-based game.

    Games never change in place: `next` and `random_next` return new values.
    Subclasses provide `players`, `active_players`, `moves`, `next` and
    `result`; the flags default to a deterministic, sequential game without
    chance events.
    """

    name: str = "game"

    @property
    @abc.abstractmethod
    def players(self) -> tuple[Player, ...]:
        """All players of the game, in a fixed order."""

    @property
    @abc.abstractmethod
    def active_players(self) -> tuple[Player, ...]:
        """Players that have to move in this state."""

    @abc.abstractmethod
    def moves(self) -> dict[Player, list[Any]] | None:
        """Legal moves for each active player, or None if the game has ended."""

    @abc.abstractmethod
    def next(self, moves: Mapping[Player, Any]) -> Game:
        """Return the state reached by applying one move per active player."""

    @abc.abstractmethod
    def result(self) -> dict[Player, float] | None:
        """Outcome for every player if the game has ended, else None."""

    @property
    def is_simultaneous(self) -> bool:
        return False

    @property
    def is_deterministic(self) -> bool:
        return True

    @property
    def is_contingent(self) -> bool:
        return False

    def random_next(self, rng: Randomness) -> Game:
        """Resolve pending chance events. Non-contingent states return themselves."""
        return self

    def active_player(self) -> Player:
        active = self.active_players
        if not active:
            raise GameFinishedError()
        if len(active) != 1:
            raise MultipleActivePlayersError(tuple(active))
        return active[0]

    def is_active(self, player: Player) -> bool:
        return player in self.active_players

    def __str__(self) -> str:
        return f"{self.name}({', '.join(self.players)})"


__all__ = ["Game", "Move", "Moves", "Player", "Results"]
