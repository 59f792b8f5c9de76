"""Small reference games used to exercise agents and match drivers.

None of these are meant to be interesting to play. Each one isolates a
feature of the game interface: a fixed-shape tree (`Predefined`), an
immediate win available (`Choose2Win`), a classic two-player board
(`TicTacToe`), simultaneous turns (`OddsAndEvens`) and chance events (`Pig`).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .exceptions import GameFinishedError, InvalidMoveError
from .game import Game, Player
from .randomness import Randomness


def _checked_move(game: Game, moves: Mapping[Player, Any], player: Player) -> Any:
    """Return the move of `player` in `moves`, validated against the game."""
    legal = game.moves()
    if legal is None:
        raise GameFinishedError()
    if player not in moves:
        raise InvalidMoveError(f"Missing move for active player {player!r}")
    move = moves[player]
    if move not in legal[player]:
        raise InvalidMoveError(f"Illegal move {move!r} for player {player!r}")
    return move


@dataclass(frozen=True)
class Predefined(Game):
    """Game tree of fixed height and width with a preset result.

    Every unfinished state offers `width` moves (1..width) to the active
    player; after `height` plies the game ends with `results`.
    """

    active: Player = "A"
    results: Mapping[Player, float] = field(default_factory=lambda: {"A": 1, "B": -1})
    height: int = 5
    width: int = 5
    name: str = "Predefined"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("A", "B")

    @property
    def active_players(self) -> tuple[Player, ...]:
        return (self.active,) if self.height > 0 else ()

    def moves(self) -> dict[Player, list[Any]] | None:
        if self.height <= 0:
            return None
        return {self.active: list(range(1, self.width + 1))}

    def next(self, moves: Mapping[Player, Any]) -> Predefined:
        _checked_move(self, moves, self.active)
        opponent = "B" if self.active == "A" else "A"
        return replace(self, active=opponent, height=self.height - 1)

    def result(self) -> dict[Player, float] | None:
        if self.height > 0:
            return None
        return dict(self.results)


@dataclass(frozen=True)
class Choose2Win(Game):
    """The active player may `win`, `lose` or `pass` the turn to the other.

    After `turns` passes in a row the game ends in a draw.
    """

    turns: int = 10
    active: Player = "This"
    winner: Player | None = None
    name: str = "Choose2Win"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("This", "That")

    def _opponent(self, player: Player) -> Player:
        return "That" if player == "This" else "This"

    @property
    def active_players(self) -> tuple[Player, ...]:
        return () if self._finished() else (self.active,)

    def _finished(self) -> bool:
        return self.winner is not None or self.turns <= 0

    def moves(self) -> dict[Player, list[Any]] | None:
        if self._finished():
            return None
        return {self.active: ["win", "lose", "pass"]}

    def next(self, moves: Mapping[Player, Any]) -> Choose2Win:
        move = _checked_move(self, moves, self.active)
        opponent = self._opponent(self.active)
        if move == "win":
            return replace(self, winner=self.active)
        if move == "lose":
            return replace(self, winner=opponent)
        return replace(self, turns=self.turns - 1, active=opponent)

    def result(self) -> dict[Player, float] | None:
        if self.winner is not None:
            return {self.winner: 1, self._opponent(self.winner): -1}
        if self.turns <= 0:
            return {"This": 0, "That": 0}
        return None


_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class TicTacToe(Game):
    """Noughts and crosses. `Xs` moves first; moves are square indices 0-8."""

    board: str = "_" * 9
    active: Player = "Xs"
    name: str = "TicTacToe"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("Xs", "Os")

    @property
    def active_players(self) -> tuple[Player, ...]:
        return () if self.result() is not None else (self.active,)

    def _winner(self) -> Player | None:
        for a, b, c in _LINES:
            mark = self.board[a]
            if mark != "_" and mark == self.board[b] == self.board[c]:
                return "Xs" if mark == "X" else "Os"
        return None

    def result(self) -> dict[Player, float] | None:
        winner = self._winner()
        if winner is not None:
            loser = "Os" if winner == "Xs" else "Xs"
            return {winner: 1, loser: -1}
        if "_" not in self.board:
            return {"Xs": 0, "Os": 0}
        return None

    def moves(self) -> dict[Player, list[Any]] | None:
        if self.result() is not None:
            return None
        return {self.active: [i for i, mark in enumerate(self.board) if mark == "_"]}

    def next(self, moves: Mapping[Player, Any]) -> TicTacToe:
        square = _checked_move(self, moves, self.active)
        mark = "X" if self.active == "Xs" else "O"
        board = self.board[:square] + mark + self.board[square + 1 :]
        return replace(self, board=board, active="Os" if self.active == "Xs" else "Xs")


@dataclass(frozen=True)
class OddsAndEvens(Game):
    """Both players show 1 or 2 at the same time, for `turns` rounds.

    `Evens` scores when the sum is even, `Odds` when it is odd. The result is
    each player's score minus the opponent's.
    """

    turns: int = 1
    points: tuple[int, int] = (0, 0)
    name: str = "OddsAndEvens"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("Evens", "Odds")

    @property
    def active_players(self) -> tuple[Player, ...]:
        return self.players if self.turns > 0 else ()

    @property
    def is_simultaneous(self) -> bool:
        return True

    def moves(self) -> dict[Player, list[Any]] | None:
        if self.turns <= 0:
            return None
        return {"Evens": [1, 2], "Odds": [1, 2]}

    def next(self, moves: Mapping[Player, Any]) -> OddsAndEvens:
        total = _checked_move(self, moves, "Evens") + _checked_move(self, moves, "Odds")
        evens, odds = self.points
        if total % 2 == 0:
            evens += 1
        else:
            odds += 1
        return replace(self, turns=self.turns - 1, points=(evens, odds))

    def result(self) -> dict[Player, float] | None:
        if self.turns > 0:
            return None
        evens, odds = self.points
        return {"Evens": evens - odds, "Odds": odds - evens}


@dataclass(frozen=True)
class Pig(Game):
    """Dice game: roll to accumulate turn points, hold to bank them.

    Rolling leaves the game in a contingent state until the die is resolved
    with `random_next`. A roll of 1 loses the turn points and passes the turn.
    The first player to bank `goal` points wins.
    """

    goal: int = 20
    active: Player = "One"
    scores: tuple[int, int] = (0, 0)
    turn_points: int = 0
    rolling: bool = False
    name: str = "Pig"

    @property
    def players(self) -> tuple[Player, ...]:
        return ("One", "Two")

    @property
    def active_players(self) -> tuple[Player, ...]:
        return () if self.result() is not None else (self.active,)

    @property
    def is_deterministic(self) -> bool:
        return False

    @property
    def is_contingent(self) -> bool:
        return self.rolling

    def _index(self, player: Player) -> int:
        return self.players.index(player)

    def _opponent(self) -> Player:
        return "Two" if self.active == "One" else "One"

    def moves(self) -> dict[Player, list[Any]] | None:
        if self.result() is not None:
            return None
        if self.rolling:
            return {}
        options = ["roll"]
        if self.turn_points > 0:
            options.append("hold")
        return {self.active: options}

    def next(self, moves: Mapping[Player, Any]) -> Pig:
        if self.rolling:
            raise InvalidMoveError("Pending die roll must be resolved with random_next()")
        move = _checked_move(self, moves, self.active)
        if move == "roll":
            return replace(self, rolling=True)
        scores = list(self.scores)
        scores[self._index(self.active)] += self.turn_points
        return replace(self, scores=tuple(scores), turn_points=0, active=self._opponent())

    def random_next(self, rng: Randomness) -> Pig:
        if not self.rolling:
            return self
        return self.with_die(rng.randint(1, 7))

    def with_die(self, value: int) -> Pig:
        """Resolve the pending roll with a known die value."""
        if value == 1:
            return replace(self, rolling=False, turn_points=0, active=self._opponent())
        return replace(self, rolling=False, turn_points=self.turn_points + value)

    def result(self) -> dict[Player, float] | None:
        for player in self.players:
            if self.scores[self._index(player)] >= self.goal:
                other = "Two" if player == "One" else "One"
                return {player: 1, other: -1}
        return None


__all__ = ["Choose2Win", "OddsAndEvens", "Pig", "Predefined", "TicTacToe"]
