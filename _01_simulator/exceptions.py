"""Custom exception classes for games and the agents that play them."""

from __future__ import annotations

from typing import Any


class GameSearchError(Exception):
    """Base exception for all game and agent errors."""


class PreconditionError(GameSearchError):
    """Raised when a caller breaks the contract of an agent operation."""


class NoLegalMovesError(PreconditionError):
    """Raised when a decision is requested for a player without legal moves."""

    def __init__(self, player: Any) -> None:
        self.player = player
        super().__init__(f"Player {player!r} has no legal moves; cannot make a decision.")


class IncompatibleGameError(PreconditionError):
    """Raised when an agent is asked to play a game it does not support."""

    def __init__(self, agent: Any, game: Any) -> None:
        self.agent = agent
        self.game = game
        super().__init__(f"Agent {agent} is not compatible with game {game}.")


class GameInvariantError(GameSearchError):
    """Raised when a game implementation reports an impossible state."""


class UnsupportedStateError(GameSearchError):
    """Raised when an agent cannot evaluate a kind of game state."""


class ContingentStateError(UnsupportedStateError):
    """Raised when a search agent meets a state with a pending chance event."""

    def __init__(self, game: Any) -> None:
        self.game = game
        super().__init__(f"Contingent states unsupported (got {game}).")


class MultipleActivePlayersError(GameSearchError):
    """Raised when a single active player is requested in a simultaneous turn."""

    def __init__(self, active_players: tuple[Any, ...]) -> None:
        self.active_players = active_players
        super().__init__(f"More than one active player: {', '.join(map(str, active_players))}.")


class InvalidMoveError(GameSearchError):
    """Raised when a game is advanced with an illegal move."""


class GameFinishedError(GameSearchError):
    """Raised when trying to advance a game that has already ended."""

    def __init__(self) -> None:
        super().__init__("Cannot advance; game already finished")


class ConfigError(GameSearchError):
    """Raised for invalid agent or match configuration."""


__all__ = [
    "ConfigError",
    "ContingentStateError",
    "GameFinishedError",
    "GameInvariantError",
    "GameSearchError",
    "IncompatibleGameError",
    "InvalidMoveError",
    "MultipleActivePlayersError",
    "NoLegalMovesError",
    "PreconditionError",
    "UnsupportedStateError",
]
