"""Game interface, randomness and match driving for search agents."""

from . import exceptions, game, games, logging_config, match, randomness

__all__ = [
    "exceptions",
    "game",
    "games",
    "logging_config",
    "match",
    "randomness",
]
