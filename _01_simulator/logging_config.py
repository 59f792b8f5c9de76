"""Logging configuration for games, agents and match drivers."""

from __future__ import annotations

import logging
import sys

HANDLER_NAME = "maxn-agents"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'


def setup_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Send log records to stdout.

    Calling this again replaces the handler installed by a previous call
    instead of adding a second one.

    Args:
        level: The logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names mean INFO
        format_json: Emit one JSON object per line instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    if format_json:
        handler.setFormatter(logging.Formatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for old in [h for h in logging.root.handlers if h.get_name() == HANDLER_NAME]:
        logging.root.removeHandler(old)
    logging.root.setLevel(log_level)
    logging.root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass `__name__`."""
    return logging.getLogger(name)


__all__ = ["get_logger", "setup_logging"]
