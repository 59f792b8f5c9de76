"""Agent configuration: dataclass configs, YAML files and a name-based factory."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from _01_simulator.exceptions import ConfigError
from _01_simulator.game import Player
from _01_simulator.randomness import Randomness

from .base import Agent
from .evaluation import HeuristicFn
from .heuristic import HeuristicAgent
from .maxn import DEFAULT_HORIZON, MaxNAgent
from .random_agent import RandomAgent

AGENT_KINDS = ("random", "heuristic", "maxn")


@dataclass
class AgentConfig:
    """Configuration for building an agent."""

    kind: str = "heuristic"
    name: str | None = None
    seed: int | None = None
    horizon: int = DEFAULT_HORIZON  # Only used by maxn agents
    heuristic: str | None = None  # "package.module:function"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AgentConfig:
        """Create a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown agent config key(s): {', '.join(unknown)}")
        config = cls(**dict(data))
        if config.kind not in AGENT_KINDS:
            raise ConfigError(f"Unknown agent kind {config.kind!r}; expected one of {', '.join(AGENT_KINDS)}")
        return config


def load_config_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Dictionary of configuration parameters.

    Raises:
        FileNotFoundError: If config file does not exist.
        yaml.YAMLError: If config file is invalid YAML.
        ConfigError: If the document is not a mapping.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")
    return config


def load_heuristic(reference: str) -> HeuristicFn:
    """Import a heuristic given as "package.module:function"."""
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Expected 'package.module:function', got: {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import heuristic module {module_name!r}") from e
    try:
        heuristic = getattr(module, attr)
    except AttributeError as e:
        raise ConfigError(f"{module_name} has no symbol {attr!r}") from e
    if not callable(heuristic):
        raise ConfigError(f"{reference} is not callable")
    return heuristic


def create_agent(
    source: str | AgentConfig | Mapping[str, Any],
    *,
    heuristic: HeuristicFn | None = None,
    rng: Randomness | None = None,
) -> Agent:
    """Create an agent from a config, a config mapping or a short name.

    Supported names:
    - "random": RandomAgent
    - "heuristic": HeuristicAgent with the test-only random heuristic
    - "maxn": MaxNAgent with the default horizon
    - "maxn-N": MaxNAgent with horizon N (e.g., maxn-2, maxn-6)

    An explicit `heuristic` overrides the one named in the config.

    Raises:
        ConfigError: If the name or config is not recognized.
    """
    if isinstance(source, str):
        config = _config_from_name(source)
    elif isinstance(source, AgentConfig):
        config = source
    elif not isinstance(source, Mapping):
        raise ConfigError(f"Invalid agent config {source!r}")
    else:
        config = AgentConfig.from_dict(source)

    if heuristic is None and config.heuristic:
        heuristic = load_heuristic(config.heuristic)

    if config.kind == "random":
        return RandomAgent(name=config.name, rng=rng, seed=config.seed)
    if config.kind == "heuristic":
        return HeuristicAgent(heuristic, name=config.name, rng=rng, seed=config.seed)
    if config.kind == "maxn":
        return MaxNAgent(heuristic, horizon=config.horizon, name=config.name, rng=rng, seed=config.seed)
    raise ConfigError(f"Unknown agent kind {config.kind!r}")


def _config_from_name(name: str) -> AgentConfig:
    name_lower = name.lower().strip()
    if name_lower in AGENT_KINDS:
        return AgentConfig(kind=name_lower)
    if name_lower.startswith("maxn-"):
        horizon = name_lower.removeprefix("maxn-")
        if not horizon.isdecimal():
            raise ConfigError(f"Invalid horizon in agent name {name!r}")
        return AgentConfig(kind="maxn", horizon=int(horizon))
    raise ConfigError(f"Unknown agent name {name!r}")


def agents_from_yaml(path: str | Path, *, rng: Randomness | None = None) -> dict[Player, Agent]:
    """Build one agent per player from the `agents` table of a YAML file.

    Each entry is either a short agent name or a mapping of AgentConfig fields:

        agents:
          Xs: random
          Os:
            kind: maxn
            horizon: 3
            seed: 7
    """
    config = load_config_from_yaml(path)
    table = config.get("agents")
    if not isinstance(table, Mapping) or not table:
        raise ConfigError(f"{path}: expected a non-empty 'agents' mapping")
    return {str(player): create_agent(entry, rng=rng) for player, entry in table.items()}


__all__ = [
    "AGENT_KINDS",
    "AgentConfig",
    "agents_from_yaml",
    "create_agent",
    "load_config_from_yaml",
    "load_heuristic",
]
