"""Agent implementations and utilities."""

from .base import Agent, AgentFn, Decision, resolve_decision
from .config import AgentConfig, agents_from_yaml, create_agent, load_config_from_yaml
from .evaluation import Evaluation, HeuristicFn, Pending, Ready, as_evaluation, best_moves
from .heuristic import HeuristicAgent
from .maxn import DEFAULT_HORIZON, MaxNAgent
from .random_agent import RandomAgent

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentFn",
    "DEFAULT_HORIZON",
    "Decision",
    "Evaluation",
    "HeuristicAgent",
    "HeuristicFn",
    "MaxNAgent",
    "Pending",
    "RandomAgent",
    "Ready",
    "agents_from_yaml",
    "as_evaluation",
    "best_moves",
    "create_agent",
    "load_config_from_yaml",
    "resolve_decision",
]
