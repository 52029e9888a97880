"""Agents and the interactive search session."""

from .policies import Policy, RandomPolicy, TreeSearchPolicy
from .session import RoundStats, SearchSession, SessionConfig, player_name

__all__ = [
    "Policy",
    "RandomPolicy",
    "TreeSearchPolicy",
    "RoundStats",
    "SearchSession",
    "SessionConfig",
    "player_name",
]
