"""Monte Carlo Tree Search engine."""

from .arena import NodeArena
from .playout import DRAW_POINTS, WIN_POINTS, PlayoutResult, simulate
from .tree import EXPLORATION_FACTOR, ActionStats, ActionTree, SearchConfig, SearchNode

__all__ = [
    "NodeArena",
    "PlayoutResult",
    "simulate",
    "WIN_POINTS",
    "DRAW_POINTS",
    "EXPLORATION_FACTOR",
    "ActionStats",
    "ActionTree",
    "SearchConfig",
    "SearchNode",
]
