"""Monte Carlo Tree Search engine for turn-based games."""

from . import core, evaluation, games, mcts, selfplay, validation
from .core import Game, InvalidActionError, MCTreeError
from .evaluation import EvaluationResult, evaluate_policies
from .games import Player, UltimateTicTacToe
from .mcts import ActionStats, ActionTree, NodeArena, PlayoutResult, SearchConfig, SearchNode, simulate
from .selfplay import (
    Policy,
    RandomPolicy,
    RoundStats,
    SearchSession,
    SessionConfig,
    TreeSearchPolicy,
)

__all__ = [
    "core",
    "evaluation",
    "games",
    "mcts",
    "selfplay",
    "validation",
    "Game",
    "InvalidActionError",
    "MCTreeError",
    "EvaluationResult",
    "evaluate_policies",
    "Player",
    "UltimateTicTacToe",
    "ActionStats",
    "ActionTree",
    "NodeArena",
    "PlayoutResult",
    "SearchConfig",
    "SearchNode",
    "simulate",
    "Policy",
    "RandomPolicy",
    "RoundStats",
    "SearchSession",
    "SessionConfig",
    "TreeSearchPolicy",
]
