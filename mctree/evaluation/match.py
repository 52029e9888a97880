from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Sequence

from mctree.core import Game
from mctree.selfplay import Policy, player_name

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    games_played: int
    wins: Dict[str, int] = field(default_factory=dict)
    draws: int = 0
    average_length: float = 0.0

    def winrate(self, player: str) -> float:
        return self.wins.get(player, 0) / max(1, self.games_played)


def evaluate_policies(
    policies: Sequence[Policy],
    *,
    episodes: int,
    game_factory: Callable[[], Game],
) -> EvaluationResult:
    """Play ``episodes`` games, ``policies[i]`` controlling ``players[i]``."""
    wins: Dict[str, int] = {}
    draws = 0
    total_ply = 0

    for _ in range(episodes):
        state = game_factory()
        if len(policies) != len(state.players):
            raise ValueError(f"Expected {len(state.players)} policies, got {len(policies)}.")
        seats = {player: policy for player, policy in zip(state.players, policies)}
        for policy in policies:
            policy.reset(state.copy())

        ply = 0
        while not state.is_over:
            action = seats[state.current_player].act(state)
            state.apply_mut(action)
            for policy in policies:
                policy.observe(action)
            ply += 1

        total_ply += ply
        winner = state.winner
        if winner is None:
            draws += 1
        else:
            name = player_name(winner)
            wins[name] = wins.get(name, 0) + 1

    result = EvaluationResult(
        games_played=episodes,
        wins=wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
    )
    logger.info("Evaluation finished: %s", result)
    return result
