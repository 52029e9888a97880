from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable

import numpy as np

from mctree.core import Game

WIN_POINTS = 10
DRAW_POINTS = 1


@dataclass
class PlayoutResult:
    total_points: int
    points: Dict[Hashable, int]

    def points_for(self, player: Hashable) -> int:
        return self.points.get(player, 0)


def simulate(state: Game, num_playouts: int, rng: np.random.Generator) -> PlayoutResult:
    """Play ``num_playouts`` uniformly random games from ``state``.

    A win is worth ``WIN_POINTS`` to the winner, a draw ``DRAW_POINTS`` to every
    player. ``state`` itself is never modified.
    """
    if num_playouts < 1:
        raise ValueError("num_playouts must be at least 1.")

    points: Dict[Hashable, int] = {player: 0 for player in state.players}
    for _ in range(num_playouts):
        playout = state.copy()
        while True:
            actions = playout.available_actions()
            if not actions:
                break
            playout.apply_mut(actions[int(rng.integers(len(actions)))])

        winner = playout.winner
        if winner is not None:
            points[winner] = points.get(winner, 0) + WIN_POINTS
        else:
            for player in points:
                points[player] += DRAW_POINTS

    return PlayoutResult(total_points=WIN_POINTS * num_playouts, points=points)
