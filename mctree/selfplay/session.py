from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Hashable, Optional, Set

from mctree.core import Game
from mctree.mcts import ActionTree, SearchConfig

logger = logging.getLogger(__name__)


def player_name(player: Hashable) -> str:
    return getattr(player, "name", str(player))


@dataclass
class SessionConfig:
    target_round_time: float = 0.1
    simulations_per_step: int = 1000
    thinking_time: float = 10.0
    enabled: bool = False
    playing_for: Set[str] = field(default_factory=set)


@dataclass
class RoundStats:
    best_action: Hashable
    sim_time: float
    sims: int
    wins: int
    round_sim_count: int
    total_sims: int
    sim_rate: float
    played_action: Optional[Hashable] = None


class SearchSession:
    """Drives an :class:`ActionTree` in rounds sized to a wall-clock target.

    Each round runs ``steps_per_round`` search steps, then resizes the next
    round so that it takes about ``target_round_time`` seconds. Once thinking
    time for the current move has run out and the engine plays for the player
    to move, the best action is committed automatically.
    """

    def __init__(
        self,
        state: Game,
        config: Optional[SessionConfig] = None,
        *,
        search_config: Optional[SearchConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config or SessionConfig()
        self.search_config = search_config or SearchConfig()
        self.clock = clock
        self.tree = ActionTree.from_config(state, self.search_config)
        self.steps_per_round = 1
        self.sim_time = 0.0
        self.total_sims = 0

    def set_options(self, **options: Any) -> None:
        known = {f.name for f in fields(SessionConfig)}
        for name, value in options.items():
            if name not in known:
                raise ValueError(f"Unknown session option: {name}")
            if isinstance(value, str) and value == "toggle":
                current = getattr(self.config, name)
                if not isinstance(current, bool):
                    raise ValueError(f"Session option {name} is not a flag and cannot be toggled.")
                value = not current
            elif name == "playing_for":
                value = set(value)
            setattr(self.config, name, value)

    def new_game(self, state: Game) -> None:
        self.tree = ActionTree.from_config(state, self.search_config)
        self.steps_per_round = 1
        self.sim_time = 0.0

    def play(self, action: Hashable) -> None:
        self.tree.commit(action)
        self.sim_time = 0.0

    def run_round(self) -> Optional[RoundStats]:
        if self.tree.is_game_over():
            self.config.enabled = False
        if not self.config.enabled:
            return None

        start = self.clock()
        for _ in range(self.steps_per_round):
            self.tree.do_search_step(self.config.simulations_per_step)
        round_time = self.clock() - start

        sim_count = self.steps_per_round * self.config.simulations_per_step
        if round_time > 0:
            per_step = round_time / self.steps_per_round
            self.steps_per_round = max(1, math.floor(self.config.target_round_time / per_step))
            sim_rate = sim_count / round_time
        else:
            self.steps_per_round *= 2
            sim_rate = math.inf

        self.total_sims += sim_count
        self.sim_time += round_time

        best = self.tree.best_action()
        if best is None:
            return None
        stats = RoundStats(
            best_action=best.action,
            sim_time=self.sim_time,
            sims=best.total_points,
            wins=best.earned_points,
            round_sim_count=sim_count,
            total_sims=self.total_sims,
            sim_rate=sim_rate,
        )

        mover = player_name(self.tree.current_player)
        if self.sim_time >= self.config.thinking_time and mover in self.config.playing_for:
            logger.info(
                "Playing %r for %s after %.2fs (%d/%d)",
                best.action,
                mover,
                self.sim_time,
                best.earned_points,
                best.total_points,
            )
            self.play(best.action)
            stats.played_action = best.action
        return stats
