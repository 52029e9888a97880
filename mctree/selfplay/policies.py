from __future__ import annotations

from copy import deepcopy
from typing import Hashable, Optional

import numpy as np

from mctree.core import Game
from mctree.mcts import ActionTree, SearchConfig


class Policy:
    """Agent choosing an action for the player to move."""

    def act(self, state: Game) -> Hashable:
        raise NotImplementedError

    def observe(self, action: Hashable) -> None:
        """Called with every action actually played, by any player."""

    def reset(self, state: Game) -> None:
        """Called when a new game starts from ``state``."""

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return an independent copy of this policy."""
        return self


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def act(self, state: Game) -> Hashable:
        actions = state.available_actions()
        if not actions:
            raise ValueError("Cannot act in a finished game.")
        return actions[int(self.rng.integers(len(actions)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPolicy":
        return RandomPolicy(np.random.default_rng(seed))


class TreeSearchPolicy(Policy):
    """Plays the best action of an :class:`ActionTree` kept across moves."""

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = deepcopy(config) if config else SearchConfig()
        self.rng = rng or np.random.default_rng(self.config.seed)
        self.tree: Optional[ActionTree] = None

    def reset(self, state: Game) -> None:
        self.tree = ActionTree(state, rng=self.rng, exploration=self.config.exploration)

    def observe(self, action: Hashable) -> None:
        if self.tree is not None:
            self.tree.commit(action)

    def act(self, state: Game) -> Hashable:
        if self.tree is None:
            self.reset(state)
        self.tree.search(self.config.search_steps, self.config.num_playouts)
        best = self.tree.best_action()
        if best is not None:
            return best.action
        actions = state.available_actions()
        if not actions:
            raise ValueError("Cannot act in a finished game.")
        return actions[int(self.rng.integers(len(actions)))]

    def spawn(self, seed: Optional[int] = None) -> "TreeSearchPolicy":
        return TreeSearchPolicy(self.config, rng=np.random.default_rng(seed))
