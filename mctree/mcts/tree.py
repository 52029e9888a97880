from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, List, Optional, Set

import numpy as np

from mctree.core import ActionT, Game, PlayerT

from .arena import NodeArena
from .playout import PlayoutResult, simulate

logger = logging.getLogger(__name__)

EXPLORATION_FACTOR = math.sqrt(2.0)


@dataclass
class SearchConfig:
    num_playouts: int = 1000
    search_steps: int = 200
    seed: Optional[int] = 0
    exploration: float = EXPLORATION_FACTOR


class SearchNode(Generic[ActionT, PlayerT]):
    __slots__ = ("id", "state", "total_points", "earned_points", "score", "parent", "children")

    def __init__(self, node_id: int, state: Game[ActionT, PlayerT], parent: Optional[int] = None) -> None:
        self.id = node_id
        self.state = state
        self.total_points = 0
        # Points won by the player who moved into this node.
        self.earned_points = 0
        self.score = math.inf
        self.parent = parent
        self.children: Dict[ActionT, int] = {}

    def is_expanded(self) -> bool:
        return bool(self.children)

    def __repr__(self) -> str:
        return (
            f"SearchNode(id={self.id}, total={self.total_points}, earned={self.earned_points}, "
            f"score={self.score:.4f}, parent={self.parent}, children={len(self.children)})"
        )


@dataclass(frozen=True)
class ActionStats:
    action: Hashable
    node_id: int
    total_points: int
    earned_points: int

    @property
    def win_rate(self) -> Optional[float]:
        """Share of points won, or ``None`` before any playout."""
        if self.total_points == 0:
            return None
        return self.earned_points / self.total_points


class ActionTree(Generic[ActionT, PlayerT]):
    """Monte Carlo search tree over a :class:`~mctree.core.Game`.

    Nodes live in a :class:`NodeArena` and refer to each other by key. Call
    :meth:`do_search_step` to refine the statistics, :meth:`best_action` for a
    recommendation and :meth:`commit` once a move has actually been played.
    A tree must be driven by a single owner; nothing here is locked.
    """

    def __init__(
        self,
        state: Game[ActionT, PlayerT],
        *,
        seed: Optional[int] = 0,
        rng: Optional[np.random.Generator] = None,
        exploration: float = EXPLORATION_FACTOR,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.exploration = exploration
        self._nodes: NodeArena[SearchNode[ActionT, PlayerT]] = NodeArena()
        self._root = -1
        self._set_root(state)

    @classmethod
    def from_config(cls, state: Game[ActionT, PlayerT], config: SearchConfig) -> "ActionTree[ActionT, PlayerT]":
        return cls(state, seed=config.seed, exploration=config.exploration)

    # ------------------------------------------------------------------
    @property
    def root_id(self) -> int:
        return self._root

    @property
    def root(self) -> SearchNode[ActionT, PlayerT]:
        return self._nodes[self._root]

    @property
    def root_state(self) -> Game[ActionT, PlayerT]:
        return self.root.state

    @property
    def current_player(self) -> PlayerT:
        return self.root.state.current_player

    def is_game_over(self) -> bool:
        return self.root.state.is_over

    def node(self, node_id: int) -> SearchNode[ActionT, PlayerT]:
        return self._nodes[node_id]

    def node_ids(self) -> List[int]:
        return self._nodes.keys()

    def __len__(self) -> int:
        return len(self._nodes)

    def get_node_total_points(self, node_id: int) -> int:
        return self._nodes[node_id].total_points

    def get_node_earned_points(self, node_id: int) -> int:
        return self._nodes[node_id].earned_points

    # ------------------------------------------------------------------
    def _set_root(self, state: Game[ActionT, PlayerT]) -> None:
        key = self._nodes.vacant_key()
        self._nodes.insert(SearchNode(key, state))
        self._root = key

    def select(self) -> int:
        """Follow the highest scores from the root down to an unexpanded node.

        Ties go to the earliest child in expansion order.
        """
        node = self._nodes[self._root]
        while node.is_expanded():
            best: Optional[SearchNode[ActionT, PlayerT]] = None
            for child_id in node.children.values():
                child = self._nodes[child_id]
                if best is None or child.score > best.score:
                    best = child
            node = best
        return node.id

    def expand(self, node_id: int) -> int:
        """Create one child per legal action and return the first child's id.

        A node without legal actions gets no children and its own id is returned.
        """
        node = self._nodes[node_id]
        children: Dict[ActionT, int] = {}
        for action in node.state.available_actions():
            key = self._nodes.vacant_key()
            self._nodes.insert(SearchNode(key, node.state.apply(action), parent=node_id))
            children[action] = key
        node.children = children
        return next(iter(children.values()), node_id)

    def _uct(self, earned: int, total: int, parent_total: int) -> float:
        if total == 0:
            return math.inf
        exploitation = earned / total
        if parent_total <= 0:
            return exploitation
        return exploitation + self.exploration * math.sqrt(math.log(parent_total) / total)

    def backpropagate(self, node_id: int, result: PlayoutResult) -> None:
        """Add a playout result to every node from ``node_id`` up to the root."""
        path: List[int] = []
        current: Optional[int] = node_id
        while current is not None:
            path.append(current)
            current = self._nodes[current].parent

        top = self._nodes[path[-1]]
        parent_player = top.state.current_player
        parent_total = top.total_points
        for current in reversed(path):
            node = self._nodes[current]
            node.total_points += result.total_points
            node.earned_points += result.points_for(parent_player)
            node.score = self._uct(node.earned_points, node.total_points, parent_total)

            parent_player = node.state.current_player
            parent_total = node.total_points

    def do_search_step(self, num_playouts: int) -> int:
        """Run select, expand, simulate and backpropagate once.

        Returns the id of the node that was simulated.
        """
        target = self.select()
        if self._nodes[target].total_points > 0:
            target = self.expand(target)

        result = simulate(self._nodes[target].state, num_playouts, self.rng)
        self.backpropagate(target, result)
        return target

    def search(self, steps: int, num_playouts: int) -> None:
        for _ in range(steps):
            self.do_search_step(num_playouts)

    # ------------------------------------------------------------------
    def children_stats(self) -> List[ActionStats]:
        stats = []
        for action, child_id in self.root.children.items():
            child = self._nodes[child_id]
            stats.append(ActionStats(action, child_id, child.total_points, child.earned_points))
        return stats

    def best_action(self) -> Optional[ActionStats]:
        """Root child with the highest win rate for the player to move.

        Children without playouts are skipped. Returns ``None`` when no child
        has been simulated yet.
        """
        best: Optional[ActionStats] = None
        best_rate = -1.0
        for stats in self.children_stats():
            rate = stats.win_rate
            if rate is not None and rate > best_rate:
                best_rate = rate
                best = stats
        return best

    def commit(self, action: ActionT) -> None:
        """Advance the root past ``action`` and drop unreachable nodes."""
        root = self.root
        child_id = root.children.get(action)
        if child_id is not None:
            self._root = child_id
            self._nodes[child_id].parent = None
        else:
            root.state.check_action(action)
            self._set_root(root.state.apply(action))
        removed = self.collect_garbage()
        logger.debug("Committed %r; root=%d, removed %d nodes, %d remain", action, self._root, removed, len(self._nodes))

    def collect_garbage(self) -> int:
        """Remove every node not reachable from the root. Returns how many went."""
        marked: Set[int] = set()
        open_set = [self._root]
        while open_set:
            node_id = open_set.pop()
            marked.add(node_id)
            open_set.extend(self._nodes[node_id].children.values())

        unreachable = [key for key in self._nodes.keys() if key not in marked]
        for key in unreachable:
            self._nodes.remove(key)
        return len(unreachable)


__all__ = [
    "EXPLORATION_FACTOR",
    "ActionStats",
    "ActionTree",
    "SearchConfig",
    "SearchNode",
]
