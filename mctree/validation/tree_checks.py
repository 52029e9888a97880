from __future__ import annotations

from typing import Set

from mctree.mcts import ActionTree


class TreeInvariantError(AssertionError):
    pass


def check_tree(tree: ActionTree) -> None:
    """Raise :class:`TreeInvariantError` if the tree structure is inconsistent."""
    root = tree.root
    if root.parent is not None:
        raise TreeInvariantError(f"root {root.id} has parent {root.parent}")

    reachable: Set[int] = set()
    open_set = [root.id]
    while open_set:
        node_id = open_set.pop()
        if node_id in reachable:
            raise TreeInvariantError(f"node {node_id} reached twice")
        reachable.add(node_id)
        node = tree.node(node_id)
        if node.id != node_id:
            raise TreeInvariantError(f"node stored at {node_id} claims id {node.id}")
        if node.earned_points > node.total_points:
            raise TreeInvariantError(f"node {node_id} earned more points than it was routed")
        for child_id in node.children.values():
            if tree.node(child_id).parent != node_id:
                raise TreeInvariantError(f"child {child_id} does not point back to {node_id}")
            open_set.append(child_id)

    orphans = set(tree.node_ids()) - reachable
    if orphans:
        raise TreeInvariantError(f"unreachable nodes: {sorted(orphans)}")
