import pytest

from mctree.mcts import ActionTree
from mctree.validation import TreeInvariantError, check_tree

from toy_games import Nim


def test_check_tree_accepts_searched_tree():
    tree = ActionTree(Nim(5))
    tree.search(15, 2)
    check_tree(tree)
    tree.commit(1)
    check_tree(tree)


def test_check_tree_reports_broken_parent_link():
    tree = ActionTree(Nim(5))
    tree.search(3, 1)
    child = tree.node(tree.root.children[1])
    child.parent = None
    with pytest.raises(TreeInvariantError):
        check_tree(tree)


def test_check_tree_reports_impossible_statistics():
    tree = ActionTree(Nim(5))
    tree.search(2, 1)
    tree.root.earned_points = tree.root.total_points + 1
    with pytest.raises(TreeInvariantError):
        check_tree(tree)
