import numpy as np
import pytest

from mctree.games import UltimateTicTacToe
from mctree.mcts import SearchConfig
from mctree.selfplay import RandomPolicy, TreeSearchPolicy

from toy_games import Nim


def test_random_policy_picks_legal_action():
    state = UltimateTicTacToe()
    policy = RandomPolicy(np.random.default_rng(0))
    assert policy.act(state) in state.available_actions()


def test_random_policy_rejects_finished_game():
    state = Nim(1)
    state.apply_mut(1)
    with pytest.raises(ValueError):
        RandomPolicy(np.random.default_rng(0)).act(state)


def test_tree_policy_takes_the_winning_move():
    policy = TreeSearchPolicy(SearchConfig(num_playouts=4, search_steps=3))
    state = Nim(2)
    policy.reset(state)
    assert policy.act(state) == 2


def test_tree_policy_commits_observed_moves():
    policy = TreeSearchPolicy(SearchConfig(num_playouts=2, search_steps=10))
    state = Nim(5)
    policy.reset(state)
    action = policy.act(state)
    policy.observe(action)
    state.apply_mut(action)

    assert policy.tree.root_state.pile == state.pile
    assert policy.tree.root.parent is None


def test_tree_policy_falls_back_without_search():
    policy = TreeSearchPolicy(SearchConfig(num_playouts=1, search_steps=0))
    state = Nim(3)
    assert policy.act(state) in (1, 2)


def test_spawn_creates_independent_policy():
    policy = TreeSearchPolicy(SearchConfig(search_steps=5))
    clone = policy.spawn(3)
    assert clone is not policy
    assert clone.config == policy.config
    assert clone.tree is None
