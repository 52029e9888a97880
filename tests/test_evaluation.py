import numpy as np
import pytest

from mctree.evaluation import evaluate_policies
from mctree.games import UltimateTicTacToe
from mctree.mcts import SearchConfig
from mctree.selfplay import RandomPolicy, TreeSearchPolicy

from toy_games import Nim


def test_evaluate_random_vs_random_small():
    policy_x = RandomPolicy(np.random.default_rng(0))
    policy_o = RandomPolicy(np.random.default_rng(1))
    result = evaluate_policies([policy_x, policy_o], episodes=2, game_factory=UltimateTicTacToe)

    assert result.games_played == 2
    assert sum(result.wins.values()) + result.draws == 2
    assert result.average_length > 0


def test_tree_search_wins_short_nim():
    engine = TreeSearchPolicy(SearchConfig(num_playouts=4, search_steps=3))
    opponent = RandomPolicy(np.random.default_rng(0))
    result = evaluate_policies([engine, opponent], episodes=3, game_factory=lambda: Nim(2))

    assert result.wins == {"P1": 3}
    assert result.winrate("P1") == 1.0
    assert result.average_length == 1.0


def test_policy_count_must_match_players():
    with pytest.raises(ValueError):
        evaluate_policies([RandomPolicy()], episodes=1, game_factory=lambda: Nim(2))
