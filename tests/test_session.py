import pytest

from mctree.mcts import SearchConfig
from mctree.selfplay import SearchSession, SessionConfig

from toy_games import Nim


class FakeClock:
    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


def make_session(clock, **options):
    config = SessionConfig(target_round_time=1.0, simulations_per_step=1, thinking_time=0.5, **options)
    return SearchSession(Nim(2), config, search_config=SearchConfig(seed=0), clock=clock)


def test_disabled_session_does_not_search():
    session = make_session(FakeClock())
    assert session.run_round() is None
    assert session.tree.root.total_points == 0


def test_rounds_adapt_and_auto_play():
    clock = FakeClock(0.0, 0.25, 1.0, 1.25)
    session = make_session(clock, enabled=True, playing_for={"P1"})

    assert session.run_round() is None
    assert session.steps_per_round == 4

    stats = session.run_round()
    assert stats is not None
    assert stats.best_action == 2
    assert stats.round_sim_count == 4
    assert stats.total_sims == 5
    assert stats.sim_time == pytest.approx(0.5)
    assert stats.sim_rate == pytest.approx(16.0)
    assert stats.played_action == 2
    assert session.steps_per_round == 16
    assert session.sim_time == 0.0
    assert session.tree.is_game_over()

    assert session.run_round() is None
    assert session.config.enabled is False


def test_no_auto_play_for_other_player():
    clock = FakeClock(0.0, 0.25, 1.0, 1.25)
    session = make_session(clock, enabled=True, playing_for={"P2"})
    session.run_round()
    stats = session.run_round()

    assert stats.played_action is None
    assert not session.tree.is_game_over()


def test_set_options_toggles_and_validates():
    session = make_session(FakeClock())
    session.set_options(enabled="toggle", playing_for=["P1", "P2"])
    assert session.config.enabled is True
    assert session.config.playing_for == {"P1", "P2"}

    with pytest.raises(ValueError):
        session.set_options(unknown=1)


def test_play_and_new_game():
    clock = FakeClock(0.0, 0.25)
    session = make_session(clock, enabled=True)
    session.run_round()
    assert session.sim_time == 0.25

    session.play(1)
    assert session.sim_time == 0.0
    assert session.tree.root_state.pile == 1

    session.new_game(Nim(5))
    assert session.tree.root_state.pile == 5
    assert len(session.tree) == 1
    assert session.steps_per_round == 1


def test_toggle_rejected_for_non_flag_options():
    session = make_session(FakeClock(), playing_for={"P1"})
    with pytest.raises(ValueError):
        session.set_options(playing_for="toggle")
    with pytest.raises(ValueError):
        session.set_options(thinking_time="toggle")
    assert session.config.playing_for == {"P1"}
    assert session.config.thinking_time == 0.5
