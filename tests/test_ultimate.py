import numpy as np
import pytest

from mctree.core import InvalidActionError
from mctree.games import (
    Player,
    UltimateTicTacToe,
    action_from_grid,
    decode_action,
    encode_action,
    format_board,
)


def test_initial_position():
    state = UltimateTicTacToe()
    assert len(state.available_actions()) == 81
    assert state.current_player == Player.X
    assert state.players == (Player.X, Player.O)
    assert state.winner is None
    assert not state.is_over


def test_action_encoding():
    assert encode_action(4, 7) == 0x47
    assert decode_action(0x47) == (4, 7)
    assert action_from_grid(4, 5) == encode_action(4, 5)
    assert action_from_grid(8, 0) == encode_action(6, 6)
    with pytest.raises(ValueError):
        encode_action(9, 0)


def test_move_sends_opponent_to_matching_board():
    state = UltimateTicTacToe()
    state.apply_mut(encode_action(0, 4))

    assert state.current_player == Player.O
    assert state.active_board == 4
    assert state.available_actions() == [encode_action(4, cell) for cell in range(9)]


def test_apply_does_not_modify_original():
    state = UltimateTicTacToe()
    next_state = state.apply(encode_action(2, 2))

    assert state.board[2, 2] == 0
    assert next_state.board[2, 2] == Player.X
    assert len(state.available_actions()) == 81


def test_illegal_action_raises():
    state = UltimateTicTacToe()
    state.apply_mut(encode_action(0, 4))
    with pytest.raises(InvalidActionError):
        state.apply_mut(encode_action(0, 0))
    with pytest.raises(InvalidActionError):
        state.check_action(encode_action(5, 5))


def test_winning_sub_board_frees_choice():
    board = np.zeros((9, 9), dtype=np.int8)
    board[0, 0] = board[0, 1] = Player.X
    state = UltimateTicTacToe(board=board, current_player=Player.X, active_board=0)
    state.apply_mut(encode_action(0, 2))

    assert state.winners[0] == Player.X
    assert state.active_board == 2
    # Sending the opponent to a decided board opens every undecided board.
    board = np.zeros((9, 9), dtype=np.int8)
    board[1, 0] = board[1, 1] = Player.X
    state = UltimateTicTacToe(board=board, current_player=Player.X, active_board=1)
    state.apply_mut(encode_action(1, 2))
    state.apply_mut(encode_action(2, 1))
    assert state.active_board is None
    assert all(decode_action(a)[0] != 1 for a in state.available_actions())


def test_three_sub_boards_in_a_row_win():
    board = np.zeros((9, 9), dtype=np.int8)
    winners = np.zeros(9, dtype=np.int8)
    winners[0] = winners[1] = Player.O
    board[2, 3] = board[2, 4] = Player.O
    state = UltimateTicTacToe(board=board, winners=winners, current_player=Player.O, active_board=2)
    state.apply_mut(encode_action(2, 5))

    assert state.winner == Player.O
    assert state.is_over
    assert state.available_actions() == []


def test_copy_is_independent():
    state = UltimateTicTacToe()
    clone = state.copy()
    clone.apply_mut(encode_action(0, 0))

    assert state.board[0, 0] == 0
    assert len(state.available_actions()) == 81


def test_format_board():
    state = UltimateTicTacToe()
    state.apply_mut(action_from_grid(0, 0))
    rows = format_board(state).splitlines()

    assert len(rows) == 11
    assert rows[0] == "X.. | ... | ..."
    assert rows[3] == "----+-----+----"


def test_full_undecided_board_frees_choice():
    board = np.zeros((9, 9), dtype=np.int8)
    board[4] = [1, 2, 1, 1, 2, 2, 2, 1, 1]
    state = UltimateTicTacToe(board=board, current_player=Player.X, active_board=0)
    assert state.winners[4] == 0

    state.apply_mut(encode_action(0, 4))

    assert state.active_board is None
    actions = state.available_actions()
    assert len(actions) == 71
    assert all(decode_action(a)[0] != 4 for a in actions)
    assert not state.is_over
