from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from mctree.core import Game, InvalidActionError

BoardArray = NDArray[np.int8]

GRID_SIZE = 9
EMPTY = 0
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Player(IntEnum):
    X = 1
    O = 2

    def other(self) -> "Player":
        return Player.O if self is Player.X else Player.X


PLAYERS: Tuple[Player, ...] = (Player.X, Player.O)


def encode_action(board: int, cell: int) -> int:
    if not (0 <= board < GRID_SIZE and 0 <= cell < GRID_SIZE):
        raise ValueError(f"Board and cell must be in [0, {GRID_SIZE}), got ({board}, {cell}).")
    return (board << 4) | cell


def decode_action(action: int) -> Tuple[int, int]:
    return action >> 4, action & 0xF


def line_winner(cells: Sequence[int]) -> Optional[Player]:
    """Player holding a full line of a 3x3 grid, if any."""
    for a, b, c in LINES:
        if cells[a] != EMPTY and cells[a] == cells[b] == cells[c]:
            return Player(int(cells[a]))
    return None


class UltimateTicTacToe(Game[int, Player]):
    """Ultimate Tic-Tac-Toe: nine sub-boards, win three of them in a row.

    ``board[b, c]`` holds the mark in cell ``c`` of sub-board ``b`` and
    ``winners[b]`` the owner of sub-board ``b``. ``active_board`` is the
    sub-board the player to move is sent to, or ``None`` for a free choice.
    """

    def __init__(
        self,
        board: Optional[BoardArray] = None,
        winners: Optional[BoardArray] = None,
        current_player: Player = Player.X,
        active_board: Optional[int] = None,
    ) -> None:
        self.board = board if board is not None else np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int8)
        self.winners = winners if winners is not None else np.zeros(GRID_SIZE, dtype=np.int8)
        self._current_player = current_player
        self.active_board = active_board
        self._winner = line_winner(self.winners)
        self._actions: List[int] = []
        self._refresh_actions()

    def copy(self) -> "UltimateTicTacToe":
        clone = UltimateTicTacToe.__new__(UltimateTicTacToe)
        clone.board = self.board.copy()
        clone.winners = self.winners.copy()
        clone._current_player = self._current_player
        clone.active_board = self.active_board
        clone._winner = self._winner
        clone._actions = list(self._actions)
        return clone

    # ------------------------------------------------------------------
    def _board_open(self, board: int) -> bool:
        return self.winners[board] == EMPTY and bool(np.any(self.board[board] == EMPTY))

    def _refresh_actions(self) -> None:
        self._actions = []
        if self._winner is not None:
            return
        boards = [self.active_board] if self.active_board is not None else range(GRID_SIZE)
        for board in boards:
            if self.winners[board] != EMPTY:
                continue
            for cell in range(GRID_SIZE):
                if self.board[board, cell] == EMPTY:
                    self._actions.append(encode_action(board, cell))

    # ------------------------------------------------------------------
    def available_actions(self) -> List[int]:
        return self._actions

    @property
    def players(self) -> Tuple[Player, ...]:
        return PLAYERS

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_over(self) -> bool:
        return not self._actions

    def apply_mut(self, action: int) -> None:
        if action not in self._actions:
            raise InvalidActionError(action)
        board, cell = decode_action(action)
        player = self._current_player
        self.board[board, cell] = player

        if line_winner(self.board[board]) == player:
            self.winners[board] = player
            self._winner = line_winner(self.winners)

        self.active_board = cell if self._board_open(cell) else None
        self._current_player = player.other()
        self._refresh_actions()

    def __repr__(self) -> str:
        return (
            f"UltimateTicTacToe(current={self._current_player.name}, active={self.active_board}, "
            f"winner={self._winner.name if self._winner else None})\n{format_board(self)}"
        )


def format_board(state: UltimateTicTacToe) -> str:
    """Render the 9x9 grid; sub-boards are separated by rules."""
    symbols = {EMPTY: ".", int(Player.X): "X", int(Player.O): "O"}
    rows = []
    for big_row in range(3):
        for small_row in range(3):
            parts = []
            for big_col in range(3):
                board = big_row * 3 + big_col
                cells = state.board[board, small_row * 3 : small_row * 3 + 3]
                parts.append("".join(symbols[int(value)] for value in cells))
            rows.append(" | ".join(parts))
        if big_row < 2:
            rows.append("----+-----+----")
    return "\n".join(rows)


def action_from_grid(row: int, col: int) -> int:
    """Action for cell (row, col) of the full 9x9 grid."""
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValueError(f"Grid position ({row}, {col}) out of range.")
    board = (row // 3) * 3 + col // 3
    cell = (row % 3) * 3 + col % 3
    return encode_action(board, cell)
