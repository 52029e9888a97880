"""Plug-in games for the search engine."""

from .ultimate import (
    GRID_SIZE,
    PLAYERS,
    Player,
    UltimateTicTacToe,
    action_from_grid,
    decode_action,
    encode_action,
    format_board,
    line_winner,
)

__all__ = [
    "GRID_SIZE",
    "PLAYERS",
    "Player",
    "UltimateTicTacToe",
    "action_from_grid",
    "decode_action",
    "encode_action",
    "format_board",
    "line_winner",
]
