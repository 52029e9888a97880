"""Game contract and errors shared by the engine and plug-in games."""

from .errors import InvalidActionError, MCTreeError
from .game import ActionT, Game, PlayerT

__all__ = [
    "ActionT",
    "Game",
    "PlayerT",
    "InvalidActionError",
    "MCTreeError",
]
