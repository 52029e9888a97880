from __future__ import annotations

import abc
import copy
from typing import Generic, Hashable, Optional, Sequence, TypeVar

from .errors import InvalidActionError

ActionT = TypeVar("ActionT", bound=Hashable)
PlayerT = TypeVar("PlayerT", bound=Hashable)
GameT = TypeVar("GameT", bound="Game")


class Game(abc.ABC, Generic[ActionT, PlayerT]):
    """A game position that the search engine can explore.

    Implementations hold the full state of the position. ``available_actions``
    must return the same order for the same position and be empty once the
    game has ended.
    """

    @abc.abstractmethod
    def available_actions(self) -> Sequence[ActionT]:
        """Legal actions from this position."""

    @abc.abstractmethod
    def apply_mut(self, action: ActionT) -> None:
        """Apply ``action`` in place."""

    @property
    @abc.abstractmethod
    def players(self) -> Sequence[PlayerT]:
        """Every participant, in turn order."""

    @property
    @abc.abstractmethod
    def current_player(self) -> PlayerT:
        """The player to move."""

    @property
    @abc.abstractmethod
    def winner(self) -> Optional[PlayerT]:
        """The winning player, or ``None`` while undecided or on a draw."""

    @property
    def is_over(self) -> bool:
        return not self.available_actions()

    def copy(self: GameT) -> GameT:
        return copy.deepcopy(self)

    def apply(self: GameT, action: ActionT) -> GameT:
        next_state = self.copy()
        next_state.apply_mut(action)
        return next_state

    def check_action(self, action: ActionT) -> None:
        if action not in self.available_actions():
            raise InvalidActionError(action)
