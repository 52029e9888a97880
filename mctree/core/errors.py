"""Exception classes for the search engine."""

from __future__ import annotations

from typing import Any


class MCTreeError(Exception):
    """Base exception for all engine errors."""


class InvalidActionError(MCTreeError, ValueError):
    """Raised when an action is not legal in the state it is applied to."""

    def __init__(self, action: Any, message: str = "") -> None:
        self.action = action
        super().__init__(message or f"Action {action!r} is not legal in the current state.")


__all__ = ["MCTreeError", "InvalidActionError"]
