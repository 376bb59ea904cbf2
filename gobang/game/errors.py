"""Errors raised at the engine's public boundary.

All of them are local and recoverable: the caller decides whether to prompt
for another move, show a draw, or start a new game.
"""

from __future__ import annotations

from typing import Optional

from .types import Point


class GomokuError(Exception):
    """Base class for every error the engine signals to its caller."""


class InvalidMove(GomokuError):
    """The requested cell is off the board or already occupied."""

    def __init__(self, message: str, point: Optional[Point] = None) -> None:
        super().__init__(message)
        self.point = point


class NoLegalMoves(GomokuError):
    """The root position has no candidate move. Treat as a draw."""


class EngineMisuse(GomokuError):
    """The engine was asked to act on a finished game or with an unusable search depth."""
