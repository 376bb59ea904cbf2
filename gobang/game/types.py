from __future__ import annotations

import enum
from typing import NamedTuple, Optional

# Cell values stored in the board grid. Player values double as cell values.
EMPTY = 0
OFF_BOARD = 3  # only appears in extracted lines, never on the board itself


class Player(enum.Enum):
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


class Move(NamedTuple):
    """A point with the score it was ordered by.

    Candidates carry their ranking score, forced moves their threat priority,
    and a root decision its search score.
    """

    point: Point
    score: Optional[int] = None
