"""Line pattern evaluation.

A point is scored by looking at the four lines through it. Each line is a
9-cell window centred on the point; cells past the board edge carry the
OFF_BOARD sentinel so they never match a stone or an empty cell. Windows are
matched against shape templates by direct tuple comparison.
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Mapping

from gobang.game.board import DIRECTIONS, Board
from gobang.game.types import EMPTY, OFF_BOARD, Player, Point

LINE_LENGTH = 9

# Opponent shapes through the same point count extra so the engine prefers blocking
DEFENSE_MULTIPLIER = 1.2

# Bonus per step closer to the centre (Manhattan distance)
CENTER_WEIGHT = 10


class Shape(enum.Enum):
    FIVE = "five"
    OPEN_FOUR = "open four"
    RUSH_FOUR = "rush four"
    OPEN_THREE = "open three"
    CLOSED_THREE = "closed three"
    OPEN_TWO = "open two"
    CLOSED_TWO = "closed two"
    OVERLINE = "overline"


SHAPE_WEIGHTS: Mapping[Shape, int] = MappingProxyType({
    Shape.FIVE: 100_000_000,
    Shape.OPEN_FOUR: 10_000_000,
    Shape.RUSH_FOUR: 5_000_000,
    Shape.OPEN_THREE: 500_000,
    Shape.CLOSED_THREE: 50_000,
    Shape.OPEN_TWO: 10_000,
    Shape.CLOSED_TWO: 1_000,
    Shape.OVERLINE: -100_000,  # six or more is not a stronger five
})

FIVE_SCORE = SHAPE_WEIGHTS[Shape.FIVE]

# Templates in priority order: X = stone of the side being scored, _ = empty
SHAPE_TEMPLATES: dict[Shape, tuple[str, ...]] = {
    Shape.OPEN_FOUR: ("_XXXX_",),
    Shape.RUSH_FOUR: ("XXXX_", "_XXXX", "XX_XX", "X_XXX", "XXX_X"),
    Shape.OPEN_THREE: ("_XXX_", "_X_XX_", "_XX_X_"),
    Shape.CLOSED_THREE: ("XXX_", "_XXX", "X_XX", "XX_X"),
    Shape.OPEN_TWO: ("__XX_", "_XX__", "_X_X_"),
    Shape.CLOSED_TWO: ("XX___", "___XX", "X_X__", "__X_X", "X__X_", "_X__X"),
}


def _compile(template: str, player: Player) -> tuple[int, ...]:
    return tuple(player.value if ch == "X" else EMPTY for ch in template)


_COMPILED: dict[Player, list[tuple[Shape, tuple[int, ...]]]] = {
    player: [
        (shape, _compile(template, player))
        for shape, templates in SHAPE_TEMPLATES.items()
        for template in templates
    ]
    for player in Player
}
_FIVE = {player: (player.value,) * 5 for player in Player}
_SIX = {player: (player.value,) * 6 for player in Player}
_OPEN_FOUR = {player: _compile("_XXXX_", player) for player in Player}


def extract_line(
    board: Board, point: Point, dr: int, dc: int, length: int = LINE_LENGTH
) -> tuple[int, ...]:
    """Return the `length` cells centred on `point` along direction (dr, dc)."""
    half = length // 2
    size = board.size
    cells: list[int] = []
    for i in range(-half, half + 1):
        r, c = point.row + i * dr, point.col + i * dc
        if 0 <= r < size and 0 <= c < size:
            cells.append(board.value_at(r, c))
        else:
            cells.append(OFF_BOARD)
    return tuple(cells)


def contains(line: tuple[int, ...], pattern: tuple[int, ...]) -> bool:
    """True if `pattern` occurs as a contiguous slice of `line`."""
    n = len(pattern)
    return any(line[i:i + n] == pattern for i in range(len(line) - n + 1))


def has_open_four(line: tuple[int, ...], player: Player) -> bool:
    return contains(line, _OPEN_FOUR[player])


def classify_line(line: tuple[int, ...], player: Player) -> list[Shape]:
    """List the shapes `player` forms in `line`, one entry per matching template.

    An overline or a five ends classification: nothing else in the line is
    worth counting once either is present.
    """
    if contains(line, _SIX[player]):
        return [Shape.OVERLINE]
    if contains(line, _FIVE[player]):
        return [Shape.FIVE]
    return [shape for shape, pattern in _COMPILED[player] if contains(line, pattern)]


def shape_score(line: tuple[int, ...], player: Player) -> int:
    return sum(SHAPE_WEIGHTS[shape] for shape in classify_line(line, player))


def evaluate_point(board: Board, point: Point, player: Player) -> int:
    """Score `point` for `player`: own shapes plus weighted opponent shapes.

    The point may be empty (candidate ranking) or occupied (leaf evaluation).
    """
    opponent = player.other
    center = board.size // 2
    center_dist = abs(point.row - center) + abs(point.col - center)
    score = (2 * center - center_dist) * CENTER_WEIGHT

    for dr, dc in DIRECTIONS:
        line = extract_line(board, point, dr, dc)
        score += shape_score(line, player)
        score += int(DEFENSE_MULTIPLIER * shape_score(line, opponent))

    return score
