from __future__ import annotations

import string
from contextlib import contextmanager
from typing import Iterator, Optional

from .types import EMPTY, Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5

# Row, column, diagonal and anti-diagonal axes
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

# Column labels: A, B, C, ... (wide enough for any board up to 26 columns)
COL_LABELS = string.ascii_uppercase


def parse_coordinate(text: str, size: int = BOARD_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter starting at A, row is a number 1..size counted from
    the top. Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


class Board:
    """Square Gomoku board. Cells hold EMPTY or a Player value."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        assert 1 <= size <= len(COL_LABELS), f"unsupported board size {size}"
        self.size = size
        self._grid: list[list[int]] = [[EMPTY] * size for _ in range(size)]
        self._occupied = 0

    @classmethod
    def from_rows(cls, rows: list[str]) -> Board:
        """Build a board from text rows: 'X' black, 'O' white, anything else empty."""
        board = cls(len(rows))
        for r, line in enumerate(rows):
            assert len(line) == board.size, f"row {r} has {len(line)} cells"
            for c, ch in enumerate(line):
                if ch == "X":
                    board.place(Point(r, c), Player.BLACK)
                elif ch == "O":
                    board.place(Point(r, c), Player.WHITE)
        return board

    def place(self, point: Point, player: Player) -> None:
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point.row][point.col] = player.value
        self._occupied += 1

    def remove(self, point: Point) -> None:
        assert not self.is_empty(point), f"{format_point(point)} is empty"
        self._grid[point.row][point.col] = EMPTY
        self._occupied -= 1

    @contextmanager
    def occupy(self, point: Point, player: Player) -> Iterator[None]:
        """Tentatively place a stone; it is removed however the block exits."""
        self.place(point, player)
        try:
            yield
        finally:
            self.remove(point)

    def get(self, point: Point) -> Optional[Player]:
        value = self._grid[point.row][point.col]
        return None if value == EMPTY else Player(value)

    def value_at(self, row: int, col: int) -> int:
        """Raw cell value. Caller guarantees the coordinates are on the grid."""
        return self._grid[row][col]

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.row][point.col] == EMPTY

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.row < self.size and 0 <= point.col < self.size

    @property
    def center(self) -> Point:
        return Point(self.size // 2, self.size // 2)

    @property
    def occupied_count(self) -> int:
        return self._occupied

    @property
    def is_full(self) -> bool:
        return self._occupied == self.size * self.size

    def points(self) -> Iterator[Point]:
        """All points in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield Point(r, c)

    def stones(self) -> Iterator[tuple[Point, Player]]:
        """Occupied points with their owner, in row-major order."""
        for r, row in enumerate(self._grid):
            for c, value in enumerate(row):
                if value != EMPTY:
                    yield Point(r, c), Player(value)

    def __str__(self) -> str:
        symbols = {EMPTY: ".", Player.BLACK.value: "X", Player.WHITE.value: "O"}
        return "\n".join("".join(symbols[v] for v in row) for row in self._grid)


def check_win(board: Board, point: Point, player: Player) -> bool:
    """Check if the stone at `point` is part of 5-or-more in a row for `player`."""
    size = board.size
    target = player.value
    for dr, dc in DIRECTIONS:
        count = 1
        # Count forward
        r, c = point.row + dr, point.col + dc
        while 0 <= r < size and 0 <= c < size and board.value_at(r, c) == target:
            count += 1
            r += dr
            c += dc
        # Count backward
        r, c = point.row - dr, point.col - dc
        while 0 <= r < size and 0 <= c < size and board.value_at(r, c) == target:
            count += 1
            r -= dr
            c -= dc
        if count >= WIN_LENGTH:
            return True
    return False
