import random

import pytest

from gobang.game.board import (
    BOARD_SIZE,
    DIRECTIONS,
    WIN_LENGTH,
    Board,
    check_win,
    format_point,
    parse_coordinate,
)
from gobang.game.types import Player, Point


def _brute_force_win(board: Board, point: Point, player: Player) -> bool:
    """Any 5-cell window through `point`, in any direction, filled by `player`."""
    for dr, dc in DIRECTIONS:
        for start in range(-(WIN_LENGTH - 1), 1):
            cells = [
                Point(point.row + (start + i) * dr, point.col + (start + i) * dc)
                for i in range(WIN_LENGTH)
            ]
            if all(board.is_on_grid(p) and board.get(p) is player for p in cells):
                return True
    return False


class TestParseCoordinate:
    def test_valid(self):
        assert parse_coordinate("A1") == Point(0, 0)
        assert parse_coordinate("E5") == Point(4, 4)
        assert parse_coordinate("H8") == Point(7, 7)
        assert parse_coordinate("O15") == Point(14, 14)
        assert parse_coordinate("h8") == Point(7, 7)  # case insensitive

    def test_invalid(self):
        assert parse_coordinate("") is None
        assert parse_coordinate("P1") is None
        assert parse_coordinate("A0") is None
        assert parse_coordinate("A16") is None
        assert parse_coordinate("XX") is None

    def test_respects_board_size(self):
        assert parse_coordinate("E5", size=5) == Point(4, 4)
        assert parse_coordinate("F1", size=5) is None
        assert parse_coordinate("A6", size=5) is None


class TestFormatPoint:
    def test_basic(self):
        assert format_point(Point(0, 0)) == "A1"
        assert format_point(Point(7, 7)) == "H8"
        assert format_point(Point(14, 14)) == "O15"

    def test_round_trip_corner(self):
        assert parse_coordinate(format_point(Point(14, 0))) == Point(14, 0)


class TestBoard:
    def test_place_and_get(self):
        b = Board()
        p = Point(3, 4)
        b.place(p, Player.BLACK)
        assert b.get(p) is Player.BLACK
        assert not b.is_empty(p)
        assert b.occupied_count == 1

    def test_remove(self):
        b = Board()
        p = Point(3, 4)
        b.place(p, Player.BLACK)
        b.remove(p)
        assert b.is_empty(p)
        assert b.occupied_count == 0

    def test_cannot_place_on_occupied(self):
        b = Board()
        b.place(Point(1, 1), Player.BLACK)
        with pytest.raises(AssertionError):
            b.place(Point(1, 1), Player.WHITE)

    def test_is_on_grid(self):
        b = Board()
        assert b.is_on_grid(Point(0, 0))
        assert b.is_on_grid(Point(14, 14))
        assert not b.is_on_grid(Point(-1, 0))
        assert not b.is_on_grid(Point(0, 15))

    def test_small_board(self):
        b = Board(5)
        assert b.center == Point(2, 2)
        assert b.is_on_grid(Point(4, 4))
        assert not b.is_on_grid(Point(5, 0))

    def test_default_center(self):
        assert Board().center == Point(7, 7)
        assert Board().size == BOARD_SIZE

    def test_is_full(self):
        b = Board(2)
        for p in b.points():
            assert not b.is_full
            b.place(p, Player.BLACK)
        assert b.is_full

    def test_stones_row_major(self):
        b = Board(5)
        b.place(Point(3, 1), Player.WHITE)
        b.place(Point(0, 4), Player.BLACK)
        assert list(b.stones()) == [
            (Point(0, 4), Player.BLACK),
            (Point(3, 1), Player.WHITE),
        ]

    def test_from_rows(self):
        b = Board.from_rows([
            "X..",
            ".O.",
            "...",
        ])
        assert b.size == 3
        assert b.get(Point(0, 0)) is Player.BLACK
        assert b.get(Point(1, 1)) is Player.WHITE
        assert b.occupied_count == 2
        assert str(b) == "X..\n.O.\n..."


class TestOccupy:
    def test_stone_present_inside_block(self):
        b = Board()
        with b.occupy(Point(5, 5), Player.WHITE):
            assert b.get(Point(5, 5)) is Player.WHITE
        assert b.is_empty(Point(5, 5))

    def test_released_on_early_return(self):
        b = Board()

        def probe() -> bool:
            with b.occupy(Point(2, 2), Player.BLACK):
                return True

        assert probe()
        assert b.is_empty(Point(2, 2))
        assert b.occupied_count == 0

    def test_released_on_exception(self):
        b = Board()
        with pytest.raises(RuntimeError):
            with b.occupy(Point(2, 2), Player.BLACK):
                raise RuntimeError("boom")
        assert b.is_empty(Point(2, 2))


class TestCheckWin:
    def test_horizontal(self):
        b = Board()
        for c in range(3, 8):
            b.place(Point(7, c), Player.BLACK)
        assert check_win(b, Point(7, 5), Player.BLACK)
        assert not check_win(b, Point(7, 5), Player.WHITE)

    def test_vertical(self):
        b = Board()
        for r in range(5):
            b.place(Point(r, 0), Player.WHITE)
        assert check_win(b, Point(0, 0), Player.WHITE)

    def test_diagonal(self):
        b = Board()
        for i in range(5):
            b.place(Point(i, i), Player.BLACK)
        assert check_win(b, Point(4, 4), Player.BLACK)

    def test_anti_diagonal(self):
        b = Board()
        for i in range(5):
            b.place(Point(i, 14 - i), Player.BLACK)
        assert check_win(b, Point(2, 12), Player.BLACK)

    def test_four_is_not_a_win(self):
        b = Board()
        for c in range(4):
            b.place(Point(0, c), Player.BLACK)
        assert not check_win(b, Point(0, 3), Player.BLACK)

    def test_overline_counts_as_win(self):
        b = Board()
        for c in range(6):
            b.place(Point(3, c), Player.BLACK)
        assert check_win(b, Point(3, 0), Player.BLACK)

    def test_gap_breaks_run(self):
        b = Board()
        for c in (0, 1, 3, 4, 5):
            b.place(Point(0, c), Player.BLACK)
        assert not check_win(b, Point(0, 1), Player.BLACK)

    @pytest.mark.parametrize("seed", range(5))
    def test_matches_brute_force_on_random_boards(self, seed):
        rng = random.Random(seed)
        b = Board(7)
        for p in b.points():
            roll = rng.random()
            if roll < 0.45:
                b.place(p, Player.BLACK)
            elif roll < 0.75:
                b.place(p, Player.WHITE)
        for p, owner in b.stones():
            assert check_win(b, p, owner) == _brute_force_win(b, p, owner), p
