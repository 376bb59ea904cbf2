"""Forced-move detection: immediate wins and must-block cells."""

from __future__ import annotations

from typing import Optional

from gobang.game.board import DIRECTIONS, Board, check_win
from gobang.game.types import Move, Player, Point

from .patterns import extract_line, has_open_four

# Priorities carried in Move.score
WIN = 10_000
BLOCK_FIVE = 1_000
BLOCK_OPEN_FOUR = 900


def _makes_open_four(board: Board, point: Point, player: Player) -> bool:
    return any(
        has_open_four(extract_line(board, point, dr, dc), player)
        for dr, dc in DIRECTIONS
    )


def find_forced_moves(board: Board, player: Player) -> list[Move]:
    """Return the moves `player` cannot ignore.

    If `player` can complete five anywhere, the result is that single cell at
    WIN priority and the scan stops. Otherwise the result lists the cells where
    the opponent would complete five (BLOCK_FIVE) or make an open four
    (BLOCK_OPEN_FOUR), highest priority first. Board is left unchanged.
    """
    opponent = player.other
    critical: list[Move] = []

    for point in board.points():
        if not board.is_empty(point):
            continue

        with board.occupy(point, opponent):
            if check_win(board, point, opponent):
                critical.append(Move(point, BLOCK_FIVE))
            elif _makes_open_four(board, point, opponent):
                critical.append(Move(point, BLOCK_OPEN_FOUR))

        with board.occupy(point, player):
            if check_win(board, point, player):
                return [Move(point, WIN)]

    critical.sort(key=lambda m: m.score, reverse=True)
    return critical


def winning_move(forced: list[Move]) -> Optional[Move]:
    """Return the forced win in a find_forced_moves result, if there is one."""
    if forced and forced[0].score == WIN:
        return forced[0]
    return None
