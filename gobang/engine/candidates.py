"""Candidate generation and move ordering."""

from __future__ import annotations

from typing import Optional

from gobang.game.board import Board
from gobang.game.types import EMPTY, Move, Player, Point

from .config import SearchConfig
from .patterns import evaluate_point
from .threats import find_forced_moves, winning_move


def _has_neighbor(board: Board, point: Point, radius: int) -> bool:
    """True if any stone lies within Chebyshev distance `radius` of `point`."""
    size = board.size
    for r in range(max(0, point.row - radius), min(size, point.row + radius + 1)):
        for c in range(max(0, point.col - radius), min(size, point.col + radius + 1)):
            if board.value_at(r, c) != EMPTY:
                return True
    return False


def candidates(
    board: Board, player: Player, depth: int, config: SearchConfig
) -> list[Move]:
    """Return empty cells near existing stones, best first, capped by depth.

    On an empty board, returns the center point. On a full board, returns [].
    """
    if board.occupied_count == 0:
        return [Move(board.center, 0)]

    profile = config.profile(depth)
    opponent = player.other
    scored: list[Move] = []

    for point in board.points():
        if not board.is_empty(point) or not _has_neighbor(board, point, profile.radius):
            continue
        score = evaluate_point(board, point, player)
        score += int(config.defense_weight * evaluate_point(board, point, opponent))
        scored.append(Move(point, score))

    # Stable sort: equal scores stay in row-major order
    scored.sort(key=lambda m: m.score, reverse=True)
    return scored[:profile.top_k]


def ordered_moves(
    board: Board,
    player: Player,
    depth: int,
    config: SearchConfig,
    forced: Optional[list[Move]] = None,
) -> list[Move]:
    """Candidates with forced moves merged in front.

    A forced win is returned alone. Must-block cells go first, then the ranked
    candidates, without duplicates and capped at config.max_merged. Pass
    `forced` when find_forced_moves has already been run for this position.
    """
    if forced is None:
        forced = find_forced_moves(board, player)
    win = winning_move(forced)
    if win is not None:
        return [win]

    ranked = candidates(board, player, depth, config)
    if not forced:
        return ranked

    merged: list[Move] = []
    seen: set[Point] = set()
    for move in forced + ranked:
        if move.point in seen:
            continue
        seen.add(move.point)
        merged.append(move)
    return merged[:config.max_merged]
