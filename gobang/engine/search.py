"""Minimax search with alpha-beta pruning and a Zobrist transposition table.

Scores are always from the searching side's point of view: positive is good
for `Searcher.player`. Maximizing nodes are that side's turn, minimizing nodes
the opponent's. The board is mutated in place; every tentative stone is placed
through Board.occupy so it is removed on every exit path.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

from gobang.game.board import Board, check_win
from gobang.game.types import Move, Player

from .candidates import ordered_moves
from .config import SearchConfig
from .patterns import FIVE_SCORE, evaluate_point
from .threats import find_forced_moves, winning_move
from .transposition import Bound, TranspositionTable
from .zobrist import ZobristHasher

logger = logging.getLogger(__name__)

INF = math.inf


class Searcher:
    """One decision's worth of search state around a borrowed board."""

    def __init__(
        self,
        board: Board,
        player: Player,
        hasher: ZobristHasher,
        table: Optional[TranspositionTable] = None,
        config: Optional[SearchConfig] = None,
    ) -> None:
        self.board = board
        self.player = player
        self.hasher = hasher
        self.table = table if table is not None else TranspositionTable()
        self.config = config or SearchConfig()
        self.nodes = 0

    # -----------------------------------------------------------------------
    # Static evaluation
    # -----------------------------------------------------------------------

    def evaluate_position(self) -> int:
        """Sum of per-stone scores, + for the searcher's stones and - for the opponent's.

        A completed five anywhere on the board decides the position outright.
        """
        board = self.board
        score = 0
        for point, owner in board.stones():
            if check_win(board, point, owner):
                return FIVE_SCORE if owner is self.player else -FIVE_SCORE
            value = evaluate_point(board, point, owner)
            score += value if owner is self.player else -value
        return score

    # -----------------------------------------------------------------------
    # Recursive search
    # -----------------------------------------------------------------------

    def root_fingerprint(self, board_fingerprint: Optional[int] = None) -> int:
        """Fingerprint of the current board, keyed to the searching side."""
        if board_fingerprint is None:
            board_fingerprint = self.hasher.initial_fingerprint(self.board)
        return board_fingerprint ^ self.hasher.perspective_key(self.player)

    def search(
        self,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        fingerprint: int,
    ) -> float:
        """Return the minimax score of the current position with `depth` plies left."""
        self.nodes += 1
        use_table = self.config.use_table

        if use_table:
            entry = self.table.lookup(fingerprint, depth)
            if entry is not None:
                if entry.bound is Bound.EXACT:
                    return entry.score
                if entry.bound is Bound.LOWER and entry.score >= beta:
                    return entry.score
                if entry.bound is Bound.UPPER and entry.score <= alpha:
                    return entry.score

        if depth == 0:
            return self.evaluate_position()

        mover = self.player if maximizing else self.player.other
        moves = ordered_moves(self.board, mover, depth, self.config)
        if not moves:
            return 0  # board is full: draw

        orig_alpha, orig_beta = alpha, beta
        best = -INF if maximizing else INF

        for move in moves:
            with self.board.occupy(move.point, mover):
                if check_win(self.board, move.point, mover):
                    # No need to look past a win
                    score = FIVE_SCORE if maximizing else -FIVE_SCORE
                    if use_table:
                        self.table.store(fingerprint, score, depth, Bound.EXACT)
                    return score
                child = self.hasher.updated_fingerprint(fingerprint, move.point, mover)
                score = self.search(depth - 1, alpha, beta, not maximizing, child)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                break

        if use_table:
            if best <= orig_alpha:
                bound = Bound.UPPER
            elif best >= orig_beta:
                bound = Bound.LOWER
            else:
                bound = Bound.EXACT
            self.table.store(fingerprint, best, depth, bound)

        return best

    # -----------------------------------------------------------------------
    # Root decision
    # -----------------------------------------------------------------------

    def best_move(
        self, depth: Optional[int] = None, board_fingerprint: Optional[int] = None
    ) -> Optional[Move]:
        """Pick the move for `self.player`, or None if the board has no candidates.

        A forced win is played without searching. Otherwise each root move is
        scored with a full-window search of the opponent's replies; the highest
        score wins and ties go to the better-ranked move. `board_fingerprint`
        saves a full recompute when the caller tracks it incrementally.

        The returned Move.score is the search score from `self.player`'s view:
        FIVE_SCORE for an immediate win, None when the only candidate was
        played without searching.
        """
        depth = depth if depth is not None else self.config.depth
        if depth < 1:
            raise ValueError(f"search depth must be >= 1, got {depth}")
        board = self.board
        player = self.player

        forced = find_forced_moves(board, player)
        win = winning_move(forced)
        if win is not None:
            logger.debug("forced win at %s", win.point)
            return Move(win.point, FIVE_SCORE)

        moves = ordered_moves(board, player, depth, self.config, forced=forced)
        if not moves:
            return None
        if len(moves) == 1:
            return Move(moves[0].point)

        started = time.perf_counter()
        root = self.root_fingerprint(board_fingerprint)
        best_score = -INF
        best: Optional[Move] = None

        for move in moves:
            with board.occupy(move.point, player):
                if check_win(board, move.point, player):
                    return Move(move.point, FIVE_SCORE)
                child = self.hasher.updated_fingerprint(root, move.point, player)
                score = self.search(depth - 1, -INF, INF, False, child)
            logger.debug("root move %s scored %s", move.point, score)

            if score > best_score:
                best_score = score
                best = move

        if best is None:
            # No score beat -inf; a legal move is still owed
            return Move(moves[0].point)

        logger.debug(
            "searched %d nodes in %.3fs (depth=%d, table=%d entries, %d hits)",
            self.nodes, time.perf_counter() - started, depth,
            len(self.table), self.table.hits,
        )
        return Move(best.point, best_score)
