"""Tests for the game-level engine API."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from gobang.engine.candidates import candidates
from gobang.engine.state import (
    PlayedMove,
    apply_move,
    choose_move,
    choose_move_async,
    new_game,
    undo_move,
)
from gobang.game.errors import EngineMisuse, GomokuError, InvalidMove, NoLegalMoves
from gobang.game.types import Player, Point

BLACK_ROW = [Point(7, c) for c in (3, 4, 5, 6, 7)]
WHITE_SCATTER = [Point(0, 0), Point(0, 2), Point(0, 4), Point(0, 6)]


def _play_black_five(state):
    outcome = None
    for i, point in enumerate(BLACK_ROW):
        outcome = apply_move(state, point)
        if i < len(WHITE_SCATTER):
            apply_move(state, WHITE_SCATTER[i])
    return outcome


class TestNewGame:
    def test_defaults(self):
        state = new_game()
        assert state.board.size == 15
        assert state.board.occupied_count == 0
        assert state.side_to_move is Player.BLACK
        assert state.fingerprint == 0
        assert state.moves == []
        assert not state.is_over
        assert state.last_move is None

    def test_custom_size_and_side(self):
        state = new_game(board_size=9, start_side=Player.WHITE)
        assert state.board.size == 9
        assert state.side_to_move is Player.WHITE
        assert state.hasher.size == 9

    def test_reuses_hasher_with_fresh_table(self):
        first = new_game()
        apply_move(first, Point(7, 7))
        choose_move(first, search_depth=1)
        second = new_game(hasher=first.hasher)
        assert second.hasher is first.hasher
        assert len(second.table) == 0

    def test_hasher_of_other_size_is_replaced(self):
        first = new_game(board_size=9)
        second = new_game(hasher=first.hasher)
        assert second.hasher is not first.hasher
        assert second.hasher.size == 15


class TestApplyMove:
    def test_places_and_alternates(self):
        state = new_game()
        outcome = apply_move(state, Point(7, 7))
        assert outcome.move == PlayedMove(Point(7, 7), Player.BLACK)
        assert not outcome.won
        assert state.board.get(Point(7, 7)) is Player.BLACK
        assert state.side_to_move is Player.WHITE
        apply_move(state, Point(7, 8))
        assert state.board.get(Point(7, 8)) is Player.WHITE
        assert state.last_move == PlayedMove(Point(7, 8), Player.WHITE)

    def test_accepts_plain_tuples(self):
        state = new_game()
        apply_move(state, (3, 4))
        assert state.board.get(Point(3, 4)) is Player.BLACK

    def test_explicit_side(self):
        state = new_game()
        apply_move(state, Point(0, 0), side=Player.WHITE)
        assert state.board.get(Point(0, 0)) is Player.WHITE
        assert state.side_to_move is Player.BLACK

    @pytest.mark.parametrize("point", [Point(15, 0), Point(0, 15), Point(-1, 3)])
    def test_off_board_rejected(self, point):
        state = new_game()
        with pytest.raises(InvalidMove) as excinfo:
            apply_move(state, point)
        assert excinfo.value.point == point
        assert state.board.occupied_count == 0
        assert state.side_to_move is Player.BLACK

    def test_occupied_rejected_without_changes(self):
        state = new_game()
        apply_move(state, Point(7, 7))
        fingerprint = state.fingerprint
        with pytest.raises(InvalidMove):
            apply_move(state, Point(7, 7))
        assert state.fingerprint == fingerprint
        assert state.side_to_move is Player.WHITE
        assert len(state.moves) == 1

    def test_errors_share_a_base(self):
        state = new_game()
        apply_move(state, Point(1, 1))
        with pytest.raises(GomokuError):
            apply_move(state, Point(1, 1))

    def test_five_wins(self):
        state = new_game()
        outcome = _play_black_five(state)
        assert outcome.won
        assert state.winner is Player.BLACK
        assert state.is_over

    def test_no_moves_after_win(self):
        state = new_game()
        _play_black_five(state)
        with pytest.raises(EngineMisuse):
            apply_move(state, Point(10, 10))
        with pytest.raises(EngineMisuse):
            choose_move(state)

    def test_fingerprint_tracks_board(self):
        state = new_game()
        for point in [Point(7, 7), Point(7, 8), Point(8, 8), Point(6, 6)]:
            apply_move(state, point)
            assert state.fingerprint == state.hasher.initial_fingerprint(state.board)

    def test_full_board_is_drawn(self):
        state = new_game()
        for p in state.board.points():
            stripe = ((p.col + 2 * p.row) // 2) % 2
            outcome = apply_move(state, p, side=Player.BLACK if stripe == 0 else Player.WHITE)
            assert not outcome.won
        assert outcome.is_draw
        assert state.is_draw
        assert state.winner is None
        assert candidates(state.board, Player.BLACK, 1, state.config) == []
        with pytest.raises(NoLegalMoves):
            choose_move(state)
        with pytest.raises(EngineMisuse):
            apply_move(state, Point(0, 0))


class TestUndoMove:
    def test_nothing_to_undo(self):
        assert undo_move(new_game()) is None

    def test_restores_previous_position(self):
        state = new_game()
        apply_move(state, Point(7, 7))
        fingerprint = state.fingerprint
        apply_move(state, Point(7, 8))
        undone = undo_move(state)
        assert undone == PlayedMove(Point(7, 8), Player.WHITE)
        assert state.board.is_empty(Point(7, 8))
        assert state.fingerprint == fingerprint
        assert state.side_to_move is Player.WHITE

    def test_undo_clears_winner(self):
        state = new_game()
        _play_black_five(state)
        undo_move(state)
        assert state.winner is None
        assert state.side_to_move is Player.BLACK
        assert state.fingerprint == state.hasher.initial_fingerprint(state.board)
        apply_move(state, Point(7, 2))
        assert state.winner is Player.BLACK


class TestChooseMove:
    def test_opens_in_the_center(self):
        move = choose_move(new_game())
        assert move.point == Point(7, 7)

    def test_small_board_center(self):
        assert choose_move(new_game(board_size=9), search_depth=2).point == Point(4, 4)

    def test_takes_the_win(self):
        state = new_game()
        for c in (3, 4, 5, 6):
            apply_move(state, Point(7, c), side=Player.BLACK)
        for point in [Point(0, 0), Point(0, 14), Point(14, 0), Point(14, 14)]:
            apply_move(state, point, side=Player.WHITE)
        move = choose_move(state, side=Player.BLACK)
        assert move.point in {Point(7, 2), Point(7, 7)}

    def test_blocks_the_four(self):
        state = new_game()
        for c in (3, 4, 5, 6):
            apply_move(state, Point(7, c), side=Player.BLACK)
        for point in [Point(0, 0), Point(0, 14), Point(14, 0)]:
            apply_move(state, point, side=Player.WHITE)
        move = choose_move(state, side=Player.WHITE, search_depth=2)
        assert move.point in {Point(7, 2), Point(7, 7)}

    def test_does_not_touch_the_state(self):
        state = new_game()
        for point in [Point(7, 7), Point(7, 8), Point(8, 8)]:
            apply_move(state, point)
        board_before = str(state.board)
        fingerprint = state.fingerprint
        move = choose_move(state, search_depth=2)
        assert state.board.is_empty(move.point)
        assert str(state.board) == board_before
        assert state.fingerprint == fingerprint
        assert len(state.moves) == 3
        assert state.side_to_move is Player.WHITE

    @pytest.mark.parametrize("depth", [0, -1])
    def test_rejects_unusable_depth(self, depth):
        state = new_game()
        apply_move(state, Point(7, 7))
        board_before = str(state.board)
        with pytest.raises(EngineMisuse):
            choose_move(state, search_depth=depth)
        assert str(state.board) == board_before
        assert len(state.moves) == 1

    def test_async_resolves_to_the_move(self):
        state = new_game()
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = choose_move_async(state, executor=pool)
            move = future.result(timeout=30)
        assert move.point == Point(7, 7)

    def test_async_propagates_errors(self):
        state = new_game()
        _play_black_five(state)
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = choose_move_async(state, executor=pool)
            with pytest.raises(EngineMisuse):
                future.result(timeout=30)
