"""Public engine API: one EngineState per game, passed into every operation."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from gobang.game.board import BOARD_SIZE, Board, check_win, format_point
from gobang.game.errors import EngineMisuse, InvalidMove, NoLegalMoves
from gobang.game.types import Move, Player, Point

from .config import SearchConfig
from .search import Searcher
from .transposition import TranspositionTable
from .zobrist import ZobristHasher

logger = logging.getLogger(__name__)

# Shared worker for choose_move_async; one decision runs at a time
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gobang-search")


@dataclass
class PlayedMove:
    point: Point
    player: Player

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


@dataclass
class Outcome:
    move: PlayedMove
    won: bool
    is_draw: bool = False


@dataclass
class EngineState:
    """Everything one game needs: board, fingerprint, table and history."""

    board: Board
    side_to_move: Player
    hasher: ZobristHasher
    config: SearchConfig = field(default_factory=SearchConfig)
    table: TranspositionTable = field(default_factory=TranspositionTable)
    moves: list[PlayedMove] = field(default_factory=list)
    fingerprint: int = 0
    winner: Optional[Player] = None
    is_draw: bool = False

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw

    @property
    def last_move(self) -> Optional[PlayedMove]:
        return self.moves[-1] if self.moves else None


def new_game(
    board_size: int = BOARD_SIZE,
    start_side: Player = Player.BLACK,
    config: Optional[SearchConfig] = None,
    hasher: Optional[ZobristHasher] = None,
) -> EngineState:
    """Start a game on an empty board.

    Pass the previous game's hasher to keep its random table; the
    transposition table always starts empty.
    """
    if hasher is None or hasher.size != board_size:
        hasher = ZobristHasher(board_size)
    state = EngineState(
        board=Board(board_size),
        side_to_move=start_side,
        hasher=hasher,
        config=config or SearchConfig(),
    )
    logger.info("new %dx%d game, %s to move", board_size, board_size, start_side)
    return state


def apply_move(state: EngineState, point: Point, side: Optional[Player] = None) -> Outcome:
    """Place a stone for `side` (default: the side to move) and report the result.

    Raises InvalidMove for an off-board or occupied cell and EngineMisuse once
    the game is over; in both cases the state is left untouched.
    """
    if state.is_over:
        raise EngineMisuse("game is already over")
    point = Point(*point)
    board = state.board
    if not board.is_on_grid(point):
        raise InvalidMove(f"{tuple(point)} is off the {board.size}x{board.size} board", point)
    if not board.is_empty(point):
        raise InvalidMove(f"{format_point(point)} is occupied", point)

    player = side or state.side_to_move
    board.place(point, player)
    state.fingerprint = state.hasher.updated_fingerprint(state.fingerprint, point, player)
    move = PlayedMove(point, player)
    state.moves.append(move)

    won = check_win(board, point, player)
    if won:
        state.winner = player
        logger.info("%s wins with %s", player, format_point(point))
    elif board.is_full:
        state.is_draw = True
        logger.info("board full, game drawn")

    state.side_to_move = player.other
    return Outcome(move=move, won=won, is_draw=state.is_draw)


def undo_move(state: EngineState) -> Optional[PlayedMove]:
    """Take back the last move. Returns the undone move, or None if there is none."""
    if not state.moves:
        return None
    move = state.moves.pop()
    state.board.remove(move.point)
    state.fingerprint = state.hasher.updated_fingerprint(state.fingerprint, move.point, move.player)
    state.side_to_move = move.player
    state.winner = None
    state.is_draw = False
    return move


def choose_move(
    state: EngineState,
    side: Optional[Player] = None,
    search_depth: Optional[int] = None,
) -> Move:
    """Pick a move for `side` (default: the side to move) without applying it.

    Raises EngineMisuse if the game already has a winner or the search depth
    is below 1, and NoLegalMoves if there is nowhere left to play.
    """
    if state.winner is not None:
        raise EngineMisuse(f"game is already won by {state.winner}")
    player = side or state.side_to_move
    depth = search_depth if search_depth is not None else state.config.depth
    if depth < 1:
        raise EngineMisuse(f"search depth must be >= 1, got {depth}")

    searcher = Searcher(state.board, player, state.hasher, state.table, state.config)
    move = searcher.best_move(depth, board_fingerprint=state.fingerprint)
    if move is None:
        raise NoLegalMoves("no empty cell left to play")

    logger.info(
        "%s plays %s (depth=%d, %d nodes)",
        player, format_point(move.point), depth, searcher.nodes,
    )
    return move


def choose_move_async(
    state: EngineState,
    side: Optional[Player] = None,
    search_depth: Optional[int] = None,
    executor: Optional[ThreadPoolExecutor] = None,
) -> Future:
    """Run choose_move on a worker thread; the Future resolves once, with the move.

    The state must not be touched until the Future is done.
    """
    return (executor or _executor).submit(choose_move, state, side, search_depth)
