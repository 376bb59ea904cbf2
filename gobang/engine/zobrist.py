"""Zobrist fingerprints: XOR of one random 64-bit constant per occupied cell/side."""

from __future__ import annotations

import random
from typing import Optional

from gobang.game.board import BOARD_SIZE, Board
from gobang.game.types import Player, Point


class ZobristHasher:
    """Random constant table for one engine lifetime.

    Pass a seed for reproducible fingerprints (tests); the default draws fresh
    constants every time a hasher is built.
    """

    def __init__(self, size: int = BOARD_SIZE, seed: Optional[int] = None) -> None:
        rng = random.Random(seed)
        self.size = size
        # _keys[row][col][player.value]; index 0 unused
        self._keys: list[list[list[int]]] = [
            [[0] + [rng.getrandbits(64) for _ in Player] for _ in range(size)]
            for _ in range(size)
        ]
        self._perspective = {player: rng.getrandbits(64) for player in Player}

    def key(self, point: Point, player: Player) -> int:
        return self._keys[point.row][point.col][player.value]

    def initial_fingerprint(self, board: Board) -> int:
        """Compute the fingerprint from scratch."""
        assert board.size == self.size, "hasher and board sizes differ"
        h = 0
        for point, player in board.stones():
            h ^= self.key(point, player)
        return h

    def updated_fingerprint(self, old: int, point: Point, player: Player) -> int:
        """Toggle one stone in or out. Applying it twice restores `old`."""
        return old ^ self.key(point, player)

    def perspective_key(self, player: Player) -> int:
        """Constant mixed into a search's root fingerprint.

        Scores are stored relative to the searching side, so entries written
        while searching for one side must not be read while searching for the
        other.
        """
        return self._perspective[player]
