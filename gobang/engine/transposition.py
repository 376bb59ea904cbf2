from __future__ import annotations

import enum
from typing import NamedTuple, Optional


class Bound(enum.Enum):
    EXACT = 0
    LOWER = 1  # search failed high; true score >= stored score
    UPPER = -1  # search failed low; true score <= stored score


class TTEntry(NamedTuple):
    score: int
    depth: int
    bound: Bound = Bound.EXACT


class TranspositionTable:
    """Fingerprint -> best score found at a given depth. Lives for one game."""

    def __init__(self) -> None:
        self.table: dict[int, TTEntry] = {}
        self.hits = 0
        self.stores = 0

    def lookup(self, fingerprint: int, depth: int) -> Optional[TTEntry]:
        """Return the entry only if it was searched at least `depth` plies deep."""
        entry = self.table.get(fingerprint)
        if entry is None or entry.depth < depth:
            return None
        self.hits += 1
        return entry

    def store(
        self, fingerprint: int, score: int, depth: int, bound: Bound = Bound.EXACT
    ) -> None:
        self.table[fingerprint] = TTEntry(score, depth, bound)
        self.stores += 1

    def clear(self) -> None:
        self.table.clear()
        self.hits = 0
        self.stores = 0

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, fingerprint: int) -> bool:
        return fingerprint in self.table
