"""Search tuning knobs.

Candidate width and neighbourhood radius depend on the remaining search depth:
near the leaves the engine looks at fewer, closer moves to bound the branching
factor, near the root it casts a wider net.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

# Default search depth used by choose_move when the caller gives none
SEARCH_DEPTH = 4


@dataclass(frozen=True)
class DepthProfile:
    radius: int  # Chebyshev distance to the nearest stone
    top_k: int   # candidates kept after ranking


def _default_profiles() -> dict[int, DepthProfile]:
    return {
        0: DepthProfile(radius=2, top_k=15),
        1: DepthProfile(radius=2, top_k=15),
        2: DepthProfile(radius=2, top_k=15),
    }


@dataclass(frozen=True)
class SearchConfig:
    depth: int = SEARCH_DEPTH
    depth_profiles: Mapping[int, DepthProfile] = field(default_factory=_default_profiles)
    deep_profile: DepthProfile = DepthProfile(radius=1, top_k=8)
    # Cap on the candidate list once forced moves have been merged in
    max_merged: int = 10
    # Opponent weight when ranking candidates (offense + 1.1 * defense)
    defense_weight: float = 1.1
    use_table: bool = True

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"search depth must be >= 1, got {self.depth}")
        if self.max_merged < 1:
            raise ValueError(f"max_merged must be >= 1, got {self.max_merged}")

    def profile(self, depth: int) -> DepthProfile:
        """Return the (radius, top_k) pair for a node with `depth` plies left."""
        return self.depth_profiles.get(depth, self.deep_profile)
