# pathfinding/distance_cache.py
from __future__ import annotations

from itertools import combinations
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

from env import GridMap, Pos
from .base import PathfindingAlgorithm, SearchResult


class DistanceOracle:
    """
    Memoizing wrapper around a single-pair search.

    Results are stored once per unordered pair {a, b}, since cost and
    reachability are symmetric on an undirected grid. The stored path is
    oriented the way it was first computed; asking for the opposite
    direction returns the same result with its path reversed.

    The cache is bound to one grid. Call reset(grid) at the start of every
    planning call so results from a previous grid can never leak. One
    instance must not be shared by planning calls running at the same time.
    """

    def __init__(self, path_algo: PathfindingAlgorithm) -> None:
        self.path_algo = path_algo
        self.grid: Optional[GridMap] = None
        self._cache: Dict[FrozenSet[Pos], Tuple[Pos, SearchResult]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def reset(self, grid: GridMap) -> None:
        self.grid = grid
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def distance(self, a: Pos, b: Pos) -> SearchResult:
        if self.grid is None:
            raise RuntimeError("DistanceOracle.reset(grid) must be called before distance().")

        key = frozenset((a, b))
        entry = self._cache.get(key)
        if entry is not None:
            self.hits += 1
            source, result = entry
            return result if source == a else result.reversed()

        self.misses += 1
        result = self.path_algo.search(self.grid, a, b)
        self._cache[key] = (a, result)
        return result

    def warm(self, points: Sequence[Pos]) -> None:
        """Compute every pairwise result among 'points' up front."""
        for a, b in combinations(points, 2):
            self.distance(a, b)
