# pathfinding/astar.py
from __future__ import annotations

from time import perf_counter
from heapq import heappush, heappop
from itertools import count
from typing import Dict, List, Set, Tuple

from env import GridMap, Pos, manhattan
from .base import Found, PathfindingAlgorithm, SearchResult, Unreachable


class AStarPlanner(PathfindingAlgorithm):
    """
    A* path planner on a 4-connected grid.
    Uses Manhattan distance as heuristic, so paths are still optimal
    (same length as BFS) but usually found with fewer expansions.

    Ties on f are broken by frontier insertion order: the entry pushed
    first is expanded first.
    """

    name = "AStar"

    def __init__(self) -> None:
        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

    # ---- stats API ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    # ---- main planning API ----

    def search(self, grid: GridMap, source: Pos, dest: Pos) -> SearchResult:
        t0 = perf_counter()

        seq = count()

        # open set: (f, insertion seq, (row, col)); stale entries are skipped on pop
        open_heap: List[Tuple[int, int, Pos]] = []
        heappush(open_heap, (manhattan(source, dest), next(seq), source))

        g_cost: Dict[Pos, int] = {source: 0}
        parent: Dict[Pos, Pos] = {}
        closed: Set[Pos] = set()
        explored: List[Pos] = []

        while open_heap:
            f_cur, _, cur = heappop(open_heap)

            if cur in closed or f_cur != g_cost[cur] + manhattan(cur, dest):
                continue

            explored.append(cur)

            if cur == dest:
                # reconstruct path
                path = [cur]
                while cur in parent:
                    cur = parent[cur]
                    path.append(cur)
                path.reverse()
                self._update_stats(perf_counter() - t0)
                return Found(path=path, cost=g_cost[dest], explored=explored)

            closed.add(cur)
            new_g = g_cost[cur] + 1  # unit-cost grid

            for np in grid.neighbors4(cur):
                if np in closed:
                    continue
                if np not in g_cost or new_g < g_cost[np]:
                    g_cost[np] = new_g
                    parent[np] = cur
                    heappush(open_heap, (new_g + manhattan(np, dest), next(seq), np))

        # no path
        self._update_stats(perf_counter() - t0)
        return Unreachable(explored)


ALGORITHM = AStarPlanner()
