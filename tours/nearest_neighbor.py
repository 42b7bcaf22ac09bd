# tours/nearest_neighbor.py
from __future__ import annotations

from time import perf_counter
from math import inf
from typing import List, Optional

from env import GridMap, Pos
from .base import RouteBuilder, RouteResult, TourAlgorithm
from pathfinding.base import Found, PathfindingAlgorithm
from pathfinding.astar import ALGORITHM as ASTAR
from pathfinding.bfs import ALGORITHM as BFS


class NearestNeighborTour(TourAlgorithm):
    """
    Greedy nearest-neighbor route:

      - Start at the origin.
      - Search from the current stop to every remaining waypoint with the
        injected single-pair search (BFS, A*, ...), in the caller's order.
      - Move to the one with the smallest cost; on equal cost the first
        one scanned wins.
      - Repeat until no waypoint remains.

    If at some point none of the remaining waypoints can be reached, the
    whole route fails (full_path None, cost +inf); the stops reached so
    far and the nodes explored on the way are still reported.

    Visited waypoints are removed by coordinate value, so equal (row, col)
    pairs held in different containers match.
    """

    def __init__(self, path_algo: Optional[PathfindingAlgorithm] = None, name: str = "NearestNeighbor") -> None:
        self.name = name

        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

        self.path_algo: Optional[PathfindingAlgorithm] = path_algo

    # ---- timing API ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    # ---- dependency injection ----

    def set_path_algo(self, algo: PathfindingAlgorithm) -> None:
        self.path_algo = algo

    # ---- main solver ----

    def solve(
        self,
        grid: GridMap,
        origin: Pos,
        waypoints: List[Pos],
    ) -> RouteResult:
        t0 = perf_counter()

        if self.path_algo is None:
            raise RuntimeError(
                f"{self.name}.path_algo is not set. "
                "Inject a pathfinding algorithm via set_path_algo()."
            )

        route = RouteBuilder(origin)
        remaining = list(waypoints)
        current = origin

        while remaining:
            best_t: Optional[Pos] = None
            best_seg: Optional[Found] = None
            best_cost: float = inf

            # find nearest reachable waypoint
            for t in remaining:
                seg = self.path_algo.search(grid, current, t)
                if seg.reachable and seg.cost < best_cost:
                    best_cost = seg.cost
                    best_t = t
                    best_seg = seg

            if best_t is None or best_seg is None:
                # none of the remaining waypoints is reachable
                self._update_stats(perf_counter() - t0)
                return route.failed()

            route.add_segment(best_t, best_seg)
            current = best_t
            remaining = [t for t in remaining if t != best_t]

        self._update_stats(perf_counter() - t0)
        return route.result()


ALGORITHMS = [
    NearestNeighborTour(BFS, name="NearestNeighborBFS"),
    NearestNeighborTour(ASTAR, name="NearestNeighborAStar"),
]
