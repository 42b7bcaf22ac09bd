# pathfinding/bfs.py
from collections import deque
from time import perf_counter
from typing import Dict, List, Optional

from env import GridMap, Pos
from .base import Found, PathfindingAlgorithm, SearchResult, Unreachable


class BFSPlanner(PathfindingAlgorithm):
    name = "BFS"

    def __init__(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def search(self, grid: GridMap, source: Pos, dest: Pos) -> SearchResult:
        """
        Breadth-first search on a 4-connected, unit-cost grid.

        Every cell is enqueued at most once (first discovery wins), which
        gives the shortest hop count. The search stops as soon as 'dest'
        is dequeued; 'explored' lists cells in dequeue order.
        """
        t0 = perf_counter()

        q = deque([source])
        came_from: Dict[Pos, Optional[Pos]] = {source: None}
        explored: List[Pos] = []
        result: SearchResult = Unreachable(explored)

        while q:
            cur = q.popleft()
            explored.append(cur)

            if cur == dest:
                # reconstruct
                path: List[Pos] = []
                node: Optional[Pos] = cur
                while node is not None:
                    path.append(node)
                    node = came_from[node]
                path.reverse()
                result = Found(path=path, cost=len(path) - 1, explored=explored)
                break

            for np in grid.neighbors4(cur):
                if np in came_from:
                    continue
                came_from[np] = cur
                q.append(np)

        self._update_stats(perf_counter() - t0)
        return result

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1


ALGORITHM = BFSPlanner()
