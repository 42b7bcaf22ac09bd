# tours/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Protocol, Sequence

from env import GridMap, Pos
from pathfinding.base import Found


@dataclass
class RouteResult:
    """
    Outcome of a multi-stop planning call.

      - full_path: origin -> ... -> last stop, shared segment endpoints
        not repeated; None when the route failed
      - visitation_order: origin first, then stops in the order taken
        (on failure: the stops reached before giving up)
      - total_cost: sum of segment hop counts, or +inf on failure
      - all_explored: every node expanded by the searches that built the
        route, first-seen order, no duplicates
    """
    full_path: Optional[List[Pos]]
    visitation_order: List[Pos]
    total_cost: float
    all_explored: List[Pos] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.full_path is not None


class RouteBuilder:
    """Stitches single-pair segments into a RouteResult."""

    def __init__(self, origin: Pos) -> None:
        self.origin = origin
        self.full_path: List[Pos] = [origin]
        self.order: List[Pos] = [origin]
        self.cost = 0
        self._explored: Dict[Pos, None] = {}

    def add_segment(self, stop: Pos, segment: Found) -> None:
        # drop first cell to avoid duplication
        self.full_path.extend(segment.path[1:])
        self.explore(segment.explored)
        self.order.append(stop)
        self.cost += segment.cost

    def explore(self, nodes: Sequence[Pos]) -> None:
        for p in nodes:
            self._explored.setdefault(p, None)

    def result(self) -> RouteResult:
        return RouteResult(
            full_path=self.full_path,
            visitation_order=self.order,
            total_cost=self.cost,
            all_explored=list(self._explored),
        )

    def failed(self) -> RouteResult:
        return RouteResult(
            full_path=None,
            visitation_order=self.order,
            total_cost=inf,
            all_explored=list(self._explored),
        )


class TourAlgorithm(Protocol):
    """
    Interface for multi-stop planners.

    Given:
      - grid
      - origin (always visited first, never reordered)
      - list of waypoints (any visiting order is allowed)

    Return:
      - a RouteResult; failures are reported in-band
        (full_path None, total_cost +inf), never raised
    """

    name: str

    # timing stats (seconds)
    total_runtime: float
    call_count: int
    last_runtime: float

    def solve(
        self,
        grid: GridMap,
        origin: Pos,
        waypoints: List[Pos],
    ) -> RouteResult:
        ...

    def reset_stats(self) -> None:
        ...
