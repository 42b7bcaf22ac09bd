# pathfinding/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from math import inf
from typing import ClassVar, List, Optional, Protocol, Union

from env import GridMap, Pos


@dataclass(frozen=True)
class Found:
    """A shortest path from source to dest (both inclusive)."""
    path: List[Pos]
    cost: int
    # nodes in the order the search expanded them (for visualization)
    explored: List[Pos] = field(default_factory=list)

    reachable: ClassVar[bool] = True

    def reversed(self) -> "Found":
        return Found(path=self.path[::-1], cost=self.cost, explored=self.explored)


@dataclass(frozen=True)
class Unreachable:
    """The frontier ran dry before dest was reached."""
    explored: List[Pos] = field(default_factory=list)

    reachable: ClassVar[bool] = False
    path: ClassVar[Optional[List[Pos]]] = None
    cost: ClassVar[float] = inf

    def reversed(self) -> "Unreachable":
        return self


SearchResult = Union[Found, Unreachable]


class PathfindingAlgorithm(Protocol):
    name: str
    # Optional timing stats (per algorithm implementation)
    total_runtime: float
    call_count: int
    last_runtime: float

    def search(self, grid: GridMap, source: Pos, dest: Pos) -> SearchResult:
        ...

    def reset_stats(self) -> None:
        ...
