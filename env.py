# env.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set, Tuple
import random

from config import Config

Pos = Tuple[int, int]  # (row, col)

PASSABLE = 0
BLOCKED = 1

# down, up, right, left -- fixed so that exploration order is reproducible
NEIGHBOR_STEPS: Tuple[Pos, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def pos_key(p: Pos) -> str:
    """Canonical "row,col" identity of a cell, used when serializing."""
    return f"{p[0]},{p[1]}"


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class GridMap:
    """
    Immutable snapshot of a rows x cols table of cells:
      - 0 = passable
      - 1 = blocked

    Cells are addressed as (row, col), 0-indexed. Adjacency is 4-connected,
    clipped at the borders; there is no diagonal movement.
    """
    rows: int
    cols: int
    cells: Tuple[Tuple[int, ...], ...]

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #
    @classmethod
    def empty(cls, rows: int, cols: int) -> "GridMap":
        return cls(rows, cols, tuple((PASSABLE,) * cols for _ in range(rows)))

    @classmethod
    def from_rows(cls, table: Sequence[Sequence[int]]) -> "GridMap":
        """
        Build a grid from a nested list such as the one an editor produces:

            GridMap.from_rows([[0, 0, 1],
                               [0, 1, 0]])
        """
        cells = tuple(tuple(BLOCKED if v else PASSABLE for v in row) for row in table)
        rows = len(cells)
        cols = len(cells[0]) if rows else 0
        if any(len(row) != cols for row in cells):
            raise ValueError("Grid rows must all have the same length.")
        return cls(rows, cols, cells)

    def with_blocked(self, blocked: Iterable[Pos]) -> "GridMap":
        """Copy of this grid with the given cells turned into obstacles."""
        table = [list(row) for row in self.cells]
        for r, c in blocked:
            table[r][c] = BLOCKED
        return GridMap(self.rows, self.cols, tuple(tuple(row) for row in table))

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    def in_bounds(self, p: Pos) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_blocked(self, p: Pos) -> bool:
        r, c = p
        return self.cells[r][c] == BLOCKED

    def neighbors4(self, p: Pos) -> List[Pos]:
        """Passable 4-connected neighbors in down, up, right, left order."""
        r, c = p
        out: List[Pos] = []
        for dr, dc in NEIGHBOR_STEPS:
            q = (r + dr, c + dc)
            if self.in_bounds(q) and not self.is_blocked(q):
                out.append(q)
        return out

    def blocked_cells(self) -> Set[Pos]:
        return {
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if self.cells[r][c] == BLOCKED
        }

    def reachable_from(self, start: Pos) -> Set[Pos]:
        """All passable cells connected to 'start' (start included)."""
        if not self.in_bounds(start) or self.is_blocked(start):
            return set()
        seen: Set[Pos] = {start}
        q = deque([start])
        while q:
            cur = q.popleft()
            for np in self.neighbors4(cur):
                if np not in seen:
                    seen.add(np)
                    q.append(np)
        return seen


def check_inputs(grid: GridMap, origin: Pos, waypoints: Sequence[Pos]) -> None:
    """
    Optional precondition check for callers that want one. The planners
    themselves never validate: off-grid, blocked or duplicate stops are
    the caller's responsibility.
    """
    for label, p in [("origin", origin)] + [("waypoint", w) for w in waypoints]:
        if not grid.in_bounds(p):
            raise ValueError(f"{label} {p} is outside the {grid.rows}x{grid.cols} grid.")
        if grid.is_blocked(p):
            raise ValueError(f"{label} {p} is on a blocked cell.")

    seen: Set[Pos] = set()
    for w in waypoints:
        if w in seen:
            raise ValueError(f"Duplicate waypoint {w}.")
        seen.add(w)


@dataclass
class RouteProblem:
    """
    One planning request: a grid, the origin (always visited first) and the
    waypoints in the order the caller added them.
    """
    grid: GridMap
    origin: Pos
    waypoints: List[Pos] = field(default_factory=list)

    @classmethod
    def from_config(cls, cfg: Config) -> "RouteProblem":
        rng = random.Random(cfg.seed)
        rows, cols = cfg.rows, cfg.cols

        origin: Pos = (rows // 2, cols // 2)
        all_cells = [(r, c) for r in range(rows) for c in range(cols) if (r, c) != origin]

        max_obstacles = max(len(all_cells) - cfg.n_waypoints, 0)
        n_blocked = min(int(cfg.obstacle_density * len(all_cells)), max_obstacles)

        # 1) Sample obstacles until enough of the map is connected to the origin
        for attempt in range(cfg.max_obstacle_tries):
            cells = list(all_cells)
            rng.shuffle(cells)
            grid = GridMap.empty(rows, cols).with_blocked(cells[:n_blocked])

            reachable = grid.reachable_from(origin) - {origin}
            total_free = len(all_cells) - n_blocked
            ratio = len(reachable) / total_free if total_free > 0 else 0.0

            if len(reachable) >= cfg.n_waypoints and ratio >= cfg.min_connected_ratio:
                break
        else:
            raise RuntimeError(
                f"Failed to generate a connected grid after {cfg.max_obstacle_tries} attempts."
            )

        # 2) Waypoints on reachable cells; sorted first so the draw is seed-stable
        waypoints = rng.sample(sorted(reachable), cfg.n_waypoints)
        return cls(grid=grid, origin=origin, waypoints=waypoints)
