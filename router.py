# router.py
from __future__ import annotations
from dataclasses import dataclass, field
from math import isinf
from typing import Any, Dict, List, Optional

from config import Config
from env import RouteProblem, check_inputs, pos_key
from pathfinding import PATHFINDING_ALGOS
from tours import get_tour_algorithm
from tours.base import RouteResult, TourAlgorithm


@dataclass
class RoutePlanner:
    """
    Runs the selected multi-stop planners on one RouteProblem, one after
    the other. Planners share nothing; each result stands on its own.
    """
    cfg: Config
    problem: RouteProblem

    # defaults to cfg.tour_algo_names
    tour_algo_names: Optional[List[str]] = None

    # control terminal logging
    log_events: bool = False

    # check origin / waypoints before planning (planners never do)
    validate: bool = False

    results: Dict[str, RouteResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.tour_algo_names is None:
            self.tour_algo_names = list(self.cfg.tour_algo_names)

        self._log(f"[INIT] RoutePlanner with TR={self.tour_algo_names}")

        self.tour_algos: Dict[str, TourAlgorithm] = {}
        for name in self.tour_algo_names:
            algo = get_tour_algorithm(name)
            # let planners pick up their parameters / seed, if they want
            if hasattr(algo, "configure"):
                algo.configure(self.cfg)
            self.tour_algos[name] = algo

        if self.validate:
            check_inputs(self.problem.grid, self.problem.origin, self.problem.waypoints)

    # ---------- logging helper ---------- #

    def _log(self, msg: str) -> None:
        if self.log_events:
            print(msg)

    # ---------------- planning ---------------- #

    def reset_stats(self) -> None:
        for algo in PATHFINDING_ALGOS.values():
            algo.reset_stats()
        for algo in self.tour_algos.values():
            algo.reset_stats()

    def run(self) -> Dict[str, RouteResult]:
        p = self.problem
        self._log(
            f"[PLAN] {p.grid.rows}x{p.grid.cols} grid, origin {p.origin}, "
            f"{len(p.waypoints)} waypoints"
        )

        self.results = {}
        for name, algo in self.tour_algos.items():
            # each planner gets its own copy of the waypoint list
            result = algo.solve(p.grid, p.origin, list(p.waypoints))
            self.results[name] = result

            if result.found:
                self._log(
                    f"[ROUTE] {name}: cost {result.total_cost}, "
                    f"{len(result.all_explored)} explored, "
                    f"{algo.last_runtime * 1000:.1f} ms"
                )
                self._log(f"    order: {result.visitation_order}")
            else:
                self._log(
                    f"[FAIL] {name}: no route through all waypoints "
                    f"(reached {len(result.visitation_order) - 1} of {len(p.waypoints)})"
                )

        return self.results

    def comparison_message(self) -> str:
        """
        One-line comparison, e.g.

            NearestNeighborAStar Length: 24 | Genetic Length: 22
            NearestNeighborBFS failed. | Genetic failed.
        """
        if self.results and not any(r.found for r in self.results.values()):
            return "All algorithms failed to find a path!"
        parts = []
        for name, result in self.results.items():
            if result.found:
                parts.append(f"{name} Length: {result.total_cost}")
            else:
                parts.append(f"{name} failed.")
        return " | ".join(parts)

    # ---------------- reporting ---------------- #

    def summary(self) -> Dict[str, Any]:
        p = self.problem
        summary: Dict[str, Any] = {
            "grid": {
                "rows": p.grid.rows,
                "cols": p.grid.cols,
                "blocked": len(p.grid.blocked_cells()),
            },
            "origin": pos_key(p.origin),
            "waypoints": [pos_key(w) for w in p.waypoints],
        }

        # ---- Pathfinding metrics ----
        summary["pathfinding"] = {
            name: {
                "call_count": pa.call_count,
                "total_runtime": pa.total_runtime,
                "avg_runtime": (pa.total_runtime / pa.call_count) if pa.call_count else 0.0,
            }
            for name, pa in PATHFINDING_ALGOS.items()
        }

        # ---- Route metrics per planner ----
        routes: Dict[str, Any] = {}
        for name, result in self.results.items():
            ta = self.tour_algos[name]
            entry: Dict[str, Any] = {
                "found": result.found,
                # JSON has no infinity
                "total_cost": None if isinf(result.total_cost) else result.total_cost,
                "path_length": len(result.full_path) if result.full_path else 0,
                "visitation_order": [pos_key(s) for s in result.visitation_order],
                "explored_count": len(result.all_explored),
                "runtime": ta.last_runtime,
            }

            # Optional GA metrics
            if hasattr(ta, "last_best_history"):
                entry["genetic"] = {
                    "generations_run": ta.last_generations_run,
                    "best_history": list(ta.last_best_history),
                    "cache_entries": len(ta.oracle),
                    "cache_hits": ta.oracle.hits,
                    "cache_misses": ta.oracle.misses,
                }

            routes[name] = entry

        summary["routes"] = routes
        return summary
