# batch_config.py
from __future__ import annotations

from typing import Dict, List, Any

# ---------------------------------------------------------------------------
# CPU usage for batch_run.py
# ---------------------------------------------------------------------------
# If CPU_COUNT is None, batch_run.py will use mp.cpu_count().
# Otherwise, it will use at most this many worker processes.
CPU_COUNT: int | None = None

# ---------------------------------------------------------------------------
# Parameter grid for batch_run.py
# ---------------------------------------------------------------------------
# PARAM_GRID runs the Cartesian product of the values, e.g.
#   "rows": [20, 30], "cols": [20, 30]
# gives 4 grid shapes. Every combination runs all planners in
# "tour_algo_names" on the same problem, one CSV row per planner.
#
# Experiment count grows as prod(len(v) for v in PARAM_GRID.values()).
PARAM_GRID: Dict[str, List[Any]] = {
    # --- meta ---
    "purpose": ["planner_comparison"],  # free-text label for this batch

    # --- problem ---
    "rows": [20],
    "cols": [20],
    "n_waypoints": [5, 10],
    "obstacle_density": [0.1, 0.25],

    # --- genetic planner ---
    "population_size": [100],
    "generations": [150],
    "mutation_rate": [0.05],

    # --- randomness (problem layout and GA draws) ---
    "seed": [i for i in range(10)],
}

# Planners run on every problem (see tours/):
#
#   "NearestNeighborBFS"    - greedy nearest waypoint, BFS segments
#   "NearestNeighborAStar"  - greedy nearest waypoint, A* segments
#   "Genetic"               - GA over visiting orders, cached A* segments
TOUR_ALGO_NAMES: List[str] = ["NearestNeighborBFS", "NearestNeighborAStar", "Genetic"]

# Reference planner for the "gap" column (planner cost - reference cost)
REFERENCE_ALGO_NAME = "NearestNeighborAStar"
