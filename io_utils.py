# io_utils.py
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
import json
from math import isinf
from typing import Any, Dict
from config import Config
from env import RouteProblem, pos_key
from tours.base import RouteResult
import uuid


def make_run_dir(cfg: Config, base: str = "outputs") -> Path:
    """
    Create and return a unique directory for this run.

    The folder name encodes grid size, waypoint count and seed, plus a
    timestamp and short UUID so repeated runs never collide:

        outputs/run_R20x20_Wp8_seed0_20261019-101500-ab12cd34/
    """
    base_path = Path(base)
    base_path.mkdir(parents=True, exist_ok=True)

    parts = [
        f"R{cfg.rows}x{cfg.cols}",
        f"Wp{cfg.n_waypoints}",
        f"seed{cfg.seed}",
    ]
    base_name = "run_" + "_".join(parts)

    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    uid = uuid.uuid4().hex[:8]

    run_dir = base_path / f"{base_name}_{ts}-{uid}"
    run_dir.mkdir(exist_ok=False)
    return run_dir


def _dump(data: Any, path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_config(cfg: Config, run_dir: Path, filename: str = "config.json") -> None:
    """Serialize the Config for this run, for reproducibility."""
    _dump(asdict(cfg), run_dir / filename)


def save_summary(summary: Dict[str, Any], run_dir: Path, filename: str = "summary.json") -> None:
    """
    Save the nested summary built by RoutePlanner.summary().
    Keys stay nested ("routes.Genetic.total_cost") so they flatten
    cleanly into CSV columns later.
    """
    _dump(summary, run_dir / filename)


def route_to_dict(result: RouteResult) -> Dict[str, Any]:
    """Full route detail, cells as "row,col" keys; failed routes have "full_path": null."""
    return {
        "full_path": [pos_key(p) for p in result.full_path] if result.full_path is not None else None,
        "visitation_order": [pos_key(p) for p in result.visitation_order],
        "total_cost": None if isinf(result.total_cost) else result.total_cost,
        "all_explored": [pos_key(p) for p in result.all_explored],
    }


def save_routes(
    problem: RouteProblem,
    results: Dict[str, RouteResult],
    run_dir: Path,
    filename: str = "routes.json",
) -> None:
    data = {
        "grid": [list(row) for row in problem.grid.cells],
        "origin": pos_key(problem.origin),
        "waypoints": [pos_key(w) for w in problem.waypoints],
        "routes": {name: route_to_dict(r) for name, r in results.items()},
    }
    _dump(data, run_dir / filename)
