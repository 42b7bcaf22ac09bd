#!/usr/bin/env python3
"""
Batch experiment runner.

This script is meant for *offline experiments* where you want to:

- Sweep over many grid / GA configurations and seeds.
- Run every planner on each generated problem (no PNG output).
- Collect all metrics into a single long-format CSV, one row per
  (experiment, planner), for analysis with plot_utils.py.

If `outputs_batch/batch_results.csv` already exists, its header is
reused and new rows are appended with the same schema.

Usage
-----

From the repo root:

    python batch_run.py
"""

import csv
import itertools
import multiprocessing as mp
from pathlib import Path
from typing import Dict, Any, Iterator, List
import traceback

from batch_config import CPU_COUNT, PARAM_GRID, REFERENCE_ALGO_NAME, TOUR_ALGO_NAMES
from config import Config
from env import RouteProblem
from router import RoutePlanner


def iter_param_combinations(grid: Dict[str, List[Any]]) -> Iterator[Dict[str, Any]]:
    """Yield dicts for each combination in the parameter grid."""
    keys = list(grid.keys())
    for combo in itertools.product(*(grid[k] for k in keys)):
        yield dict(zip(keys, combo))


def flatten_dict(
    d: Dict[str, Any],
    parent_key: str = "",
    sep: str = ".",
) -> Dict[str, Any]:
    """
    Turn nested dicts into a flat dict with dotted keys:

        {"a": {"b": 1}, "c": 2}  ->  {"a.b": 1, "c": 2}
    """
    items: Dict[str, Any] = {}
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.update(flatten_dict(v, new_key, sep=sep))
        else:
            items[new_key] = v
    return items


def run_single_experiment(
    purpose: str,                # meta label, only copied into the CSV
    rows: int,
    cols: int,
    n_waypoints: int,
    obstacle_density: float,
    seed: int,
    population_size: int = 100,
    generations: int = 150,
    mutation_rate: float = 0.05,
) -> List[Dict[str, Any]]:
    """
    Build one problem, run every planner on it and return one flat row
    per planner.
    """
    cfg = Config(
        rows=rows,
        cols=cols,
        n_waypoints=n_waypoints,
        obstacle_density=obstacle_density,
        seed=seed,
        population_size=population_size,
        generations=generations,
        mutation_rate=mutation_rate,
        tour_algo_names=list(TOUR_ALGO_NAMES),
    )

    problem = RouteProblem.from_config(cfg)
    planner = RoutePlanner(cfg=cfg, problem=problem)
    planner.reset_stats()
    planner.run()

    summary = planner.summary()
    routes = summary["routes"]
    reference = routes.get(REFERENCE_ALGO_NAME, {}).get("total_cost")

    out: List[Dict[str, Any]] = []
    for name, entry in routes.items():
        entry = dict(entry)
        entry.pop("visitation_order")
        genetic = entry.pop("genetic", None)
        if genetic is not None:
            entry["generations_run"] = genetic["generations_run"]
            entry["cache_misses"] = genetic["cache_misses"]

        cost = entry["total_cost"]
        entry["gap_vs_reference"] = (
            cost - reference if cost is not None and reference is not None else None
        )

        row = {"planner": name, "blocked": summary["grid"]["blocked"]}
        row.update(flatten_dict({"route": entry}))
        out.append(row)
    return out


def run_one(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Worker function for each process.

    Returns merged {params..., row...} dicts; an empty list if the run
    failed (the error is printed).
    """
    params = dict(params)

    try:
        rows = run_single_experiment(**params)
    except Exception as e:
        print(f"[ERROR] run_single_experiment failed for params={params}: {e}")
        traceback.print_exc()
        return []

    return [{**params, **row} for row in rows]


def _fieldnames(row: Dict[str, Any]) -> List[str]:
    names = sorted(row.keys())
    # 'purpose' and 'planner' first
    for key in ("planner", "purpose"):
        if key in names:
            names.remove(key)
            names.insert(0, key)
    return names


def main_batch() -> None:
    combos = list(iter_param_combinations(PARAM_GRID))
    total = len(combos)
    if total == 0:
        print("No parameter combinations to run. Check PARAM_GRID.")
        return

    print(f"Total experiments to run: {total}")

    out_dir = Path("outputs_batch")
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "batch_results.csv"

    fieldnames: List[str] | None = None
    if out_path.exists():
        with out_path.open("r", newline="") as f:
            fieldnames = next(csv.reader(f), None) or None
        if fieldnames:
            print(f"Appending to existing CSV: {out_path} ({len(fieldnames)} columns)")

    # Without a header yet, run the first job synchronously to infer columns.
    start_index = 0
    if fieldnames is None:
        print("Running first job synchronously to infer CSV columns...")
        first_rows = run_one(combos[0])
        if not first_rows:
            print("[ERROR] First experiment failed; cannot infer CSV columns.")
            return
        fieldnames = _fieldnames(first_rows[0])
        with out_path.open("w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(first_rows)
        start_index = 1

    remaining = combos[start_index:]
    if not remaining:
        print("No remaining experiments to run; done.")
        return

    num_procs = min(CPU_COUNT or mp.cpu_count(), mp.cpu_count())
    print(f"Running remaining {len(remaining)} experiments using {num_procs} processes ...")

    done = start_index
    with out_path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        with mp.Pool(processes=num_procs) as pool:
            for rows in pool.imap_unordered(run_one, remaining):
                if not rows:
                    # this run failed; already logged
                    continue
                writer.writerows(rows)
                f.flush()
                done += 1
                if done % 10 == 0 or done == total:
                    print(f"Completed {done}/{total} experiments")

    print(f"All done. Results in {out_path}")


if __name__ == "__main__":
    main_batch()
