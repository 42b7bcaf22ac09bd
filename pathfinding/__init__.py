# pathfinding/__init__.py
"""
Single-pair search strategies, discovered by module.

Any module in this package that exposes a module-level ALGORITHM instance
is registered under ALGORITHM.name ("BFS", "AStar", ...). Helper modules
without one (base, distance_cache) are skipped.
"""
import importlib
import pkgutil
from typing import Dict
from .base import PathfindingAlgorithm

PATHFINDING_ALGOS: Dict[str, PathfindingAlgorithm] = {}


def load_algorithms() -> None:
    global PATHFINDING_ALGOS
    found: Dict[str, PathfindingAlgorithm] = {}
    for info in pkgutil.iter_modules(__path__):
        if info.name == "base":
            continue
        module = importlib.import_module(f"{__name__}.{info.name}")
        algo = getattr(module, "ALGORITHM", None)
        if algo is None:
            continue
        if algo.name in found:
            raise ValueError(f"Duplicate pathfinding name: {algo.name}")
        found[algo.name] = algo
    PATHFINDING_ALGOS = found


def get_algorithm(name: str) -> PathfindingAlgorithm:
    try:
        return PATHFINDING_ALGOS[name]
    except KeyError:
        raise ValueError(
            f"Unknown pathfinding algorithm: {name!r}. "
            f"Known: {sorted(PATHFINDING_ALGOS)}"
        ) from None


load_algorithms()
