# tours/__init__.py
"""
Multi-stop planners, discovered by module.

A module registers either one planner (module-level ALGORITHM) or several
configurations of the same planner (module-level ALGORITHMS list), each
under its own .name.
"""
import importlib
import pkgutil
from typing import Dict, List
from .base import TourAlgorithm

TOUR_ALGOS: Dict[str, TourAlgorithm] = {}


def load_algorithms() -> None:
    global TOUR_ALGOS
    found: Dict[str, TourAlgorithm] = {}
    for info in pkgutil.iter_modules(__path__):
        if info.name == "base":
            continue
        module = importlib.import_module(f"{__name__}.{info.name}")
        algos: List[TourAlgorithm] = list(getattr(module, "ALGORITHMS", []))
        single = getattr(module, "ALGORITHM", None)
        if single is not None:
            algos.append(single)
        for algo in algos:
            if algo.name in found:
                raise ValueError(f"Duplicate tour algorithm name: {algo.name}")
            found[algo.name] = algo
    TOUR_ALGOS = found


def get_tour_algorithm(name: str) -> TourAlgorithm:
    try:
        return TOUR_ALGOS[name]
    except KeyError:
        raise ValueError(
            f"Unknown tour algorithm: {name!r}. Known: {sorted(TOUR_ALGOS)}"
        ) from None


load_algorithms()
