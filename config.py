# config.py
from dataclasses import dataclass, field
from typing import List


@dataclass
class Config:
    rows: int = 20
    cols: int = 20

    n_waypoints: int = 8

    # Fraction of non-origin cells that start blocked
    obstacle_density: float = 0.20
    seed: int = 0

    min_connected_ratio: float = 0.5      # reachable / free cells required from origin
    max_obstacle_tries: int = 50          # avoid infinite loop

    # Genetic ordering planner
    population_size: int = 100
    generations: int = 150
    mutation_rate: float = 0.05
    tournament_size: int = 5
    elitism_count: int = 2

    # Planners to run, by registry name (see tours/)
    tour_algo_names: List[str] = field(
        default_factory=lambda: ["NearestNeighborBFS", "NearestNeighborAStar", "Genetic"]
    )

    log_events: bool = False
