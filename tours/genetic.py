# tours/genetic.py
from __future__ import annotations

import random
from time import perf_counter
from math import inf
from typing import List, Optional, Sequence, Tuple

from config import Config
from env import GridMap, Pos
from .base import RouteBuilder, RouteResult, TourAlgorithm
from pathfinding.astar import AStarPlanner
from pathfinding.distance_cache import DistanceOracle

Chromosome = List[int]


class GeneticTour(TourAlgorithm):
    """
    Genetic-algorithm search over waypoint visiting orders (open-path TSP).

    A chromosome is a permutation of waypoint indices; the origin is
    implicitly first and never part of it. Edge weights are A* hop counts
    between stops, served by a DistanceOracle that is reset and pre-warmed
    with every pairwise result at the start of each solve().

    Per generation:
      - fitness = d(origin, first) + sum of d(consecutive stops);
        any unreachable segment makes it +inf
      - the elitism_count best finite individuals survive unchanged
      - the rest of the population is bred: two tournament winners drawn
        from the finite individuals, ordered crossover (OX1), swap mutation

    The best finite chromosome over all generations is kept. If a
    generation has no finite individual the route fails.

    Cost model (open path):
      cost([i0, ..., ik-1]) = d(origin, w_i0) + sum_m d(w_im, w_im+1)

    The planner owns its oracle, so one instance must not run two solves
    at the same time.
    """

    name = "Genetic"

    def __init__(
        self,
        population_size: int = 100,
        generations: int = 150,
        mutation_rate: float = 0.05,
        tournament_size: int = 5,
        elitism_count: int = 2,
        seed: Optional[int] = None,
    ) -> None:
        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

        self.population_size = population_size
        self.generations = generations
        self.mutation_rate = mutation_rate
        self.tournament_size = tournament_size
        self.elitism_count = elitism_count

        self.rng = random.Random(seed)
        # own A* instance, so its stats stay apart from the registered "AStar"
        self.oracle = DistanceOracle(AStarPlanner())

        # per-solve stats
        self.last_generations_run: int = 0
        self.last_best_history: List[float] = []

    # ---- timing ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    # ---- configuration ----

    def reseed(self, seed: Optional[int]) -> None:
        self.rng = random.Random(seed)

    def configure(self, cfg: Config) -> None:
        """Take GA parameters and the random seed from a Config."""
        self.population_size = cfg.population_size
        self.generations = cfg.generations
        self.mutation_rate = cfg.mutation_rate
        self.tournament_size = cfg.tournament_size
        self.elitism_count = cfg.elitism_count
        self.reseed(cfg.seed)

    # ---- genetic operators ----

    def fitness(self, origin: Pos, waypoints: Sequence[Pos], order: Chromosome) -> float:
        seg = self.oracle.distance(origin, waypoints[order[0]])
        if not seg.reachable:
            return inf
        total = seg.cost

        for a, b in zip(order, order[1:]):
            seg = self.oracle.distance(waypoints[a], waypoints[b])
            if not seg.reachable:
                return inf
            total += seg.cost
        return total

    def random_population(self, n_genes: int) -> List[Chromosome]:
        population: List[Chromosome] = []
        for _ in range(self.population_size):
            order = list(range(n_genes))
            self.rng.shuffle(order)
            population.append(order)
        return population

    def tournament(self, scored: Sequence[Tuple[float, Chromosome]]) -> Chromosome:
        """Lowest fitness among tournament_size random draws (with replacement)."""
        best = self.rng.choice(scored)
        for _ in range(self.tournament_size - 1):
            cand = self.rng.choice(scored)
            if cand[0] < best[0]:
                best = cand
        return best[1]

    def crossover(self, parent1: Chromosome, parent2: Chromosome) -> Chromosome:
        """
        Ordered crossover (OX1): child keeps parent1[start..end] in place,
        the other slots are filled left to right with parent2's genes that
        are not in the slice. Any gene still missing is dropped into the
        remaining holes so the child is always a permutation.
        """
        n = len(parent1)
        start = self.rng.randrange(n)
        end = self.rng.randrange(start, n)

        child: List[Optional[int]] = [None] * n
        child[start:end + 1] = parent1[start:end + 1]
        in_slice = set(parent1[start:end + 1])

        donors = (g for g in parent2 if g not in in_slice)
        for i in range(n):
            if child[i] is None:
                child[i] = next(donors, None)

        placed = set(child)
        missing = [g for g in parent1 if g not in placed]
        for i in range(n):
            if child[i] is None:
                child[i] = missing.pop(0)

        return child  # type: ignore[return-value]

    def mutate(self, order: Chromosome) -> None:
        """Swap two random positions, with probability mutation_rate."""
        if self.rng.random() < self.mutation_rate:
            i = self.rng.randrange(len(order))
            j = self.rng.randrange(len(order))
            order[i], order[j] = order[j], order[i]

    def next_generation(self, valid: Sequence[Tuple[float, Chromosome]]) -> List[Chromosome]:
        """
        Breed population_size children from 'valid' (finite individuals,
        sorted by fitness). The first elitism_count are copied over as-is.
        """
        population: List[Chromosome] = [
            list(order) for _, order in valid[: self.elitism_count]
        ]
        while len(population) < self.population_size:
            parent1 = self.tournament(valid)
            parent2 = self.tournament(valid)
            child = self.crossover(parent1, parent2)
            self.mutate(child)
            population.append(child)
        return population

    # ---- main solver ----

    def solve(
        self,
        grid: GridMap,
        origin: Pos,
        waypoints: List[Pos],
    ) -> RouteResult:
        t0 = perf_counter()

        waypoints = list(waypoints)
        self.oracle.reset(grid)
        self.last_generations_run = 0
        self.last_best_history = []

        route = RouteBuilder(origin)
        if not waypoints:
            self._update_stats(perf_counter() - t0)
            return route.result()

        # 1) every pairwise A* result among origin + waypoints
        self.oracle.warm([origin] + waypoints)

        # 2) random initial orders
        population = self.random_population(len(waypoints))

        best_order: Optional[Chromosome] = None
        best_fitness: float = inf

        # 3) generations
        for gen in range(self.generations):
            scored = [(self.fitness(origin, waypoints, order), order) for order in population]
            valid = [s for s in scored if s[0] != inf]
            if not valid:
                self._update_stats(perf_counter() - t0)
                return route.failed()

            # stable: equal fitness keeps population order
            valid.sort(key=lambda s: s[0])

            if valid[0][0] < best_fitness:
                best_fitness, best_order = valid[0][0], list(valid[0][1])
            self.last_best_history.append(best_fitness)
            self.last_generations_run = gen + 1

            population = self.next_generation(valid)

        if best_order is None:
            # generations == 0: nothing was evaluated
            self._update_stats(perf_counter() - t0)
            return route.failed()

        # 4) stitch the cached segments along the best order
        current = origin
        for idx in best_order:
            stop = waypoints[idx]
            seg = self.oracle.distance(current, stop)
            route.add_segment(stop, seg)
            current = stop

        self._update_stats(perf_counter() - t0)
        return route.result()


ALGORITHM = GeneticTour()
