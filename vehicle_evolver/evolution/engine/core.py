from __future__ import annotations

import random
from typing import Iterable

from loguru import logger

from vehicle_evolver.database.fitness_cache import FitnessCache
from vehicle_evolver.evolution.engine.metrics import GenerationStatistics
from vehicle_evolver.evolution.mutation.parent_selector import (
    ParentSelector,
    SlidingWindowParentSelector,
)
from vehicle_evolver.evolution.strategies.selectors import (
    TournamentSelector,
    require_fitness,
)
from vehicle_evolver.exceptions import PreconditionError
from vehicle_evolver.vehicles.genome import Genome
from vehicle_evolver.vehicles.individual import Individual

__all__ = ["EvolutionEngine"]


class EvolutionEngine:
    """
    Generational GA over vehicle genomes:
    - Fitness comes from the shared FitnessCache, never computed here.
    - Each step logs statistics, runs tournament selection, sliding-window
      crossover and mutation, and replaces the whole population.
    - Parents only survive when crossover/mutation happens to rebuild them.
    """

    def __init__(
        self,
        population_size: int,
        rng: random.Random | None = None,
        parent_selector: ParentSelector | None = None,
    ):
        self._rng = rng or random.Random()
        self._check_size(population_size)
        self._population = [
            Individual(genome=Genome.random(self._rng)) for _ in range(population_size)
        ]
        self._statistics: list[GenerationStatistics] = []
        self.parent_selector = parent_selector or SlidingWindowParentSelector()

        logger.info("[EvolutionEngine] Init | population_size={}", population_size)

    @classmethod
    def from_genomes(
        cls, genomes: Iterable[Genome], rng: random.Random | None = None
    ) -> EvolutionEngine:
        genomes = list(genomes)
        engine = cls(len(genomes), rng=rng)
        engine.overwrite_population(genomes)
        return engine

    # -------------------------- Accessors --------------------------

    @property
    def population(self) -> list[Individual]:
        return list(self._population)

    @property
    def statistics(self) -> list[GenerationStatistics]:
        return list(self._statistics)

    @property
    def generation(self) -> int:
        return len(self._statistics)

    def genomes(self) -> list[Genome]:
        return [ind.genome for ind in self._population]

    # -------------------------- Fitness --------------------------

    def fill_fitness(self, cache: FitnessCache) -> None:
        logger.info(
            "[EvolutionEngine] filling in fitness: {} cache entries to pick from",
            len(cache),
        )
        for ind in self._population:
            old = ind.fitness
            ind.fitness = cache.get(ind.genome)
            logger.trace(
                "[EvolutionEngine] fitness went from {} to {}", old, ind.fitness
            )

    def average_fitness(self) -> float:
        values = require_fitness(self._population)
        return sum(values) / len(values)

    def max_fitness(self) -> int:
        return max(require_fitness(self._population))

    # -------------------------- Variation --------------------------

    def tournament_select(self, k: int, n: int) -> list[Individual]:
        """Hold ``n`` tournaments of ``k`` distinct individuals each."""
        winners = TournamentSelector(k)(self._population, n, self._rng)
        logger.info(
            "[EvolutionEngine] tournament selection on {} vehicles with k={} n={}",
            len(self._population),
            k,
            n,
        )
        return winners

    def crossover(self, parents: list[Individual]) -> list[Individual]:
        """Cross every overlapping adjacent pair, then keep ``len(parents)`` children.

        The ``2 * (len - 1)`` candidates are subsampled without replacement.
        """
        if len(parents) % 2 != 0:
            raise PreconditionError(f"population size wasn't even ({len(parents)})")

        candidates: list[Genome] = []
        for father, mother in self.parent_selector.create_parent_iterator(parents):
            logger.debug(
                "[EvolutionEngine] crossbreeding parents with fitness {} and {}",
                father.fitness,
                mother.fitness,
            )
            cut = self._rng.randrange(1, father.genome.columns)
            brother, sister = father.genome.one_point_crossover(mother.genome, cut)
            candidates.extend((brother, sister))

        chosen = self._rng.sample(candidates, len(parents))
        return [Individual(genome=g) for g in chosen]

    def mutate_all(self, children: list[Individual], amount: int) -> None:
        """Replace each child's genome with a mutated copy, in place."""
        logger.debug(
            "[EvolutionEngine] mutating {} children with amount {}",
            len(children),
            amount,
        )
        for i, child in enumerate(children):
            children[i] = Individual(genome=child.genome.mutate(amount, self._rng))

    # -------------------------- Generation --------------------------

    def step(self, tournament_k: int, mutation_amount: int) -> GenerationStatistics:
        stats = GenerationStatistics(
            avg_fitness=self.average_fitness(),
            max_fitness=float(self.max_fitness()),
        )

        n = len(self._population)
        parents = self.tournament_select(tournament_k, n)
        children = self.crossover(parents)
        if len(children) != n:
            raise PreconditionError(
                f"crossover produced {len(children)} children for {n} parents"
            )
        self.mutate_all(children, mutation_amount)

        self._statistics.append(stats)
        self._population = children
        logger.info(
            "[EvolutionEngine] generation {} | avg={:.1f} max={:.0f}",
            self.generation,
            stats.avg_fitness,
            stats.max_fitness,
        )
        return stats

    def overwrite_population(self, genomes: Iterable[Genome]) -> None:
        """Replace every row, clearing fitness; the size must not change."""
        genomes = list(genomes)
        if len(genomes) != len(self._population):
            raise PreconditionError(
                f"population size is fixed at {len(self._population)}, got {len(genomes)}"
            )
        self._population = [Individual(genome=g) for g in genomes]

    @staticmethod
    def _check_size(population_size: int) -> None:
        if population_size < 2 or population_size % 2 != 0:
            raise PreconditionError(
                f"population size must be even and at least 2 ({population_size})"
            )
