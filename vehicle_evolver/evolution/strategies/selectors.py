from __future__ import annotations

import random

from loguru import logger

from vehicle_evolver.exceptions import MissingFitnessError, PreconditionError
from vehicle_evolver.vehicles.individual import Individual


def require_fitness(population: list[Individual]) -> list[int]:
    """Return every individual's fitness, failing if any is still unset."""
    missing = [i for i, ind in enumerate(population) if ind.fitness is None]
    if missing:
        raise MissingFitnessError(
            f"fitness not calculated for {len(missing)} of {len(population)} "
            f"individuals (rows {missing})"
        )
    return [ind.fitness for ind in population]  # type: ignore[misc]


class TournamentSelector:
    """Best of ``tournament_size`` distinct draws, repeated per requested winner.

    Low sizes keep selection pressure gentle; a size equal to the population
    always returns the global best and quickly homogenizes the gene pool.
    Ties go to the first maximum in draw order.
    """

    def __init__(self, tournament_size: int):
        if tournament_size < 2:
            raise PreconditionError(
                f"tournament_size must be at least 2, got {tournament_size}"
            )
        self.tournament_size = tournament_size

    def __call__(
        self, population: list[Individual], total: int, rng: random.Random
    ) -> list[Individual]:
        if self.tournament_size > len(population):
            raise PreconditionError(
                f"tournament_size ({self.tournament_size}) exceeds population "
                f"({len(population)})"
            )
        if total < 0:
            raise PreconditionError(f"total must be >= 0, got {total}")
        require_fitness(population)

        winners: list[Individual] = []
        for _ in range(total):
            candidates = rng.sample(population, self.tournament_size)
            winner = candidates[0]
            for candidate in candidates[1:]:
                if candidate.fitness > winner.fitness:  # type: ignore[operator]
                    winner = candidate
            winners.append(winner.model_copy())

        logger.debug(
            "TournamentSelector: {} tournaments over {} individuals (k={}), winner fitness {}",
            total,
            len(population),
            self.tournament_size,
            [w.fitness for w in winners],
        )
        return winners
