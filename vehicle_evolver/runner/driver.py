from __future__ import annotations

from loguru import logger

from vehicle_evolver.database.fitness_cache import FitnessCache
from vehicle_evolver.evaluation.fitness import FitnessEvaluator
from vehicle_evolver.evolution.engine.config import SimulationParams
from vehicle_evolver.evolution.engine.core import EvolutionEngine
from vehicle_evolver.exceptions import PreconditionError
from vehicle_evolver.vehicles.ledger import PoppedSlot, PopulationLedger, SlotId

__all__ = ["GenerationDriver"]


class GenerationDriver:
    """
    Glue between the evaluator, the ledger, the cache and the engine:
    - spawn_batch() finalizes the previous batch into the cache and pops the next.
    - evolve_if_finished() steps the engine once every slot is done and
      starts a fresh ledger for the new generation.
    Wall-clock deadlines belong to the caller, which decides when to spawn
    the next batch.
    """

    def __init__(
        self,
        engine: EvolutionEngine,
        cache: FitnessCache,
        params: SimulationParams,
    ):
        if len(engine.population) != params.population_size:
            raise PreconditionError(
                f"engine holds {len(engine.population)} individuals, "
                f"params expect {params.population_size}"
            )
        self.engine = engine
        self.cache = cache
        self.params = params
        self.ledger = PopulationLedger.build(
            engine.genomes(), max_slots=params.max_ledger_slots
        )
        self._active: list[SlotId] = []

        logger.info(
            "[GenerationDriver] Init | population={}, batch={}, k={}, mutation={}, elitism={}",
            params.population_size,
            params.max_simultaneous_vehicles,
            params.tournament_k,
            params.mutation_amount,
            params.place_only_best_vehicle,
        )

    @property
    def active_slots(self) -> list[SlotId]:
        return list(self._active)

    def spawn_batch(self) -> list[PoppedSlot]:
        """Finalize the running batch, then hand out the next pending slots."""
        self.finalize_active()

        popped = self.ledger.pop_next_pending(self.params.max_simultaneous_vehicles)
        if not popped:
            logger.warning("[GenerationDriver] ran out of vehicles")
            return []

        self._active = [p.slot_id for p in popped]
        logger.info("[GenerationDriver] spawned slots {}", self._active)
        return popped

    def report(self, slot: SlotId, fitness: int, fell_apart: bool) -> None:
        self.ledger.set_fitness(slot, fitness, fell_apart)

    def finalize_active(self) -> int:
        """Move every running slot to DONE and record its fitness in the cache."""
        finalized = 0
        for slot in self._active:
            genome, fitness, _ = self.ledger.finalize(slot)
            logger.debug("[GenerationDriver] finalized slot {} (fitness={})", slot, fitness)
            if self.cache.insert(genome, fitness):
                logger.warning(
                    "[GenerationDriver] slot {} overrode another's fitness, "
                    "vehicle may have been simulated twice",
                    slot,
                )
            finalized += 1
        self._active = []
        return finalized

    def evolve_if_finished(self) -> bool:
        if not self.ledger.all_done():
            return False

        logger.info("[GenerationDriver] Evolving...")
        self.engine.fill_fitness(self.cache)
        self.engine.step(self.params.tournament_k, self.params.mutation_amount)

        if self.params.place_only_best_vehicle:
            best = self.cache.best()
            if best is None:
                raise PreconditionError("elitism requested but the fitness cache is empty")
            genome, fitness = best
            logger.info(
                "[GenerationDriver] Replacing all vehicles with best vehicle (fitness {}):\n{}",
                fitness,
                genome,
            )
            self.engine.overwrite_population([genome] * self.params.population_size)

        self.ledger = PopulationLedger.build(
            self.engine.genomes(), max_slots=self.params.max_ledger_slots
        )
        logger.info("[GenerationDriver] Simulation stepped")
        return True

    def run_generation(self, evaluator: FitnessEvaluator) -> None:
        """Evaluate every slot of the current ledger with ``evaluator``, then evolve."""
        while True:
            popped = self.spawn_batch()
            if not popped:
                break
            for genome, slot_id, _ in popped:
                fitness, fell_apart = evaluator(genome, slot_id)
                self.report(slot_id, fitness, fell_apart)

        if not self.evolve_if_finished():
            raise PreconditionError("generation ended with slots still pending")
