"""Process-wide fitness memo keyed by genome content.

Structurally identical genomes share one entry no matter which lineage or
generation produced them. Entries are never evicted.
"""

from __future__ import annotations

import threading

from loguru import logger

from vehicle_evolver.vehicles.genome import Genome


class FitnessCache:
    """Thread-safe ``Genome -> fitness`` map with last-writer-wins inserts."""

    def __init__(self) -> None:
        self._data: dict[Genome, int] = {}
        self._lock = threading.Lock()

    def insert(self, genome: Genome, fitness: int) -> bool:
        """Store ``fitness`` for ``genome``; return True if an entry was replaced."""
        with self._lock:
            was_present = genome in self._data
            previous = self._data.get(genome)
            self._data[genome] = fitness
        if was_present:
            logger.debug(
                "[FitnessCache] overwrote fitness {} -> {} for {!r}",
                previous,
                fitness,
                genome,
            )
        return was_present

    def get(self, genome: Genome) -> int | None:
        with self._lock:
            return self._data.get(genome)

    def __contains__(self, genome: object) -> bool:
        with self._lock:
            return genome in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def best(self) -> tuple[Genome, int] | None:
        """Highest-fitness entry (first inserted wins ties), or None when empty."""
        with self._lock:
            best: tuple[Genome, int] | None = None
            for genome, fitness in self._data.items():
                if best is None or fitness > best[1]:
                    best = (genome, fitness)
            return best

    def snapshot(self) -> dict[Genome, int]:
        with self._lock:
            return dict(self._data)
