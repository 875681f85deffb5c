"""Contract between the external physics evaluator and the fitness cache.

The evaluator owns the simulation; these helpers only turn its measurements
into the integer fitness and ``fell_apart`` flag the ledger expects.
"""

from __future__ import annotations

import math
from typing import Iterable, Protocol

from vehicle_evolver.vehicles.genome import Genome

# How far apart the leftmost and rightmost blocks may drift before the vehicle
# counts as broken.
MAX_SPREAD = 1000
FELL_APART_PENALTY = 0.1


class FitnessEvaluator(Protocol):
    """Scores one popped vehicle; returns ``(fitness, fell_apart)``."""

    def __call__(self, genome: Genome, slot_id: int) -> tuple[int, bool]: ...


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def displacement_fitness(
    block_xs: Iterable[float],
    max_spread: float = MAX_SPREAD,
    penalty: float = FELL_APART_PENALTY,
) -> tuple[int, bool]:
    """Mean horizontal block position, punished when the blocks dispersed.

    Args:
        block_xs: Final x coordinate of every block belonging to the vehicle
        max_spread: Largest allowed ``max - min`` before punishment
        penalty: Multiplier applied to a vehicle that fell apart

    Returns:
        Rounded fitness and whether the vehicle fell apart
    """
    xs = [round_half_away(x) for x in block_xs]
    if not xs:
        return 0, False

    fitness = sum(xs) / len(xs)
    fell_apart = abs(max(xs) - min(xs)) > max_spread
    if fell_apart:
        fitness *= penalty
    return round_half_away(fitness), fell_apart
