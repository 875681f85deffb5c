import random

from loguru import logger
import numpy as np
import pytest

from vehicle_evolver.vehicles.genome import GENOME_SHAPE, Genome


def make_genome(index: int, shape: tuple[int, int] = GENOME_SHAPE) -> Genome:
    """Distinct genome per non-negative index (base-3 digits, row-major)."""
    digits = []
    for _ in range(shape[0] * shape[1]):
        index, digit = divmod(index, 3)
        digits.append(digit)
    return Genome(np.array(digits, dtype=np.uint8).reshape(shape))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def log_records():
    """Collect (level, message) pairs emitted through loguru at WARNING and above."""
    records: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda msg: records.append((msg.record["level"].name, msg.record["message"])),
        level="WARNING",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def genome_factory():
    return make_genome
