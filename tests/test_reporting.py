from vehicle_evolver.evolution.engine import GenerationStatistics
from vehicle_evolver.utils.formatting import (
    format_generation,
    format_population,
    format_slot,
    format_statistics,
)
from vehicle_evolver.utils.plotting import plot_statistics
from vehicle_evolver.vehicles.genome import Genome
from vehicle_evolver.vehicles.ledger import SlotState
from vehicle_evolver.vehicles.slot_state import SlotStatus


def test_pending_slot_shows_clock():
    assert format_slot(SlotState(genome=Genome.empty())) == "🕒"


def test_running_slot_shows_fitness_and_flags():
    state = SlotState(
        genome=Genome.empty(),
        status=SlotStatus.RUNNING,
        fitness=14500,
        reached_finish=True,
        fell_apart=True,
    )
    assert format_slot(state) == "🔄 fitness = 14500 🏁 ❌  "


def test_done_slot():
    state = SlotState(genome=Genome.empty(), status=SlotStatus.DONE, fitness=12)
    assert format_slot(state).startswith("✅ fitness =    12")


def test_population_is_numbered_from_one():
    text = format_population([SlotState(genome=Genome.empty())] * 2)
    assert text.splitlines() == ["01. 🕒", "02. 🕒"]


def test_generation_line():
    stats = GenerationStatistics(avg_fitness=45.4, max_fitness=90.0)
    assert format_generation(0, stats) == "Generation   1. Avg=   45 Max=   90"


def test_statistics_block():
    stats = [GenerationStatistics(avg_fitness=1.0, max_fitness=2.0)] * 3
    assert len(format_statistics(stats).splitlines()) == 3


def test_plot_statistics_writes_file(tmp_path):
    stats = [
        GenerationStatistics(avg_fitness=float(i * 10), max_fitness=float(i * 20))
        for i in range(5)
    ]
    out = plot_statistics(stats, tmp_path / "plots" / "fitness.png")
    assert out.exists()
    assert out.stat().st_size > 0
