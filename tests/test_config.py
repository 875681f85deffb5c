from pydantic import ValidationError
import pytest

from vehicle_evolver.config import DEFAULT_CONFIG_PATH, load_params
from vehicle_evolver.evolution.engine import SimulationParams


def test_defaults():
    params = SimulationParams()
    assert params.population_size == 24
    assert params.tournament_k == 10
    assert params.mutation_amount == 1
    assert params.max_simultaneous_vehicles == 30
    assert params.place_only_best_vehicle is False


def test_odd_population_rejected():
    with pytest.raises(ValidationError):
        SimulationParams(population_size=5, tournament_k=2)


def test_tournament_larger_than_population_rejected():
    with pytest.raises(ValidationError):
        SimulationParams(population_size=4, tournament_k=6)


@pytest.mark.parametrize(
    "field, value",
    [("tournament_k", 1), ("mutation_amount", 21), ("max_generation_duration", 2.0)],
)
def test_bounds(field, value):
    with pytest.raises(ValidationError):
        SimulationParams(**{field: value})


def test_tournament_size_only_bounded_by_population():
    params = SimulationParams(population_size=40, tournament_k=30)
    assert params.tournament_k == 30


def test_population_bounded_by_ledger_slots():
    with pytest.raises(ValidationError):
        SimulationParams(population_size=40, max_ledger_slots=32)


def test_load_default_file():
    assert DEFAULT_CONFIG_PATH.exists()
    params = load_params()
    assert params.population_size == 24
    assert params.max_ledger_slots == 32


def test_load_with_overrides():
    params = load_params(overrides=["tournament_k=4", "place_only_best_vehicle=true"])
    assert params.tournament_k == 4
    assert params.place_only_best_vehicle is True


def test_load_from_custom_file(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text("population_size: 6\ntournament_k: 3\n")
    params = load_params(path)
    assert params.population_size == 6
    assert params.max_simultaneous_vehicles == 30


def test_invalid_override_surfaces_validation_error():
    with pytest.raises(ValidationError):
        load_params(overrides=["population_size=7"])
