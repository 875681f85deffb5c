import pytest

from vehicle_evolver.exceptions import InvalidTransitionError
from vehicle_evolver.vehicles.slot_state import (
    SlotStatus,
    accepts_fitness,
    is_active,
    is_terminal,
    is_valid_transition,
    validate_transition,
)


@pytest.mark.parametrize(
    "current, new",
    [
        (SlotStatus.PENDING, SlotStatus.RUNNING),
        (SlotStatus.RUNNING, SlotStatus.DONE),
    ],
)
def test_forward_transitions(current, new):
    assert is_valid_transition(current, new)
    validate_transition(current, new)


@pytest.mark.parametrize(
    "current, new",
    [
        (SlotStatus.PENDING, SlotStatus.DONE),
        (SlotStatus.RUNNING, SlotStatus.PENDING),
        (SlotStatus.DONE, SlotStatus.RUNNING),
        (SlotStatus.DONE, SlotStatus.PENDING),
    ],
)
def test_illegal_transitions(current, new):
    assert not is_valid_transition(current, new)
    with pytest.raises(InvalidTransitionError):
        validate_transition(current, new)


def test_status_predicates():
    assert is_active(SlotStatus.RUNNING)
    assert not is_active(SlotStatus.PENDING)
    assert is_terminal(SlotStatus.DONE)
    assert not accepts_fitness(SlotStatus.PENDING)
    assert accepts_fitness(SlotStatus.DONE)
