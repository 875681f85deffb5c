from enum import Enum

from vehicle_evolver.exceptions import InvalidTransitionError


class SlotStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"


ACTIVE_STATES = {
    SlotStatus.RUNNING,
}

TERMINAL_STATES = {
    SlotStatus.DONE,
}

STATES_WITH_FITNESS = {
    SlotStatus.RUNNING,
    SlotStatus.DONE,
}

VALID_TRANSITIONS: dict[SlotStatus, set[SlotStatus]] = {
    SlotStatus.PENDING: {
        SlotStatus.RUNNING,
    },
    SlotStatus.RUNNING: {
        SlotStatus.DONE,
    },
    SlotStatus.DONE: set(),
}


def is_valid_transition(current: SlotStatus, new: SlotStatus) -> bool:
    return new in VALID_TRANSITIONS.get(current, set())


def validate_transition(current: SlotStatus, new: SlotStatus) -> None:
    if not is_valid_transition(current, new):
        valid_next = VALID_TRANSITIONS.get(current, set())
        raise InvalidTransitionError(
            f"Invalid slot transition: {current.value} -> {new.value}. "
            f"Valid transitions from {current.value}: {sorted(s.value for s in valid_next)}"
        )


def is_active(status: SlotStatus) -> bool:
    return status in ACTIVE_STATES


def is_terminal(status: SlotStatus) -> bool:
    return status in TERMINAL_STATES


def accepts_fitness(status: SlotStatus) -> bool:
    return status in STATES_WITH_FITNESS
