"""Per-generation slot bookkeeping.

One :class:`SlotState` per individual of the current generation, advanced by
the driver as vehicles are handed to the evaluator and report back:

    PENDING --pop_next_pending--> RUNNING --finalize--> DONE

All reads and writes go through a single re-entrant lock so a monitoring or
rendering thread can poll the ledger while the driver updates it.
"""

from __future__ import annotations

from collections import Counter
import threading
from typing import Iterable, NamedTuple

from loguru import logger
from matplotlib import colormaps
from pydantic import BaseModel, ConfigDict, Field

from vehicle_evolver.exceptions import PreconditionError
from vehicle_evolver.vehicles.genome import Genome
from vehicle_evolver.vehicles.slot_state import (
    SlotStatus,
    accepts_fitness,
    is_active,
    is_terminal,
    validate_transition,
)

# A vehicle at or beyond this fitness reached the finish flag.
FITNESS_FINISH_THRESHOLD = 14_400
MIN_FITNESS = -(2**63)

Color = tuple[float, float, float]
WHITE: Color = (1.0, 1.0, 1.0)
SlotId = int


def ramp_color(rank: int, limit: int) -> Color:
    """Sample the turbo ramp at ``rank / (limit - 1)``; a lone slot is white."""
    if limit == 1:
        return WHITE
    r, g, b, _ = colormaps["turbo"](rank / (limit - 1))
    return (float(r), float(g), float(b))


class SlotState(BaseModel):
    """Evaluation state of one population slot."""

    genome: Genome
    fitness: int = Field(default=MIN_FITNESS)
    status: SlotStatus = Field(default=SlotStatus.PENDING)
    reached_finish: bool = False
    fell_apart: bool = False
    is_camera_target: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)


class PoppedSlot(NamedTuple):
    genome: Genome
    slot_id: SlotId
    color: Color


class FinalizedSlot(NamedTuple):
    genome: Genome
    fitness: int
    already_finalized: bool


class PopulationLedger:
    """Slot lifecycle tracker for one generation's evaluation round."""

    def __init__(self, states: list[SlotState], max_slots: int | None = None):
        if max_slots is not None and len(states) > max_slots:
            raise PreconditionError(
                f"ledger holds at most {max_slots} slots, got {len(states)}"
            )
        self._states = states
        self._lock = threading.RLock()

    @classmethod
    def from_genomes(
        cls, genomes: Iterable[Genome], max_slots: int | None = None
    ) -> PopulationLedger:
        """One PENDING slot per genome, in order."""
        return cls([SlotState(genome=g) for g in genomes], max_slots=max_slots)

    build = from_genomes

    # -------------------------- Reads --------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def states(self) -> list[SlotState]:
        """Snapshot copies of every slot, safe to inspect from another thread."""
        with self._lock:
            return [s.model_copy() for s in self._states]

    def state(self, slot: SlotId) -> SlotState:
        with self._lock:
            return self._get(slot).model_copy()

    def genomes(self) -> list[Genome]:
        with self._lock:
            return [s.genome for s in self._states]

    def all_done(self) -> bool:
        with self._lock:
            return all(is_terminal(s.status) for s in self._states)

    def counts(self) -> dict[SlotStatus, int]:
        with self._lock:
            counter = Counter(s.status for s in self._states)
        return {status: counter.get(status, 0) for status in SlotStatus}

    def running_ids(self) -> list[SlotId]:
        with self._lock:
            return [i for i, s in enumerate(self._states) if is_active(s.status)]

    # -------------------------- Writes --------------------------

    def pop_next_pending(self, limit: int) -> list[PoppedSlot]:
        """Flip up to ``limit`` pending slots (lowest index first) to RUNNING."""
        if limit < 1:
            raise PreconditionError(f"limit must be at least 1, got {limit}")

        with self._lock:
            pending = [
                i for i, s in enumerate(self._states) if s.status == SlotStatus.PENDING
            ][:limit]

            popped: list[PoppedSlot] = []
            for rank, i in enumerate(pending):
                state = self._states[i]
                validate_transition(state.status, SlotStatus.RUNNING)
                state.status = SlotStatus.RUNNING
                popped.append(PoppedSlot(state.genome, i, ramp_color(rank, limit)))

        if popped:
            logger.debug(
                "[PopulationLedger] popped {} slot(s): {}",
                len(popped),
                [p.slot_id for p in popped],
            )
        else:
            logger.debug("[PopulationLedger] no pending slots left")
        return popped

    def set_fitness(self, slot: SlotId, value: int, fell_apart: bool) -> None:
        with self._lock:
            state = self._get(slot)
            if not accepts_fitness(state.status):
                raise PreconditionError(
                    f"cannot set fitness of slot {slot} in state {state.status.value}"
                )
            state.fitness = value
            state.fell_apart = fell_apart
            if value >= FITNESS_FINISH_THRESHOLD:
                state.reached_finish = True

    def finalize(self, slot: SlotId) -> FinalizedSlot:
        """RUNNING -> DONE. Re-finalizing a DONE slot only warns."""
        with self._lock:
            state = self._get(slot)
            if state.status == SlotStatus.DONE:
                logger.warning("[PopulationLedger] slot {} already finalized", slot)
                return FinalizedSlot(state.genome, state.fitness, True)

            validate_transition(state.status, SlotStatus.DONE)
            state.status = SlotStatus.DONE
            return FinalizedSlot(state.genome, state.fitness, False)

    def set_camera_target(self, slot: SlotId | None) -> None:
        with self._lock:
            if slot is not None:
                self._get(slot)
            for i, state in enumerate(self._states):
                state.is_camera_target = i == slot

    def _get(self, slot: SlotId) -> SlotState:
        if not 0 <= slot < len(self._states):
            raise PreconditionError(
                f"slot {slot} out of range for ledger of {len(self._states)}"
            )
        return self._states[slot]
