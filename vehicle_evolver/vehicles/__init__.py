from vehicle_evolver.vehicles.genome import GENOME_SHAPE, CellKind, Genome
from vehicle_evolver.vehicles.individual import Individual
from vehicle_evolver.vehicles.ledger import (
    FITNESS_FINISH_THRESHOLD,
    FinalizedSlot,
    PoppedSlot,
    PopulationLedger,
    SlotState,
)
from vehicle_evolver.vehicles.slot_state import SlotStatus

__all__ = [
    "FITNESS_FINISH_THRESHOLD",
    "GENOME_SHAPE",
    "CellKind",
    "FinalizedSlot",
    "Genome",
    "Individual",
    "PoppedSlot",
    "PopulationLedger",
    "SlotState",
    "SlotStatus",
]
