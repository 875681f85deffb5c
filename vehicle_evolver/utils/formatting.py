from __future__ import annotations

from vehicle_evolver.evolution.engine.metrics import GenerationStatistics
from vehicle_evolver.vehicles.ledger import SlotState
from vehicle_evolver.vehicles.slot_state import SlotStatus

_STATUS_ICONS = {
    SlotStatus.PENDING: "🕒",
    SlotStatus.RUNNING: "🔄",
    SlotStatus.DONE: "✅",
}


def format_slot(state: SlotState) -> str:
    """One-line summary of a slot for the population panel."""
    if state.status == SlotStatus.PENDING:
        return _STATUS_ICONS[SlotStatus.PENDING]

    finish_icon = "🏁" if state.reached_finish else " "
    fell_apart_icon = "❌" if state.fell_apart else " "
    camera_icon = "🔆" if state.is_camera_target else " "
    return (
        f"{_STATUS_ICONS[state.status]} fitness = {state.fitness:5} "
        f"{finish_icon} {fell_apart_icon} {camera_icon}"
    )


def format_population(states: list[SlotState]) -> str:
    return "\n".join(f"{i + 1:02}. {format_slot(s)}" for i, s in enumerate(states))


def format_generation(index: int, stats: GenerationStatistics) -> str:
    """``index`` is zero-based; generations are displayed from 1."""
    return (
        f"Generation {index + 1:3}. "
        f"Avg={round(stats.avg_fitness):5} Max={round(stats.max_fitness):5}"
    )


def format_statistics(stats: list[GenerationStatistics]) -> str:
    return "\n".join(format_generation(i, s) for i, s in enumerate(stats))
