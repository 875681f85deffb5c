from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class SimulationParams(BaseModel):
    """Values consumed by the engine, the ledger and the generation driver."""

    population_size: int = Field(
        default=24, ge=2, description="Even, fixed for the lifetime of the process"
    )
    max_simultaneous_vehicles: int = Field(
        default=30, ge=1, le=30, description="Slots popped per evaluation batch"
    )
    tournament_k: int = Field(
        default=10, ge=2, description="Tournament size, at most population_size"
    )
    mutation_amount: int = Field(
        default=1, ge=0, le=20, description="Cells redrawn per child; keep below 3"
    )
    max_generation_duration: float = Field(
        default=24.0,
        ge=4.0,
        le=60.0,
        description="Seconds the external driver lets a batch run before finalizing it",
    )
    place_only_best_vehicle: bool = Field(
        default=False,
        description="Replace every new generation with copies of the best cached genome",
    )
    max_ledger_slots: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on slot ids (physics collision groups); None = unbounded",
    )

    @field_validator("population_size")
    @classmethod
    def validate_population_size(cls, v: int) -> int:
        if v % 2 != 0:
            raise ValueError(f"population size wasn't even ({v})")
        return v

    @model_validator(mode="after")
    def validate_consistency(self):
        if self.tournament_k > self.population_size:
            raise ValueError(
                f"tournament_k ({self.tournament_k}) exceeds population_size "
                f"({self.population_size})"
            )
        if (
            self.max_ledger_slots is not None
            and self.population_size > self.max_ledger_slots
        ):
            raise ValueError(
                f"population_size ({self.population_size}) exceeds max_ledger_slots "
                f"({self.max_ledger_slots})"
            )
        return self
