from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from vehicle_evolver.vehicles.genome import Genome


class Individual(BaseModel):
    """One population row: a genome and its fitness once known."""

    genome: Genome
    fitness: int | None = Field(
        default=None, description="None until filled in from the fitness cache"
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    def __repr__(self) -> str:
        return f"Individual(fitness={self.fitness}, genome={self.genome!r})"
