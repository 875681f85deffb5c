from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GenerationStatistics(BaseModel):
    """Fitness snapshot of one generation, taken before it is replaced."""

    avg_fitness: float = Field(description="Arithmetic mean fitness")
    max_fitness: float = Field(description="Best fitness in the generation")

    model_config = ConfigDict(frozen=True)
