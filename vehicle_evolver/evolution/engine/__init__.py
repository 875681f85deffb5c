from __future__ import annotations

from vehicle_evolver.evolution.engine.config import SimulationParams
from vehicle_evolver.evolution.engine.core import EvolutionEngine
from vehicle_evolver.evolution.engine.metrics import GenerationStatistics
