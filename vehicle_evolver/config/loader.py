"""Load :class:`SimulationParams` from YAML with OmegaConf dotlist overrides."""

from pathlib import Path
from typing import Iterable

from loguru import logger
from omegaconf import OmegaConf

from vehicle_evolver.evolution.engine.config import SimulationParams

DEFAULT_CONFIG_PATH = Path(__file__).with_name("simulation.yaml")


def load_params(
    path: str | Path | None = DEFAULT_CONFIG_PATH,
    overrides: Iterable[str] = (),
) -> SimulationParams:
    """Merge the YAML file at ``path`` with ``key=value`` overrides and validate.

    Raises:
        pydantic.ValidationError: If the merged values violate a constraint
    """
    cfg = OmegaConf.load(path) if path is not None else OmegaConf.create({})
    overrides = list(overrides)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))

    params = SimulationParams(**OmegaConf.to_container(cfg, resolve=True))
    logger.debug("[load_params] {} (overrides={})", params.model_dump(), overrides)
    return params
