from vehicle_evolver.config.loader import DEFAULT_CONFIG_PATH, load_params

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "load_params",
]
