# config.py
"""
Run configuration and physical tuning values.

This module loads the JSON run configuration and defines TuningConfig, the
explicit structure that carries every tunable used when generating drawable
parameters and integrating their motion. Nothing here is a hidden global:
callers pass a TuningConfig to whatever needs it.
"""
import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Dict, Any

import constants

logger = logging.getLogger(constants.LOGGER_NAME)

# --- Data Contracts ---
#
# load_config(path: str) -> Dict[str, Any]:
#   - Inputs: path to a JSON file.
#   - Outputs: the parsed dictionary.
#   - Side Effects: logs progress; logs and re-raises on failure.
#
# TuningConfig.from_dict(values: Dict[str, Any]) -> TuningConfig:
#   - Inputs: a mapping of field name to value (usually config["tuning"]).
#   - Outputs: a frozen TuningConfig. Missing keys keep their defaults.
#   - Invariants: unknown keys raise ValueError.


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logger.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {path}.")
        raise


@dataclass(frozen=True)
class TuningConfig:
    """
    Physical and photometric tuning for drawables.

    Units: seconds, meters, kilograms. Luminance is in scRGB-style units where
    1.0 is reference white.
    """
    # Decay parameters
    base_luminance_scale: float = 20.0
    decay_time_scale: float = 3.0       # Seconds
    basic_max_lifetime: float = 10.0    # Seconds
    particle_max_lifetime: float = 30.0 # Seconds
    can_dispose_luminance: float = 0.05

    # Ballistic parameters
    velocity_x_scale: float = 0.05      # m/s, centered on zero
    velocity_y_scale: float = 1.0       # m/s
    mass: float = 0.1                   # kg
    drag_coeff: float = 0.5             # Sphere
    frontal_area: float = 0.03          # m^2, ~10cm diameter tube

    # Environment
    gravity: float = -9.8               # m/s^2
    air_density: float = 1.2            # kg/m^3

    # Drag is always computed; this decides whether it slows the velocity.
    apply_drag: bool = False

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TuningConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown tuning keys: {sorted(unknown)}")
        return cls(**values)

    def __post_init__(self):
        if self.decay_time_scale <= 0:
            raise ValueError(f"decay_time_scale must be positive, got {self.decay_time_scale}")
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
