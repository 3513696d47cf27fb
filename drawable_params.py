# drawable_params.py
"""
Randomized per-drawable parameters.

Each drawable owns exactly one parameter set, created once when the drawable is
initialized. Fields are drawn independently and uniformly from the ranges in a
TuningConfig. Parameter sets may also be built directly with explicit values,
which is how deterministic tests and variant chaining supply them.

Draw order from the RandomSource (kept stable for reproducibility):
hue r, hue g, hue b, luminance, decay time, then velocity x, velocity y for the
ballistic fields.
"""
from dataclasses import dataclass, field
import numpy as np

from config import TuningConfig
from random_source import RandomSource

DEFAULT_TUNING = TuningConfig()


def _as_vector(values, length: int) -> np.ndarray:
    vector = np.array(values, dtype=np.float64)
    if vector.shape != (length,):
        raise ValueError(f"Expected a vector of length {length}, got shape {vector.shape}")
    return vector


def _draw_decay_fields(rng: RandomSource, tuning: TuningConfig) -> dict:
    hue = [rng.random(), rng.random(), rng.random()]
    luminance = rng.random() * tuning.base_luminance_scale
    # 1 - u keeps the time constant strictly positive.
    decay_time = (1.0 - rng.random()) * tuning.decay_time_scale
    return {
        'base_hue': hue,
        'base_luminance': luminance,
        'decay_time': decay_time,
        'can_dispose_luminance': tuning.can_dispose_luminance,
    }


def _draw_velocity(rng: RandomSource, tuning: TuningConfig) -> list:
    vx = (rng.random() - 0.5) * tuning.velocity_x_scale
    vy = rng.random() * tuning.velocity_y_scale
    return [vx, vy]


@dataclass(eq=False)
class BasicDrawableParams:
    """
    Decay parameters shared by every drawable variant.

    - base_hue: RGB tint, scaled by base_luminance when rendering.
    - base_luminance: current light intensity (1.0 = reference white). Only
      ever decreases after creation.
    - decay_time: seconds for luminance to fall to 1/e.
    - max_lifetime: seconds after which the drawable becomes disposable.
    - can_dispose_luminance: luminance floor for disposal.
    """
    base_hue: np.ndarray
    base_luminance: float
    decay_time: float
    max_lifetime: float = 10.0
    can_dispose_luminance: float = 0.05

    def __post_init__(self):
        self.base_hue = _as_vector(self.base_hue, 3)
        self.base_luminance = float(self.base_luminance)
        self.decay_time = float(self.decay_time)
        if not self.base_luminance >= 0:
            raise ValueError(f"base_luminance must be non-negative, got {self.base_luminance}")
        if self.decay_time <= 0:
            raise ValueError(f"decay_time must be positive, got {self.decay_time}")

    @classmethod
    def generate(cls, rng: RandomSource, tuning: TuningConfig = DEFAULT_TUNING,
                 max_lifetime: float = None) -> "BasicDrawableParams":
        if max_lifetime is None:
            max_lifetime = tuning.basic_max_lifetime
        return cls(max_lifetime=max_lifetime, **_draw_decay_fields(rng, tuning))


@dataclass(eq=False)
class ParticleParams(BasicDrawableParams):
    """Decay parameters plus the ballistic fields of a point particle."""
    max_lifetime: float = 30.0
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))  # m/s
    mass: float = 0.1           # kg
    drag_coeff: float = 0.5
    frontal_area: float = 0.03  # m^2

    def __post_init__(self):
        super().__post_init__()
        self.velocity = _as_vector(self.velocity, 2)
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")

    @classmethod
    def generate(cls, rng: RandomSource, tuning: TuningConfig = DEFAULT_TUNING,
                 max_lifetime: float = None) -> "ParticleParams":
        if max_lifetime is None:
            max_lifetime = tuning.particle_max_lifetime
        decay_fields = _draw_decay_fields(rng, tuning)
        return cls(
            max_lifetime=max_lifetime,
            velocity=_draw_velocity(rng, tuning),
            mass=tuning.mass,
            drag_coeff=tuning.drag_coeff,
            frontal_area=tuning.frontal_area,
            **decay_fields
        )


@dataclass(eq=False)
class ProjectileParams:
    """
    Ballistic parameters owned by a Projectile, separate from its decay
    parameters so the two can be varied independently.
    """
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))  # m/s
    mass: float = 0.1           # kg
    drag_coeff: float = 0.5
    frontal_area: float = 0.03  # m^2

    def __post_init__(self):
        self.velocity = _as_vector(self.velocity, 2)
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")

    @classmethod
    def generate(cls, rng: RandomSource, tuning: TuningConfig = DEFAULT_TUNING) -> "ProjectileParams":
        return cls(
            velocity=_draw_velocity(rng, tuning),
            mass=tuning.mass,
            drag_coeff=tuning.drag_coeff,
            frontal_area=tuning.frontal_area,
        )
