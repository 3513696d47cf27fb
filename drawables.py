# drawables.py

import logging
import math
from typing import NamedTuple, Optional
import numba
import numpy as np

import constants
from config import TuningConfig
from drawable_params import (
    DEFAULT_TUNING, BasicDrawableParams, ParticleParams, ProjectileParams
)
from random_source import RandomSource

logger = logging.getLogger(constants.LOGGER_NAME)

# --- JIT-Compiled Physics Functions ---
# Per-drawable kernels compiled by Numba. Kept outside the classes and limited
# to NumPy arrays and scalars, as required by nopython mode. Vectors are
# modified in place.

@numba.jit(nopython=True)
def _decay_luminance_jit(luminance, delta, decay_time):
    """Exponential decay: L(t + dt) = L(t) * exp(-dt / tau)."""
    return luminance * math.exp(-delta / decay_time)


@numba.jit(nopython=True)
def _drag_delta_velocity_jit(velocity, drag_coeff, air_density, frontal_area, mass, delta, out):
    """
    Per-axis quadratic drag converted to a velocity change.
    DragForce = DragCoeff * 0.5 * FluidDensity * FlowVelocity^2 * FrontalArea
    Drag_DeltaVelocity = DragForce / Mass * DeltaTime
    """
    for axis in range(2):
        force = drag_coeff * 0.5 * air_density * velocity[axis] ** 2 * frontal_area
        out[axis] = force / mass * delta


@numba.jit(nopython=True)
def _integrate_ballistic_jit(position, velocity, drag_dv, gravity, delta, apply_drag):
    """
    One semi-implicit Euler step: velocity first, then position from the
    updated velocity.

    Gravity is subtracted from the y component, so with gravity < 0 the
    particle accelerates towards +y, which is downwards in display space.
    """
    if apply_drag:
        # Drag opposes motion and can at most bring an axis to rest.
        for axis in range(2):
            v = velocity[axis]
            dv = min(drag_dv[axis], abs(v))
            if v > 0.0:
                velocity[axis] = v - dv
            elif v < 0.0:
                velocity[axis] = v + dv

    velocity[1] = velocity[1] - gravity * delta

    position[0] += velocity[0] * delta
    position[1] += velocity[1] * delta


# --- Errors ---

class DrawableError(Exception):
    """Base class for drawable contract violations."""


class UninitializedError(DrawableError, RuntimeError):
    """update() or render_state() was called before initialize()."""


class OutOfRangeError(DrawableError, ValueError):
    """update() was called with a timestamp earlier than the current time."""


class RenderState(NamedTuple):
    """
    Snapshot handed to the renderer.

    color is hue scaled by luminance and is not clamped; channels above 1.0
    are extended-range emission.
    """
    color: np.ndarray
    display_position: np.ndarray
    requested_radius: float


class BallisticMotion:
    """
    Moves a drawable's position under gravity, and optionally drag, using the
    velocity stored in a ballistic parameter set.

    Any object exposing velocity, mass, drag_coeff and frontal_area can drive
    it; Particle passes its ParticleParams, Projectile its ProjectileParams.
    """
    def __init__(self, ballistics, tuning: TuningConfig):
        self.ballistics = ballistics
        self.tuning = tuning
        self.last_drag_delta_velocity = np.zeros(2, dtype=np.float64)

    @property
    def velocity(self) -> np.ndarray:
        return self.ballistics.velocity

    def step(self, position: np.ndarray, delta: float):
        b = self.ballistics
        _drag_delta_velocity_jit(
            b.velocity, b.drag_coeff, self.tuning.air_density,
            b.frontal_area, b.mass, delta, self.last_drag_delta_velocity
        )
        _integrate_ballistic_jit(
            position, b.velocity, self.last_drag_delta_velocity,
            self.tuning.gravity, delta, self.tuning.apply_drag
        )


class Drawable:
    """
    A simulated point that glows, fades and eventually expires.

    The core owns the clock, position, decay parameters and disposal flag.
    Variants decide how parameters are generated and whether a BallisticMotion
    component moves the position.

    Data Contract:
    - Inputs:
        - tuning (TuningConfig): Ranges and physical constants.
    - Outputs: RenderState snapshots via render_state().
    - Side Effects: update() mutates luminance, position and velocity.
    - Invariants:
        - current_time never decreases.
        - Luminance never increases after creation.
        - Once disposable, always disposable.
        - update() and render_state() require initialize().
    """
    def __init__(self, tuning: TuningConfig = DEFAULT_TUNING):
        self.tuning = tuning
        self._params = None
        self._motion = None
        self._is_initialized = False
        self._can_dispose = False
        self._position = np.zeros(2, dtype=np.float64)
        self._meters_per_dip = constants.DEFAULT_METERS_PER_DIP
        self._requested_render_radius = constants.MAX_RENDER_RADIUS_DIPS
        self._init_time = 0.0
        self._last_time = 0.0
        self._current_time = 0.0

    def initialize(self, start_time: float, start_position, rng: RandomSource,
                   meters_per_dip: float = constants.DEFAULT_METERS_PER_DIP,
                   params: Optional[BasicDrawableParams] = None):
        """
        Sets the clock to start_time, places the drawable at start_position
        (meters) and either generates fresh parameters from rng or adopts the
        supplied ones.
        """
        self._initialize(start_time, start_position, rng, meters_per_dip, params, None)

    def _initialize(self, start_time, start_position, rng, meters_per_dip, params, ballistics):
        # Nothing on self changes until every input has been accepted.
        if meters_per_dip <= 0:
            raise ValueError(f"meters_per_dip must be positive, got {meters_per_dip}")
        position = np.array(start_position, dtype=np.float64)
        if position.shape != (2,):
            raise ValueError(f"start_position must have two components, got shape {position.shape}")

        if params is None:
            params = self._generate_params(rng)
        motion = self._build_motion(params, ballistics, rng)

        if self._is_initialized:
            logger.debug(f"{type(self).__name__} re-initialized at t={start_time}.")

        self._params = params
        self._motion = motion
        self._position = position
        self._init_time = self._last_time = self._current_time = float(start_time)
        self._meters_per_dip = float(meters_per_dip)
        self._requested_render_radius = constants.MAX_RENDER_RADIUS_DIPS
        self._can_dispose = False
        self._is_initialized = True

        logger.debug(
            f"{type(self).__name__} initialized: t={self._init_time:.3f}, "
            f"pos={self._position}, luminance={params.base_luminance:.3f}, "
            f"decay_time={params.decay_time:.3f}"
        )

    def _generate_params(self, rng: RandomSource) -> BasicDrawableParams:
        raise NotImplementedError

    def _build_motion(self, params, ballistics, rng: RandomSource) -> Optional[BallisticMotion]:
        return None

    def update(self, time_now: float):
        """
        Advances the simulation to time_now (seconds).

        Raises UninitializedError before initialize() and OutOfRangeError if
        time_now is earlier than the current time.
        """
        if not self._is_initialized:
            raise UninitializedError(f"{type(self).__name__}.update() called before initialize()")
        if not time_now >= self._current_time:
            raise OutOfRangeError(
                f"Time went backwards: update({time_now}) with current time {self._current_time}"
            )

        self._last_time = self._current_time
        self._current_time = float(time_now)
        delta = self._current_time - self._last_time

        self._update_color(delta)
        if self._motion is not None:
            self._motion.step(self._position, delta)

    def _update_color(self, delta: float):
        p = self._params
        p.base_luminance = _decay_luminance_jit(p.base_luminance, delta, p.decay_time)

        if self._can_dispose:
            return
        if (p.base_luminance <= p.can_dispose_luminance or
                self._current_time - self._init_time > p.max_lifetime):
            self._can_dispose = True
            logger.debug(
                f"{type(self).__name__} disposable at t={self._current_time:.3f} "
                f"(age={self.age:.3f}, luminance={p.base_luminance:.4f})"
            )

    def render_state(self) -> RenderState:
        if not self._is_initialized:
            raise UninitializedError(f"{type(self).__name__}.render_state() called before initialize()")
        return RenderState(
            color=self._params.base_hue * self._params.base_luminance,
            display_position=self._position / self._meters_per_dip,
            requested_radius=self._requested_render_radius,
        )

    def is_disposable(self) -> bool:
        return self._can_dispose

    # --- Read-only state ---

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def can_dispose(self) -> bool:
        return self._can_dispose

    @property
    def params(self) -> Optional[BasicDrawableParams]:
        return self._params

    @property
    def luminance(self) -> float:
        return self._params.base_luminance

    @property
    def position(self) -> np.ndarray:
        """Position in meters."""
        return self._position.copy()

    @property
    def display_position(self) -> np.ndarray:
        return self._position / self._meters_per_dip

    @property
    def velocity(self) -> Optional[np.ndarray]:
        """Velocity in m/s, or None for drawables that do not move."""
        if self._motion is None:
            return None
        return self._motion.velocity.copy()

    @property
    def last_drag_delta_velocity(self) -> Optional[np.ndarray]:
        if self._motion is None:
            return None
        return self._motion.last_drag_delta_velocity.copy()

    @property
    def meters_per_dip(self) -> float:
        return self._meters_per_dip

    @property
    def requested_render_radius(self) -> float:
        return self._requested_render_radius

    @property
    def init_time(self) -> float:
        return self._init_time

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def age(self) -> float:
        return self._current_time - self._init_time

    def __repr__(self):
        if not self._is_initialized:
            return f"{type(self).__name__}(uninitialized)"
        return (
            f"{type(self).__name__}(pos=({self._position[0]:.2f}, {self._position[1]:.2f}), "
            f"luminance={self._params.base_luminance:.3f}, age={self.age:.2f}, "
            f"can_dispose={self._can_dispose})"
        )


class BasicDrawable(Drawable):
    """A stationary point whose luminance decays until it expires."""

    def _generate_params(self, rng: RandomSource) -> BasicDrawableParams:
        return BasicDrawableParams.generate(rng, self.tuning)


class Particle(Drawable):
    """Point particle with basic physics (gravity, optional drag)."""

    def _generate_params(self, rng: RandomSource) -> ParticleParams:
        return ParticleParams.generate(rng, self.tuning)

    def _build_motion(self, params, ballistics, rng: RandomSource) -> BallisticMotion:
        if not isinstance(params, ParticleParams):
            raise TypeError(f"Particle requires ParticleParams, got {type(params).__name__}")
        return BallisticMotion(params, self.tuning)


class Projectile(Drawable):
    """
    Moves like a Particle, but keeps its ballistic state in a separate
    ProjectileParams so decay and ballistics can be chosen independently.

    Decay parameters may be BasicDrawableParams or ParticleParams; ballistic
    fields of a ParticleParams are ignored in favor of projectile_params.
    """
    def initialize(self, start_time: float, start_position, rng: RandomSource,
                   meters_per_dip: float = constants.DEFAULT_METERS_PER_DIP,
                   params: Optional[BasicDrawableParams] = None,
                   projectile_params: Optional[ProjectileParams] = None):
        self._initialize(start_time, start_position, rng, meters_per_dip, params, projectile_params)

    def _generate_params(self, rng: RandomSource) -> BasicDrawableParams:
        return BasicDrawableParams.generate(rng, self.tuning, max_lifetime=self.tuning.particle_max_lifetime)

    def _build_motion(self, params, ballistics, rng: RandomSource) -> BallisticMotion:
        # Ballistic draws come after the decay draws.
        if ballistics is None:
            ballistics = ProjectileParams.generate(rng, self.tuning)
        elif not isinstance(ballistics, ProjectileParams):
            raise TypeError(f"Projectile requires ProjectileParams, got {type(ballistics).__name__}")
        return BallisticMotion(ballistics, self.tuning)

    @property
    def projectile_params(self) -> Optional[ProjectileParams]:
        if self._motion is None:
            return None
        return self._motion.ballistics


DRAWABLE_KINDS = {
    'basic': BasicDrawable,
    'particle': Particle,
    'projectile': Projectile,
}
