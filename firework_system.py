# firework_system.py

import logging
from typing import List
import numpy as np

import constants
from config import TuningConfig
from drawables import DRAWABLE_KINDS, Drawable, RenderState
from random_source import RandomSource

logger = logging.getLogger(constants.LOGGER_NAME)


class FireworkSystem:
    """
    Owns the live set of drawables: spawns them stochastically, advances them
    every tick and evicts the ones that have expired.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - tuning (TuningConfig): Passed to every drawable it creates.
        - rng (RandomSource): The shared, seeded random source.
        - bounds (tuple): The (width, height) of the display area, in display units.
    - Outputs: RenderState snapshots for the live drawables.
    - Side Effects: Creates and discards drawables.
    - Invariants: After update(), no live drawable is disposable. The live count
      never exceeds max_drawables when a cap is configured.
    """
    def __init__(self, config: dict, tuning: TuningConfig, rng: RandomSource, bounds: tuple):
        self.config = config
        self.tuning = tuning
        self.rng = rng
        self.bounds = np.array(bounds, dtype=np.float64)
        self.spawn_probability = config.get('spawn_probability', 0.05)
        self.meters_per_dip = config.get('meters_per_dip', constants.DEFAULT_METERS_PER_DIP)
        self.max_drawables = config.get('max_drawables') # None means uncapped

        kind = config.get('drawable_kind', 'particle')
        if kind not in DRAWABLE_KINDS:
            raise ValueError(f"Unknown drawable_kind '{kind}', expected one of {sorted(DRAWABLE_KINDS)}")
        self.drawable_class = DRAWABLE_KINDS[kind]

        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError(f"spawn_probability must be within [0, 1], got {self.spawn_probability}")
        if self.meters_per_dip <= 0:
            raise ValueError(f"meters_per_dip must be positive, got {self.meters_per_dip}")
        if self.max_drawables is not None and self.max_drawables < 1:
            raise ValueError(f"max_drawables must be at least 1, got {self.max_drawables}")

        self._drawables = []
        self.total_spawned = 0
        self.total_disposed = 0 # Became disposable and were removed
        self.total_evicted = 0  # Removed early by the max_drawables cap

        logger.info(
            f"FireworkSystem created: kind={kind}, spawn_probability={self.spawn_probability}, "
            f"bounds={tuple(self.bounds)}, meters_per_dip={self.meters_per_dip}."
        )

    def spawn(self, time_now: float) -> Drawable:
        """Creates one drawable at a uniformly random point inside the bounds."""
        # Bounds are in display units; drawables live in meters.
        position = np.array([self.rng.random(), self.rng.random()]) * self.bounds * self.meters_per_dip

        drawable = self.drawable_class(self.tuning)
        drawable.initialize(time_now, position, self.rng, self.meters_per_dip)
        self._drawables.append(drawable)
        self.total_spawned += 1

        if self.max_drawables is not None and len(self._drawables) > self.max_drawables:
            evicted = len(self._drawables) - self.max_drawables
            # Oldest first
            del self._drawables[:evicted]
            self.total_evicted += evicted
            logger.warning(f"Drawable cap of {self.max_drawables} reached; evicted {evicted} oldest.")

        return drawable

    def update(self, time_now: float):
        """
        Runs one tick: maybe spawn, advance every drawable to time_now, then
        remove the disposable ones.
        """
        if self.rng.random() <= self.spawn_probability:
            self.spawn(time_now)

        for drawable in self._drawables:
            drawable.update(time_now)

        alive = [d for d in self._drawables if not d.is_disposable()]
        disposed = len(self._drawables) - len(alive)
        if disposed:
            self.total_disposed += disposed
            logger.debug(f"{disposed} drawable(s) disposed at t={time_now:.3f}. Live: {len(alive)}.")
        self._drawables = alive

    def render_states(self) -> List[RenderState]:
        return [d.render_state() for d in self._drawables]

    def draw(self, renderer):
        """Paints every live drawable onto the renderer."""
        for state in self.render_states():
            renderer.draw(state)

    def get_total_luminance(self) -> float:
        return float(sum(d.luminance for d in self._drawables))

    @property
    def drawables(self) -> list:
        return list(self._drawables)

    def __len__(self):
        return len(self._drawables)
