"""Pytest fixtures for HDR Fireworks tests."""
import pytest
from pathlib import Path

from config import TuningConfig
from random_source import RandomSource

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """A seeded random source so every run draws the same values."""
    return RandomSource(1234)


@pytest.fixture
def tuning():
    return TuningConfig()


@pytest.fixture
def basic_params():
    """Luminance 10, one second time constant, never disposed by luminance."""
    from drawable_params import BasicDrawableParams
    return BasicDrawableParams(
        base_hue=[1.0, 0.5, 0.25],
        base_luminance=10.0,
        decay_time=1.0,
        max_lifetime=10.0,
        can_dispose_luminance=0.0,
    )


@pytest.fixture
def particle_params():
    """A particle at rest with a one second time constant."""
    from drawable_params import ParticleParams
    return ParticleParams(
        base_hue=[1.0, 1.0, 1.0],
        base_luminance=10.0,
        decay_time=1.0,
        max_lifetime=30.0,
        can_dispose_luminance=0.0,
        velocity=[0.0, 0.0],
    )
