"""Test randomized parameter generation."""
import numpy as np
import pytest

from config import TuningConfig
from drawable_params import BasicDrawableParams, ParticleParams, ProjectileParams
from random_source import RandomSource


class TestBasicDrawableParams:
    """Tests for decay parameter generation."""

    def test_ranges(self, rng, tuning):
        for _ in range(500):
            params = BasicDrawableParams.generate(rng, tuning)
            assert params.base_hue.shape == (3,)
            assert np.all((params.base_hue >= 0.0) & (params.base_hue < 1.0))
            assert 0.0 <= params.base_luminance < 20.0
            assert 0.0 < params.decay_time <= 3.0
            assert params.max_lifetime == 10.0
            assert params.can_dispose_luminance == 0.05

    def test_same_seed_same_params(self):
        first = BasicDrawableParams.generate(RandomSource(5))
        second = BasicDrawableParams.generate(RandomSource(5))
        assert np.array_equal(first.base_hue, second.base_hue)
        assert first.base_luminance == second.base_luminance
        assert first.decay_time == second.decay_time

    def test_draw_order(self, tuning):
        params = BasicDrawableParams.generate(RandomSource(11), tuning)
        draws = RandomSource(11).random(5)
        assert np.allclose(params.base_hue, draws[:3])
        assert params.base_luminance == pytest.approx(draws[3] * 20.0)
        assert params.decay_time == pytest.approx((1.0 - draws[4]) * 3.0)

    def test_tuning_scales_ranges(self, rng):
        tuning = TuningConfig(base_luminance_scale=2.0, decay_time_scale=0.5,
                              basic_max_lifetime=4.0, can_dispose_luminance=0.5)
        for _ in range(100):
            params = BasicDrawableParams.generate(rng, tuning)
            assert params.base_luminance < 2.0
            assert params.decay_time <= 0.5
            assert params.max_lifetime == 4.0
            assert params.can_dispose_luminance == 0.5

    def test_max_lifetime_override(self, rng):
        params = BasicDrawableParams.generate(rng, max_lifetime=30.0)
        assert params.max_lifetime == 30.0

    def test_explicit_values(self):
        params = BasicDrawableParams(base_hue=(0.1, 0.2, 0.3), base_luminance=4, decay_time=2)
        assert params.base_hue.dtype == np.float64
        assert isinstance(params.base_luminance, float)
        assert params.max_lifetime == 10.0
        assert params.can_dispose_luminance == 0.05

    @pytest.mark.parametrize("decay_time", [0.0, -1.0])
    def test_rejects_non_positive_decay_time(self, decay_time):
        with pytest.raises(ValueError):
            BasicDrawableParams(base_hue=[1, 1, 1], base_luminance=1.0, decay_time=decay_time)

    @pytest.mark.parametrize("luminance", [-10.0, -1e-9, float('nan')])
    def test_rejects_negative_luminance(self, luminance):
        with pytest.raises(ValueError):
            BasicDrawableParams(base_hue=[1, 1, 1], base_luminance=luminance, decay_time=1.0)

    def test_zero_luminance_is_allowed(self):
        params = BasicDrawableParams(base_hue=[1, 1, 1], base_luminance=0.0, decay_time=1.0)
        assert params.base_luminance == 0.0

    def test_rejects_wrong_hue_shape(self):
        with pytest.raises(ValueError):
            BasicDrawableParams(base_hue=[1, 1], base_luminance=1.0, decay_time=1.0)

    def test_hue_is_copied(self):
        hue = np.array([0.5, 0.5, 0.5])
        params = BasicDrawableParams(base_hue=hue, base_luminance=1.0, decay_time=1.0)
        hue[0] = 0.0
        assert params.base_hue[0] == 0.5


class TestParticleParams:
    """Tests for particle parameter generation."""

    def test_ranges(self, rng, tuning):
        for _ in range(500):
            params = ParticleParams.generate(rng, tuning)
            assert -0.025 <= params.velocity[0] < 0.025
            assert 0.0 <= params.velocity[1] < 1.0
            assert params.max_lifetime == 30.0
            assert params.mass == 0.1
            assert params.drag_coeff == 0.5
            assert params.frontal_area == 0.03

    def test_velocity_drawn_after_decay_fields(self, tuning):
        params = ParticleParams.generate(RandomSource(3), tuning)
        draws = RandomSource(3).random(7)
        assert np.allclose(params.base_hue, draws[:3])
        assert params.velocity[0] == pytest.approx((draws[5] - 0.5) * 0.05)
        assert params.velocity[1] == pytest.approx(draws[6] * 1.0)

    def test_defaults(self):
        params = ParticleParams(base_hue=[1, 1, 1], base_luminance=1.0, decay_time=1.0)
        assert params.max_lifetime == 30.0
        assert np.array_equal(params.velocity, [0.0, 0.0])

    def test_rejects_non_positive_mass(self):
        with pytest.raises(ValueError):
            ParticleParams(base_hue=[1, 1, 1], base_luminance=1.0, decay_time=1.0, mass=0.0)


class TestProjectileParams:
    """Tests for the separately owned ballistic parameters."""

    def test_ranges(self, rng, tuning):
        for _ in range(200):
            params = ProjectileParams.generate(rng, tuning)
            assert -0.025 <= params.velocity[0] < 0.025
            assert 0.0 <= params.velocity[1] < 1.0
            assert params.mass == tuning.mass

    def test_uses_tuning(self, rng):
        tuning = TuningConfig(velocity_y_scale=100.0, mass=2.0, drag_coeff=1.0, frontal_area=0.5)
        params = ProjectileParams.generate(rng, tuning)
        assert params.mass == 2.0
        assert params.drag_coeff == 1.0
        assert params.frontal_area == 0.5

    def test_rejects_bad_velocity(self):
        with pytest.raises(ValueError):
            ProjectileParams(velocity=[1.0, 2.0, 3.0])
