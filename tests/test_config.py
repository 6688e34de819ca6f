"""
Test suite for package configuration and validation behaviour.

Tests cover:
- Default values and reset
- temp_config context manager
- Equality tolerances
- validation_error raise/warn switch
"""

import pytest
import orbex
from orbex import Orbit, config, temp_config
from orbex.config import OrbexConfig
from orbex.utils import (
    clamp_degrees_180, clamp_degrees_360, clamp_radians_two_pi, validation_error,
    TWO_PI,
)


class TestDefaults:
    """Test default configuration values."""

    def test_package_exposes_global_config(self):
        """orbex.config is the module-level instance."""
        assert orbex.config is config
        assert isinstance(config, OrbexConfig)

    def test_closest_approach_defaults(self):
        """Grid search defaults to 20 divisions and 8 refinements."""
        defaults = OrbexConfig()
        assert defaults.APPROACH_DIVISIONS == 20
        assert defaults.APPROACH_REFINEMENTS == 8
        assert defaults.HYPERBOLIC_APPROACH_MEAN_ANOMALY == 100.0

    def test_equality_tolerances(self):
        """Equality tolerances default to 1e-12 relative, 1e-14 absolute."""
        assert OrbexConfig().EQUALITY_RTOL == 1e-12
        assert OrbexConfig().EQUALITY_ATOL == 1e-14

    def test_repr_lists_settings(self):
        """repr shows every group of settings."""
        text = repr(OrbexConfig())
        assert text.startswith("OrbexConfig:")
        assert "APPROACH_DIVISIONS" in text
        assert "KEPLER_TOLERANCE" in text

    def test_reset_restores_defaults(self):
        """reset() puts every field back to its default."""
        local = OrbexConfig()
        local.APPROACH_DIVISIONS = 50
        local.STRICT_VALIDATION = False
        local.reset()
        assert local.APPROACH_DIVISIONS == 20
        assert local.STRICT_VALIDATION is True


class TestTempConfig:
    """Test temporary configuration changes."""

    def test_value_changed_inside_block(self):
        """Setting is applied inside the with block."""
        with temp_config(APPROACH_REFINEMENTS=3):
            assert config.APPROACH_REFINEMENTS == 3

    def test_value_restored_after_block(self):
        """Setting is restored on exit."""
        before = config.APPROACH_REFINEMENTS
        with temp_config(APPROACH_REFINEMENTS=3):
            pass
        assert config.APPROACH_REFINEMENTS == before

    def test_value_restored_after_exception(self):
        """Setting is restored even if the block raises."""
        before = config.KEPLER_TOLERANCE
        with pytest.raises(RuntimeError):
            with temp_config(KEPLER_TOLERANCE=1.0):
                raise RuntimeError("boom")
        assert config.KEPLER_TOLERANCE == before

    def test_unknown_setting_rejected(self):
        """Unknown keys raise AttributeError."""
        with pytest.raises(AttributeError, match="NOT_A_SETTING"):
            with temp_config(NOT_A_SETTING=1):
                pass


class TestValidationSwitch:
    """Test STRICT_VALIDATION behaviour."""

    def test_strict_raises(self):
        """Strict mode raises the requested error class."""
        with temp_config(STRICT_VALIDATION=True):
            with pytest.raises(TypeError, match="bad"):
                validation_error("bad", TypeError)

    def test_lenient_warns(self):
        """Lenient mode warns instead of raising."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad"):
                validation_error("bad")

    def test_lenient_orbit_construction(self):
        """Inconsistent elements only warn when validation is lenient."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning):
                orbit = Orbit(a=-7000, e=0.1)
        assert orbit.a == -7000


class TestAngleWrapping:
    """Test angle clamping helpers."""

    def test_radians_range(self):
        """Radians wrap into [0, 2pi)."""
        assert clamp_radians_two_pi(TWO_PI) == 0.0
        assert clamp_radians_two_pi(-0.5) == pytest.approx(TWO_PI - 0.5)
        assert clamp_radians_two_pi(7.0) == pytest.approx(7.0 - TWO_PI)

    def test_tiny_negative_radians(self):
        """Values just below zero never come back as 2pi."""
        assert 0.0 <= clamp_radians_two_pi(-1e-18) < TWO_PI

    def test_degrees_360(self):
        """Degrees wrap into [0, 360)."""
        assert clamp_degrees_360(360.0) == 0.0
        assert clamp_degrees_360(-90.0) == 270.0
        assert clamp_degrees_360(725.0) == pytest.approx(5.0)

    def test_degrees_180(self):
        """Degrees wrap into [-180, 180)."""
        assert clamp_degrees_180(180.0) == -180.0
        assert clamp_degrees_180(270.0) == -90.0
        assert clamp_degrees_180(-30.0) == -30.0
