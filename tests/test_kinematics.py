"""
Test suite for kinematic queries.

Tests cover:
- Radius and separation
- Local direction vectors (prograde, up, radial, horizontal, north, east)
- Impulsive maneuvers (perturbed_orbit)
"""

import pytest
import numpy as np
from orbex import (
    Orbit, EARTH, radius, prograde, up, radial_outward, normal_plus,
    horizontal, north, east, separation, perturbed_orbit, orbit_normal,
    relative_position_at, velocity_at,
)


@pytest.fixture
def circular_equatorial():
    return Orbit(a=7000, e=0.0)


@pytest.fixture
def inclined_ellipse():
    return Orbit.from_true_anomaly(a=8000, e=0.1, i=0.5, omega=1.0, w=0.7, nu=0.3)


class TestDistances:
    """Test radius and separation."""

    def test_circular_radius(self, circular_equatorial):
        """Circular orbit radius equals a."""
        assert radius(circular_equatorial, 1234.0) == pytest.approx(7000)

    def test_separation_self(self, inclined_ellipse):
        """An orbit is zero distance from itself."""
        assert separation(inclined_ellipse, inclined_ellipse, 300.0) == 0.0

    def test_separation_concentric(self):
        """Aligned coplanar circles are separated by the radius difference."""
        inner = Orbit(a=7000, e=0.0)
        outer = Orbit(a=8000, e=0.0)
        assert separation(inner, outer, 0.0) == pytest.approx(1000)


class TestDirections:
    """Test local direction vectors."""

    def test_unit_vectors(self, inclined_ellipse):
        """All directions have unit length."""
        for func in (prograde, up, radial_outward, normal_plus, horizontal, north, east):
            assert np.linalg.norm(func(inclined_ellipse, 700.0)) == pytest.approx(1.0)

    def test_radial_perpendicular_to_prograde(self, inclined_ellipse):
        """radial_outward is perpendicular to prograde and outward."""
        t = 700.0
        assert np.dot(radial_outward(inclined_ellipse, t),
                      prograde(inclined_ellipse, t)) == pytest.approx(0.0, abs=1e-12)
        assert np.dot(radial_outward(inclined_ellipse, t), up(inclined_ellipse, t)) > 0

    def test_horizontal_perpendicular_to_up(self, inclined_ellipse):
        """horizontal is perpendicular to up and along the motion."""
        t = 700.0
        assert np.dot(horizontal(inclined_ellipse, t),
                      up(inclined_ellipse, t)) == pytest.approx(0.0, abs=1e-12)
        assert np.dot(horizontal(inclined_ellipse, t), prograde(inclined_ellipse, t)) > 0

    def test_normal_plus_is_orbit_normal(self, inclined_ellipse):
        """normal_plus is the orbit normal at any time."""
        np.testing.assert_array_equal(normal_plus(inclined_ellipse, 10.0),
                                      orbit_normal(inclined_ellipse))

    def test_circular_prograde_is_horizontal(self, circular_equatorial):
        """On a circular orbit prograde and horizontal coincide."""
        np.testing.assert_allclose(prograde(circular_equatorial, 0.0),
                                   horizontal(circular_equatorial, 0.0), atol=1e-12)

    def test_north_on_equator(self, circular_equatorial):
        """Over the equator north is the body's pole."""
        np.testing.assert_allclose(north(circular_equatorial, 0.0), EARTH.up, atol=1e-12)

    def test_prograde_equatorial_moves_east(self, circular_equatorial):
        """A prograde equatorial orbit moves due east."""
        for t in (0.0, 1000.0):
            np.testing.assert_allclose(east(circular_equatorial, t),
                                       prograde(circular_equatorial, t), atol=1e-12)

    def test_east_north_up_orthogonal(self, inclined_ellipse):
        """east, north and up are mutually perpendicular."""
        t = 2000.0
        e, n, u = (east(inclined_ellipse, t), north(inclined_ellipse, t),
                   up(inclined_ellipse, t))
        assert np.dot(e, n) == pytest.approx(0.0, abs=1e-12)
        assert np.dot(e, u) == pytest.approx(0.0, abs=1e-12)
        assert np.dot(n, u) == pytest.approx(0.0, abs=1e-12)


class TestPerturbedOrbit:
    """Test impulsive maneuvers."""

    def test_zero_dv_keeps_trajectory(self, inclined_ellipse):
        """A zero impulse reproduces the same motion."""
        t = 900.0
        new = perturbed_orbit(inclined_ellipse, t, [0.0, 0.0, 0.0])
        assert new.epoch == t
        np.testing.assert_allclose(new.elements[:5], inclined_ellipse.elements[:5],
                                   rtol=1e-9, atol=1e-9)
        np.testing.assert_allclose(relative_position_at(new, 3000.0),
                                   relative_position_at(inclined_ellipse, 3000.0),
                                   atol=1e-6)

    def test_prograde_burn_raises_orbit(self, inclined_ellipse):
        """A prograde impulse increases the semi-major axis."""
        t = 900.0
        dv = 0.1 * prograde(inclined_ellipse, t)
        new = perturbed_orbit(inclined_ellipse, t, dv)
        assert new.a > inclined_ellipse.a

    def test_velocity_changes_by_dv(self, inclined_ellipse):
        """New velocity at the burn time is old velocity plus dv."""
        t = 900.0
        dv = np.array([0.05, -0.02, 0.01])
        new = perturbed_orbit(inclined_ellipse, t, dv)
        np.testing.assert_allclose(velocity_at(new, t),
                                   velocity_at(inclined_ellipse, t) + dv, atol=1e-9)
        np.testing.assert_allclose(relative_position_at(new, t),
                                   relative_position_at(inclined_ellipse, t), atol=1e-6)

    def test_escape_burn(self, circular_equatorial):
        """A large prograde impulse produces a hyperbolic orbit."""
        dv = 5.0 * prograde(circular_equatorial, 0.0)
        new = perturbed_orbit(circular_equatorial, 0.0, dv)
        assert new.e > 1
        assert new.a < 0

    def test_input_unchanged(self, inclined_ellipse):
        """The original orbit is not modified."""
        before = inclined_ellipse.elements.copy()
        perturbed_orbit(inclined_ellipse, 0.0, [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(inclined_ellipse.elements, before)
