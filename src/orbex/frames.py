"""
Frame and vector primitives.

The propagator (``Orbit``) works in a native frame whose z axis is the
reference body's pole. Everything above this module uses the working frame,
which is the native frame with the y and z axes swapped, so the body's pole
is +y. ``swap_yz`` is the only place the permutation is written down.

Vectors produced here are plain numpy arrays of shape (3,).
"""

import numpy as np

from .orbit import Orbit


def swap_yz(vector) -> np.ndarray:
    """Swap the y and z components (native <-> working frame)."""
    x, y, z = np.asarray(vector, dtype=float)
    return np.array([x, z, y])


def velocity_at(orbit: Orbit, t: float) -> np.ndarray:
    """Orbital velocity relative to the body at time t [km/s]."""
    return swap_yz(orbit.velocity_at(t))


def relative_position_at(orbit: Orbit, t: float) -> np.ndarray:
    """Position relative to the body centre at time t [km]."""
    return swap_yz(orbit.position_at(t))


def absolute_position_at(orbit: Orbit, t: float) -> np.ndarray:
    """World position at time t [km]."""
    return orbit.body.position + relative_position_at(orbit, t)


def orbit_normal(orbit: Orbit) -> np.ndarray:
    """
    Unit vector perpendicular to the orbital plane.

    Looking down the normal the orbiting object moves counter-clockwise,
    i.e. the normal is ``cross(r, v)`` evaluated in working coordinates.
    The y/z swap reverses the cross product, hence the sign.
    """
    normal = -swap_yz(orbit.angular_momentum_direction())
    return normal / np.linalg.norm(normal)


def periapsis_direction(orbit: Orbit) -> np.ndarray:
    """Unit vector from the body centre towards periapsis."""
    return swap_yz(orbit.periapsis_direction())


def normalize(vector) -> np.ndarray:
    """Unit vector along ``vector``; zero input gives NaN."""
    vector = np.asarray(vector, dtype=float)
    return vector / np.linalg.norm(vector)


def project(direction, vector) -> np.ndarray:
    """Component of ``vector`` along ``direction``."""
    direction = np.asarray(direction, dtype=float)
    return direction * np.dot(vector, direction) / np.dot(direction, direction)


def exclude(direction, vector) -> np.ndarray:
    """Component of ``vector`` orthogonal to ``direction``."""
    return np.asarray(vector, dtype=float) - project(direction, vector)


def angle_between(a, b) -> float:
    """Unsigned angle between two vectors in degrees, in [0, 180]."""
    cos_angle = np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))
    return float(np.degrees(np.arccos(np.clip(cos_angle, -1.0, 1.0))))
