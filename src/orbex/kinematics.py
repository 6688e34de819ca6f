"""
Kinematic queries: distances and local direction vectors at a given time.

All vectors are unit vectors in the working frame unless stated otherwise.
"""

import numpy as np

from .frames import (
    absolute_position_at, exclude, normalize, orbit_normal,
    relative_position_at, swap_yz, velocity_at,
)
from .orbit import Orbit


def radius(orbit: Orbit, t: float) -> float:
    """Distance from the centre of the reference body [km]."""
    return float(np.linalg.norm(relative_position_at(orbit, t)))


def prograde(orbit: Orbit, t: float) -> np.ndarray:
    """Along the orbital velocity."""
    return normalize(velocity_at(orbit, t))


def up(orbit: Orbit, t: float) -> np.ndarray:
    """Radially outward from the body centre through the orbiting object."""
    return normalize(relative_position_at(orbit, t))


def radial_outward(orbit: Orbit, t: float) -> np.ndarray:
    """Radially outward and perpendicular to prograde."""
    return normalize(exclude(prograde(orbit, t), up(orbit, t)))


def normal_plus(orbit: Orbit, t: float) -> np.ndarray:
    """The orbit normal, named to match the other directions."""
    return orbit_normal(orbit)


def horizontal(orbit: Orbit, t: float) -> np.ndarray:
    """
    Parallel to the (spherical) surface below, in the general direction
    of the orbital velocity.
    """
    return normalize(exclude(up(orbit, t), prograde(orbit, t)))


def north(orbit: Orbit, t: float) -> np.ndarray:
    """Parallel to the surface below and pointing towards the north pole."""
    body = orbit.body
    to_pole = body.up * body.radius - relative_position_at(orbit, t)
    return normalize(exclude(up(orbit, t), to_pole))


def east(orbit: Orbit, t: float) -> np.ndarray:
    """Parallel to the surface below and pointing east."""
    # with the y/z swap this ordering gives geographic east
    return np.cross(up(orbit, t), north(orbit, t))


def separation(a: Orbit, b: Orbit, t: float) -> float:
    """Distance between the objects on orbits a and b at time t [km]."""
    return float(np.linalg.norm(absolute_position_at(a, t) - absolute_position_at(b, t)))


def perturbed_orbit(orbit: Orbit, t: float, dv) -> Orbit:
    """
    Orbit that results from an instantaneous velocity change at time t.

    Parameters
    ----------
    orbit : Orbit
        Orbit before the impulse
    t : float
        Time of the impulse [s]
    dv : array_like
        Velocity change in the working frame [km/s]

    Returns
    -------
    Orbit
        New orbit with its epoch at t; the input is unchanged
    """
    body = orbit.body
    position = absolute_position_at(orbit, t)
    velocity = velocity_at(orbit, t) + np.asarray(dv, dtype=float)
    return Orbit.from_state_vectors(swap_yz(position - body.position),
                                    swap_yz(velocity), body=body, t=t)
