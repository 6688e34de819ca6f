"""
Event and relationship queries between one or two orbits.

Times are in seconds, true anomalies and angles in degrees. Queries whose
event cannot happen raise ``UndefinedEventError`` or
``UnattainableAnomalyError``; wrap them in ``orbex.attempt`` to receive an
``Outcome`` instead.

Node and angle queries are not guarded against degenerate geometry: two
coplanar orbits (or an equatorial orbit in the equatorial node queries)
have no line of nodes and yield NaN.
"""

import numpy as np

from .anomaly import (
    maximum_true_anomaly, mean_anomaly_at, mean_motion, time_of_true_anomaly,
)
from .config import config
from .errors import UndefinedEventError
from .frames import (
    angle_between, exclude, normalize, orbit_normal, periapsis_direction,
    relative_position_at,
)
from .kinematics import normal_plus, prograde, radial_outward, separation
from .orbit import Orbit, OrbitShape
from .utils import clamp_degrees_180, clamp_degrees_360


# ========== APSIDES ==========
def next_periapsis_time(orbit: Orbit, t: float) -> float:
    """
    Next time at which the orbiting object is at periapsis.

    For elliptical orbits the result is in [t, t + period). For hyperbolic
    orbits it can be in the past if periapsis has already been passed.
    """
    if orbit.shape == OrbitShape.ELLIPTICAL:
        return time_of_true_anomaly(orbit, 0.0, t)
    return t - mean_anomaly_at(orbit, t) / mean_motion(orbit)


def next_apoapsis_time(orbit: Orbit, t: float) -> float:
    """
    Next time at which the orbiting object is at apoapsis.

    Raises
    ------
    UndefinedEventError
        If the orbit is hyperbolic (no apoapsis)
    """
    if orbit.shape == OrbitShape.ELLIPTICAL:
        return time_of_true_anomaly(orbit, 180.0, t)
    raise UndefinedEventError(
        f"Hyperbolic orbits have no apoapsis (e={orbit.eccentricity})")


# ========== NODES ==========
def true_anomaly_from_vector(orbit: Orbit, vector) -> float:
    """
    True anomaly [deg, in [0, 360)] of the direction given by ``vector``.

    The vector is projected into the orbital plane and its angle from the
    periapsis direction measured. Directions on the inbound half of the
    orbit (more than 90 degrees from ``cross(normal, periapsis)``) return
    360 minus that angle.

    Notes
    -----
    The angle comes from ``atan2`` of the in-plane components, so a
    direction along periapsis gives 0 to rounding. Rounding can still put
    it a hair on the inbound side, giving a value just below 360; compare
    results modulo 360 rather than with ``==``.
    """
    normal = orbit_normal(orbit)
    projected = normalize(exclude(normal, vector))
    to_periapsis = periapsis_direction(orbit)
    along_motion = np.cross(normal, to_periapsis)
    angle = np.degrees(np.arctan2(np.dot(projected, along_motion),
                                  np.dot(projected, to_periapsis)))
    return clamp_degrees_360(float(angle))


def ascending_node_true_anomaly(a: Orbit, b: Orbit) -> float:
    """True anomaly [deg] in a's orbit of a's ascending node with b's plane."""
    vector_to_node = np.cross(orbit_normal(a), orbit_normal(b))
    return true_anomaly_from_vector(a, vector_to_node)


def descending_node_true_anomaly(a: Orbit, b: Orbit) -> float:
    """True anomaly [deg] in a's orbit of a's descending node with b's plane."""
    return clamp_degrees_360(ascending_node_true_anomaly(a, b) + 180.0)


def ascending_node_equatorial_true_anomaly(orbit: Orbit) -> float:
    """
    True anomaly [deg] where the orbit crosses the equator northward
    (southward for a west-moving orbit).
    """
    vector_to_node = np.cross(orbit.body.up, orbit_normal(orbit))
    return true_anomaly_from_vector(orbit, vector_to_node)


def descending_node_equatorial_true_anomaly(orbit: Orbit) -> float:
    """
    True anomaly [deg] where the orbit crosses the equator southward
    (northward for a west-moving orbit).
    """
    return clamp_degrees_360(ascending_node_equatorial_true_anomaly(orbit) + 180.0)


def _node_exists(orbit: Orbit, node_true_anomaly: float) -> bool:
    return abs(clamp_degrees_180(node_true_anomaly)) <= maximum_true_anomaly(orbit)


def ascending_node_exists(a: Orbit, b: Orbit) -> bool:
    """
    Whether a crosses b's plane going up. False only if a is hyperbolic and
    the would-be node lies beyond a's asymptotes.
    """
    return _node_exists(a, ascending_node_true_anomaly(a, b))


def descending_node_exists(a: Orbit, b: Orbit) -> bool:
    """Whether a crosses b's plane going down (see ``ascending_node_exists``)."""
    return _node_exists(a, descending_node_true_anomaly(a, b))


def ascending_node_equatorial_exists(orbit: Orbit) -> bool:
    """Whether the orbit has an ascending node with the equator."""
    return _node_exists(orbit, ascending_node_equatorial_true_anomaly(orbit))


def descending_node_equatorial_exists(orbit: Orbit) -> bool:
    """Whether the orbit has a descending node with the equator."""
    return _node_exists(orbit, descending_node_equatorial_true_anomaly(orbit))


def time_of_ascending_node(a: Orbit, b: Orbit, t: float) -> float:
    """
    Next time at which a crosses its ascending node with b.

    Hyperbolic orbits return t unchanged.
    """
    if a.shape == OrbitShape.HYPERBOLIC:
        return t
    return time_of_true_anomaly(a, ascending_node_true_anomaly(a, b), t)


def time_of_descending_node(a: Orbit, b: Orbit, t: float) -> float:
    """
    Next time at which a crosses its descending node with b.

    Hyperbolic orbits return t unchanged.
    """
    if a.shape == OrbitShape.HYPERBOLIC:
        return t
    return time_of_true_anomaly(a, descending_node_true_anomaly(a, b), t)


def time_of_ascending_node_equatorial(orbit: Orbit, t: float) -> float:
    """
    Next time at which the orbit crosses the equator at its ascending node.

    Hyperbolic orbits return t unchanged.
    """
    if orbit.shape == OrbitShape.HYPERBOLIC:
        return t
    return time_of_true_anomaly(orbit, ascending_node_equatorial_true_anomaly(orbit), t)


def time_of_descending_node_equatorial(orbit: Orbit, t: float) -> float:
    """
    Next time at which the orbit crosses the equator at its descending node.

    Computed for both shapes; a hyperbolic orbit may return a past time.

    Raises
    ------
    UnattainableAnomalyError
        If the orbit is hyperbolic and the node lies beyond its asymptotes
    """
    return time_of_true_anomaly(orbit, descending_node_equatorial_true_anomaly(orbit), t)


# ========== CLOSEST APPROACH ==========
def next_closest_approach_time(a: Orbit, b: Orbit, t: float) -> float:
    """
    Time during a's next orbit at which a comes nearest to b.

    Coarse-to-fine grid search: the window [t, t + span] is sampled at
    ``config.APPROACH_DIVISIONS`` points, then narrowed around the best
    sample ``config.APPROACH_REFINEMENTS`` times. The span is a's period,
    or ``config.HYPERBOLIC_APPROACH_MEAN_ANOMALY`` units of mean anomaly if
    a is hyperbolic.

    Notes
    -----
    This is a local search over a bounded horizon. It can miss a closer
    approach outside the window, and for very eccentric hyperbolic arcs it
    may not find the true minimum.
    """
    if a.shape == OrbitShape.ELLIPTICAL:
        span = a.period
    else:
        span = config.HYPERBOLIC_APPROACH_MEAN_ANOMALY / mean_motion(a)
    t_min = t
    t_max = t + span
    divisions = config.APPROACH_DIVISIONS

    best_time = t
    best_distance = np.inf
    for _ in range(config.APPROACH_REFINEMENTS):
        dt = (t_max - t_min) / divisions
        for k in range(divisions):
            sample_time = t_min + k * dt
            distance = separation(a, b, sample_time)
            if distance < best_distance:
                best_distance = distance
                best_time = sample_time
        t_min = float(np.clip(best_time - dt, t, t + span))
        t_max = float(np.clip(best_time + dt, t, t + span))

    return best_time


def next_closest_approach_distance(a: Orbit, b: Orbit, t: float) -> float:
    """Separation [km] at the time found by ``next_closest_approach_time``."""
    return separation(a, b, next_closest_approach_time(a, b, t))


# ========== RELATIVE GEOMETRY ==========
def synodic_period(a: Orbit, b: Orbit) -> float:
    """
    Period [s] after which the phase angle between a and b repeats.

    Counter-rotating pairs (normals more than 90 degrees apart) add their
    rates. Equal co-rotating periods never repeat and return inf.
    Only meaningful for near-circular orbits in similar planes.

    Raises
    ------
    UndefinedEventError
        If either orbit is hyperbolic
    """
    sign = 1.0 if np.dot(orbit_normal(a), orbit_normal(b)) >= 0 else -1.0
    rate = 1.0 / a.period - sign * 1.0 / b.period
    if rate == 0:
        return np.inf
    return abs(1.0 / rate)


def phase_angle(a: Orbit, b: Orbit, t: float) -> float:
    """
    Angle [deg, in [0, 360)] from a's position to b's position projected
    into a's orbital plane, measured in a's direction of motion.

    Only meaningful when both orbits share a reference body.
    """
    normal_a = orbit_normal(a)
    position_a = relative_position_at(a, t)
    projected_b = exclude(normal_a, relative_position_at(b, t))
    angle = angle_between(position_a, projected_b)
    if np.dot(np.cross(normal_a, position_a), projected_b) < 0:
        angle = clamp_degrees_360(360.0 - angle)
    return angle


def relative_inclination(a: Orbit, b: Orbit) -> float:
    """
    Angle [deg, in [0, 180]] between the two orbital planes.

    Coplanar orbits moving in opposite directions are 180 degrees apart.
    """
    return angle_between(orbit_normal(a), orbit_normal(b))


def next_time_of_radius(orbit: Orbit, t: float, radius: float) -> float:
    """
    Next time at which the orbit is at the given distance from the body centre.

    If a hyperbolic orbit only reached the radius in the past, either of the
    two past times may be returned.

    Raises
    ------
    UndefinedEventError
        If the radius is below periapsis, or above apoapsis for an
        elliptical orbit
    """
    if (radius < orbit.periapsis_radius or
            (orbit.shape == OrbitShape.ELLIPTICAL and radius > orbit.apoapsis_radius)):
        raise UndefinedEventError(
            f"Radius of {radius} km is never achieved: periapsis radius "
            f"{orbit.periapsis_radius} km, apoapsis radius "
            f"{orbit.apoapsis_radius} km")

    true_anomaly_1 = float(np.degrees(orbit.true_anomaly_at_radius(radius)))
    true_anomaly_2 = 360.0 - true_anomaly_1
    time_1 = time_of_true_anomaly(orbit, true_anomaly_1, t)
    time_2 = time_of_true_anomaly(orbit, true_anomaly_2, t)
    if time_2 < time_1 and time_2 > t:
        return time_2
    return time_1


# ========== MANEUVERS ==========
def delta_v_to_maneuver_node_coordinates(orbit: Orbit, t: float, dv) -> np.ndarray:
    """
    Express a velocity change in maneuver-node coordinates.

    Returns
    -------
    np.ndarray
        [radial-out, normal (anti-normal positive), prograde] components
    """
    dv = np.asarray(dv, dtype=float)
    return np.array([np.dot(radial_outward(orbit, t), dv),
                     np.dot(-normal_plus(orbit, t), dv),
                     np.dot(prograde(orbit, t), dv)])
