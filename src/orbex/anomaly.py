"""
Anomaly conversions between time, mean, eccentric and true anomaly.

Conventions
-----------
- True anomalies are taken in degrees.
- Mean and eccentric anomalies are in radians.
- Elliptical results are wrapped into [0, 2pi); hyperbolic results are
  unbounded and are never wrapped.
"""

import numpy as np

from .errors import UnattainableAnomalyError
from .orbit import Orbit, OrbitShape
from .utils import clamp_degrees_180, clamp_degrees_360, clamp_radians_two_pi


def mean_motion(orbit: Orbit) -> float:
    """Mean motion sqrt(mu / |a|^3) [rad/s]."""
    return orbit.mean_motion()


def maximum_true_anomaly(orbit: Orbit) -> float:
    """
    Largest true anomaly [deg] the orbit reaches.

    Hyperbolic orbits only take true anomalies in (-M, +M), M being the
    true anomaly of the asymptote. Elliptical orbits return 180.
    """
    if orbit.shape == OrbitShape.ELLIPTICAL:
        return 180.0
    elif orbit.shape == OrbitShape.HYPERBOLIC:
        return float(np.degrees(np.arccos(-1.0 / orbit.eccentricity)))
    raise ValueError(f"Unhandled orbit shape {orbit.shape}")


def mean_anomaly_at(orbit: Orbit, t: float) -> float:
    """
    Mean anomaly at time t [rad].

    In [0, 2pi) for elliptical orbits, any value for hyperbolic orbits.
    """
    M = orbit.mean_anomaly_at_epoch + mean_motion(orbit) * (t - orbit.epoch)
    if orbit.shape == OrbitShape.ELLIPTICAL:
        return clamp_radians_two_pi(M)
    return float(M)


def time_at_mean_anomaly(orbit: Orbit, mean_anomaly: float, t: float) -> float:
    """
    Next time after t at which the orbit reaches the given mean anomaly.

    For elliptical orbits the result is in [t, t + period). For hyperbolic
    orbits it can be any time, including a time in the past if the mean
    anomaly already occurred.
    """
    difference = mean_anomaly - mean_anomaly_at(orbit, t)
    if orbit.shape == OrbitShape.ELLIPTICAL:
        difference = clamp_radians_two_pi(difference)
    return t + difference / mean_motion(orbit)


def eccentric_anomaly_at_true_anomaly(orbit: Orbit, true_anomaly: float) -> float:
    """
    Convert a true anomaly [deg] into an eccentric anomaly [rad].

    Elliptical orbits return a value in [0, 2pi). Hyperbolic orbits return
    the hyperbolic anomaly, negative on the inbound leg.

    Raises
    ------
    UnattainableAnomalyError
        If the orbit is hyperbolic and never reaches ``true_anomaly``
    """
    e = orbit.eccentricity
    nu_deg = clamp_degrees_360(true_anomaly)
    nu = np.radians(nu_deg)

    if orbit.shape == OrbitShape.ELLIPTICAL:
        cos_E = (e + np.cos(nu)) / (1 + e * np.cos(nu))
        sin_E = np.sqrt(1 - e**2) * abs(np.sin(nu)) / (1 + e * np.cos(nu))
        if nu > np.pi:
            sin_E = -sin_E
        return clamp_radians_two_pi(np.arctan2(sin_E, cos_E))

    elif orbit.shape == OrbitShape.HYPERBOLIC:
        limit = maximum_true_anomaly(orbit)
        if abs(clamp_degrees_180(nu_deg)) >= limit:
            raise UnattainableAnomalyError(
                f"True anomaly of {true_anomaly} degrees is not attained by "
                f"orbit with eccentricity {e} (asymptote at +-{limit} degrees)")
        cosh_E = (e + np.cos(nu)) / (1 + e * np.cos(nu))
        if cosh_E < 1:
            raise UnattainableAnomalyError(
                f"True anomaly of {true_anomaly} degrees is not attained by "
                f"orbit with eccentricity {e}")
        E = np.arccosh(cosh_E)
        if nu > np.pi:
            E = -E
        return float(E)

    raise ValueError(f"Unhandled orbit shape {orbit.shape}")


def mean_anomaly_at_eccentric_anomaly(orbit: Orbit, eccentric_anomaly: float) -> float:
    """
    Convert an eccentric anomaly [rad] into a mean anomaly [rad].

    Wrapped into [0, 2pi) for elliptical orbits.
    """
    e = orbit.eccentricity
    E = eccentric_anomaly
    if orbit.shape == OrbitShape.ELLIPTICAL:
        return clamp_radians_two_pi(E - e * np.sin(E))
    elif orbit.shape == OrbitShape.HYPERBOLIC:
        return float(e * np.sinh(E) - E)
    raise ValueError(f"Unhandled orbit shape {orbit.shape}")


def mean_anomaly_at_true_anomaly(orbit: Orbit, true_anomaly: float) -> float:
    """
    Convert a true anomaly [deg] into a mean anomaly [rad].

    Raises
    ------
    UnattainableAnomalyError
        If the orbit is hyperbolic and never reaches ``true_anomaly``
    """
    return mean_anomaly_at_eccentric_anomaly(
        orbit, eccentric_anomaly_at_true_anomaly(orbit, true_anomaly))


def time_of_true_anomaly(orbit: Orbit, true_anomaly: float, t: float) -> float:
    """
    Next time after t at which the orbit reaches a true anomaly [deg].

    Raises
    ------
    UnattainableAnomalyError
        If the orbit is hyperbolic and never reaches ``true_anomaly``
    """
    return time_at_mean_anomaly(
        orbit, mean_anomaly_at_true_anomaly(orbit, true_anomaly), t)
