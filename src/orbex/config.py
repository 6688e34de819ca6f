"""
Global Configuration for Orbex Package
======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, validation behavior, the closest-approach
search and integrator compilation.

Examples
--------
View current configuration:

>>> import orbex
>>> print(orbex.config)

Modify settings:

>>> orbex.config.APPROACH_REFINEMENTS = 10  # Finer closest-approach search
>>> orbex.config.KEPLER_TOLERANCE = 1e-10   # Looser Kepler solve

Reset to defaults:

>>> orbex.config.reset()

Temporarily modify settings:

>>> with orbex.temp_config(EQUALITY_RTOL=1e-6):
...     # Relaxed tolerance for this block only
...     orbit1 == orbit2

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class OrbexConfig:
    """
    Global configuration for Orbex package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12 (approximately millimeter-level at LEO distances)
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    SNAP_TO_CIRCULAR : float
        Eccentricity below this threshold treated as circular orbit when
        recovering elements from state vectors (argument of periapsis is
        then measured from the node line).
        Default: 1e-11
    SNAP_TO_EQUATORIAL : float
        Inclination [rad] below this threshold (or this close to pi) treated
        as equatorial when recovering elements (node longitude set to zero).
        Default: 1e-11
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    KEPLER_TOLERANCE : float
        Convergence tolerance [rad] of the Newton solve of Kepler's equation.
        Default: 1e-13
    KEPLER_MAX_ITERATIONS : int
        Newton iterations allowed before the Kepler solve gives up.
        Default: 50
    APPROACH_DIVISIONS : int
        Samples per window in the closest-approach grid search.
        Default: 20
    APPROACH_REFINEMENTS : int
        Number of window refinements in the closest-approach search.
        Default: 8
    HYPERBOLIC_APPROACH_MEAN_ANOMALY : float
        Span of mean anomaly [rad] searched for closest approach when the
        first orbit is hyperbolic (window = value / mean motion).
        Default: 100.0
    DEFAULT_COMPILE : bool
        If True, TwoBodyPropagator objects compile their integrator on
        construction. If False, compilation is deferred until first use.
        Default: True
    COMPILE_MESSAGES : bool
        If True, a short notice is printed while an integrator compiles.
        Default: True
    DEFAULT_SAMPLE_POINTS : int
        Default number of points when tabulating a Trajectory.
        Default: 1000
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Snapping behavior thresholds
    SNAP_TO_CIRCULAR: float = 1e-11
    SNAP_TO_EQUATORIAL: float = 1e-11

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Kepler equation solver
    KEPLER_TOLERANCE: float = 1e-13
    KEPLER_MAX_ITERATIONS: int = 50

    # Closest-approach search
    APPROACH_DIVISIONS: int = 20
    APPROACH_REFINEMENTS: int = 8
    HYPERBOLIC_APPROACH_MEAN_ANOMALY: float = 100.0

    # Propagator defaults
    DEFAULT_COMPILE: bool = True
    COMPILE_MESSAGES: bool = True
    DEFAULT_SAMPLE_POINTS: int = 1000

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orbex
        >>> orbex.config.APPROACH_DIVISIONS = 50  # Modify
        >>> orbex.config.reset()  # Back to defaults
        >>> orbex.config.APPROACH_DIVISIONS
        20
        """
        defaults = OrbexConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrbexConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Snapping Thresholds:")
        lines.append(f"    SNAP_TO_CIRCULAR = {self.SNAP_TO_CIRCULAR}")
        lines.append(f"    SNAP_TO_EQUATORIAL = {self.SNAP_TO_EQUATORIAL}")
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_TOLERANCE = {self.KEPLER_TOLERANCE}")
        lines.append(f"    KEPLER_MAX_ITERATIONS = {self.KEPLER_MAX_ITERATIONS}")
        lines.append("  Closest Approach:")
        lines.append(f"    APPROACH_DIVISIONS = {self.APPROACH_DIVISIONS}")
        lines.append(f"    APPROACH_REFINEMENTS = {self.APPROACH_REFINEMENTS}")
        lines.append(f"    HYPERBOLIC_APPROACH_MEAN_ANOMALY = "
                     f"{self.HYPERBOLIC_APPROACH_MEAN_ANOMALY}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    DEFAULT_COMPILE = {self.DEFAULT_COMPILE}")
        lines.append(f"    COMPILE_MESSAGES = {self.COMPILE_MESSAGES}")
        lines.append(f"    DEFAULT_SAMPLE_POINTS = {self.DEFAULT_SAMPLE_POINTS}")
        return "\n".join(lines)


# Global configuration instance
config = OrbexConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orbex
    >>> with orbex.temp_config(APPROACH_REFINEMENTS=12):
    ...     t = orbex.next_closest_approach_time(chaser, target, 0.0)
    >>> # Original config restored here
    >>> orbex.config.APPROACH_REFINEMENTS
    8

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if key not in config.__dataclass_fields__:
            raise AttributeError(
                f"OrbexConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
