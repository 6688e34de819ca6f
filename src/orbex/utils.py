"""
Utility functions for the Orbex package.

Angle wrapping helpers shared by every layer, plus the package-wide
validation hook.
"""

import math
import warnings
from typing import Type
from .config import config

TWO_PI = 2.0 * math.pi


def clamp_radians_two_pi(angle: float) -> float:
    """Wrap an angle in radians into [0, 2*pi)."""
    angle = math.fmod(angle, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    # fmod of a tiny negative value can round back up to 2*pi
    if angle >= TWO_PI:
        angle -= TWO_PI
    return angle


def clamp_degrees_360(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    angle = math.fmod(angle, 360.0)
    if angle < 0:
        angle += 360.0
    if angle >= 360.0:
        angle -= 360.0
    return angle


def clamp_degrees_180(angle: float) -> float:
    """Wrap an angle in degrees into [-180, 180)."""
    angle = clamp_degrees_360(angle)
    if angle >= 180.0:
        angle -= 360.0
    return angle


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from orbex.utils import validation_error
    >>> from orbex import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)
