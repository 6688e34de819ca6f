"""
Orbex: Keplerian Orbit Analysis

A Python package for analytic two-body orbit queries: anomaly conversions,
apsis and node timing, closest approach, local direction vectors and
impulsive maneuvers, with a Taylor-series integrator for numerical
cross-checks.
"""

# Core classes
from .orbit import Orbit, OrbitShape
from .bodies import ReferenceBody
from .propagator import TwoBodyPropagator
from .trajectory import Trajectory

# Commonly-used celestial bodies
from .bodies import (
    MERCURY, VENUS, EARTH, MOON, MARS, JUPITER, SATURN, URANUS, NEPTUNE, SUN,
)

# Configuration
from .config import config, temp_config

# Errors and explicit outcomes
from .errors import OrbitQueryError, UnattainableAnomalyError, UndefinedEventError
from .outcome import Outcome, Failure, attempt

# Frame primitives
from .frames import (
    swap_yz, velocity_at, relative_position_at, absolute_position_at,
    orbit_normal, periapsis_direction, normalize, project, exclude,
    angle_between,
)

# Kinematic queries
from .kinematics import (
    radius, prograde, up, radial_outward, normal_plus, horizontal, north,
    east, separation, perturbed_orbit,
)

# Anomaly conversions
from .anomaly import (
    mean_motion, maximum_true_anomaly, mean_anomaly_at, time_at_mean_anomaly,
    eccentric_anomaly_at_true_anomaly, mean_anomaly_at_eccentric_anomaly,
    mean_anomaly_at_true_anomaly, time_of_true_anomaly,
)

# Event and relationship queries
from .events import (
    next_periapsis_time, next_apoapsis_time,
    true_anomaly_from_vector,
    ascending_node_true_anomaly, descending_node_true_anomaly,
    ascending_node_equatorial_true_anomaly,
    descending_node_equatorial_true_anomaly,
    ascending_node_exists, descending_node_exists,
    ascending_node_equatorial_exists, descending_node_equatorial_exists,
    time_of_ascending_node, time_of_descending_node,
    time_of_ascending_node_equatorial, time_of_descending_node_equatorial,
    next_closest_approach_time, next_closest_approach_distance,
    synodic_period, phase_angle, relative_inclination, next_time_of_radius,
    delta_v_to_maneuver_node_coordinates,
)

# Package metadata
__version__ = "0.1.0"
__author__ = "Shane Billingsley"

# Define what gets imported with "from orbex import *"
__all__ = [
    # Classes
    "Orbit",
    "OrbitShape",
    "ReferenceBody",
    "TwoBodyPropagator",
    "Trajectory",
    "Outcome",
    "Failure",
    # Errors
    "OrbitQueryError",
    "UnattainableAnomalyError",
    "UndefinedEventError",
    # Configuration
    "config",
    "temp_config",
    "attempt",
    # Constants
    "MERCURY",
    "VENUS",
    "EARTH",
    "MOON",
    "MARS",
    "JUPITER",
    "SATURN",
    "URANUS",
    "NEPTUNE",
    "SUN",
    # Frames
    "swap_yz",
    "velocity_at",
    "relative_position_at",
    "absolute_position_at",
    "orbit_normal",
    "periapsis_direction",
    "normalize",
    "project",
    "exclude",
    "angle_between",
    # Kinematics
    "radius",
    "prograde",
    "up",
    "radial_outward",
    "normal_plus",
    "horizontal",
    "north",
    "east",
    "separation",
    "perturbed_orbit",
    # Anomalies
    "mean_motion",
    "maximum_true_anomaly",
    "mean_anomaly_at",
    "time_at_mean_anomaly",
    "eccentric_anomaly_at_true_anomaly",
    "mean_anomaly_at_eccentric_anomaly",
    "mean_anomaly_at_true_anomaly",
    "time_of_true_anomaly",
    # Events
    "next_periapsis_time",
    "next_apoapsis_time",
    "true_anomaly_from_vector",
    "ascending_node_true_anomaly",
    "descending_node_true_anomaly",
    "ascending_node_equatorial_true_anomaly",
    "descending_node_equatorial_true_anomaly",
    "ascending_node_exists",
    "descending_node_exists",
    "ascending_node_equatorial_exists",
    "descending_node_equatorial_exists",
    "time_of_ascending_node",
    "time_of_descending_node",
    "time_of_ascending_node_equatorial",
    "time_of_descending_node_equatorial",
    "next_closest_approach_time",
    "next_closest_approach_distance",
    "synodic_period",
    "phase_angle",
    "relative_inclination",
    "next_time_of_radius",
    "delta_v_to_maneuver_node_coordinates",
]
