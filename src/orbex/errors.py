"""
Exception types for geometrically impossible orbit queries.

Both concrete errors derive from ValueError so that callers written against
plain argument errors keep working.
"""


class OrbitQueryError(ValueError):
    """Base class for queries whose requested condition cannot occur."""


class UnattainableAnomalyError(OrbitQueryError):
    """
    Requested true or mean anomaly is never reached by the orbit.

    Only hyperbolic orbits raise this: their true anomaly is confined to the
    open interval between the two asymptotes.
    """


class UndefinedEventError(OrbitQueryError):
    """
    Requested event does not exist for the orbit (or orbit pair).

    Examples are the apoapsis or period of a hyperbolic orbit and a radius
    outside the range the orbit sweeps.
    """
