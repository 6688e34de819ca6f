"""
Explicit success-or-reason values for orbit queries.

Every query raises on geometric impossibility. ``attempt`` runs a query and
turns those two failure kinds into an ``Outcome`` so that a caller (a
telemetry display, say) can branch on the reason and show a fallback
without a try block per query.

Examples
--------
>>> result = orbex.attempt(orbex.next_apoapsis_time, escape_orbit, 0.0)
>>> result.ok
False
>>> result.failure
<Failure.UNDEFINED_EVENT: 'undefined_event'>
>>> result.value_or("N/A")
'N/A'
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .errors import UnattainableAnomalyError, UndefinedEventError


class Failure(Enum):
    UNATTAINABLE_ANOMALY = 'unattainable_anomaly'
    UNDEFINED_EVENT = 'undefined_event'


_ERROR_FOR_FAILURE = {
    Failure.UNATTAINABLE_ANOMALY: UnattainableAnomalyError,
    Failure.UNDEFINED_EVENT: UndefinedEventError,
}


@dataclass(frozen=True)
class Outcome:
    """
    Result of an orbit query: either a value or the reason there is none.

    Attributes
    ----------
    value : Any
        Query result, None on failure
    failure : Failure, optional
        Reason the query has no result, None on success
    message : str
        Description of the failure, empty on success
    """
    value: Any = None
    failure: Optional[Failure] = None
    message: str = ""

    @classmethod
    def success(cls, value) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: Failure, message: str = "") -> "Outcome":
        if not isinstance(failure, Failure):
            raise TypeError(f"failure must be a Failure, got {type(failure)}")
        return cls(failure=failure, message=message)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self):
        """Return the value, or raise the error matching the failure."""
        if self.failure is None:
            return self.value
        raise _ERROR_FOR_FAILURE[self.failure](self.message)

    def value_or(self, default):
        """Return the value, or ``default`` on failure."""
        return self.value if self.failure is None else default

    def __bool__(self):
        return self.ok


def attempt(query: Callable[..., Any], *args, **kwargs) -> Outcome:
    """
    Run an orbit query and capture geometric failures as an Outcome.

    Other exceptions (bad arguments, numerical failure) propagate.

    Parameters
    ----------
    query : callable
        Any orbex query, e.g. ``orbex.time_of_true_anomaly``
    *args, **kwargs
        Arguments forwarded to ``query``

    Returns
    -------
    Outcome
    """
    try:
        return Outcome.success(query(*args, **kwargs))
    except UnattainableAnomalyError as err:
        return Outcome.failed(Failure.UNATTAINABLE_ANOMALY, str(err))
    except UndefinedEventError as err:
        return Outcome.failed(Failure.UNDEFINED_EVENT, str(err))
