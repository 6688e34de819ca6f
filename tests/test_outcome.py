"""
Test suite for explicit query outcomes.

Tests cover:
- Error hierarchy
- Outcome construction and accessors
- attempt() capturing geometric failures only
"""

import pytest
import numpy as np
from orbex import (
    Orbit, Outcome, Failure, attempt, OrbitQueryError,
    UnattainableAnomalyError, UndefinedEventError,
    next_apoapsis_time, eccentric_anomaly_at_true_anomaly, synodic_period,
    ascending_node_true_anomaly,
)


@pytest.fixture
def hyperbola():
    return Orbit(a=-20000, e=1.2)


@pytest.fixture
def ellipse():
    return Orbit(a=8000, e=0.1)


class TestErrorHierarchy:
    """Test exception types."""

    def test_value_error_subclasses(self):
        """Query errors are ValueErrors."""
        assert issubclass(UnattainableAnomalyError, OrbitQueryError)
        assert issubclass(UndefinedEventError, OrbitQueryError)
        assert issubclass(OrbitQueryError, ValueError)


class TestOutcome:
    """Test Outcome values."""

    def test_success(self):
        """Successful outcomes carry the value."""
        result = Outcome.success(12.5)
        assert result.ok
        assert bool(result)
        assert result.failure is None
        assert result.unwrap() == 12.5
        assert result.value_or(0.0) == 12.5

    def test_failure(self):
        """Failed outcomes carry the reason."""
        result = Outcome.failed(Failure.UNDEFINED_EVENT, "no apoapsis")
        assert not result.ok
        assert not bool(result)
        assert result.value is None
        assert result.message == "no apoapsis"
        assert result.value_or("N/A") == "N/A"

    def test_unwrap_raises_matching_error(self):
        """unwrap() re-raises the error for the failure kind."""
        with pytest.raises(UndefinedEventError, match="no apoapsis"):
            Outcome.failed(Failure.UNDEFINED_EVENT, "no apoapsis").unwrap()
        with pytest.raises(UnattainableAnomalyError):
            Outcome.failed(Failure.UNATTAINABLE_ANOMALY).unwrap()

    def test_failure_kind_checked(self):
        """Failure reason must be a Failure."""
        with pytest.raises(TypeError):
            Outcome.failed("undefined_event")

    def test_falsy_value_is_still_success(self):
        """A zero result is a success."""
        assert Outcome.success(0.0).ok


class TestAttempt:
    """Test attempt()."""

    def test_success_value(self, ellipse):
        """Successful queries return their value."""
        result = attempt(next_apoapsis_time, ellipse, 0.0)
        assert result.ok
        assert result.value == pytest.approx(ellipse.period / 2)

    def test_undefined_event(self, hyperbola):
        """Undefined events become UNDEFINED_EVENT."""
        result = attempt(next_apoapsis_time, hyperbola, 0.0)
        assert result.failure == Failure.UNDEFINED_EVENT
        assert "apoapsis" in result.message

    def test_unattainable_anomaly(self, hyperbola):
        """Unreachable anomalies become UNATTAINABLE_ANOMALY."""
        result = attempt(eccentric_anomaly_at_true_anomaly, hyperbola, 170.0)
        assert result.failure == Failure.UNATTAINABLE_ANOMALY

    def test_keyword_arguments(self, ellipse, hyperbola):
        """Keyword arguments are forwarded."""
        result = attempt(synodic_period, a=ellipse, b=hyperbola)
        assert result.failure == Failure.UNDEFINED_EVENT

    def test_other_errors_propagate(self):
        """Errors that are not geometric failures are not captured."""
        def broken():
            raise RuntimeError("solver failure")

        with pytest.raises(RuntimeError):
            attempt(broken)

    def test_argument_errors_propagate(self, ellipse):
        """Calling errors are not mistaken for failures."""
        with pytest.raises(TypeError):
            attempt(next_apoapsis_time, ellipse)

    def test_nan_result_is_success(self, ellipse):
        """Degenerate geometry yields NaN rather than a failure."""
        result = attempt(ascending_node_true_anomaly, ellipse, ellipse)
        assert result.ok
        assert np.isnan(result.value)
