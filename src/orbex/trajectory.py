'''Dense two-body trajectory produced by TwoBodyPropagator
Trajectory class definition'''

import numpy as np
import pandas as pd
from typing import Optional, Union

from .bodies import ReferenceBody
from .config import config
from .frames import swap_yz
from .orbit import Orbit


class Trajectory:
    """
    A trajectory segment with continuous-time state access.

    Raw states are native-frame [x, y, z, vx, vy, vz]; the position and
    velocity accessors return working-frame vectors like the query layers.

    Attributes:
        body: Reference body the trajectory was integrated about
        output: continuous output function object from hy.taylor_adaptive()
        t0: Start time
        tf: End time
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, body: ReferenceBody, output, t0: float, tf: float):
        self._body = body
        self._output = output  # Must have dense output enabled
        self._t0 = t0
        self._tf = tf

    # ========== PROPERTY ACCESS ==========
    @property
    def body(self) -> ReferenceBody:
        return self._body

    @property
    def t0(self):
        return self._t0

    @property
    def tf(self):
        return self._tf

    @property
    def duration(self):
        """Trajectory duration."""
        return self.tf - self.t0

    # ========== STATE ACCESS ==========
    def state_at_raw(self, t: float) -> np.ndarray:
        """Get raw native-frame state array at time t"""
        self._validate_time(t)
        return self._output(float(t))  # Heyoka needs float input

    def evaluate_raw(self, times: Union[float, np.ndarray, list]) -> np.ndarray:
        """
        Evaluate at one or more times, returning raw arrays.

        Parameters:
            times: Single time or array of times

        Returns:
            State array of shape (6,) if times is scalar,
            Array of shape (n_times, 6) if times is array-like
        """
        # Handle scalar input
        if isinstance(times, (int, float)):
            return self.state_at_raw(times)

        # Handle array input
        times = np.asarray(times, dtype=float)
        for t in (times.min(), times.max()):
            self._validate_time(t)
        return self._output(times)

    def relative_position_at(self, t: float) -> np.ndarray:
        """Position relative to the body centre [km], working frame"""
        return swap_yz(self.state_at_raw(t)[:3])

    def velocity_at(self, t: float) -> np.ndarray:
        """Velocity relative to the body [km/s], working frame"""
        return swap_yz(self.state_at_raw(t)[3:])

    def absolute_position_at(self, t: float) -> np.ndarray:
        """World position [km], working frame"""
        return self._body.position + self.relative_position_at(t)

    def orbit_at(self, t: float) -> Orbit:
        """Osculating orbit at time t, with its epoch at t"""
        state = self.state_at_raw(t)
        return Orbit.from_state_vectors(state[:3], state[3:], body=self._body, t=t)

    def _validate_time(self, t: float):
        """Validate that time is within trajectory bounds."""
        t_min = min(self.t0, self.tf)
        t_max = max(self.t0, self.tf)

        if not (t_min <= t <= t_max):
            raise ValueError(
                f"Time {t} outside trajectory bounds [{self.t0}, {self.tf}]"
            )

    def contains_time(self, t: float) -> bool:
        """Check if time is within trajectory bounds."""
        return min(self.t0, self.tf) <= t <= max(self.t0, self.tf)

    def get_times(self, n_points: Optional[int] = None) -> np.ndarray:
        """Generate uniform time array spanning trajectory."""
        if n_points is None:
            n_points = config.DEFAULT_SAMPLE_POINTS
        return np.linspace(self.t0, self.tf, n_points)

    def to_dataframe(self,
                     times: Optional[np.ndarray] = None,
                     n_points: Optional[int] = None) -> pd.DataFrame:
        """
        Export trajectory to pandas DataFrame.

        Parameters:
            times: Specific times to evaluate. If None, uses uniform sampling.
            n_points: Number of uniform samples if times not provided
                      (default: config.DEFAULT_SAMPLE_POINTS)

        Returns:
            DataFrame with columns time, x, y, z, vx, vy, vz (working frame,
            positions relative to the body)
        """
        # Get evaluation times
        if times is None:
            times = self.get_times(n_points)
        else:
            times = np.asarray(times, dtype=float)

        # Evaluate states to a numpy array
        states = np.atleast_2d(self.evaluate_raw(times))

        # Build data dictionary, swapping native y/z into the working frame
        data = {
            'time': times,
            'x': states[:, 0],
            'y': states[:, 2],
            'z': states[:, 1],
            'vx': states[:, 3],
            'vy': states[:, 5],
            'vz': states[:, 4],
        }

        return pd.DataFrame(data)

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"Trajectory(body={self._body.name}, "
                f"t0={self.t0}, tf={self.tf}, duration={self.duration})")

    def __call__(self, t: float) -> np.ndarray:
        """
        Working-frame relative position at time t.
        Syntactic sugar for .relative_position_at(t). Allows traj(t) syntax.
        """
        return self.relative_position_at(t)
