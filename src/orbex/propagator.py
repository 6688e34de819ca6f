'''Numerical two-body propagation for cross-checking the analytic orbit
TwoBodyPropagator class definition'''

import numpy as np
from typing import List, Optional, Tuple
import heyoka as hy

from .bodies import ReferenceBody
from .config import config
from .orbit import Orbit
from .trajectory import Trajectory


class TwoBodyPropagator:
    """
    Taylor-series integrator of the unperturbed two-body problem.

    The analytic ``Orbit`` is exact for this problem; integrating the same
    equations numerically gives an independent reference for its state
    vectors and a dense ephemeris that can be tabulated.

    Parameters
    ----------
    body : ReferenceBody
        Central body, its gravitational parameter is compiled into the
        equations of motion
    compile : bool, optional
        Compile the integrator immediately (default: config.DEFAULT_COMPILE)

    Notes
    -----
    - The propagator is immutable apart from its cached integrator, which is
      reused by every call to ``propagate`` and so is not thread-safe
    - State vector order: [x, y, z, vx, vy, vz] (km, km/s), native frame
    """

    # ========== CONSTRUCTION ==========
    def __init__(self, body: ReferenceBody, compile: Optional[bool] = None):
        if not isinstance(body, ReferenceBody):
            raise TypeError(f"body must be a ReferenceBody, got {type(body)}")
        self._body = body
        self._cached_integrator = None
        self._cached_eom = self._build_eom()

        if compile is None:
            compile = config.DEFAULT_COMPILE
        if compile:
            self._compile_integrator()

    # ========== PROPAGATION ==========
    def propagate(self, orbit: Orbit, t_start: float, t_end: float) -> Trajectory:
        """
        Propagate the orbit's state from t_start to t_end with dense output.

        Parameters
        ----------
        orbit : Orbit
            Orbit supplying the initial state at t_start; must be referenced
            to this propagator's body
        t_start : float
            Start time [s]
        t_end : float
            End time [s], may be earlier than t_start

        Returns
        -------
        Trajectory
            Trajectory object containing dense output
        """
        if not isinstance(orbit, Orbit):
            raise TypeError(f"orbit must be an Orbit, got {type(orbit)}")
        if not np.isclose(orbit.mu, self._body.mu,
                          rtol=config.EQUALITY_RTOL, atol=config.EQUALITY_ATOL):
            raise ValueError(
                f"Orbit is referenced to mu={orbit.mu}, propagator body has "
                f"mu={self._body.mu}")

        # Ensure compiled
        if not self.is_compiled:
            self._compile_integrator()
        ta = self._cached_integrator
        assert ta is not None, "Integrator should be compiled"

        # cast input times explicitly to floats (required by heyoka)
        t_start = float(t_start)
        t_end = float(t_end)

        state_array = np.concatenate([orbit.position_at(t_start),
                                      orbit.velocity_at(t_start)])
        if not np.all(np.isfinite(state_array)):
            raise ValueError(
                f"Initial state contains NaN or Inf values: {state_array}"
            )

        # Set initial conditions
        ta.time = t_start
        ta.state[:] = state_array

        # Propagate until ending time
        traj = ta.propagate_until(t_end, c_output=True)[4]

        # Check for integration failure
        if not np.all(np.isfinite(ta.state)):
            raise ValueError(
                f"Integration failed: state became invalid during propagation.\n"
                f"Initial state: {state_array}\n"
                f"Final time: {ta.time}\n"
                f"Final state: {ta.state}"
            )

        # Check that continuous output object produces a valid trajectory
        if traj is None:
            raise ValueError(
                "Integration produced no continuous output (c_output is None)."
            )

        return Trajectory(self._body, traj, t_start, t_end)

    # ========== PROPERTY ACCESS ==========
    @property
    def body(self) -> ReferenceBody:
        return self._body

    @property
    def is_compiled(self) -> bool:
        """Whether the heyoka integrator has been built"""
        return self._cached_integrator is not None

    @property
    def cached_eom(self) -> List[Tuple]:
        """Symbolic equations of motion as (variable, rhs) pairs"""
        return self._cached_eom

    # ========== EQUATIONS OF MOTION ==========
    def _build_eom(self):
        """
        Build symbolic Heyoka equations of motion.

        The gravitational parameter is hardcoded into the expressions since
        it belongs to the immutable body.
        """
        x, y, z, vx, vy, vz = hy.make_vars("x", "y", "z", "vx", "vy", "vz")
        r = hy.sqrt(x**2 + y**2 + z**2)
        mu = self._body.mu

        return [
            (x, vx),
            (y, vy),
            (z, vz),
            (vx, -mu * x / r**3),
            (vy, -mu * y / r**3),
            (vz, -mu * z / r**3)
        ]

    def _compile_integrator(self):
        """
        Compile Heyoka integrator (expensive operation).

        This performs automatic differentiation and LLVM compilation,
        which takes a few seconds.
        """
        if self._cached_integrator is not None:
            return  # Already compiled

        if config.COMPILE_MESSAGES:
            print(f"Compiling two-body integrator for "
                  f"{self._body.name or 'unnamed body'}...")

        # EXPENSIVE: Compile integrator
        self._cached_integrator = hy.taylor_adaptive(
            sys=self._cached_eom,
            state=[0.0] * 6,  # Dummy state
        )
        if config.COMPILE_MESSAGES:
            print("Compilation complete")

    def compile(self):
        """
        Explicitly compile integrator if not already compiled.

        Returns
        -------
        self
            Returns self for method chaining
        """
        self._compile_integrator()
        return self

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"TwoBodyPropagator(body={self._body.name}, "
                f"mu={self._body.mu:.3e} km³/s², compiled={self.is_compiled})")
