'''Keplerian orbit value and two-body propagator
Orbit class definition

All quantities on this class are expressed in the propagator's native frame
(z along the reference body's pole) and in radians. The query layers convert
to the working frame.'''

import numpy as np
from enum import Enum
from typing import Optional

from .bodies import ReferenceBody, EARTH
from .config import config
from .errors import UnattainableAnomalyError, UndefinedEventError
from .utils import TWO_PI, clamp_radians_two_pi, validation_error


# closed set of orbit shapes; every shape-dependent formula dispatches on this
class OrbitShape(Enum):
    ELLIPTICAL = 'ellip'    # 0 <= e < 1, closed and periodic
    HYPERBOLIC = 'hyper'    # e > 1, open, anomalies unbounded


class Orbit:
    """
    Represents an unperturbed Keplerian orbit about a reference body.

    The orbit is defined by six classical elements and an epoch. Mean anomaly
    is given at the epoch rather than true anomaly so that propagation is a
    linear update followed by a Kepler solve.
    Orbit is immutable, create a new instance to change any element.

    Parameters
    ----------
    a : float
        Semi-major axis [km], negative for hyperbolic orbits
    e : float
        Eccentricity, 0 <= e < 1 elliptical, e > 1 hyperbolic
    i : float, optional
        Inclination [rad] in [0, pi] (default 0)
    omega : float, optional
        Longitude of the ascending node [rad] (default 0)
    w : float, optional
        Argument of periapsis [rad] (default 0)
    mean_anomaly_at_epoch : float, optional
        Mean anomaly at ``epoch`` [rad] (default 0)
    epoch : float, optional
        Epoch time [s] (default 0)
    body : ReferenceBody, optional
        Body the orbit is referenced to. Omitting it is a convenience for
        Earth orbits and means EARTH; the body is stored on the orbit, no
        process-wide current body is consulted.
    validate : bool, optional
        Whether to validate the elements (default True)

    Examples
    --------
    >>> leo = Orbit(a=7000, e=0.001, i=np.radians(51.6))
    >>> escape = Orbit.from_true_anomaly(a=-20000, e=1.4, nu=0.0)
    """
    # ========== CLASS CONSTANTS ==========
    # parabolic orbits have a zero semi-latus rectum and no finite a
    _PARABOLIC_ECCENTRICITY = 1.0

    # ========== CONSTRUCTION ==========
    def __init__(self, a, e, i=0.0, omega=0.0, w=0.0,
                 mean_anomaly_at_epoch=0.0, epoch=0.0,
                 body: Optional[ReferenceBody] = None, validate=True):
        self._body = EARTH if body is None else body
        if not isinstance(self._body, ReferenceBody):
            raise TypeError(f"body must be a ReferenceBody, got {type(self._body)}")

        self._elements = np.array(
            [a, e, i, omega, w, mean_anomaly_at_epoch], dtype=float)
        # Ensure immutability of elements array
        self._elements.flags.writeable = False
        self._epoch = float(epoch)

        # run validation checks on input parameters (if not flagged otherwise)
        if validate:
            self._validate()

        self._shape = (OrbitShape.ELLIPTICAL if self._elements[1] < 1
                       else OrbitShape.HYPERBOLIC)

        # perifocal -> native inertial rotation, R3(omega) R1(i) R3(w)
        R3_omega = np.array([
            [np.cos(omega), -np.sin(omega), 0],
            [np.sin(omega),  np.cos(omega), 0],
            [0,              0,             1]
        ])
        R1_i = np.array([
            [1,  0,          0         ],
            [0,  np.cos(i), -np.sin(i) ],
            [0,  np.sin(i),  np.cos(i) ]
        ])
        R3_w = np.array([
            [np.cos(w), -np.sin(w), 0],
            [np.sin(w),  np.cos(w), 0],
            [0,          0,         1]
        ])
        self._dcm = R3_omega @ R1_i @ R3_w
        self._dcm.flags.writeable = False

    @classmethod
    def from_true_anomaly(cls, a, e, i=0.0, omega=0.0, w=0.0, nu=0.0,
                          epoch=0.0, body=None, validate=True):
        """
        Create an orbit whose true anomaly at ``epoch`` is ``nu``.

        Parameters
        ----------
        nu : float
            True anomaly at epoch [rad]. For hyperbolic orbits it must lie
            strictly between the asymptotes.

        Returns
        -------
        Orbit

        Raises
        ------
        UnattainableAnomalyError
            If the orbit is hyperbolic and nu is beyond its asymptote
        """
        if e >= 1:
            limit = np.arccos(-1.0 / e)
            nu_wrapped = clamp_radians_two_pi(nu + np.pi) - np.pi
            if abs(nu_wrapped) >= limit:
                raise UnattainableAnomalyError(
                    f"True anomaly {nu} rad lies beyond the asymptote "
                    f"(+-{limit} rad) of a hyperbola with e={e}")
            nu = nu_wrapped
        M0 = cls._mean_anomaly_from_true(nu, e)
        return cls(a, e, i, omega, w, M0, epoch, body=body, validate=validate)

    @classmethod
    def from_state_vectors(cls, position, velocity, body=None, t=0.0):
        """
        Create an orbit from a native-frame state vector relative to the body.

        Uses algorithm from Flores & Fantino, Advances in Space Research,
        v.75, pp.4910. Node longitude is set to zero for equatorial orbits
        and argument of periapsis to zero for circular orbits (see
        config.SNAP_TO_EQUATORIAL / config.SNAP_TO_CIRCULAR).

        Parameters
        ----------
        position : array_like
            Position relative to the body centre [km], native frame
        velocity : array_like
            Velocity relative to the body [km/s], native frame
        body : ReferenceBody, optional
            Reference body the state is relative to. Omitting it is a
            convenience for Earth states and means EARTH.
        t : float, optional
            Time of the state vector, becomes the orbit epoch [s]

        Returns
        -------
        Orbit
            Orbit built without validation (automated process)
        """
        body = EARTH if body is None else body
        mu = body.mu
        rvec = np.asarray(position, dtype=float)
        vvec = np.asarray(velocity, dtype=float)
        r_mag = np.linalg.norm(rvec)
        # calculate angular momentum vector h = r × v
        hvec = np.cross(rvec, vvec)
        h_mag = np.linalg.norm(hvec)
        # calculate inclination
        i = np.arctan2(np.sqrt(hvec[0]**2 + hvec[1]**2), hvec[2])
        # find longitude of ascending node, undefined for equatorial orbits
        if i < config.SNAP_TO_EQUATORIAL or np.pi - i < config.SNAP_TO_EQUATORIAL:
            omega = 0.0
        else:
            omega = np.arctan2(hvec[0], -hvec[1])
        # define line of nodes vector
        nhat = np.array([np.cos(omega), np.sin(omega), 0])
        # define an intermediate vector b in the orbit plane
        bhat = np.cross(hvec / h_mag, nhat)
        # find semimajor axis from energy equation
        a = ((2 / r_mag) - (np.dot(vvec, vvec) / mu))**(-1)
        # find eccentricity vector
        evec = np.cross(vvec, hvec) / mu - rvec / r_mag
        e = np.linalg.norm(evec)
        # find argument of periapsis, undefined for circular orbits
        if e < config.SNAP_TO_CIRCULAR:
            e = 0.0
            w = 0.0
        else:
            w = np.arctan2(np.dot(evec, bhat), np.dot(evec, nhat))
        # true anomaly measured from periapsis, in [-pi, pi)
        nu = np.arctan2(np.dot(rvec, bhat), np.dot(rvec, nhat)) - w
        nu = clamp_radians_two_pi(nu + np.pi) - np.pi
        omega = clamp_radians_two_pi(omega)
        w = clamp_radians_two_pi(w)
        M0 = cls._mean_anomaly_from_true(nu, e)
        return cls(a, e, i, omega, w, M0, t, body=body, validate=False)

    # ========== VALIDATION ==========
    def _validate(self):
        """Check the elements describe a physical Keplerian orbit.
        If validation fails inappropriately, set validate=False for constructor
        """
        if not np.all(np.isfinite(self._elements)) or not np.isfinite(self._epoch):
            validation_error("Orbital elements contain NaN or Inf")
            return
        a, e, i, omega, w, M0 = self._elements
        if e < 0:
            validation_error(f"Eccentricity must be non-negative, got e={e}")
        if e == self._PARABOLIC_ECCENTRICITY:
            validation_error("Parabolic orbits (e=1) are not supported")
        # Validate a-e combination for physical consistency
        if e < 1 and a <= 0:
            validation_error(f"Elliptic orbit (e={e}) "
                             f"requires positive semi-major axis, got a={a}")
        if e > 1 and a >= 0:
            validation_error(f"Hyperbolic orbit (e={e}) "
                             f"requires negative semi-major axis, got a={a}")
        if i > np.pi or i < 0:
            validation_error(f"Inclination out of range [0, pi], got i={i}")

    # ========== PROPERTY ACCESS ==========
    @property
    def elements(self) -> np.ndarray:
        """Read-only element array [a, e, i, omega, w, M0]"""
        return self._elements

    @property
    def body(self) -> ReferenceBody:
        """Reference body"""
        return self._body

    @property
    def reference_body(self) -> ReferenceBody:
        """Alias of ``body``"""
        return self._body

    @property
    def mu(self) -> float:
        """Gravitational parameter of the reference body [km³/s²]"""
        return self._body.mu

    @property
    def shape(self) -> OrbitShape:
        return self._shape

    @property
    def a(self) -> float:
        """Semi-major axis [km]"""
        return self._elements[0]

    @property
    def e(self) -> float:
        """Eccentricity"""
        return self._elements[1]

    @property
    def i(self) -> float:
        """Inclination [rad]"""
        return self._elements[2]

    @property
    def omega(self) -> float:
        """Longitude of the ascending node [rad]"""
        return self._elements[3]

    @property
    def w(self) -> float:
        """Argument of periapsis [rad]"""
        return self._elements[4]

    @property
    def mean_anomaly_at_epoch(self) -> float:
        """Mean anomaly at epoch [rad]"""
        return self._elements[5]

    @property
    def epoch(self) -> float:
        """Epoch [s]"""
        return self._epoch

    # long names used by the query layers
    semi_major_axis = a
    eccentricity = e
    inclination = i

    # ========== ORBITAL PROPERTIES ==========
    @property
    def semi_latus_rectum(self) -> float:
        """Semi-latus rectum p = a(1 - e²) [km]"""
        return self.a * (1 - self.e**2)

    @property
    def periapsis_radius(self) -> float:
        """Distance from the body centre at periapsis [km]"""
        return self.a * (1 - self.e)

    @property
    def apoapsis_radius(self) -> float:
        """Distance from the body centre at apoapsis [km], inf if hyperbolic"""
        if self._shape == OrbitShape.HYPERBOLIC:
            return np.inf
        return self.a * (1 + self.e)

    @property
    def period(self) -> float:
        """
        Orbital period [s]

        Raises
        ------
        UndefinedEventError
            If the orbit is hyperbolic
        """
        if self._shape == OrbitShape.HYPERBOLIC:
            raise UndefinedEventError(
                f"Orbital period undefined for hyperbolic orbits (e={self.e})")
        return 2 * np.pi * np.sqrt(self.a**3 / self.mu)

    def mean_motion(self) -> float:
        """
        Calculate mean motion (n = √(μ/|a|³))

        Returns
        -------
        float
            Mean motion [rad/s], defined for both shapes
        """
        return np.sqrt(self.mu / np.abs(self.a**3))

    def specific_energy(self) -> float:
        """Calculate specific orbital energy (energy per unit mass)"""
        return -self.mu / (2 * self.a)

    def specific_angular_momentum(self) -> float:
        """
        Calculate specific angular momentum magnitude

        Returns h = √(μp)
        """
        return np.sqrt(self.mu * self.semi_latus_rectum)

    # ========== ORIENTATION ==========
    def periapsis_direction(self) -> np.ndarray:
        """Unit vector towards periapsis (native frame)"""
        return self._dcm[:, 0].copy()

    def eccentricity_vector(self) -> np.ndarray:
        """Eccentricity vector (native frame), magnitude e"""
        return self.e * self._dcm[:, 0]

    def angular_momentum_direction(self) -> np.ndarray:
        """Unit angular momentum vector (native frame)"""
        return self._dcm[:, 2].copy()

    # ========== PROPAGATION ==========
    def true_anomaly_at(self, t: float) -> float:
        """
        True anomaly at time t [rad].

        In [0, 2pi) for elliptical orbits and in (-nu_inf, nu_inf) for
        hyperbolic orbits.
        """
        e = self.e
        M = self.mean_anomaly_at_epoch + self.mean_motion() * (t - self._epoch)
        if self._shape == OrbitShape.ELLIPTICAL:
            E = self._solve_kepler_elliptic(clamp_radians_two_pi(M), e)
            nu = 2 * np.arctan2(np.sqrt(1 + e) * np.sin(E / 2),
                                np.sqrt(1 - e) * np.cos(E / 2))
            return clamp_radians_two_pi(nu)
        elif self._shape == OrbitShape.HYPERBOLIC:
            H = self._solve_kepler_hyperbolic(M, e)
            return 2 * np.arctan(np.sqrt((e + 1) / (e - 1)) * np.tanh(H / 2))
        raise ValueError(f"Unhandled orbit shape {self._shape}")

    def position_at_true_anomaly(self, nu: float) -> np.ndarray:
        """Position relative to the body at true anomaly nu [rad] (native frame)"""
        r_mag = self.semi_latus_rectum / (1 + self.e * np.cos(nu))
        return self._dcm @ np.array([r_mag * np.cos(nu), r_mag * np.sin(nu), 0])

    def velocity_at_true_anomaly(self, nu: float) -> np.ndarray:
        """Velocity relative to the body at true anomaly nu [rad] (native frame)"""
        scale = np.sqrt(self.mu / self.semi_latus_rectum)
        return self._dcm @ np.array([-scale * np.sin(nu),
                                     scale * (self.e + np.cos(nu)), 0])

    def position_at(self, t: float) -> np.ndarray:
        """Position relative to the body at time t [km] (native frame)"""
        return self.position_at_true_anomaly(self.true_anomaly_at(t))

    def velocity_at(self, t: float) -> np.ndarray:
        """Velocity relative to the body at time t [km/s] (native frame)"""
        return self.velocity_at_true_anomaly(self.true_anomaly_at(t))

    def true_anomaly_at_radius(self, radius: float) -> float:
        """
        Outbound true anomaly [rad, in [0, pi]] at which the orbit has the
        given radius. Radii outside the swept range are clipped to the
        nearest apsis; circular orbits return 0.
        """
        if self.e == 0:
            return 0.0
        cos_nu = (self.semi_latus_rectum / radius - 1) / self.e
        return np.arccos(np.clip(cos_nu, -1.0, 1.0))

    # ========== KEPLER EQUATION ==========
    @staticmethod
    def _solve_kepler_elliptic(M, e):
        """Solve M = E - e sin(E) for E by Newton-Raphson iteration"""
        # Initial guess, pi is safer for high eccentricity
        E = M if e < 0.8 else np.pi
        for _ in range(config.KEPLER_MAX_ITERATIONS):
            dE = (E - e * np.sin(E) - M) / (1.0 - e * np.cos(E))
            E = E - dE
            if abs(dE) <= config.KEPLER_TOLERANCE * max(1.0, abs(E)):
                return E
        raise RuntimeError(
            f"Kepler solve did not converge (M={M}, e={e}) after "
            f"{config.KEPLER_MAX_ITERATIONS} iterations")

    @staticmethod
    def _solve_kepler_hyperbolic(M, e):
        """Solve M = e sinh(H) - H for H by Newton-Raphson iteration"""
        # asinh(M/e) is exact in the large |M| limit and overshoots safely
        H = np.arcsinh(M / e)
        for _ in range(config.KEPLER_MAX_ITERATIONS):
            dH = (e * np.sinh(H) - H - M) / (e * np.cosh(H) - 1.0)
            H = H - dH
            if abs(dH) <= config.KEPLER_TOLERANCE * max(1.0, abs(H)):
                return H
        raise RuntimeError(
            f"Hyperbolic Kepler solve did not converge (M={M}, e={e}) after "
            f"{config.KEPLER_MAX_ITERATIONS} iterations")

    @staticmethod
    def _mean_anomaly_from_true(nu, e):
        """Mean anomaly for true anomaly nu [rad], wrapped only if elliptical"""
        if e < 1:
            E = 2 * np.arctan2(np.sqrt(1 - e) * np.sin(nu / 2),
                               np.sqrt(1 + e) * np.cos(nu / 2))
            return clamp_radians_two_pi(E - e * np.sin(E))
        H = 2 * np.arctanh(np.sqrt((e - 1) / (e + 1)) * np.tan(nu / 2))
        return e * np.sinh(H) - H

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        #Machine-readable representation
        return (f"Orbit({self._elements.tolist()}, epoch={self._epoch}, "
                f"body={self._body.name})")

    def __str__(self):
        #Human-readable representation
        a, e, i, omega, w, M0 = self._elements
        return (f"{self._shape.name.capitalize()} Orbit about "
                f"{self._body.name or 'unnamed body'}:\n"
                f"  a     = {a:12.4f} km\n"
                f"  e     = {e:12.6f}\n"
                f"  i     = {np.degrees(i):12.4f}°\n"
                f"  RAAN  = {np.degrees(omega):12.4f}°\n"
                f"  ω     = {np.degrees(w):12.4f}°\n"
                f"  M0    = {np.degrees(M0):12.4f}°\n"
                f"  epoch = {self._epoch:12.4f} s")

    def __eq__(self, other):
        #Check equality with tolerance, angles compared modulo 2pi
        if not isinstance(other, Orbit):
            return False
        if self._shape != other._shape:
            return False
        rtol, atol = config.EQUALITY_RTOL, config.EQUALITY_ATOL
        # omega, w and (elliptical only) M0 are periodic
        if self._shape == OrbitShape.ELLIPTICAL:
            linear, periodic = [0, 1, 2], [3, 4, 5]
        else:
            linear, periodic = [0, 1, 2, 5], [3, 4]
        angle_diffs = [clamp_radians_two_pi(self._elements[k] - other._elements[k])
                       for k in periodic]
        return (np.allclose(self._elements[linear], other._elements[linear],
                            rtol=rtol, atol=atol) and
                all(min(d, TWO_PI - d) <= atol + rtol * TWO_PI for d in angle_diffs) and
                np.isclose(self._epoch, other._epoch, rtol=rtol, atol=atol) and
                np.isclose(self.mu, other.mu, rtol=rtol, atol=atol))

    def __hash__(self):
        # Tolerance equality cannot be bucketed by rounding, so only the
        # exact shape takes part in the hash
        return hash(self._shape)
