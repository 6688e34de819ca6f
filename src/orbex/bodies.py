'''Reference bodies for orbit analysis
ReferenceBody definition and predefined Solar System bodies'''

import numpy as np
from dataclasses import dataclass, field, replace
from typing import Optional


def _frozen_vector(value, label):
    vec = np.array(value, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"{label} must be a 3-vector, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise ValueError(f"{label} contains NaN or Inf: {vec}")
    vec.flags.writeable = False
    return vec


@dataclass(frozen=True, eq=False)
class ReferenceBody:
    """
    Immutable parameters for the body an orbit is referenced to.

    Attributes
    ----------
    mu : float
        Gravitational parameter [km³/s²]
    radius : float
        Mean radius [km]
    position : np.ndarray
        World position of the body centre in the working frame [km].
        Defaults to the origin.
    up : np.ndarray
        Unit polar axis of the body in the working frame. Defaults to +y,
        which is the native z axis after the y/z swap.
    name : str, optional
        Body identifier

    Notes
    -----
    Vectors are stored as read-only arrays. Use ``at()`` to get a copy of the
    body placed at another world position.
    """
    mu: float
    radius: float
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    name: Optional[str] = None

    def __post_init__(self):
        # Validate parameters
        if not self.mu > 0:
            raise ValueError(f"Gravitational parameter must be positive, got {self.mu}")
        if not self.radius > 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")
        position = _frozen_vector(self.position, "Body position")
        up = np.array(self.up, dtype=float)
        norm = np.linalg.norm(up)
        if not np.isfinite(norm) or norm == 0:
            raise ValueError(f"Body up vector must be finite and non-zero, got {up}")
        up = _frozen_vector(up / norm, "Body up vector")
        object.__setattr__(self, "mu", float(self.mu))
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "up", up)

    def at(self, position) -> "ReferenceBody":
        """Return a copy of this body centred at another world position."""
        return replace(self, position=position)

    def __repr__(self) -> str:
        name_str = f"'{self.name}'" if self.name else "unnamed"
        return (f"ReferenceBody({name_str}, mu={self.mu:.6e} km³/s², "
                f"radius={self.radius:.1f} km)")


"""
Predefined Solar System bodies
Values taken from Vallado, Fundamentals of Astrdynamics, Fifth Edition, 2022, Appendix D
Units referenced to km (i.e. mu = km^3/s^2)
"""

MERCURY = ReferenceBody(mu=2.2032e4, radius=2439.0, name='Mercury')

VENUS = ReferenceBody(mu=3.257e5, radius=6052.0, name='Venus')

EARTH = ReferenceBody(mu=3.986004415e5, radius=6378.1363, name='Earth')

MOON = ReferenceBody(mu=4.902799e3, radius=1738.0, name='Moon')

MARS = ReferenceBody(mu=4.305e4, radius=3397.2, name='Mars')

JUPITER = ReferenceBody(mu=1.268e8, radius=71492.0, name='Jupiter')

SATURN = ReferenceBody(mu=3.794e7, radius=60268.0, name='Saturn')

URANUS = ReferenceBody(mu=5.794e6, radius=25559.0, name='Uranus')

NEPTUNE = ReferenceBody(mu=6.809e6, radius=24764.0, name='Neptune')

SUN = ReferenceBody(mu=1.32712428e11, radius=6.96e5, name='Sun')
