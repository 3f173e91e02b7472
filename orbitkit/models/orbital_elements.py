"""
Orbital elements and state vector models.

This module defines the immutable value types exchanged by the orbital
mechanics engine:

- :class:`StateVector`: Cartesian position and velocity of a body relative
  to its primary, in an inertial frame.
- :class:`OrbitalElements`: the six classical (Keplerian) elements, together
  with the derived quantities commonly needed from them (periapsis, apoapsis,
  period, vis-viva speeds, Hill radius).
- :class:`OrbitType` and :class:`OrbitalClassification`: shape and
  orientation classes of an orbit.

All angles are in radians. Lengths, speeds and the gravitational parameter
are plain floats in whatever consistent unit system the caller chose, or
astropy quantities when the elements were computed from quantities. The
derived quantities then carry units too, provided μ is also a quantity.
"""

from enum import Enum
from typing import NamedTuple

import numpy as np
from astropy import units as u

from orbitkit.errors import UnsupportedOrbitTypeError
from orbitkit.utils.constants import ANGLE_TOL
from orbitkit.utils.crtbp import hill_radius
from orbitkit.utils.units import SPEED, is_quantity


class OrbitType(Enum):
    """Conic section described by an orbit."""
    ELLIPTICAL = "elliptical"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"


class OrbitalClassification(Enum):
    """Orbit classification by inclination."""
    PROGRADE = "prograde"
    POLAR = "polar"
    RETROGRADE = "retrograde"

    @classmethod
    def from_inclination(cls, inclination):
        """
        Classify an inclination given in radians.

        Orbits within 5° of polar (85°–95°) are polar; below that they are
        prograde and above retrograde.
        """
        deg = np.degrees(inclination)
        if deg < 85.0:
            return cls.PROGRADE
        if deg > 95.0:
            return cls.RETROGRADE
        return cls.POLAR


class StateVector(NamedTuple):
    """
    Cartesian state of a body relative to its primary.

    Attributes:
        r: Position vector [x, y, z]
        v: Velocity vector [vx, vy, vz]
    """
    r: np.ndarray  # position [x, y, z]
    v: np.ndarray  # velocity [vx, vy, vz]

    def as_array(self):
        """Return the state as a flat [x, y, z, vx, vy, vz] array, in m and m/s for quantities."""
        if is_quantity(self.r):
            return np.concatenate([self.r.to_value(u.m), self.v.to_value(SPEED)])
        return np.concatenate([self.r, self.v])


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a body about a central mass.

    Attributes:
        semi_major_axis: Semi-major axis (negative for hyperbolic, inf for parabolic orbits)
        eccentricity: Eccentricity (dimensionless, >= 0)
        inclination: Inclination relative to the reference plane, in [0, π]
        raan: Right ascension of the ascending node, in [0, 2π)
        argument_of_periapsis: Argument of periapsis, in [0, 2π)
        true_anomaly: True anomaly at epoch, in [0, 2π)

    Note:
        - Equatorial orbits have no ascending node; raan is set to 0 and the
          argument of periapsis is measured from the x-axis.
        - Circular orbits have no periapsis; argument_of_periapsis is set to 0
          and the true anomaly is measured from the ascending node (from the
          x-axis when the orbit is also equatorial).
    """
    semi_major_axis: float
    eccentricity: float
    inclination: float
    raan: float
    argument_of_periapsis: float
    true_anomaly: float

    @property
    def orbit_type(self):
        """Conic type, with eccentricities within 1e-10 of one counted as parabolic."""
        e = self.eccentricity
        if abs(e - 1.0) < 1e-10 or np.isinf(self.semi_major_axis):
            return OrbitType.PARABOLIC
        if e < 1.0:
            return OrbitType.ELLIPTICAL
        return OrbitType.HYPERBOLIC

    @property
    def classification(self):
        return OrbitalClassification.from_inclination(self.inclination)

    @property
    def is_circular(self):
        """True when the argument of periapsis carries the circular-orbit convention."""
        return self.eccentricity <= ANGLE_TOL

    @property
    def is_equatorial(self):
        """True when the node carries the equatorial-orbit convention."""
        return abs(np.sin(self.inclination)) <= ANGLE_TOL

    @property
    def semi_latus_rectum(self):
        """p = a(1 - e²)."""
        return self.semi_major_axis * (1.0 - self.eccentricity**2)

    @property
    def periapsis(self):
        """Periapsis distance rp = a(1 - e)."""
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def apoapsis(self):
        """Apoapsis distance ra = a(1 + e); infinite for open orbits."""
        if self.orbit_type is not OrbitType.ELLIPTICAL:
            return np.inf
        return self.semi_major_axis * (1.0 + self.eccentricity)

    def mean_motion(self, mu):
        """Mean motion n = √(μ/|a|³) (rad per time unit)."""
        if self.orbit_type is OrbitType.PARABOLIC:
            raise UnsupportedOrbitTypeError("Mean motion is undefined for parabolic orbits")
        return np.sqrt(mu / abs(self.semi_major_axis)**3)

    def orbital_period(self, mu):
        """
        Orbital period from Kepler's third law, T = 2π√(a³/μ).

        Raises
        ------
        UnsupportedOrbitTypeError
            For parabolic and hyperbolic orbits, which are not periodic.
        """
        if self.orbit_type is not OrbitType.ELLIPTICAL:
            raise UnsupportedOrbitTypeError(
                f"Orbital period is only defined for elliptical orbits, not {self.orbit_type.value}"
            )
        return 2.0 * np.pi / self.mean_motion(mu)

    def specific_energy(self, mu):
        """Specific orbital energy ε = -μ/(2a)."""
        if np.isinf(self.semi_major_axis):
            return 0.0
        return -mu / (2.0 * self.semi_major_axis)

    def velocity_at_distance(self, r, mu):
        """Orbital speed at distance r from the vis-viva equation v² = μ(2/r - 1/a)."""
        inv_a = 0.0 if np.isinf(self.semi_major_axis) else 1.0 / self.semi_major_axis
        return np.sqrt(mu * (2.0 / r - inv_a))

    def velocity_at_periapsis(self, mu):
        return self.velocity_at_distance(self.periapsis, mu)

    def velocity_at_apoapsis(self, mu):
        if self.orbit_type is not OrbitType.ELLIPTICAL:
            raise UnsupportedOrbitTypeError("Open orbits have no apoapsis")
        return self.velocity_at_distance(self.apoapsis, mu)

    def hill_radius(self, body_mass, parent_mass):
        """Hill sphere radius of the orbiting body, r_H = a (m / 3M)^(1/3)."""
        return hill_radius(self.semi_major_axis, body_mass, parent_mass)

    def without_units(self):
        """Copy of the elements with a plain semi-major axis, in meters if it was a quantity."""
        if is_quantity(self.semi_major_axis):
            return self._replace(semi_major_axis=self.semi_major_axis.to_value(u.m))
        return self

    def in_degrees(self):
        """Return (a, e, i, Ω, ω, ν) with the angles converted to degrees."""
        return (self.semi_major_axis, self.eccentricity,
                np.degrees(self.inclination), np.degrees(self.raan),
                np.degrees(self.argument_of_periapsis), np.degrees(self.true_anomaly))

    def __str__(self):
        a, e, i, raan, argp, nu = self.in_degrees()
        a = f"{a.value:.6g} {a.unit}" if is_quantity(a) else f"{a:.6g}"
        return (f"OrbitalElements(a={a}, e={e:.6f}, i={i:.4f}°, Ω={raan:.4f}°, "
                f"ω={argp:.4f}°, ν={nu:.4f}°, {self.orbit_type.value})")
