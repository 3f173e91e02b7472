"""
Binary orbit model.

This module defines :class:`BinaryOrbit`, the relative orbit of two
comparable masses (a binary star, or a planet and its moon) together with the
regions where a third, much lighter body can orbit stably:

- S-type orbits circle one member of the pair, inside a limit that shrinks
  with the companion's mass and the eccentricity of the binary.
- P-type (circumbinary) orbits circle both members, outside a limit that
  grows with them.

The stability limits are the empirical fits of Holman & Wiegert (1999).
"""

import logging

import numpy as np
from astropy import units as u

from orbitkit.errors import InvalidGeometryError, InvalidMassError
from orbitkit.models.orbital_elements import OrbitalElements
from orbitkit.utils.constants import MIN_LAGRANGE_MASS_RATIO
from orbitkit.utils.units import has_quantity, to_si, with_unit

logger = logging.getLogger(__name__)


class BinaryOrbit:
    """
    Relative orbit of two bodies and its planetary stability limits.

    Parameters
    ----------
    primary_mass : float or Quantity
        Mass of the primary body
    secondary_mass : float or Quantity
        Mass of the secondary body
    separation : float or Quantity
        Semi-major axis of the relative orbit
    eccentricity : float, optional
        Eccentricity of the relative orbit, in [0, 1). Default is 0.
    inclination, raan, argument_of_periapsis : float, optional
        Orientation of the orbit in radians. Default is 0.

    Raises
    ------
    InvalidMassError
        If either mass is not finite and positive.
    InvalidGeometryError
        If the separation is not finite and positive, or the eccentricity is
        outside [0, 1).

    Notes
    -----
    When any input is an astropy quantity, every length this class returns
    is a quantity in meters.
    """

    def __init__(self, primary_mass, secondary_mass, separation, eccentricity=0.0,
                 inclination=0.0, raan=0.0, argument_of_periapsis=0.0):
        wrap = has_quantity(primary_mass, secondary_mass, separation)
        m1 = to_si(primary_mass, u.kg)
        m2 = to_si(secondary_mass, u.kg)
        a = to_si(separation, u.m)

        for label, m in (("primary_mass", m1), ("secondary_mass", m2)):
            if not np.isfinite(m) or m <= 0.0:
                raise InvalidMassError(f"{label} must be finite and positive, got {m}")
        if not np.isfinite(a) or a <= 0.0:
            raise InvalidGeometryError(f"Separation must be finite and positive, got {a}")
        if not 0.0 <= eccentricity < 1.0:
            raise InvalidGeometryError(f"A binary orbit must be bound, got e = {eccentricity}")

        self.primary_mass = m1
        self.secondary_mass = m2
        self.orbital_elements = OrbitalElements(
            semi_major_axis=with_unit(a, u.m, wrap),
            eccentricity=eccentricity,
            inclination=inclination,
            raan=raan,
            argument_of_periapsis=argument_of_periapsis,
            true_anomaly=0.0,
        )
        logger.debug(f"Created binary orbit with mass ratio {m2 / m1:.6e}, a={a:.6e}, e={eccentricity}")

    @property
    def separation(self):
        return self.orbital_elements.semi_major_axis

    @property
    def eccentricity(self):
        return self.orbital_elements.eccentricity

    @property
    def total_mass(self):
        return self.primary_mass + self.secondary_mass

    @property
    def barycenter_position(self):
        """Distance of the barycenter from the primary, as a fraction of the separation."""
        return self.secondary_mass / self.total_mass

    @property
    def s_type_stability(self):
        """
        Outer limits of stable S-type orbits around (primary, secondary).

        Each limit is a (0.464 - 0.380 μ - 0.631 e), where μ is the mass
        fraction of the companion. A limit of zero means no S-type orbit
        survives.
        """
        a, e = self.separation, self.eccentricity
        limits = []
        for companion_fraction in (self.secondary_mass / self.total_mass,
                                   self.primary_mass / self.total_mass):
            factor = 0.464 - 0.380 * companion_fraction - 0.631 * e
            limits.append(a * max(factor, 0.0))
        return tuple(limits)

    @property
    def p_type_stability(self):
        """Inner limit of stable circumbinary orbits, a (1.60 + 4.12 μ + 4.27 e) with μ the lighter mass fraction."""
        mu_min = min(self.primary_mass, self.secondary_mass) / self.total_mass
        return self.separation * (1.60 + 4.12 * mu_min + 4.27 * self.eccentricity)

    @property
    def mutual_hill_sphere(self):
        """Hill radius of the lighter body with respect to the total mass."""
        return self.orbital_elements.hill_radius(min(self.primary_mass, self.secondary_mass), self.total_mass)

    @property
    def l4_l5_stable(self):
        """True when the heavier body is at least 24.96 times the lighter one."""
        heavier = max(self.primary_mass, self.secondary_mass)
        lighter = min(self.primary_mass, self.secondary_mass)
        return heavier / lighter >= MIN_LAGRANGE_MASS_RATIO

    def distance_range(self):
        """Closest and widest separation of the pair, (periapsis, apoapsis)."""
        return self.orbital_elements.periapsis, self.orbital_elements.apoapsis

    def s_type_primary_possible(self, planet_distance):
        """True if a planet at ``planet_distance`` from the primary can orbit it stably."""
        return planet_distance < self.s_type_stability[0]

    def s_type_secondary_possible(self, planet_distance):
        """True if a planet at ``planet_distance`` from the secondary can orbit it stably."""
        return planet_distance < self.s_type_stability[1]

    def p_type_possible(self, planet_distance):
        """True if a planet at ``planet_distance`` from the barycenter can orbit both bodies stably."""
        return planet_distance > self.p_type_stability

    def __repr__(self):
        return (f"BinaryOrbit(primary_mass={self.primary_mass}, secondary_mass={self.secondary_mass}, "
                f"separation={self.separation}, eccentricity={self.eccentricity})")
