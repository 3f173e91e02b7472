"""
Classical orbital elements from a Cartesian state vector.

This module converts a position/velocity pair relative to a central body into
the six Keplerian elements (a, e, i, Ω, ω, ν) using the angular momentum,
eccentricity and node vectors.

Two families of orbits leave some angles undefined and receive fixed
conventions:

- Equatorial orbits (no ascending node): Ω = 0 and ω is measured from the
  inertial x-axis.
- Circular orbits (no periapsis): ω = 0 and ν is the argument of latitude,
  or the true longitude when the orbit is also equatorial.

For retrograde equatorial orbits the angles measured from the x-axis are
mirrored (2π - θ) so that rotating the perifocal state by Rz(Ω) Rx(i) Rz(ω)
recovers the original position.
"""

import logging

import numpy as np
from astropy import units as u

from orbitkit.algorithms.core.energy import specific_orbital_energy
from orbitkit.algorithms.core.kepler import TWO_PI, wrap_to_2pi
from orbitkit.errors import DegenerateStateError, InvalidMassError
from orbitkit.models.orbital_elements import OrbitalElements
from orbitkit.utils.constants import ANGLE_TOL
from orbitkit.utils.units import GRAVITATIONAL_PARAMETER, SPEED, has_quantity, to_si, to_si_vector, with_unit

logger = logging.getLogger(__name__)


def validate_gravitational_parameter(mu):
    """
    Unwrap and check a gravitational parameter.

    Quantities are converted to m³/s².

    Raises
    ------
    InvalidMassError
        If μ is not a finite positive number, or is a quantity without the
        dimension of a gravitational parameter.
    """
    try:
        mu = to_si(mu, GRAVITATIONAL_PARAMETER)
    except u.UnitConversionError as exc:
        raise InvalidMassError(f"Gravitational parameter must be in units of length³/time², got {mu.unit}") from exc
    if not np.isfinite(mu) or mu <= 0.0:
        raise InvalidMassError(f"Gravitational parameter must be finite and positive, got {mu}")
    return mu


def _angle_between(a, b, norm_a, norm_b):
    """arccos of the normalized dot product, clipped against rounding."""
    return float(np.arccos(np.clip(np.dot(a, b) / (norm_a * norm_b), -1.0, 1.0)))


def elements_from_state(mu, r, v, tol=ANGLE_TOL):
    """
    Compute classical orbital elements from a state vector.

    Parameters
    ----------
    mu : float or Quantity
        Gravitational parameter of the central body. Plain numbers must share
        their unit system with ``r`` and ``v`` (e.g. km³/s² with km and km/s).
    r : array_like or Quantity
        Position [x, y, z] relative to the central body, as plain numbers, a
        length Quantity array, or a sequence of length quantities.
    v : array_like or Quantity
        Velocity [vx, vy, vz], as plain numbers or speed quantities.
    tol : float, optional
        Threshold below which the eccentricity, or the node vector relative
        to the angular momentum, is treated as zero. Default is 1e-11.

    Returns
    -------
    OrbitalElements
        Elements at the epoch of the state. The semi-major axis is negative
        for hyperbolic orbits and infinite for parabolic ones, and is a
        Quantity in meters when any input was a quantity.

    Raises
    ------
    InvalidMassError
        If μ is not finite and positive.
    DegenerateStateError
        If the position is zero or the angular momentum vanishes.
    """
    wrap = has_quantity(mu, r, v)
    mu = validate_gravitational_parameter(mu)
    r = to_si_vector(r, u.m)
    v = to_si_vector(v, SPEED)
    if not (np.all(np.isfinite(r)) and np.all(np.isfinite(v))):
        raise DegenerateStateError("State vector contains non-finite components")

    r_norm = np.linalg.norm(r)
    v_norm = np.linalg.norm(v)
    if r_norm == 0.0:
        raise DegenerateStateError("Position vector is zero; no orbit is defined")

    h = np.cross(r, v)
    h_norm = np.linalg.norm(h)
    if h_norm == 0.0 or h_norm <= tol * r_norm * v_norm:
        raise DegenerateStateError("Angular momentum is zero; the motion is rectilinear")

    e_vec = np.cross(v, h) / mu - r / r_norm
    e = float(np.linalg.norm(e_vec))

    energy = specific_orbital_energy(mu, r_norm, v_norm)
    a = np.inf if energy == 0.0 else float(-mu / (2.0 * energy))

    inclination = float(np.arccos(np.clip(h[2] / h_norm, -1.0, 1.0)))

    # Node vector ẑ × h
    n = np.array([-h[1], h[0], 0.0])
    n_norm = np.linalg.norm(n)

    equatorial = n_norm <= tol * h_norm
    circular = e <= tol
    retrograde = h[2] < 0.0

    if equatorial:
        raan = 0.0
    else:
        raan = _angle_between(n, np.array([1.0, 0.0, 0.0]), n_norm, 1.0)
        if n[1] < 0.0:
            raan = TWO_PI - raan

    if circular:
        argp = 0.0
    elif equatorial:
        argp = float(np.arctan2(e_vec[1], e_vec[0]))
        if retrograde:
            argp = -argp
    else:
        argp = _angle_between(n, e_vec, n_norm, e)
        if e_vec[2] < 0.0:
            argp = TWO_PI - argp

    if not circular:
        nu = _angle_between(e_vec, r, e, r_norm)
        if np.dot(np.cross(e_vec, r), h) < 0.0:
            nu = TWO_PI - nu
    elif not equatorial:
        # Argument of latitude
        nu = _angle_between(n, r, n_norm, r_norm)
        if r[2] < 0.0:
            nu = TWO_PI - nu
    else:
        # True longitude
        nu = float(np.arctan2(r[1], r[0]))
        if retrograde:
            nu = -nu

    elements = OrbitalElements(
        semi_major_axis=with_unit(a, u.m, wrap),
        eccentricity=e,
        inclination=inclination,
        raan=wrap_to_2pi(raan),
        argument_of_periapsis=wrap_to_2pi(argp),
        true_anomaly=wrap_to_2pi(nu),
    )
    logger.debug(f"Computed {elements}")
    return elements
