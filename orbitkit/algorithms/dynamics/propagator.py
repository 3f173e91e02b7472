"""
Closed-form two-body propagation of orbital elements.

This module advances Keplerian elements over an elapsed time and returns the
Cartesian state, including:
- Elliptical propagation through the eccentric anomaly (M wraps into [0, 2π))
- Hyperbolic propagation through the hyperbolic anomaly (M is unbounded)
- Evaluation of many epochs along a trajectory

Only the true anomaly changes with time; the shape (a, e) and orientation
(i, Ω, ω) of the orbit are fixed. Parabolic orbits are not supported.
"""

import logging

import numpy as np
from astropy import units as u
from tqdm import tqdm

from orbitkit.algorithms.core.elements import validate_gravitational_parameter
from orbitkit.algorithms.core.kepler import (
    eccentric_to_mean_anomaly,
    eccentric_to_true_anomaly,
    hyperbolic_to_mean_anomaly,
    hyperbolic_to_true_anomaly,
    solve_kepler,
    solve_kepler_hyperbolic,
    true_to_eccentric_anomaly,
    true_to_hyperbolic_anomaly,
    wrap_to_2pi,
)
from orbitkit.errors import UnsupportedOrbitTypeError
from orbitkit.models.orbital_elements import OrbitType, StateVector
from orbitkit.utils.constants import KEPLER_MAX_ITER, KEPLER_TOL
from orbitkit.utils.frames import perifocal_to_inertial
from orbitkit.utils.units import SPEED, has_quantity, is_quantity, to_si, with_unit

logger = logging.getLogger(__name__)


def _check_orbit_type(elements):
    orbit_type = elements.orbit_type
    if orbit_type is OrbitType.PARABOLIC:
        logger.warning(f"Refusing to propagate a parabolic orbit (e = {elements.eccentricity})")
        raise UnsupportedOrbitTypeError(
            f"Parabolic orbits are not supported (e = {elements.eccentricity}, "
            f"a = {elements.semi_major_axis})"
        )
    return orbit_type


def _unwrap(elements, mu):
    """Plain elements and μ, plus whether either carried units."""
    wrap = has_quantity(mu, elements.semi_major_axis)
    return elements.without_units(), validate_gravitational_parameter(mu), wrap


def _state_at(elements, mu, nu, wrap=False):
    """Inertial state on the orbit of ``elements`` at true anomaly ``nu``."""
    e = elements.eccentricity
    p = elements.semi_latus_rectum
    r = p / (1.0 + e * np.cos(nu))

    r_pf = r * np.array([np.cos(nu), np.sin(nu), 0.0])
    v_pf = np.sqrt(mu / p) * np.array([-np.sin(nu), e + np.cos(nu), 0.0])

    Q = perifocal_to_inertial(elements.raan, elements.inclination, elements.argument_of_periapsis)
    return StateVector(with_unit(Q @ r_pf, u.m, wrap), with_unit(Q @ v_pf, SPEED, wrap))


def _true_anomaly(elements, mu, dt, tol, max_iter):
    orbit_type = _check_orbit_type(elements)
    e = elements.eccentricity
    n = elements.mean_motion(mu)

    if orbit_type is OrbitType.ELLIPTICAL:
        E0 = true_to_eccentric_anomaly(elements.true_anomaly, e)
        M = wrap_to_2pi(eccentric_to_mean_anomaly(E0, e) + n * dt)
        E = solve_kepler(M, e, tol, max_iter)
        return eccentric_to_true_anomaly(E, e)

    F0 = true_to_hyperbolic_anomaly(elements.true_anomaly, e)
    M = hyperbolic_to_mean_anomaly(F0, e) + n * dt
    F = solve_kepler_hyperbolic(M, e, tol, max_iter)
    return hyperbolic_to_true_anomaly(F, e)


def state_from_elements(elements, mu):
    """
    Cartesian state at the epoch of a set of orbital elements.

    Parameters
    ----------
    elements : OrbitalElements
        Elliptical or hyperbolic elements
    mu : float or Quantity
        Gravitational parameter of the central body

    Returns
    -------
    StateVector
        Position and velocity in the inertial frame of the central body, as
        SI quantities when μ or the semi-major axis is a quantity
    """
    elements, mu, wrap = _unwrap(elements, mu)
    _check_orbit_type(elements)
    return _state_at(elements, mu, elements.true_anomaly, wrap)


def true_anomaly_at_time(elements, mu, dt, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    True anomaly reached after an elapsed time.

    Parameters
    ----------
    elements : OrbitalElements
        Elements at the initial epoch
    mu : float or Quantity
        Gravitational parameter of the central body
    dt : float or Quantity
        Elapsed time, in the time unit implied by ``mu`` (any time unit for a
        Quantity). May be negative.
    tol : float, optional
        Kepler solver tolerance. Default is 1e-10.
    max_iter : int, optional
        Kepler solver iteration budget. Default is 50.

    Returns
    -------
    float
        True anomaly in [0, 2π)
    """
    elements, mu, _ = _unwrap(elements, mu)
    return _true_anomaly(elements, mu, to_si(dt, u.s), tol, max_iter)


def propagate(elements, mu, dt, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Propagate orbital elements over an elapsed time.

    Parameters
    ----------
    elements : OrbitalElements
        Elements at the initial epoch
    mu : float or Quantity
        Gravitational parameter of the central body
    dt : float or Quantity
        Elapsed time (may be negative)
    tol : float, optional
        Kepler solver tolerance on the Newton step (rad). Default is 1e-10.
    max_iter : int, optional
        Kepler solver iteration budget. Default is 50.

    Returns
    -------
    StateVector
        Position and velocity after ``dt``. When any input carries units the
        vectors are quantities in m and m/s.

    Raises
    ------
    UnsupportedOrbitTypeError
        For parabolic orbits.
    ConvergenceFailureError
        If Kepler's equation does not converge within ``max_iter``.

    Notes
    -----
    Propagation by zero time returns the initial state, and elliptical
    propagation is periodic in the orbital period T = 2π√(a³/μ).
    """
    elements, mu, wrap = _unwrap(elements, mu)
    wrap = wrap or is_quantity(dt)
    nu = _true_anomaly(elements, mu, to_si(dt, u.s), tol, max_iter)
    return _state_at(elements, mu, nu, wrap)


def propagate_trajectory(elements, mu, times, progress=False, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Evaluate the state along an orbit at several elapsed times.

    Parameters
    ----------
    elements : OrbitalElements
        Elements at the initial epoch
    mu : float or Quantity
        Gravitational parameter of the central body
    times : array_like or Quantity
        Elapsed times since the epoch
    progress : bool, optional
        Show a progress bar. Default is False.

    Returns
    -------
    ndarray
        Array of shape (len(times), 6) holding [x, y, z, vx, vy, vz] rows,
        in SI units when any input carries units
    """
    elements, mu, _ = _unwrap(elements, mu)
    times = [to_si(t, u.s) for t in times]
    states = np.empty((len(times), 6), dtype=np.float64)
    for k, t in enumerate(tqdm(times, desc="Propagating orbit", disable=not progress)):
        nu = _true_anomaly(elements, mu, t, tol, max_iter)
        states[k] = _state_at(elements, mu, nu).as_array()
    logger.debug(f"Propagated {len(times)} epochs")
    return states
