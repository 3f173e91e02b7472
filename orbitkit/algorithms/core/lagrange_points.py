"""
Computation of Lagrange (libration) points of a two-body system.

This module provides functions for calculating the positions of the five
Lagrange points of two bodies in circular orbit about their common
barycenter, either in dimensionless units for a given mass parameter or
scaled to a physical separation from the masses of the bodies.
"""

import logging

import numpy as np
from astropy import units as u

from orbitkit.algorithms.core.energy import effective_potential_gradient
from orbitkit.errors import InvalidGeometryError, InvalidMassError
from orbitkit.models.lagrange_point import LagrangePointSet, create_lagrange_point
from orbitkit.utils.constants import LAGRANGE_MAX_ITER, LAGRANGE_TOL
from orbitkit.utils.crtbp import mass_parameter
from orbitkit.utils.units import has_quantity, to_si, with_unit

logger = logging.getLogger(__name__)


def _check_mass_parameter(mu):
    if not np.isfinite(mu) or not 0.0 < mu < 1.0:
        raise InvalidMassError(f"Mass parameter must lie in (0, 1), got {mu}")


def get_lagrange_point(mu, point_index, tol=LAGRANGE_TOL, max_iter=LAGRANGE_MAX_ITER):
    """
    Get the position of a specific Lagrange point.

    Parameters
    ----------
    mu : float
        Mass parameter of the system (ratio of secondary to total mass)
    point_index : int
        Lagrange point index (1-5)
    tol : float, optional
        Newton step tolerance for the collinear points. Default is 1e-28.
    max_iter : int, optional
        Iteration budget for the collinear points. Default is 50.

    Returns
    -------
    ndarray
        3D vector [x, y, z] in units of the separation

    Raises
    ------
    InvalidMassError
        If μ is outside (0, 1).
    ConvergenceFailureError
        If a collinear point does not converge.
    """
    _check_mass_parameter(mu)
    return create_lagrange_point(mu, point_index, tol=tol, max_iter=max_iter).position


def lagrange_point_locations(mu, tol=LAGRANGE_TOL, max_iter=LAGRANGE_MAX_ITER):
    """
    Compute all five libration points for a mass parameter.

    Parameters
    ----------
    mu : float
        Mass parameter of the system (ratio of secondary to total mass)

    Returns
    -------
    tuple
        A tuple containing the positions of L1, L2, L3, L4, and L5 as ndarrays,
        in units of the separation

    Notes
    -----
    The libration points are equilibrium points in the rotating frame where
    the gravitational and centrifugal forces balance. There are three collinear
    points (L1, L2, L3) located on the x-axis, and two equilateral points
    (L4, L5) forming equilateral triangles with the two bodies.
    """
    _check_mass_parameter(mu)
    points = tuple(get_lagrange_point(mu, i, tol, max_iter) for i in range(1, 6))
    for i, p in enumerate(points, start=1):
        logger.debug(f"L{i} = {p} (|∇Ω| = {np.linalg.norm(effective_potential_gradient(p, mu)):.3e})")
    return points


def lagrange_points(m1, m2, separation, tol=LAGRANGE_TOL, max_iter=LAGRANGE_MAX_ITER):
    """
    Compute the five Lagrange points of a two-body system.

    Parameters
    ----------
    m1 : float or Quantity
        Mass of the primary body
    m2 : float or Quantity
        Mass of the secondary body
    separation : float or Quantity
        Distance between the two bodies. Positions are returned in its unit,
        or as quantities in meters when any input is a quantity.
    tol : float, optional
        Newton step tolerance for the collinear points. Default is 1e-28.
    max_iter : int, optional
        Iteration budget for the collinear points. Default is 50.

    Returns
    -------
    LagrangePointSet
        Positions of L1..L5 in the barycentric rotating frame

    Raises
    ------
    InvalidMassError
        If either mass is not finite and positive.
    InvalidGeometryError
        If the separation is not finite and positive.
    ConvergenceFailureError
        If a collinear point does not converge.

    Notes
    -----
    The triangular points L4 and L5 are only stable when the heavier body
    outweighs the lighter one by at least 24.96; see
    :attr:`LagrangePointSet.l4_l5_stable`.
    """
    wrap = has_quantity(m1, m2, separation)
    m1 = to_si(m1, u.kg)
    m2 = to_si(m2, u.kg)
    separation = to_si(separation, u.m)

    for label, m in (("m1", m1), ("m2", m2)):
        if not np.isfinite(m) or m <= 0.0:
            raise InvalidMassError(f"{label} must be finite and positive, got {m}")
    if not np.isfinite(separation) or separation <= 0.0:
        raise InvalidGeometryError(f"Separation must be finite and positive, got {separation}")

    mu = float(mass_parameter(m1, m2))
    logger.info(f"Computing Lagrange points for mu={mu:.6e}, separation={separation:.6e}")
    points = lagrange_point_locations(mu, tol, max_iter)
    separation = with_unit(separation, u.m, wrap)
    return LagrangePointSet(*(p * separation for p in points), mass_ratio=mu, separation=separation)
