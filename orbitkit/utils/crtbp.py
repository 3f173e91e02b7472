"""
Two-body system utility functions for restricted three-body geometry.

This module provides utility functions for working with a pair of gravitating
bodies in a circular orbit about their barycenter, including:

1. Mass parameter calculation
2. Mean motion of the system
3. Conversion between dimensional and non-dimensional positions
4. Hill sphere radii

The non-dimensional units follow the usual restricted three-body conventions:
- Distance unit: Distance between the primary bodies
- Time unit: Inverse of the mean motion (1/n)
- Mass unit: Sum of the primary and secondary masses

In these units the primary sits at (-μ, 0, 0) and the secondary at
(1 - μ, 0, 0).
"""

import numba
import numpy as np

from orbitkit.utils.constants import G


@numba.njit(fastmath=True, cache=True)
def mass_parameter(primary_mass, secondary_mass):
    """
    Calculate the mass parameter μ of a two-body system.

    The mass parameter μ is defined as the ratio of the secondary mass
    to the total system mass: μ = m₂/(m₁ + m₂).

    Parameters
    ----------
    primary_mass : float
        Mass of the primary body (m₁)
    secondary_mass : float
        Mass of the secondary body (m₂)

    Returns
    -------
    float
        Mass parameter μ (dimensionless)
    """
    return secondary_mass / (primary_mass + secondary_mass)


@numba.njit(fastmath=True, cache=True)
def system_angular_velocity(primary_mass, secondary_mass, distance):
    """
    Calculate the mean motion (angular velocity) of a two-body system.

    Computes the angular velocity at which the two bodies orbit around their
    common barycenter in a circular orbit.

    Parameters
    ----------
    primary_mass : float
        Mass of the primary body in kilograms
    secondary_mass : float
        Mass of the secondary body in kilograms
    distance : float
        Distance between the two bodies in meters

    Returns
    -------
    float
        Angular velocity in radians per second

    Notes
    -----
    This is calculated using Kepler's Third Law: ω² = G(m₁+m₂)/r³
    """
    return np.sqrt(G * (primary_mass + secondary_mass) / distance**3)


def to_dimensionless(position, distance):
    """Scale a dimensional position by the system separation."""
    return np.asarray(position, dtype=np.float64) / distance


def to_dimensional(position, distance):
    """Scale a non-dimensional position back to the separation's unit."""
    return np.asarray(position, dtype=np.float64) * distance


def hill_radius(a, body_mass, parent_mass):
    """
    Radius of the Hill sphere of a body orbiting a heavier parent.

    Parameters
    ----------
    a : float
        Semi-major axis of the body's orbit (or the separation of the system)
    body_mass : float
        Mass of the orbiting body
    parent_mass : float
        Mass of the parent body

    Returns
    -------
    float
        r_H = a (m / 3M)^(1/3), in the unit of ``a``
    """
    return a * (body_mass / (3.0 * parent_mass)) ** (1.0 / 3.0)
