"""
Energy and potential functions for two-body and restricted three-body motion.

This module provides functions for calculating energies, characteristic
speeds and potentials, including:
- Specific orbital energy
- Circular and escape velocities
- The effective potential of the rotating frame, its gradient and the
  Jacobi constant, used to characterise the libration points
"""

import numpy as np


def specific_orbital_energy(mu, r, v):
    """
    Compute the specific orbital energy of a two-body state.

    Parameters
    ----------
    mu : float
        Gravitational parameter of the central body
    r : float
        Distance from the central body
    v : float
        Speed relative to the central body

    Returns
    -------
    float
        ε = v²/2 - μ/r
    """
    return 0.5 * v * v - mu / r


def circular_velocity(mu, r):
    """Speed of a circular orbit of radius r: v = √(μ/r)."""
    return np.sqrt(mu / r)


def escape_velocity(mu, r):
    """Escape speed at distance r: v = √(2μ/r) = √2 · v_circular."""
    return np.sqrt(2.0 * mu / r)


def primary_distance(position, mu):
    """Distance from the primary, located at (-μ, 0, 0), in the rotating frame."""
    x, y, z = position
    return np.sqrt((x + mu)**2 + y**2 + z**2)


def secondary_distance(position, mu):
    """Distance from the secondary, located at (1 - μ, 0, 0), in the rotating frame."""
    x, y, z = position
    return np.sqrt((x - 1 + mu)**2 + y**2 + z**2)


def effective_potential(position, mu):
    """
    Compute the effective potential at a point of the rotating frame.

    Parameters
    ----------
    position : array_like
        Non-dimensional position [x, y, z] in the rotating frame
    mu : float
        Mass parameter of the system (ratio of smaller to total mass)

    Returns
    -------
    float
        Ω = (x² + y²)/2 + (1-μ)/r₁ + μ/r₂

    Notes
    -----
    The effective potential is the sum of the gravitational potential of
    both bodies and the centrifugal potential of the rotating frame. Its
    stationary points are the five libration points.
    """
    x, y, _ = position
    r1 = primary_distance(position, mu)
    r2 = secondary_distance(position, mu)
    return 0.5 * (x**2 + y**2) + (1 - mu) / r1 + mu / r2


def effective_potential_gradient(position, mu):
    """
    Compute the gradient of the effective potential in the rotating frame.

    This is the net (gravitational + centrifugal) acceleration felt by a
    particle at rest in the rotating frame; it vanishes at the libration
    points.

    Parameters
    ----------
    position : array_like
        Non-dimensional position [x, y, z] in the rotating frame
    mu : float
        Mass parameter of the system (ratio of smaller to total mass)

    Returns
    -------
    ndarray
        [∂Ω/∂x, ∂Ω/∂y, ∂Ω/∂z]
    """
    x, y, z = position
    mu1 = 1 - mu
    r1_3 = primary_distance(position, mu)**3
    r2_3 = secondary_distance(position, mu)**3

    dx = x - mu1 * (x + mu) / r1_3 - mu * (x - mu1) / r2_3
    dy = y - mu1 * y / r1_3 - mu * y / r2_3
    dz = -mu1 * z / r1_3 - mu * z / r2_3
    return np.array([dx, dy, dz], dtype=np.float64)


def jacobi_constant(state, mu):
    """
    Compute the Jacobi constant of a rotating-frame state.

    Parameters
    ----------
    state : array_like
        State vector [x, y, z, vx, vy, vz] in the rotating frame
    mu : float
        Mass parameter of the system

    Returns
    -------
    float
        C = 2Ω - v²
    """
    state = np.asarray(state, dtype=np.float64)
    v2 = np.dot(state[3:], state[3:])
    return 2.0 * effective_potential(state[:3], mu) - v2
