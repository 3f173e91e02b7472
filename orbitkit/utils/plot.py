"""
Plotting functions for two-body orbits and Lagrange points.

This module provides functions for visualizing the trajectories produced by
:mod:`orbitkit.algorithms.dynamics.propagator` in the inertial frame of the
central body, and the Lagrange points of a two-body system in the rotating
frame.

Each function returns the figure and axes it drew on, and only calls
``plt.show()`` when asked to.
"""

import numpy as np
import matplotlib.pyplot as plt

from orbitkit.algorithms.dynamics.propagator import propagate_trajectory
from orbitkit.models.orbital_elements import OrbitType
from orbitkit.utils.units import GRAVITATIONAL_PARAMETER, to_si


def plot_orbit(elements, mu, n_points=500, body=None, progress=False, figsize=(10, 8), show=False):
    """
    Plot a two-body orbit in 3D.

    Parameters
    ----------
    elements : OrbitalElements
        Elliptical or hyperbolic elements of the orbit.
    mu : float or Quantity
        Gravitational parameter of the central body. Quantities, like a
        semi-major axis given as a quantity, are plotted in meters.
    n_points : int, default=500
        Number of samples along the orbit.
    body : Body, optional
        Central body, drawn as a sphere. Its radius must be in the length
        unit of ``mu``.
    progress : bool, default=False
        Show a progress bar while sampling the orbit.
    figsize : tuple, default=(10, 8)
        Figure size in inches (width, height).
    show : bool, default=False
        Call ``plt.show()`` before returning.

    Returns
    -------
    tuple
        (fig, ax) of the plot

    Notes
    -----
    Elliptical orbits are sampled over one orbital period. Hyperbolic orbits
    are sampled symmetrically about the epoch over 2π/n on each side, where n
    is the mean motion.
    """
    elements = elements.without_units()
    mu = to_si(mu, GRAVITATIONAL_PARAMETER)
    if elements.orbit_type is OrbitType.ELLIPTICAL:
        times = np.linspace(0.0, elements.orbital_period(mu), n_points)
    else:
        span = 2.0 * np.pi / elements.mean_motion(mu)
        times = np.linspace(-span, span, n_points)
    states = propagate_trajectory(elements, mu, times, progress=progress)

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')
    ax.plot(states[:, 0], states[:, 1], states[:, 2], label='Orbit', color='red')
    ax.scatter(*states[0, :3], color='red', marker='o', label='Epoch')

    if body is not None:
        _plot_body(ax, np.zeros(3), body.radius, 'blue', body.name)
    else:
        ax.scatter(0.0, 0.0, 0.0, color='blue', marker='*', label='Central body')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(f'{elements.orbit_type.value.capitalize()} orbit')
    _set_axes_equal(ax)
    ax.legend()
    if show:
        plt.show()
    return fig, ax


def plot_lagrange_points(points, bodies=None, figsize=(10, 8), show=False):
    """
    Plot the five Lagrange points in the rotating frame.

    Parameters
    ----------
    points : LagrangePointSet
        Lagrange points to draw. Quantities are plotted in meters.
    bodies : sequence of Body, optional
        Primary and secondary bodies, drawn as spheres with radii in the unit
        of the separation. Without them the bodies are drawn as markers.
    figsize : tuple, default=(10, 8)
        Figure size in inches (width, height).
    show : bool, default=False
        Call ``plt.show()`` before returning.

    Returns
    -------
    tuple
        (fig, ax) of the plot
    """
    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')

    points = points.without_units()
    positions = points.as_array()
    for i, p in enumerate(positions, start=1):
        ax.scatter(p[0], p[1], p[2], marker='x', label=f'L{i}')

    centers = (points.primary_position, points.secondary_position)
    if bodies is not None:
        for body, center, color in zip(bodies, centers, ('blue', 'gray')):
            _plot_body(ax, center, body.radius, color, body.name)
    else:
        for center, color, label in zip(centers, ('blue', 'gray'), ('Primary', 'Secondary')):
            ax.scatter(*center, color=color, marker='o', label=label)

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title('Lagrange Points in Rotating Frame')
    _set_axes_equal(ax)
    ax.legend()
    if show:
        plt.show()
    return fig, ax


def _plot_body(ax, center, radius, color, label=None):
    """Draw a body as a sphere of the given radius, with an optional label."""
    u, v = np.mgrid[0:2*np.pi:30j, 0:np.pi:15j]
    x = center[0] + radius * np.cos(u) * np.sin(v)
    y = center[1] + radius * np.sin(u) * np.sin(v)
    z = center[2] + radius * np.cos(v)
    ax.plot_surface(x, y, z, color=color, alpha=0.6)
    if label:
        ax.text(center[0], center[1], center[2] + 1.2*radius, label, color=color)


def _set_axes_equal(ax):
    """
    Make the 3D axes have equal scale so that spheres look like spheres.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        The axes to adjust in place.
    """
    limits = np.array([ax.get_xlim3d(), ax.get_ylim3d(), ax.get_zlim3d()])
    half_range = 0.5 * np.max(np.abs(limits[:, 1] - limits[:, 0]))
    mids = limits.mean(axis=1)

    ax.set_xlim3d([mids[0] - half_range, mids[0] + half_range])
    ax.set_ylim3d([mids[1] - half_range, mids[1] + half_range])
    ax.set_zlim3d([mids[2] - half_range, mids[2] + half_range])
