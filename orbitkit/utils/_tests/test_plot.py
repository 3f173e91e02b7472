import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from astropy import units as u

from orbitkit.algorithms.core.elements import elements_from_state
from orbitkit.algorithms.core.lagrange_points import lagrange_points
from orbitkit.models.body import Body
from orbitkit.utils.constants import M_earth, M_moon, MU_earth_km, R_earth_moon
from orbitkit.utils.plot import plot_lagrange_points, plot_orbit


def test_plot_elliptical_orbit():
    el = elements_from_state(MU_earth_km, [7000.0, 1000.0, 2000.0], [-1.0, 7.0, 2.0])
    earth = Body("Earth", M_earth, 6378.137)
    fig, ax = plot_orbit(el, MU_earth_km, n_points=50, body=earth)
    assert len(ax.lines) >= 1
    xlim, ylim = ax.get_xlim3d(), ax.get_ylim3d()
    assert np.isclose(xlim[1] - xlim[0], ylim[1] - ylim[0])
    plt.close(fig)


def test_plot_hyperbolic_orbit():
    el = elements_from_state(MU_earth_km, [7000.0, 0.0, 0.0], [1.0, 12.0, 0.0])
    fig, ax = plot_orbit(el, MU_earth_km, n_points=20)
    assert "Hyperbolic" in ax.get_title()
    plt.close(fig)


def test_plot_lagrange_points():
    points = lagrange_points(M_earth, M_moon, R_earth_moon)
    fig, ax = plot_lagrange_points(points)
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    for i in range(1, 6):
        assert f"L{i}" in labels
    plt.close(fig)


def test_plot_with_quantities():
    points = lagrange_points(M_earth * u.kg, M_moon * u.kg, 384400.0 * u.km)
    fig, ax = plot_lagrange_points(points)
    assert ax.get_xlim3d()[1] > 3.0e8
    plt.close(fig)

    mu = MU_earth_km * u.km**3 / u.s**2
    el = elements_from_state(mu, [7000.0, 0.0, 0.0] * u.km, [0.0, 7.5, 0.0] * u.km / u.s)
    fig, ax = plot_orbit(el, mu, n_points=20)
    assert ax.get_xlim3d()[1] > 6.0e6
    plt.close(fig)
