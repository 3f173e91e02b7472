import numpy as np
import pytest

from orbitkit.algorithms.core.energy import (
    circular_velocity,
    effective_potential,
    effective_potential_gradient,
    escape_velocity,
    jacobi_constant,
    primary_distance,
    secondary_distance,
    specific_orbital_energy,
)
from orbitkit.utils.constants import MU_earth_km

MU_EARTH_MOON = 0.01215


def test_specific_energy_of_circular_orbit():
    r = 7000.0
    v = circular_velocity(MU_earth_km, r)
    assert specific_orbital_energy(MU_earth_km, r, v) == pytest.approx(-MU_earth_km / (2 * r))


def test_escape_speed_gives_zero_energy():
    r = 7000.0
    v = escape_velocity(MU_earth_km, r)
    assert v == pytest.approx(np.sqrt(2) * circular_velocity(MU_earth_km, r))
    assert specific_orbital_energy(MU_earth_km, r, v) == pytest.approx(0.0, abs=1e-9)


def test_distances_to_bodies():
    pos = np.array([0.5 - MU_EARTH_MOON, np.sqrt(3) / 2, 0.0])
    assert primary_distance(pos, MU_EARTH_MOON) == pytest.approx(1.0)
    assert secondary_distance(pos, MU_EARTH_MOON) == pytest.approx(1.0)


def test_gradient_matches_finite_differences():
    pos = np.array([0.3, 0.4, 0.1])
    h = 1e-6
    numeric = np.array([
        (effective_potential(pos + h * e, MU_EARTH_MOON) - effective_potential(pos - h * e, MU_EARTH_MOON)) / (2 * h)
        for e in np.eye(3)
    ])
    np.testing.assert_allclose(effective_potential_gradient(pos, MU_EARTH_MOON), numeric, rtol=1e-6)


def test_gradient_vanishes_at_triangular_point():
    pos = np.array([0.5 - MU_EARTH_MOON, -np.sqrt(3) / 2, 0.0])
    np.testing.assert_allclose(effective_potential_gradient(pos, MU_EARTH_MOON), 0.0, atol=1e-14)


def test_jacobi_constant_at_rest():
    pos = np.array([0.5 - MU_EARTH_MOON, np.sqrt(3) / 2, 0.0])
    state = np.concatenate([pos, [0.0, 0.0, 0.0]])
    assert jacobi_constant(state, MU_EARTH_MOON) == pytest.approx(2 * effective_potential(pos, MU_EARTH_MOON))
    moving = np.concatenate([pos, [0.1, 0.0, 0.0]])
    assert jacobi_constant(moving, MU_EARTH_MOON) == pytest.approx(jacobi_constant(state, MU_EARTH_MOON) - 0.01)
