import numpy as np
import pytest
from astropy import units as u
from scipy.integrate import solve_ivp

from orbitkit.algorithms.core.elements import elements_from_state
from orbitkit.algorithms.dynamics.propagator import (
    propagate,
    propagate_trajectory,
    state_from_elements,
    true_anomaly_at_time,
)
from orbitkit.errors import ConvergenceFailureError, InvalidMassError, UnsupportedOrbitTypeError
from orbitkit.models.orbital_elements import OrbitalElements
from orbitkit.utils.constants import MU_earth_km

MU = MU_earth_km

STATES = {
    "equatorial": ([7000.0, 0.0, 0.0], [0.0, 7.5, 0.0]),
    "inclined": ([7000.0, 1000.0, 2000.0], [-1.0, 7.0, 2.0]),
    "retrograde": ([-6045.0, -3490.0, 2500.0], [-3.457, 6.618, 2.533]),
    "eccentric": ([6600.0, 0.0, 500.0], [0.0, 10.2, 1.0]),
    "hyperbolic": ([7000.0, 0.0, 0.0], [1.0, 12.0, 0.0]),
}


def _two_body(t, y):
    r = y[:3]
    a = -MU * r / np.linalg.norm(r)**3
    return np.concatenate([y[3:], a])


def _integrate(r0, v0, dt):
    sol = solve_ivp(_two_body, (0.0, dt), np.concatenate([r0, v0]), method='DOP853', rtol=1e-12, atol=1e-12)
    return sol.y[:, -1]


@pytest.mark.parametrize("name", sorted(STATES))
def test_zero_time_round_trip(name):
    r0, v0 = STATES[name]
    el = elements_from_state(MU, r0, v0)
    state = propagate(el, MU, 0.0)
    np.testing.assert_allclose(state.r, r0, rtol=1e-9, atol=1e-6)
    np.testing.assert_allclose(state.v, v0, rtol=1e-9, atol=1e-9)
    np.testing.assert_allclose(state_from_elements(el, MU).as_array(), state.as_array(), atol=1e-9)


@pytest.mark.parametrize("name", ["equatorial", "inclined", "retrograde", "eccentric"])
def test_elliptical_propagation_is_periodic(name):
    el = elements_from_state(MU, *STATES[name])
    period = el.orbital_period(MU)
    start = propagate(el, MU, 0.0)
    after = propagate(el, MU, period)
    np.testing.assert_allclose(after.r, start.r, rtol=1e-8, atol=1e-5)
    np.testing.assert_allclose(after.v, start.v, rtol=1e-8, atol=1e-8)


@pytest.mark.parametrize("name, dt", [
    ("inclined", 1500.0),
    ("retrograde", -2400.0),
    ("eccentric", 5000.0),
    ("hyperbolic", 3000.0),
])
def test_matches_numerical_integration(name, dt):
    r0, v0 = STATES[name]
    el = elements_from_state(MU, r0, v0)
    state = propagate(el, MU, dt)
    reference = _integrate(np.array(r0), np.array(v0), dt)
    print(f"{name}: analytic {state.as_array()} numeric {reference}")
    np.testing.assert_allclose(state.r, reference[:3], rtol=1e-7)
    np.testing.assert_allclose(state.v, reference[3:], rtol=1e-7, atol=1e-9)


def test_astropy_quantities():
    mu = MU * u.km**3 / u.s**2
    r0, v0 = STATES["inclined"]
    el = elements_from_state(mu, r0 * u.km, v0 * u.km / u.s)
    assert el.semi_major_axis.unit == u.m
    state = propagate(el, mu, 1.0 * u.h)
    assert state.r.unit == u.m
    assert state.v.unit == u.m / u.s
    plain = propagate(elements_from_state(MU, r0, v0), MU, 3600.0)
    np.testing.assert_allclose(state.r.to_value(u.km), plain.r, rtol=1e-9)
    np.testing.assert_allclose(state.v.to_value(u.km / u.s), plain.v, rtol=1e-9)
    start = state_from_elements(el, mu)
    np.testing.assert_allclose(start.r.to_value(u.km), r0, rtol=1e-9)
    assert true_anomaly_at_time(el, mu, 60.0 * u.min) == pytest.approx(true_anomaly_at_time(el, mu, 3600.0))


def test_trajectory_accepts_time_quantities():
    mu = MU * u.km**3 / u.s**2
    el = elements_from_state(mu, STATES["eccentric"][0] * u.km, STATES["eccentric"][1] * u.km / u.s)
    states = propagate_trajectory(el, mu, [0.0, 10.0, 20.0] * u.min)
    assert states.shape == (3, 6)
    np.testing.assert_allclose(states[2], propagate(el, mu, 1200.0).as_array(), rtol=1e-12)


def test_only_true_anomaly_changes():
    el = elements_from_state(MU, *STATES["inclined"])
    state = propagate(el, MU, 1234.0)
    moved = elements_from_state(MU, state.r, state.v)
    np.testing.assert_allclose(moved[:5], el[:5], rtol=1e-8, atol=1e-7)
    assert moved.true_anomaly == pytest.approx(true_anomaly_at_time(el, MU, 1234.0), abs=1e-7)


def test_parabolic_orbit_is_unsupported():
    el = OrbitalElements(np.inf, 1.0, 0.0, 0.0, 0.0, 0.0)
    with pytest.raises(UnsupportedOrbitTypeError):
        propagate(el, MU, 10.0)
    with pytest.raises(UnsupportedOrbitTypeError):
        state_from_elements(el, MU)


def test_iteration_budget():
    el = OrbitalElements(7000.0, 0.9, 0.0, 0.0, 0.0, 0.0)
    with pytest.raises(ConvergenceFailureError):
        propagate(el, MU, 100.0, max_iter=1)


def test_invalid_mu():
    el = elements_from_state(MU, *STATES["equatorial"])
    with pytest.raises(InvalidMassError):
        propagate(el, 0.0, 10.0)


def test_trajectory():
    el = elements_from_state(MU, *STATES["eccentric"])
    times = np.linspace(0.0, el.orbital_period(MU), 25)
    states = propagate_trajectory(el, MU, times)
    assert states.shape == (25, 6)
    np.testing.assert_allclose(states[0], states[-1], rtol=1e-8, atol=1e-5)
    radii = np.linalg.norm(states[:, :3], axis=1)
    assert radii.min() >= el.periapsis * (1 - 1e-9)
    assert radii.max() <= el.apoapsis * (1 + 1e-9)
