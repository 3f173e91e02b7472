import mpmath as mp
import numpy as np
import pytest
from astropy import units as u

from orbitkit.algorithms.core.energy import effective_potential_gradient
from orbitkit.errors import ConvergenceFailureError
from orbitkit.models.lagrange_point import (
    L1Point,
    L2Point,
    L3Point,
    L4Point,
    L5Point,
    LagrangePointSet,
    TriangularPoint,
    create_lagrange_point,
)

MU_EARTH_MOON = 0.01215


@pytest.mark.parametrize("point_cls, expected_x", [
    (L1Point, 0.8369),
    (L2Point, 1.1557),
    (L3Point, -1.0051),
])
def test_collinear_earth_moon(point_cls, expected_x):
    pos = point_cls(MU_EARTH_MOON).position
    print(f"{point_cls.__name__}: {pos}")
    assert pos[0] == pytest.approx(expected_x, abs=1e-4)
    assert pos[1] == 0.0 and pos[2] == 0.0


@pytest.mark.parametrize("point_index", [1, 2, 3, 4, 5])
def test_points_are_equilibria(point_index):
    pos = create_lagrange_point(MU_EARTH_MOON, point_index).position
    np.testing.assert_allclose(effective_potential_gradient(pos, MU_EARTH_MOON), 0.0, atol=1e-12)


def test_triangular_positions():
    l4 = L4Point(MU_EARTH_MOON).position
    l5 = L5Point(MU_EARTH_MOON).position
    np.testing.assert_allclose(l4, [0.5 - MU_EARTH_MOON, np.sqrt(3) / 2, 0.0])
    np.testing.assert_allclose(l5, [0.5 - MU_EARTH_MOON, -np.sqrt(3) / 2, 0.0])


def test_triangular_warns_when_unstable():
    with pytest.warns(UserWarning):
        L4Point(0.1)


def test_collinear_iteration_budget():
    with pytest.raises(ConvergenceFailureError):
        L1Point(MU_EARTH_MOON, max_iter=1).position


def test_gamma_is_hill_radius_for_light_secondary():
    mu = 1e-12
    gamma = float(L1Point(mu).gamma())
    assert gamma == pytest.approx((mu / 3) ** (1 / 3), rel=1e-3)


def test_invalid_indices():
    with pytest.raises(ValueError):
        create_lagrange_point(MU_EARTH_MOON, 6)
    with pytest.raises(ValueError):
        TriangularPoint(MU_EARTH_MOON, 1)


def _earth_moon_set(separation=1.0):
    points = [create_lagrange_point(MU_EARTH_MOON, i).position * separation for i in range(1, 6)]
    return LagrangePointSet(*points, mass_ratio=MU_EARTH_MOON, separation=separation)


def test_point_set_accessors():
    points = _earth_moon_set()
    assert points.as_array().shape == (5, 3)
    np.testing.assert_array_equal(points.point(2), points.l2)
    with pytest.raises(ValueError):
        points.point(0)
    np.testing.assert_allclose(points.primary_position, [-MU_EARTH_MOON, 0, 0])
    np.testing.assert_allclose(points.secondary_position, [1 - MU_EARTH_MOON, 0, 0])
    np.testing.assert_allclose(points.relative_to_primary()[3], points.l4 - points.primary_position)


def test_point_set_distances():
    points = _earth_moon_set(384400.0)
    assert points.l4_l5_stable
    assert points.l1_distance_from_secondary < points.secondary_hill_radius < points.l2_distance_from_secondary
    assert points.l3_distance_from_primary == pytest.approx(384400.0, rel=0.01)


def test_point_set_inertial_positions():
    points = _earth_moon_set()
    np.testing.assert_allclose(points.inertial_positions(0.0, 1.0), points.as_array())
    quarter = points.inertial_positions(np.pi / 2, 1.0)
    np.testing.assert_allclose(quarter[3], [-points.l4[1], points.l4[0], 0.0], atol=1e-12)


def test_solver_restores_mpmath_precision():
    saved = mp.mp.dps
    try:
        mp.mp.dps = 20
        L2Point(MU_EARTH_MOON).position
        assert mp.mp.dps == 20
    finally:
        mp.mp.dps = saved


def test_capture_at_lagrange_points():
    points = _earth_moon_set()
    for index in (1, 2, 3):
        assert not points.can_capture_at_lagrange_point(index)
    assert points.can_capture_at_lagrange_point(4)
    assert points.can_capture_at_lagrange_point(5)
    unstable = points._replace(mass_ratio=0.1)
    assert not unstable.can_capture_at_lagrange_point(4)
    with pytest.raises(ValueError):
        points.can_capture_at_lagrange_point(6)


def test_hill_sphere_at_lagrange_points():
    points = _earth_moon_set(384400.0)
    radius = points.hill_sphere_at_lagrange_point(4)
    print(f"L4 trojan region: {radius:.1f}")
    assert radius == pytest.approx(0.5 * 384400.0 * (MU_EARTH_MOON / 3) ** (1 / 3))
    assert points.hill_sphere_at_lagrange_point(5) == radius
    assert points.hill_sphere_at_lagrange_point(1) is None
    assert points._replace(mass_ratio=0.1).hill_sphere_at_lagrange_point(4) is None


def test_point_set_with_quantities():
    points = _earth_moon_set(384400.0 * u.km)
    assert points.l4.unit == u.km
    assert points.secondary_position.unit == u.km
    assert points.l3_distance_from_primary.to_value(u.km) == pytest.approx(384400.0, rel=0.01)
    assert points.hill_sphere_at_lagrange_point(4).unit == u.km
    plain = points.without_units()
    assert plain.separation == pytest.approx(3.844e8)
    np.testing.assert_allclose(plain.l1, points.l1.to_value(u.m))
    quarter = points.inertial_positions(6.0 * u.h, np.pi / 12 * u.rad / u.h)
    assert quarter.unit == u.m
    np.testing.assert_allclose(quarter[3].to_value(u.m), [-plain.l4[1], plain.l4[0], 0.0], atol=1e-3)
