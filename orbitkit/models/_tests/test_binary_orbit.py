import numpy as np
import pytest
from astropy import units as u

from orbitkit.errors import InvalidGeometryError, InvalidMassError
from orbitkit.models.binary_orbit import BinaryOrbit
from orbitkit.utils.constants import AU, M_jupiter, M_sun


def test_sun_jupiter():
    a, e = 5.2 * AU, 0.048
    binary = BinaryOrbit(M_sun, M_jupiter, a, eccentricity=e)
    print(binary)
    mu = M_jupiter / (M_sun + M_jupiter)
    assert binary.barycenter_position == pytest.approx(mu)
    assert binary.l4_l5_stable

    primary_limit, secondary_limit = binary.s_type_stability
    assert primary_limit == pytest.approx(a * (0.464 - 0.380 * mu - 0.631 * e))
    assert secondary_limit == pytest.approx(a * (0.464 - 0.380 * (1 - mu) - 0.631 * e))
    assert binary.p_type_stability == pytest.approx(a * (1.60 + 4.12 * mu + 4.27 * e))
    assert binary.mutual_hill_sphere == pytest.approx(a * (mu / 3) ** (1 / 3))

    # Galilean moons orbit well inside Jupiter's S-type region
    assert binary.s_type_secondary_possible(1.9e9)
    assert not binary.s_type_secondary_possible(AU)
    assert binary.s_type_primary_possible(AU)
    assert binary.p_type_possible(40 * AU)
    assert not binary.p_type_possible(5 * AU)


def test_distance_range():
    binary = BinaryOrbit(1.0, 0.5, 10.0, eccentricity=0.2)
    periapsis, apoapsis = binary.distance_range()
    assert periapsis == pytest.approx(8.0)
    assert apoapsis == pytest.approx(12.0)


def test_eccentric_twins_have_no_s_type_region():
    binary = BinaryOrbit(1.1 * M_sun, 0.9 * M_sun, 23.4 * AU, eccentricity=0.52)
    assert binary.s_type_stability == (0.0, 0.0)
    assert not binary.s_type_primary_possible(0.1 * AU)
    assert not binary.l4_l5_stable
    mu_min = 0.9 / 2.0
    assert binary.p_type_stability == pytest.approx(23.4 * AU * (1.60 + 4.12 * mu_min + 4.27 * 0.52))


def test_astropy_quantities():
    binary = BinaryOrbit(1.0 * u.M_sun, 1.0 * u.M_jup, 5.2 * u.AU, eccentricity=0.048)
    assert binary.separation.unit == u.m
    assert binary.p_type_stability.unit == u.m
    assert binary.s_type_stability[0].to_value(u.AU) == pytest.approx(5.2 * 0.4334, rel=1e-3)
    assert binary.p_type_possible(20 * u.AU)
    assert binary.s_type_primary_possible(1.0 * u.AU)
    periapsis, apoapsis = binary.distance_range()
    assert periapsis.to_value(u.AU) == pytest.approx(5.2 * (1 - 0.048))
    assert apoapsis.to_value(u.AU) == pytest.approx(5.2 * (1 + 0.048))


@pytest.mark.parametrize("m1, m2, a, e, error", [
    (0.0, 1.0, 1.0, 0.0, InvalidMassError),
    (1.0, np.nan, 1.0, 0.0, InvalidMassError),
    (1.0, 1.0, -1.0, 0.0, InvalidGeometryError),
    (1.0, 1.0, 1.0, 1.0, InvalidGeometryError),
    (1.0, 1.0, 1.0, -0.1, InvalidGeometryError),
])
def test_invalid_binary(m1, m2, a, e, error):
    with pytest.raises(error):
        BinaryOrbit(m1, m2, a, eccentricity=e)
