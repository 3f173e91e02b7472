import numpy as np
import pytest
from astropy import units as u

from orbitkit.utils.units import GRAVITATIONAL_PARAMETER, has_quantity, to_si, to_si_vector, with_unit


def test_scalar_conversion():
    assert to_si(3.5, u.m) == 3.5
    assert to_si(7.0 * u.km, u.m) == pytest.approx(7000.0)
    assert to_si(398600.4418 * u.km**3 / u.s**2, GRAVITATIONAL_PARAMETER) == pytest.approx(3.986004418e14)
    with pytest.raises(u.UnitConversionError):
        to_si(1.0 * u.s, u.m)


def test_vector_conversion():
    np.testing.assert_allclose(to_si_vector([1.0 * u.km, 2.0 * u.m, 0.0 * u.km], u.m), [1000.0, 2.0, 0.0])
    np.testing.assert_allclose(to_si_vector([0.0, 7.5, 0.0] * u.km / u.s, u.m / u.s), [0.0, 7500.0, 0.0])
    assert to_si_vector(np.array([1, 2, 3]), u.m).dtype == np.float64
    with pytest.raises(ValueError):
        to_si_vector([1.0, 2.0], u.m)


def test_wrapping():
    assert has_quantity(1.0, [1.0 * u.m, 0.0 * u.m])
    assert not has_quantity(1.0, [1.0, 2.0])
    assert with_unit(2.0, u.m, True) == 2.0 * u.m
    assert with_unit(2.0, u.m, False) == 2.0
