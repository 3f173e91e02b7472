"""
Unit handling at the boundary of the orbitkit API.

The numerical core works on plain floats. Public operations accept either
plain numbers, which pass through unchanged in whatever consistent unit
system the caller chose, or :class:`astropy.units.Quantity` objects, which
are converted to SI on the way in:

    ```python
    from astropy import units as u
    elements_from_state(398600.4418 * u.km**3 / u.s**2,
                        [7000, 0, 0] * u.km, [0, 7.5, 0] * u.km / u.s)
    ```

When any input of an operation is a quantity, its dimensional results are
returned as SI quantities, and plain numbers mixed with quantities are taken
to be SI as well.
"""

import numpy as np
from astropy import units as u

#: Unit of the gravitational parameter μ = GM
GRAVITATIONAL_PARAMETER = u.m**3 / u.s**2

#: Unit of speed
SPEED = u.m / u.s


def is_quantity(value):
    return isinstance(value, u.Quantity)


def has_quantity(*values):
    """True if any value is a quantity, or a list/tuple holding one."""
    for value in values:
        if isinstance(value, u.Quantity):
            return True
        if isinstance(value, (list, tuple)) and any(isinstance(c, u.Quantity) for c in value):
            return True
    return False


def to_si(value, unit):
    """
    Magnitude of a scalar in ``unit``.

    Parameters
    ----------
    value : float or Quantity
        Plain numbers are returned unchanged.
    unit : astropy.units.Unit
        Target SI unit

    Raises
    ------
    astropy.units.UnitConversionError
        If a quantity does not have the dimension of ``unit``.
    """
    if isinstance(value, u.Quantity):
        return value.to_value(unit)
    return value


def to_si_vector(vec, unit):
    """
    Convert a 3-vector to a float64 array in ``unit``.

    ``vec`` may be a Quantity array, a sequence of scalar quantities, or a
    sequence of plain numbers.

    Raises
    ------
    ValueError
        If the vector does not have exactly three components.
    astropy.units.UnitConversionError
        If the components do not have the dimension of ``unit``.
    """
    if has_quantity(vec):
        vec = u.Quantity(vec).to_value(unit)
    arr = np.asarray(vec, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def with_unit(value, unit, wrap):
    """Attach ``unit`` to ``value`` when ``wrap`` is set."""
    return value * unit if wrap else value
