"""
Celestial body model.

This module defines the Body class, a minimal description of a gravitating
body (star, planet, moon) by its name, mass and physical radius. It uses
Numba's jitclass so that bodies can be handed to compiled kernels alongside
the rest of the numerical code.
"""

import numpy as np
from numba import types
from numba.experimental import jitclass

from orbitkit.utils.constants import G

spec = [
    ('name', types.unicode_type),
    ('mass', types.float64),
    ('radius', types.float64),
]


@jitclass(spec)
class Body:
    """
    Celestial body with its physical properties.

    Parameters
    ----------
    name : str
        Name of the celestial body
    mass : float
        Mass of the body in kilograms
    radius : float
        Physical (mean) radius of the body in meters
    """
    def __init__(self, name, mass, radius):
        self.name = name
        self.mass = mass
        self.radius = radius

    @property
    def gravitational_parameter(self):
        """μ = G·M in m³/s²."""
        return G * self.mass

    @property
    def surface_escape_velocity(self):
        """Escape speed from the surface, √(2μ/R) in m/s."""
        return np.sqrt(2.0 * G * self.mass / self.radius)

    def escape_velocity_at(self, distance):
        """Escape speed at a distance (m) from the body's center."""
        return np.sqrt(2.0 * G * self.mass / distance)
