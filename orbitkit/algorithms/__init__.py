"""
Orbital mechanics algorithms.

This package is organized into two submodules:

- core:      Orbital elements, Kepler solvers, energies and Lagrange points
- dynamics:  Closed-form two-body propagation
"""

from .core.elements import elements_from_state
from .core.lagrange_points import lagrange_point_locations, lagrange_points
from .dynamics.propagator import propagate, propagate_trajectory, state_from_elements

__all__ = [
    'elements_from_state',
    'lagrange_point_locations',
    'lagrange_points',
    'propagate',
    'propagate_trajectory',
    'state_from_elements',
]
