"""
Core functions of the orbital mechanics engine.

This package contains the element computation, Kepler solvers, energy and
potential functions and the Lagrange point solver.
"""

from .elements import elements_from_state, validate_gravitational_parameter
from .energy import (
    circular_velocity,
    effective_potential,
    effective_potential_gradient,
    escape_velocity,
    jacobi_constant,
    specific_orbital_energy,
)
from .kepler import mean_to_true_anomaly, solve_kepler, solve_kepler_hyperbolic
from .lagrange_points import get_lagrange_point, lagrange_point_locations, lagrange_points

__all__ = [
    'elements_from_state',
    'validate_gravitational_parameter',
    'circular_velocity',
    'effective_potential',
    'effective_potential_gradient',
    'escape_velocity',
    'jacobi_constant',
    'specific_orbital_energy',
    'mean_to_true_anomaly',
    'solve_kepler',
    'solve_kepler_hyperbolic',
    'get_lagrange_point',
    'lagrange_point_locations',
    'lagrange_points',
]
