"""
orbitkit: orbital mechanics for two-body and restricted three-body systems.

The package computes classical orbital elements from Cartesian state vectors,
propagates them over time with closed-form two-body solutions, and locates
the five Lagrange points of a two-body system.

Plotting helpers live in :mod:`orbitkit.utils.plot` and logging is set up
with :func:`orbitkit.logging_config.setup_logging`.
"""

from .algorithms.core.elements import elements_from_state
from .algorithms.core.lagrange_points import get_lagrange_point, lagrange_point_locations, lagrange_points
from .algorithms.dynamics.propagator import (
    propagate,
    propagate_trajectory,
    state_from_elements,
    true_anomaly_at_time,
)
from .errors import (
    ConvergenceFailureError,
    DegenerateStateError,
    InvalidGeometryError,
    InvalidMassError,
    OrbitError,
    UnsupportedOrbitTypeError,
)
from .models.binary_orbit import BinaryOrbit
from .models.body import Body
from .models.lagrange_point import LagrangePointSet
from .models.orbital_elements import OrbitalClassification, OrbitalElements, OrbitType, StateVector

__version__ = "0.1.0"

__all__ = [
    'elements_from_state',
    'get_lagrange_point',
    'lagrange_point_locations',
    'lagrange_points',
    'propagate',
    'propagate_trajectory',
    'state_from_elements',
    'true_anomaly_at_time',
    'ConvergenceFailureError',
    'DegenerateStateError',
    'InvalidGeometryError',
    'InvalidMassError',
    'OrbitError',
    'UnsupportedOrbitTypeError',
    'BinaryOrbit',
    'Body',
    'LagrangePointSet',
    'OrbitalClassification',
    'OrbitalElements',
    'OrbitType',
    'StateVector',
]
