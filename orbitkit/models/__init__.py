from .binary_orbit import BinaryOrbit
from .body import Body
from .lagrange_point import (
    LagrangePoint,
    CollinearPoint,
    TriangularPoint,
    L1Point,
    L2Point,
    L3Point,
    L4Point,
    L5Point,
    LagrangePointSet,
    create_lagrange_point,
)
from .orbital_elements import OrbitalClassification, OrbitalElements, OrbitType, StateVector

__all__ = [
    'BinaryOrbit',
    'Body',
    'LagrangePoint',
    'CollinearPoint',
    'TriangularPoint',
    'L1Point',
    'L2Point',
    'L3Point',
    'L4Point',
    'L5Point',
    'LagrangePointSet',
    'create_lagrange_point',
    'OrbitalClassification',
    'OrbitalElements',
    'OrbitType',
    'StateVector',
]
