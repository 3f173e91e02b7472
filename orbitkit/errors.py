"""
Exception hierarchy for the orbital mechanics engine.

Every failure raised by the element computation, the two-body propagator and
the Lagrange point solver derives from :class:`OrbitError`, so callers can
catch the whole family at once or handle each kind individually.
"""


class OrbitError(ValueError):
    """Base class for all orbital mechanics errors."""


class DegenerateStateError(OrbitError):
    """
    Raised when a state vector does not define an orbit.

    This happens for a position at the origin (no reference direction for the
    true anomaly) or for a vanishing angular momentum (rectilinear motion,
    inclination and node undefined).
    """


class UnsupportedOrbitTypeError(OrbitError):
    """Raised when an operation is requested for an orbit shape it does not handle."""


class ConvergenceFailureError(OrbitError):
    """
    Raised when an iterative solver exhausts its iteration budget.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    iterations : int, optional
        Number of iterations performed before giving up.
    residual : float, optional
        Last residual (or step size) reached by the solver.
    """

    def __init__(self, message, iterations=None, residual=None):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class InvalidMassError(OrbitError):
    """Raised for non-positive or non-finite masses and gravitational parameters."""


class InvalidGeometryError(OrbitError):
    """Raised for non-positive or non-finite separations."""
