"""
Lagrange point models for a two-body system.

This module defines a hierarchy of classes representing the Lagrange
(libration) points of a pair of bodies in circular orbit about their
barycenter, with specialized handling for collinear points (L1, L2, L3) and
triangular points (L4, L5).

The class hierarchy consists of:
- LagrangePoint (abstract base class)
- CollinearPoint (for L1, L2, L3)
- TriangularPoint (for L4, L5)
- Concrete classes for each point (L1Point, L2Point, etc.)

Point classes work in dimensionless units (separation = 1, primary at
(-μ, 0, 0), secondary at (1 - μ, 0, 0)). :class:`LagrangePointSet` holds the
five positions scaled back to the unit of the separation.
"""

import logging
import warnings
from abc import ABC, abstractmethod
from typing import NamedTuple

import mpmath as mp
import numpy as np
from astropy import units as u

from orbitkit.errors import ConvergenceFailureError
from orbitkit.utils.constants import LAGRANGE_MAX_ITER, LAGRANGE_TOL, MIN_LAGRANGE_MASS_RATIO
from orbitkit.utils.crtbp import hill_radius
from orbitkit.utils.frames import rotating_to_inertial
from orbitkit.utils.units import is_quantity, to_si, with_unit

logger = logging.getLogger(__name__)

# Working precision of the collinear root finder, in decimal digits
MP_DPS = 50


def heavier_to_lighter_ratio(mu):
    """Ratio of the heavier to the lighter mass for a mass parameter μ."""
    return max(mu, 1.0 - mu) / min(mu, 1.0 - mu)


class LagrangePoint(ABC):
    """
    Abstract base class for Lagrange points.

    Parameters
    ----------
    mu : float
        Mass parameter of the system (ratio of secondary to total mass)
    point_index : int
        The Lagrange point index (1-5)
    """

    def __init__(self, mu, point_index):
        self.mu = mu
        self.point_index = point_index
        self._position = None

    @property
    def position(self):
        """
        Position of the Lagrange point in the rotating frame.

        Returns
        -------
        ndarray
            3D vector [x, y, z] in units of the separation
        """
        if self._position is None:
            self._position = self._calculate_position()
        return self._position

    @property
    def name(self):
        return f"L{self.point_index}"

    def __repr__(self):
        return f"{type(self).__name__}(mu={self.mu!r})"

    @abstractmethod
    def _calculate_position(self):
        """Calculate the position of the Lagrange point."""


class CollinearPoint(LagrangePoint):
    """
    Base class for collinear Lagrange points (L1, L2, L3).

    The collinear points lie on the x-axis through both bodies. Each one is
    found from a quintic equation in its distance γ to the nearest body,
    solved by Newton-Raphson in 50-digit arithmetic. The quintic is divided
    by the mass of that nearest body so that its residual stays of order one
    even when the secondary is vanishingly light.

    Parameters
    ----------
    mu : float
        Mass parameter of the system (ratio of secondary to total mass)
    point_index : int
        The Lagrange point index (must be 1, 2, or 3)
    tol : float, optional
        Newton step tolerance on γ. Default is 1e-28.
    max_iter : int, optional
        Iteration budget. Default is 50.
    """

    def __init__(self, mu, point_index, tol=LAGRANGE_TOL, max_iter=LAGRANGE_MAX_ITER):
        if point_index not in [1, 2, 3]:
            raise ValueError(f"Collinear point index must be 1, 2, or 3, not {point_index}")
        super().__init__(mu, point_index)
        self.tol = tol
        self.max_iter = max_iter

    @abstractmethod
    def _quintic(self, gamma):
        """Normalized equilibrium quintic in γ, returned as (value, derivative)."""

    @abstractmethod
    def _initial_gamma(self):
        """Seed for the Newton iteration."""

    @abstractmethod
    def _x_from_gamma(self, gamma):
        """x-coordinate of the point given its distance γ to the nearest body."""

    def _valid_gamma(self, gamma):
        return gamma > 0

    def gamma(self):
        """
        Solve the equilibrium quintic for the distance γ to the nearest body.

        Returns
        -------
        mpf
            γ in units of the separation, at mpmath precision

        Raises
        ------
        ConvergenceFailureError
            If Newton-Raphson does not reach the tolerance within the
            iteration budget, or lands on a root with no physical meaning.
        """
        mu = mp.mpf(self.mu)
        seed = mp.mpf(self._initial_gamma())
        try:
            # findroot adjusts the context precision while it iterates
            with mp.workdps(MP_DPS):
                gamma = mp.findroot(lambda g: self._quintic(g)[0], seed, solver='newton',
                                    df=lambda g: self._quintic(g)[1],
                                    tol=self.tol, maxsteps=self.max_iter)
        except (ValueError, ZeroDivisionError) as exc:
            logger.warning(f"{self.name} solver failed for mu={float(mu):.6e}: {exc}")
            raise ConvergenceFailureError(
                f"{self.name} did not converge within {self.max_iter} iterations (mu = {self.mu})",
                iterations=self.max_iter,
            ) from exc

        if not self._valid_gamma(gamma):
            logger.warning(f"{self.name} solver converged to an unphysical root gamma={float(gamma)}")
            raise ConvergenceFailureError(
                f"{self.name} converged to an unphysical distance gamma = {float(gamma)} (mu = {self.mu})",
                residual=float(abs(self._quintic(gamma)[0])),
            )
        logger.debug(f"{self.name} gamma={float(gamma):.16e} for mu={float(mu):.6e}")
        return gamma

    def _calculate_position(self):
        with mp.workdps(MP_DPS):
            x = self._x_from_gamma(self.gamma())
        return np.array([float(x), 0, 0], dtype=np.float64)


class L1Point(CollinearPoint):
    """
    L1 Lagrange point, located between the two bodies.

    γ is measured from the secondary towards the primary, x = 1 - μ - γ.
    """

    def __init__(self, mu, **kwargs):
        super().__init__(mu, 1, **kwargs)

    def _quintic(self, g):
        mu = mp.mpf(self.mu)
        f = g**5 - (3 - mu) * g**4 + (3 - 2 * mu) * g**3 - mu * g**2 + 2 * mu * g - mu
        df = 5 * g**4 - 4 * (3 - mu) * g**3 + 3 * (3 - 2 * mu) * g**2 - 2 * mu * g + 2 * mu
        return f / mu, df / mu

    def _initial_gamma(self):
        # Hill sphere radius
        return (self.mu / 3.0) ** (1.0 / 3.0)

    def _valid_gamma(self, gamma):
        return 0 < gamma < 1

    def _x_from_gamma(self, gamma):
        return 1 - mp.mpf(self.mu) - gamma


class L2Point(CollinearPoint):
    """
    L2 Lagrange point, located beyond the secondary.

    γ is measured outwards from the secondary, x = 1 - μ + γ.
    """

    def __init__(self, mu, **kwargs):
        super().__init__(mu, 2, **kwargs)

    def _quintic(self, g):
        mu = mp.mpf(self.mu)
        f = g**5 + (3 - mu) * g**4 + (3 - 2 * mu) * g**3 - mu * g**2 - 2 * mu * g - mu
        df = 5 * g**4 + 4 * (3 - mu) * g**3 + 3 * (3 - 2 * mu) * g**2 - 2 * mu * g - 2 * mu
        return f / mu, df / mu

    def _initial_gamma(self):
        return (self.mu / 3.0) ** (1.0 / 3.0)

    def _x_from_gamma(self, gamma):
        return 1 - mp.mpf(self.mu) + gamma


class L3Point(CollinearPoint):
    """
    L3 Lagrange point, located beyond the primary.

    γ is measured outwards from the primary, x = -μ - γ.
    """

    def __init__(self, mu, **kwargs):
        super().__init__(mu, 3, **kwargs)

    def _quintic(self, g):
        mu = mp.mpf(self.mu)
        mu1 = 1 - mu
        f = g**5 + (2 + mu) * g**4 + (1 + 2 * mu) * g**3 - mu1 * g**2 - 2 * mu1 * g - mu1
        df = 5 * g**4 + 4 * (2 + mu) * g**3 + 3 * (1 + 2 * mu) * g**2 - 2 * mu1 * g - 2 * mu1
        return f / mu1, df / mu1

    def _initial_gamma(self):
        # Szebehely's first order expansion
        return 1.0 - 7.0 * self.mu / 12.0

    def _x_from_gamma(self, gamma):
        return -mp.mpf(self.mu) - gamma


class TriangularPoint(LagrangePoint):
    """
    Base class for triangular Lagrange points (L4, L5).

    The triangular points form equilateral triangles with the two bodies.
    They are linearly stable only while the heavier body outweighs the
    lighter one by at least 24.96 (μ < 0.0385); a warning is issued otherwise.

    Parameters
    ----------
    mu : float
        Mass parameter of the system (ratio of secondary to total mass)
    point_index : int
        The Lagrange point index (must be 4 or 5)
    """

    def __init__(self, mu, point_index):
        if point_index not in [4, 5]:
            raise ValueError(f"Triangular point index must be 4 or 5, not {point_index}")
        super().__init__(mu, point_index)

        if heavier_to_lighter_ratio(mu) < MIN_LAGRANGE_MASS_RATIO:
            warnings.warn(f"Triangular points are unstable for mu > 0.0385 (current mu = {mu})")

    @property
    def _side(self):
        return 1.0 if self.point_index == 4 else -1.0

    def _calculate_position(self):
        x = 1 / 2 - self.mu
        y = self._side * np.sqrt(3) / 2
        return np.array([x, y, 0], dtype=np.float64)


class L4Point(TriangularPoint):
    """L4, leading the secondary by 60° (positive y)."""

    def __init__(self, mu):
        super().__init__(mu, 4)


class L5Point(TriangularPoint):
    """L5, trailing the secondary by 60° (negative y)."""

    def __init__(self, mu):
        super().__init__(mu, 5)


_POINT_CLASSES = {1: L1Point, 2: L2Point, 3: L3Point, 4: L4Point, 5: L5Point}


def create_lagrange_point(mu, point_index, **kwargs):
    """
    Create a specific Lagrange point object by index.

    Parameters
    ----------
    mu : float
        Mass parameter of the system
    point_index : int
        The Lagrange point index (1-5)
    **kwargs
        ``tol`` and ``max_iter`` for the collinear solvers

    Returns
    -------
    LagrangePoint
        An instance of the appropriate Lagrange point class

    Raises
    ------
    ValueError
        If an invalid point index is provided
    """
    _check_index(point_index)
    cls = _POINT_CLASSES[point_index]
    if issubclass(cls, TriangularPoint):
        return cls(mu)
    return cls(mu, **kwargs)


class LagrangePointSet(NamedTuple):
    """
    The five Lagrange points of a two-body system.

    Positions are in the barycentric rotating frame (x from the primary
    towards the secondary, z along the orbital angular momentum), in the unit
    of the separation. When the separation is an astropy quantity the
    positions are quantities too.

    Attributes:
        l1: Between the bodies
        l2: Beyond the secondary
        l3: Beyond the primary
        l4: Leading triangular point (positive y)
        l5: Trailing triangular point (negative y)
        mass_ratio: Mass parameter μ = m2 / (m1 + m2)
        separation: Distance between the two bodies
    """
    l1: np.ndarray
    l2: np.ndarray
    l3: np.ndarray
    l4: np.ndarray
    l5: np.ndarray
    mass_ratio: float
    separation: float

    @property
    def primary_position(self):
        return np.array([-self.mass_ratio, 0.0, 0.0]) * self.separation

    @property
    def secondary_position(self):
        return np.array([1.0 - self.mass_ratio, 0.0, 0.0]) * self.separation

    @property
    def l4_l5_stable(self):
        """True when the heavier body is at least 24.96 times the lighter one."""
        return heavier_to_lighter_ratio(self.mass_ratio) >= MIN_LAGRANGE_MASS_RATIO

    @property
    def l1_distance_from_secondary(self):
        return np.linalg.norm(self.l1 - self.secondary_position)

    @property
    def l2_distance_from_secondary(self):
        return np.linalg.norm(self.l2 - self.secondary_position)

    @property
    def l3_distance_from_primary(self):
        return np.linalg.norm(self.l3 - self.primary_position)

    @property
    def secondary_hill_radius(self):
        """Hill sphere radius of the secondary, a first order estimate of the L1/L2 distance."""
        return hill_radius(self.separation, self.mass_ratio, 1.0 - self.mass_ratio)

    def as_array(self):
        """Return the positions as a (5, 3) array ordered L1..L5."""
        return np.vstack([self.l1, self.l2, self.l3, self.l4, self.l5])

    def relative_to_primary(self):
        """Positions L1..L5 as a (5, 3) array with the primary as origin."""
        return self.as_array() - self.primary_position

    def without_units(self):
        """Copy with plain positions and separation, in meters if they were quantities."""
        if not is_quantity(self.separation):
            return self
        plain = [p.to_value(u.m) for p in self[:5]]
        return LagrangePointSet(*plain, mass_ratio=self.mass_ratio, separation=self.separation.to_value(u.m))

    def point(self, index):
        """
        Position of a single point by its index (1-5).

        Raises
        ------
        ValueError
            If the index is outside 1-5.
        """
        _check_index(index)
        return self[index - 1]

    def can_capture_at_lagrange_point(self, index):
        """
        Whether a small body can stay trapped near a Lagrange point.

        The collinear points are unstable equilibria and never capture. The
        triangular points capture when they are linearly stable.

        Raises
        ------
        ValueError
            If the index is outside 1-5.
        """
        _check_index(index)
        if index in (4, 5):
            return self.l4_l5_stable
        return False

    def hill_sphere_at_lagrange_point(self, index):
        """
        Rough radius of the region around L4 or L5 where a trojan stays bound.

        Half the Hill radius a (μ/3)^(1/3) of the secondary with respect to the
        total mass.

        Returns
        -------
        float or None
            Radius in the unit of the separation, or None for the collinear
            points and for unstable triangular points.
        """
        _check_index(index)
        if index not in (4, 5) or not self.l4_l5_stable:
            return None
        return 0.5 * hill_radius(self.separation, self.mass_ratio, 1.0)

    def inertial_positions(self, t, omega):
        """
        Positions of L1..L5 in the barycentric inertial frame at time t.

        Parameters
        ----------
        t : float or Quantity
            Time since the rotating and inertial frames coincided
        omega : float or Quantity
            Angular velocity of the system (rad per time unit)

        Returns
        -------
        ndarray
            (5, 3) array of inertial positions, in meters if the separation
            is a quantity
        """
        t = to_si(t, u.s)
        omega = to_si(omega, u.rad / u.s)
        positions = np.vstack([rotating_to_inertial(p, t, omega) for p in self.without_units().as_array()])
        return with_unit(positions, u.m, is_quantity(self.separation))


def _check_index(index):
    if index not in _POINT_CLASSES:
        raise ValueError(f"Invalid Lagrange point index: {index}. Must be 1-5.")
