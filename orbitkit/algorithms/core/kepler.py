"""
Kepler's equation and anomaly conversions.

This module provides the closed-form anomaly conversions and the iterative
Kepler equation solvers used by the two-body propagator:

- Elliptical orbits:  M = E - e·sin(E)
- Hyperbolic orbits:  M = e·sinh(F) - F

Both equations are solved with Newton-Raphson iteration inside Numba-compiled
kernels. Each solver runs within a fixed iteration budget and raises
:class:`~orbitkit.errors.ConvergenceFailureError` when the step size has not
dropped below the tolerance by the end of it.
"""

import logging

import numba
import numpy as np

from orbitkit.errors import ConvergenceFailureError, DegenerateStateError, UnsupportedOrbitTypeError
from orbitkit.utils.constants import KEPLER_MAX_ITER, KEPLER_TOL

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


def wrap_to_2pi(angle):
    """Wrap an angle into [0, 2π)."""
    wrapped = np.mod(angle, TWO_PI)
    # np.mod can round up to exactly 2π for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return float(wrapped)


@numba.njit(fastmath=True, cache=True)
def _kepler_newton(M, e, E0, tol, max_iter):
    E = E0
    step = 0.0
    for k in range(1, max_iter + 1):
        f = E - e * np.sin(E) - M
        fp = 1.0 - e * np.cos(E)
        step = f / fp
        E = E - step
        if abs(step) < tol:
            return E, k, abs(step), True
    return E, max_iter, abs(step), False


@numba.njit(fastmath=True, cache=True)
def _kepler_hyperbolic_newton(M, e, F0, tol, max_iter):
    F = F0
    step = 0.0
    for k in range(1, max_iter + 1):
        f = e * np.sinh(F) - F - M
        fp = e * np.cosh(F) - 1.0
        step = f / fp
        F = F - step
        if abs(step) < tol:
            return F, k, abs(step), True
    return F, max_iter, abs(step), False


def solve_kepler(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Solve Kepler's equation M = E - e·sin(E) for the eccentric anomaly.

    Parameters
    ----------
    M : float
        Mean anomaly (rad). Wrapped into [0, 2π) before solving.
    e : float
        Eccentricity, 0 <= e < 1
    tol : float, optional
        Convergence tolerance on the Newton step (rad). Default is 1e-10.
    max_iter : int, optional
        Iteration budget. Default is 50.

    Returns
    -------
    float
        Eccentric anomaly E (rad)

    Raises
    ------
    UnsupportedOrbitTypeError
        If e is outside [0, 1).
    ConvergenceFailureError
        If the iteration budget is exhausted.

    Notes
    -----
    The initial guess is E₀ = M, switching to E₀ = π for e >= 0.8 where
    starting from M can overshoot near periapsis.
    """
    if not 0.0 <= e < 1.0:
        raise UnsupportedOrbitTypeError(f"Elliptical Kepler equation requires 0 <= e < 1, got e = {e}")

    M = wrap_to_2pi(M)
    E0 = M if e < 0.8 else np.pi
    E, iterations, step, converged = _kepler_newton(M, float(e), E0, float(tol), int(max_iter))
    if not converged:
        logger.warning(f"Kepler solver did not converge: M={M:.6e}, e={e:.6e}, last step={step:.3e}")
        raise ConvergenceFailureError(
            f"Kepler's equation did not converge within {iterations} iterations "
            f"(M = {M}, e = {e}, last step = {step:.3e})",
            iterations=iterations, residual=step,
        )
    logger.debug(f"Kepler solver converged in {iterations} iterations (M={M:.6f}, e={e:.6f})")
    return float(E)


def solve_kepler_hyperbolic(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Solve the hyperbolic Kepler equation M = e·sinh(F) - F.

    Parameters
    ----------
    M : float
        Hyperbolic mean anomaly (rad), unbounded
    e : float
        Eccentricity, e > 1
    tol : float, optional
        Convergence tolerance on the Newton step. Default is 1e-10.
    max_iter : int, optional
        Iteration budget. Default is 50.

    Returns
    -------
    float
        Hyperbolic anomaly F
    """
    if not e > 1.0:
        raise UnsupportedOrbitTypeError(f"Hyperbolic Kepler equation requires e > 1, got e = {e}")

    M = float(M)
    F0 = np.arcsinh(M / e)
    F, iterations, step, converged = _kepler_hyperbolic_newton(M, float(e), F0, float(tol), int(max_iter))
    if not converged:
        logger.warning(f"Hyperbolic Kepler solver did not converge: M={M:.6e}, e={e:.6e}")
        raise ConvergenceFailureError(
            f"Hyperbolic Kepler equation did not converge within {iterations} iterations "
            f"(M = {M}, e = {e}, last step = {step:.3e})",
            iterations=iterations, residual=step,
        )
    logger.debug(f"Hyperbolic Kepler solver converged in {iterations} iterations")
    return float(F)


def true_to_eccentric_anomaly(nu, e):
    """Convert true anomaly to eccentric anomaly, result in [0, 2π)."""
    E = 2.0 * np.arctan2(np.sqrt(1.0 - e) * np.sin(nu / 2.0),
                         np.sqrt(1.0 + e) * np.cos(nu / 2.0))
    return wrap_to_2pi(E)


def eccentric_to_true_anomaly(E, e):
    """Convert eccentric anomaly to true anomaly, result in [0, 2π)."""
    nu = 2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(E / 2.0),
                          np.sqrt(1.0 - e) * np.cos(E / 2.0))
    return wrap_to_2pi(nu)


def eccentric_to_mean_anomaly(E, e):
    """Kepler's equation in the forward direction: M = E - e·sin(E)."""
    return E - e * np.sin(E)


def mean_to_true_anomaly(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """Convert mean anomaly to true anomaly for an elliptical orbit."""
    return eccentric_to_true_anomaly(solve_kepler(M, e, tol, max_iter), e)


def true_to_hyperbolic_anomaly(nu, e):
    """
    Convert true anomaly to hyperbolic anomaly.

    Raises
    ------
    DegenerateStateError
        If the true anomaly lies beyond the asymptotes, |ν| >= arccos(-1/e).
    """
    arg = np.sqrt((e - 1.0) / (e + 1.0)) * np.tan(nu / 2.0)
    if abs(arg) >= 1.0:
        raise DegenerateStateError(
            f"True anomaly {nu} rad lies outside the hyperbola's asymptotes (e = {e})"
        )
    return float(2.0 * np.arctanh(arg))


def hyperbolic_to_true_anomaly(F, e):
    """Convert hyperbolic anomaly to true anomaly, result in [0, 2π)."""
    nu = 2.0 * np.arctan2(np.sqrt(e + 1.0) * np.sinh(F / 2.0),
                          np.sqrt(e - 1.0) * np.cosh(F / 2.0))
    return wrap_to_2pi(nu)


def hyperbolic_to_mean_anomaly(F, e):
    """Hyperbolic Kepler equation in the forward direction: M = e·sinh(F) - F."""
    return e * np.sinh(F) - F
