"""
Coordinate frame transformations for two-body and restricted three-body work.

This module provides the rotations used by the orbital mechanics engine:

1. Perifocal frame: the orbital plane frame with x towards periapsis and z
   along the specific angular momentum.

2. Inertial frame: a non-rotating frame centred on the primary body (or on
   the barycenter for the restricted three-body problem).

3. Rotating frame: the synodic frame of a two-body system, rotating with the
   primaries at their mean motion, with origin at the barycenter.

All angles are in radians. Rotation matrices are active (they rotate vectors,
not axes), so that the perifocal-to-inertial matrix is Rz(Ω) Rx(i) Rz(ω).
"""

import numpy as np


def rotation_x(angle):
    """
    Active rotation matrix about the x-axis.

    Parameters
    ----------
    angle : float
        Rotation angle in radians

    Returns
    -------
    ndarray
        3x3 rotation matrix
    """
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ], dtype=np.float64)


def rotation_z(angle):
    """
    Active rotation matrix about the z-axis.

    Parameters
    ----------
    angle : float
        Rotation angle in radians

    Returns
    -------
    ndarray
        3x3 rotation matrix
    """
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ], dtype=np.float64)


def perifocal_to_inertial(raan, inclination, argp):
    """
    Rotation matrix from the perifocal (PQW) frame to the inertial frame.

    Parameters
    ----------
    raan : float
        Right ascension of the ascending node Ω (rad)
    inclination : float
        Inclination i (rad)
    argp : float
        Argument of periapsis ω (rad)

    Returns
    -------
    ndarray
        3x3 matrix Q such that r_inertial = Q @ r_perifocal

    Notes
    -----
    Q = Rz(Ω) Rx(i) Rz(ω), i.e. the classical 3-1-3 Euler sequence.
    """
    return rotation_z(raan) @ rotation_x(inclination) @ rotation_z(argp)


def rotating_to_inertial(position_rot, t, omega):
    """
    Convert a position from the rotating (synodic) frame to the inertial frame.

    Both frames share the barycenter as origin and the z-axis; the rotating
    frame has turned by θ = ω t at time t.

    Parameters
    ----------
    position_rot : array_like
        Position [x, y, z] in the rotating frame
    t : float
        Time since the frames coincided
    omega : float
        Angular velocity of the rotating frame (rad per time unit)

    Returns
    -------
    ndarray
        Position [X, Y, Z] in the inertial frame
    """
    return rotation_z(omega * t) @ np.asarray(position_rot, dtype=np.float64)
