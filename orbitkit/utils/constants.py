"""
Physical constants and solver defaults for orbital mechanics calculations.

This module contains fundamental physical constants and system-specific values
used throughout the package. Physical constants are defined in SI units and
stored as numpy float64 data types for precision and consistency in numerical
computations.

The module includes:
1. Universal physical constants (gravitational constant)
2. The astronomical unit
3. Masses, radii and gravitational parameters of common bodies
4. Characteristic distances for common two-body systems
5. Default tolerances and iteration budgets for the iterative solvers

References
----------
Values are based on standard IAU (International Astronomical Union) and
NASA/JPL data. For detailed sources, see:
- IAU 2015 Resolution B3 (https://www.iau.org/static/resolutions/IAU2015_English.pdf)
- NASA JPL Solar System Dynamics (https://ssd.jpl.nasa.gov/)
"""

import numpy as np

# Universal physical constants
#-----------------------------

#: float: Universal gravitational constant (m^3 kg^-1 s^-2)
G = np.float64(6.67430e-11)  # m^3 kg^-1 s^-2

# Astronomical unit
#------------------

#: float: Astronomical unit (m)
AU = np.float64(1.495978707e11)  # m

# Celestial body masses
#---------------------

#: float: Mass of Sun (kg)
M_sun = np.float64(1.98847e30)  # kg

#: float: Mass of Earth (kg)
M_earth = np.float64(5.972e24)  # kg

#: float: Mass of Moon (kg)
M_moon = np.float64(7.348e22)  # kg

#: float: Mass of Jupiter (kg)
M_jupiter = np.float64(1.898e27)  # kg

# Body radii
#-----------

#: float: Radius of Earth (m)
R_earth = np.float64(6378.137e3)  # m

# Gravitational parameters
#-------------------------

#: float: Standard gravitational parameter of the Sun (m^3 s^-2)
MU_sun = np.float64(1.32712440018e20)  # m^3 s^-2

#: float: Standard gravitational parameter of the Earth (m^3 s^-2)
MU_earth = np.float64(3.986004418e14)  # m^3 s^-2

#: float: Standard gravitational parameter of the Earth (km^3 s^-2)
MU_earth_km = np.float64(398600.4418)  # km^3 s^-2

# Characteristic distances
#------------------------

#: float: Average Earth-Sun distance (m)
R_earth_sun = np.float64(149.6e9)  # m

#: float: Average Earth-Moon distance (m)
R_earth_moon = np.float64(384400e3)  # m

# Lagrange point stability
#-------------------------

#: float: Minimum heavier/lighter mass ratio for stable L4/L5 points (Routh criterion)
MIN_LAGRANGE_MASS_RATIO = 24.96

# Solver defaults
#----------------

#: float: Convergence tolerance on the eccentric anomaly step (rad)
KEPLER_TOL = 1e-10

#: int: Iteration budget of the Kepler equation solvers
KEPLER_MAX_ITER = 50

#: float: Convergence tolerance of the collinear Lagrange point root finder
LAGRANGE_TOL = 1e-28

#: int: Iteration budget of the collinear Lagrange point root finder
LAGRANGE_MAX_ITER = 50

#: float: Threshold below which eccentricity and sin(inclination) count as zero
ANGLE_TOL = 1e-11
