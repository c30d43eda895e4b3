"""
The `constants` module defines the physical constants used by the NRLMSISE-00 model
and the atmosphere helpers built on top of it.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Time Constants
"""
Number of seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

# Model Constants
"""
Angular rate of the Earth's rotation relative to the Sun, used for the
universal time harmonics. Units: *rad/s*
"""
MSIS_SR = 7.2722e-5

"""
Angular rate of the annual cycle (2pi/365.25 rounded as in the published model). Units: *rad/day*
"""
MSIS_DR = 1.72142e-2

"""
Angular rate of the local solar time cycle (2pi/24 rounded as in the published model). Units: *rad/h*
"""
MSIS_HR = 0.2618

"""
Gas constant in the units used by the hydrostatic integrals (cm/s^2 gravity, km heights).
"""
MSIS_RGAS = 831.4

"""
Lower altitude bound of the thermospheric formulation. Units: *km*
"""
MSIS_ZN2_TOP = 72.5

"""
Atomic mass unit expressed in grams, as used in the model's mass density sum. Units: *g*
"""
AMU_CGS = 1.66e-24

"""
Atomic mass unit expressed in kilograms, consistent with ``AMU_CGS``. Units: *kg*
"""
AMU_SI = 1.66e-27

# Physical Constants
"""
Boltzmann constant. Units: *J/K*

References:

1. CODATA 2018, exact by definition of the SI kelvin
"""
K_BOLTZMANN = 1.380649e-23

"""
Specific gas constant of dry air. Units: *J/(kg K)*
"""
R_AIR = 287.058

"""
Ratio of specific heats of air (diatomic ideal gas). Units: *dimensionless*
"""
GAMMA_AIR = 1.4
