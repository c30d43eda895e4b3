"""
msisjax is an implementation of the NRLMSISE-00 empirical atmosphere model in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    SECONDS_PER_DAY,
    AMU_CGS,
    AMU_SI,
    K_BOLTZMANN,
    R_AIR,
    GAMMA_AIR,
)

from .config import set_dtype, get_dtype

from .coefficients import (
    MsisCoefficients,
    coefficients_from_arrays,
    load_coefficients_from_file,
    load_cached_coefficients,
    load_default_coefficients,
    download_coefficients_file,
)

from .nrlmsise00 import (
    ApCoef,
    Flags,
    Input,
    Output,
    make_input,
    gtd7,
    gtd7d,
)

from .solar_activity import SolarActivity, constant_solar_activity

from .atmosphere import (
    AtmosphereData,
    atmosphere_data,
    density,
    input_from_datetime,
    pressure,
    speed_of_sound,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "SECONDS_PER_DAY",
    "AMU_CGS",
    "AMU_SI",
    "K_BOLTZMANN",
    "R_AIR",
    "GAMMA_AIR",
    # Config
    "set_dtype",
    "get_dtype",
    # Coefficients
    "MsisCoefficients",
    "coefficients_from_arrays",
    "load_coefficients_from_file",
    "load_cached_coefficients",
    "load_default_coefficients",
    "download_coefficients_file",
    # Model
    "ApCoef",
    "Flags",
    "Input",
    "Output",
    "make_input",
    "gtd7",
    "gtd7d",
    # Solar activity
    "SolarActivity",
    "constant_solar_activity",
    # Atmosphere
    "AtmosphereData",
    "atmosphere_data",
    "density",
    "input_from_datetime",
    "pressure",
    "speed_of_sound",
]
