"""Atmosphere quantities in SI units built on NRLMSISE-00.

Bridges calendar time and geodetic position to the model
:class:`~msisjax.nrlmsise00.Input`, and repackages the model output as
mass densities, temperatures, pressure and speed of sound.

All evaluations use :func:`~msisjax.nrlmsise00.gtd7d`, so the total
density includes anomalous oxygen.
"""

from __future__ import annotations

import datetime
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from msisjax.coefficients import MsisCoefficients
from msisjax.config import get_dtype
from msisjax.constants import AMU_SI, GAMMA_AIR, K_BOLTZMANN, R_AIR, SECONDS_PER_DAY
from msisjax.nrlmsise00 import ApCoef, Flags, Input, gtd7d
from msisjax.solar_activity import SolarActivity

_SPECIES_MASS: tuple[float, ...] = (4.0, 16.0, 28.0, 32.0, 40.0, 0.0, 1.0, 14.0, 16.0)
"""Molecular weight [amu] per output slot; zero for the total density slot."""


class AtmosphereData(NamedTuple):
    """Atmosphere state at one point, in SI units.

    Attributes:
        density: Total mass density including anomalous oxygen [kg/m^3].
        temperature: Local temperature [K].
        exospheric_temperature: Exospheric temperature [K].
        density_he: Helium mass density [kg/m^3].
        density_o: Atomic oxygen mass density [kg/m^3].
        density_n2: Molecular nitrogen mass density [kg/m^3].
        density_o2: Molecular oxygen mass density [kg/m^3].
        density_ar: Argon mass density [kg/m^3].
        density_h: Hydrogen mass density [kg/m^3].
        density_n: Atomic nitrogen mass density [kg/m^3].
        density_anomalous_o: Anomalous oxygen mass density [kg/m^3].
        number_density: Total number density [m^-3].
        mean_atomic_mass: Mean particle mass [amu].
    """

    density: Array
    temperature: Array
    exospheric_temperature: Array
    density_he: Array
    density_o: Array
    density_n2: Array
    density_o2: Array
    density_ar: Array
    density_h: Array
    density_n: Array
    density_anomalous_o: Array
    number_density: Array
    mean_atomic_mass: Array


def input_from_datetime(
    epoch: datetime.datetime,
    geod: ArrayLike,
    activity: SolarActivity,
) -> Input:
    """Build a model :class:`~msisjax.nrlmsise00.Input` from calendar time.

    Naive datetimes are taken as UTC.  The local solar time is the
    longitude-shifted UT, ``sec/3600 + lon/15``.

    Args:
        epoch: Evaluation time.
        geod: Geodetic position ``[lon_deg, lat_deg, alt_m]``.
        activity: Solar and geomagnetic activity for *epoch*.

    Returns:
        Model input with the Ap history attached.

    Examples:
        ```python
        import datetime
        from msisjax.atmosphere import input_from_datetime
        from msisjax.solar_activity import constant_solar_activity

        epoch = datetime.datetime(2020, 6, 1, 12, 0, 0)
        inp = input_from_datetime(epoch, [-74.0, 40.7, 400e3], constant_solar_activity())
        ```
    """
    if epoch.tzinfo is not None:
        epoch = epoch.astimezone(datetime.timezone.utc)

    dtype = get_dtype()
    geod = jnp.asarray(geod, dtype=dtype)
    lon_deg = geod[0]
    lat_deg = geod[1]
    alt_km = geod[2] / 1000.0

    doy = epoch.timetuple().tm_yday
    sec = epoch.hour * 3600.0 + epoch.minute * 60.0 + epoch.second + epoch.microsecond * 1.0e-6
    sec = sec % SECONDS_PER_DAY

    ap = jnp.asarray(activity.ap, dtype=dtype)
    return Input(
        doy=jnp.asarray(doy, dtype=dtype),
        sec=jnp.asarray(sec, dtype=dtype),
        alt=alt_km,
        g_lat=lat_deg,
        g_long=lon_deg,
        lst=sec / 3600.0 + lon_deg / 15.0,
        f107a=jnp.asarray(activity.f107a, dtype=dtype),
        f107=jnp.asarray(activity.f107, dtype=dtype),
        ap=ap[0],
        ap_a=ApCoef(ap),
    )


def _si_flags(flags: Flags | None) -> Flags:
    if flags is None:
        return Flags.si()
    return flags.with_switch(0, 1)


def atmosphere_data(
    coefficients: MsisCoefficients,
    inp: Input,
    flags: Flags | None = None,
) -> AtmosphereData:
    """Evaluate the model and return SI atmosphere quantities.

    Args:
        coefficients: Model coefficients.
        inp: Model input.
        flags: Model switches.  Switch 0 is always forced to SI units.
            Default: every term enabled.

    Returns:
        :class:`AtmosphereData` for *inp*.  The partial densities sum to
        the total density.
    """
    out = gtd7d(coefficients, inp, _si_flags(flags))
    d = out.d
    mass = jnp.asarray(_SPECIES_MASS, dtype=d.dtype)
    partial = d * mass * AMU_SI

    number_density = jnp.sum(d) - d[5]
    mean_atomic_mass = jnp.where(
        number_density > 0.0, d[5] / (number_density * AMU_SI), 0.0
    )

    return AtmosphereData(
        density=d[5],
        temperature=out.t[1],
        exospheric_temperature=out.t[0],
        density_he=partial[0],
        density_o=partial[1],
        density_n2=partial[2],
        density_o2=partial[3],
        density_ar=partial[4],
        density_h=partial[6],
        density_n=partial[7],
        density_anomalous_o=partial[8],
        number_density=number_density,
        mean_atomic_mass=mean_atomic_mass,
    )


def density(
    coefficients: MsisCoefficients,
    inp: Input,
    flags: Flags | None = None,
) -> Array:
    """Total mass density [kg/m^3], including anomalous oxygen.

    Args:
        coefficients: Model coefficients.
        inp: Model input.
        flags: Model switches.  Switch 0 is always forced to SI units.

    Returns:
        Total mass density (scalar).
    """
    return gtd7d(coefficients, inp, _si_flags(flags)).d[5]


def pressure(data: AtmosphereData) -> Array:
    """Ideal gas pressure ``n k_B T`` [Pa]."""
    return data.number_density * K_BOLTZMANN * data.temperature


def speed_of_sound(data: AtmosphereData) -> Array:
    """Speed of sound of dry air at the local temperature [m/s]."""
    return jnp.sqrt(GAMMA_AIR * R_AIR * data.temperature)
