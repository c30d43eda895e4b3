"""Descriptor table of the thermospheric minor species.

N2 is evaluated first because it defines the mixed atmosphere that every
other species blends into; the remaining species share one evaluation
path in :func:`~msisjax.nrlmsise00._driver.gts7`, parameterized by the
entries below.  Coefficient locations are ``(row, column)`` pairs into the
``pdl`` table.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from msisjax.coefficients import MsisCoefficients
from msisjax.nrlmsise00._corrections import ccor, ccor2

PdlIndex = tuple[int, int]


class SpeciesProfile(NamedTuple):
    """Static description of one species in the thermospheric loop.

    Attributes:
        name: Chemical symbol.
        slot: Index in the output density array.
        pd_row: Row of the ``pd`` table holding its density expansion.
        pdm_row: Row of the ``pdm`` table holding its profile parameters.
        mass: Molecular weight [amu].
        alpha: Thermal diffusion coefficient.
        altl: Altitude [km] below which the turbopause correction applies.
        inclusive: Whether the correction also applies at exactly *altl*.
        density_switch: Switch gating the density variation expansion.
        mixing_h: ``pdl`` entry scaling the mixing transition length.
        mixing_z: ``pdl`` entry scaling the mixing transition altitude.
        ratio_scale: ``pdl`` entry scaling the ground mixing ratio, if any.
        fixed_ratio: ``pdl`` entry giving a solar-flux dependent target
            ratio in place of the ground mixing ratio.
        mixing_h2: ``pdl`` entry of the second transition length; present
            only for species using the two-scale correction.
        chemistry: ``pdl`` entries ``(ratio, length, altitude)`` of the
            chemistry/dissociation correction, if any.
        departure: Whether the departure-from-equilibrium correction of
            molecular oxygen applies.
    """

    name: str
    slot: int
    pd_row: int
    pdm_row: int
    mass: float
    alpha: float
    altl: float
    inclusive: bool
    density_switch: int
    mixing_h: PdlIndex
    mixing_z: PdlIndex
    ratio_scale: PdlIndex | None = None
    fixed_ratio: PdlIndex | None = None
    mixing_h2: PdlIndex | None = None
    chemistry: tuple[PdlIndex, PdlIndex, PdlIndex] | None = None
    departure: bool = False


SPECIES: tuple[SpeciesProfile, ...] = (
    SpeciesProfile(
        name="He", slot=0, pd_row=0, pdm_row=0, mass=4.0, alpha=-0.38,
        altl=200.0, inclusive=False, density_switch=21,
        mixing_h=(1, 1), mixing_z=(1, 0),
    ),
    SpeciesProfile(
        name="O", slot=1, pd_row=1, pdm_row=1, mass=16.0, alpha=0.0,
        altl=300.0, inclusive=True, density_switch=21,
        mixing_h=(1, 3), mixing_z=(1, 2), fixed_ratio=(1, 16), mixing_h2=(1, 4),
        chemistry=((1, 14), (1, 13), (1, 12)),
    ),
    SpeciesProfile(
        name="O2", slot=3, pd_row=4, pdm_row=3, mass=32.0, alpha=0.0,
        altl=250.0, inclusive=True, density_switch=21,
        mixing_h=(1, 7), mixing_z=(1, 6), departure=True,
    ),
    SpeciesProfile(
        name="Ar", slot=4, pd_row=5, pdm_row=4, mass=40.0, alpha=0.17,
        altl=240.0, inclusive=True, density_switch=20,
        mixing_h=(1, 9), mixing_z=(1, 8),
    ),
    SpeciesProfile(
        name="H", slot=6, pd_row=6, pdm_row=5, mass=1.0, alpha=-0.38,
        altl=320.0, inclusive=True, density_switch=21,
        mixing_h=(1, 11), mixing_z=(1, 10), ratio_scale=(1, 17),
        chemistry=((1, 20), (1, 19), (1, 18)),
    ),
    SpeciesProfile(
        name="N", slot=7, pd_row=7, pdm_row=6, mass=14.0, alpha=0.0,
        altl=450.0, inclusive=True, density_switch=21,
        mixing_h=(0, 1), mixing_z=(0, 0), ratio_scale=(0, 2),
        chemistry=((0, 5), (0, 4), (0, 3)),
    ),
)
"""Species evaluated by the shared loop, in evaluation order."""


def _pdl(c: MsisCoefficients, index: PdlIndex) -> Array:
    return c.pdl[index[0], index[1]]


def mixing_correction(
    profile: SpeciesProfile,
    c: MsisCoefficients,
    z: Array,
    b28: Array,
    b: Array,
    flux_factor: Array,
) -> Array:
    """Correction towards the specified mixing ratio at the ground.

    Args:
        profile: Species descriptor.
        c: Model coefficients.
        z: Altitude [km].
        b28: Mixed N2 density at the N2 turbopause.
        b: Mixed density of the species at its turbopause.
        flux_factor: ``1 + sw[1]*pdl[0][23]*(f107a - 150)``.

    Returns:
        Multiplicative correction.
    """
    pdm = c.pdm[profile.pdm_row]
    hc = pdm[5] * _pdl(c, profile.mixing_h)
    zc = pdm[4] * _pdl(c, profile.mixing_z)

    if profile.fixed_ratio is not None:
        rl = pdm[1] * _pdl(c, profile.fixed_ratio) * flux_factor
    elif profile.ratio_scale is not None:
        rl = jnp.log(b28 * pdm[1] * jnp.abs(_pdl(c, profile.ratio_scale)) / b)
    else:
        rl = jnp.log(b28 * pdm[1] / b)

    if profile.mixing_h2 is not None:
        return ccor2(z, rl, hc, zc, pdm[5] * _pdl(c, profile.mixing_h2))
    return ccor(z, rl, hc, zc)


def chemistry_correction(profile: SpeciesProfile, c: MsisCoefficients, z: Array) -> Array:
    """Chemistry/dissociation correction; ``1`` for species without one."""
    if profile.chemistry is None:
        return jnp.ones_like(z)
    pdm = c.pdm[profile.pdm_row]
    ratio, length, altitude = profile.chemistry
    return ccor(z, pdm[3] * _pdl(c, ratio), pdm[7] * _pdl(c, length), pdm[6] * _pdl(c, altitude))


def departure_correction(c: MsisCoefficients, z: Array, flux_factor: Array) -> Array:
    """Departure of molecular oxygen from diffusive equilibrium."""
    pdm = c.pdm[3]
    return ccor2(
        z,
        pdm[3] * c.pdl[1, 23] * flux_factor,
        pdm[7] * c.pdl[1, 22],
        pdm[6] * c.pdl[1, 21],
        pdm[7] * c.pdl[0, 22],
    )
