"""NRLMSISE-00 model drivers.

:func:`gts7` evaluates the thermosphere (above 72.5 km); :func:`gtd7` adds
the mesosphere, stratosphere and troposphere below it; :func:`gtd7d`
includes anomalous oxygen in the total mass density, as required for
satellite drag.

Every evaluation is a pure function of the coefficient tables, the
:class:`~msisjax.nrlmsise00.Input` and the
:class:`~msisjax.nrlmsise00.Flags`.  Intermediate node tables and the
magnetic activity terms are local values, so repeated or concurrent calls
never interact.  ``Flags`` must be a static argument under ``jax.jit``::

    jax.jit(gtd7d, static_argnums=2)
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array

from msisjax.coefficients import MsisCoefficients
from msisjax.constants import AMU_CGS, DEG2RAD, MSIS_DR, MSIS_ZN2_TOP
from msisjax.nrlmsise00._corrections import dnet
from msisjax.nrlmsise00._globe import (
    GlobeBasis,
    MagneticState,
    glob7s,
    globe7,
    globe_basis,
)
from msisjax.nrlmsise00._profiles import densm, densu, glatf, scaleh
from msisjax.nrlmsise00._species import (
    SPECIES,
    chemistry_correction,
    departure_correction,
    mixing_correction,
)
from msisjax.nrlmsise00._types import Flags, Input, Output

ZN2: tuple[float, ...] = (72.5, 55.0, 45.0, 32.5)
"""Node altitudes of the stratosphere/mesosphere layer [km]."""

ZN3: tuple[float, ...] = (32.5, 20.0, 15.0, 10.0, 0.0)
"""Node altitudes of the troposphere/stratosphere layer [km]."""

_ZMIX: float = 62.5
_N2_TURBOPAUSE_ALTL: float = 160.0
_LOWER_THERMOSPHERE_TOP: float = 300.0
_ZN1_TAIL: tuple[float, ...] = (0.0, 110.0, 100.0, 90.0, 72.5)


class ThermosphereResult(NamedTuple):
    """Output of :func:`gts7` plus the quantities :func:`gtd7` continues from.

    Attributes:
        d: Densities, shape ``(9,)``, same layout as :class:`Output`.
        t: Temperatures [K], shape ``(2,)``.
        dm28: Fully mixed N2 density at the evaluation altitude, in the
            same units as *d*.
        tn1: Lower thermosphere node temperatures [K], shape ``(5,)``.
        tgn1: Lower thermosphere end-node gradients, shape ``(2,)``.
        magnetic: Magnetic state after the last expansion.
    """

    d: Array
    t: Array
    dm28: Array
    tn1: Array
    tgn1: Array
    magnetic: MagneticState


def _select(cond: Array, new: MagneticState, old: MagneticState) -> MagneticState:
    return jax.tree_util.tree_map(lambda a, b: jnp.where(cond, a, b), new, old)


def _mass_density(d: Array, include_anomalous_o: bool = False) -> Array:
    """Total mass density from the number densities in *d* [g/cm^3 scale]."""
    total = (
        4.0 * d[0]
        + 16.0 * d[1]
        + 28.0 * d[2]
        + 32.0 * d[3]
        + 40.0 * d[4]
        + d[6]
        + 14.0 * d[7]
    )
    if include_anomalous_o:
        total = total + 16.0 * d[8]
    return AMU_CGS * total


def gts7(
    c: MsisCoefficients,
    inp: Input,
    flags: Flags,
    gsurf: Array,
    re: Array,
    basis: GlobeBasis | None = None,
) -> ThermosphereResult:
    """Thermospheric species densities and temperatures (alt > 72.5 km).

    N2 is evaluated first; it fixes the turbopause and the fully mixed
    reference density used by the other species.  The remaining species
    follow the descriptor table
    :data:`~msisjax.nrlmsise00._species.SPECIES`.  Anomalous oxygen uses
    its own isothermal scale height.

    Args:
        c: Model coefficients.
        inp: Model input.  ``inp.alt`` should be at least 72.5 km.
        flags: Model switches.
        gsurf: Surface gravity [cm/s^2].
        re: Effective Earth radius [km].
        basis: Precomputed :class:`GlobeBasis` for *inp*, if available.

    Returns:
        A :class:`ThermosphereResult`.
    """
    sw = flags.sw
    if basis is None:
        basis = globe_basis(inp)
    alt = inp.alt
    magnetic = MagneticState.initial(alt)

    za = c.pdl[1, 15]
    zn1 = jnp.asarray(_ZN1_TAIL, dtype=za.dtype).at[0].set(za)
    zlb = c.ptm[5]

    # Exospheric temperature, not significant below za
    g_pt, mag_pt = globe7(c.pt, inp, flags, basis, magnetic)
    above_za = alt > za
    tinf = c.ptm[0] * c.pt[0] * jnp.where(above_za, 1.0 + sw[16] * g_pt, 1.0)
    magnetic = _select(above_za, mag_pt, magnetic)

    # Temperature gradient at zlb, not significant below zn1[4]
    g_ps, mag_ps = globe7(c.ps, inp, flags, basis, magnetic)
    above_zn14 = alt > zn1[4]
    g0 = c.ptm[3] * c.ps[0] * jnp.where(above_zn14, 1.0 + sw[19] * g_ps, 1.0)
    magnetic = _select(above_zn14, mag_ps, magnetic)

    g_tlb, magnetic = globe7(c.pd[3], inp, flags, basis, magnetic)
    tlb = c.ptm[1] * (1.0 + sw[17] * g_tlb) * c.pd[3, 0]
    s = g0 / (tinf - tlb)

    # Lower thermosphere node temperatures, not significant above 300 km
    lower = alt < _LOWER_THERMOSPHERE_TOP

    def g7s(row: Array, magnetic: MagneticState = magnetic) -> Array:
        return jnp.where(lower, glob7s(row, inp, flags, basis, magnetic), 0.0)

    ptl, pma, ptm = c.ptl, c.pma, c.ptm
    tn1_4 = ptm[4] * ptl[3, 0] / (1.0 - sw[18] * sw[20] * g7s(ptl[3]))
    tn1 = jnp.stack(
        [
            tinf,
            ptm[6] * ptl[0, 0] / (1.0 - sw[18] * g7s(ptl[0])),
            ptm[2] * ptl[1, 0] / (1.0 - sw[18] * g7s(ptl[1])),
            ptm[7] * ptl[2, 0] / (1.0 - sw[18] * g7s(ptl[2])),
            tn1_4,
        ]
    )
    tgn1 = jnp.stack(
        [
            jnp.zeros_like(tinf),
            ptm[8]
            * pma[8, 0]
            * (1.0 + sw[18] * sw[20] * g7s(pma[8]))
            * tn1_4
            * tn1_4
            / (ptm[4] * ptl[3, 0]) ** 2,
        ]
    )

    def thermo(z, dlb, xm, alpha, t_inf=tinf, t_lb=tlb):
        return densu(z, dlb, t_inf, t_lb, xm, alpha, zlb, s, zn1, tn1, tgn1, gsurf, re)[0]

    # N2 variation factor at zlb and turbopause height
    g28, magnetic = globe7(c.pd[2], inp, flags, basis, magnetic)
    g28 = sw[21] * g28
    zhf = c.pdl[1, 24] * (
        1.0
        + sw[5]
        * c.pdl[0, 24]
        * jnp.sin(DEG2RAD * inp.g_lat)
        * jnp.cos(MSIS_DR * (inp.doy - c.pt[13]))
    )
    xmm = c.pdm[2, 4]
    z = alt
    d = [jnp.zeros_like(alt)] * 9

    # N2
    db28 = c.pdm[2, 0] * jnp.exp(g28) * c.pd[2, 0]
    d[2] = thermo(z, db28, 28.0, 0.0)
    zh28 = c.pdm[2, 2] * zhf
    zhm28 = c.pdm[2, 3] * c.pdl[1, 5]
    b28 = thermo(zh28, db28, 28.0 - xmm, -1.0)
    dm28 = thermo(z, b28, xmm, 0.0)
    if sw[15]:
        d[2] = jnp.where(z <= _N2_TURBOPAUSE_ALTL, dnet(d[2], dm28, zhm28, xmm, 28.0), d[2])

    flux_factor = 1.0 + sw[1] * c.pdl[0, 23] * (inp.f107a - 150.0)

    for profile in SPECIES:
        g, magnetic = globe7(c.pd[profile.pd_row], inp, flags, basis, magnetic)
        pdm = c.pdm[profile.pdm_row]
        db = pdm[0] * jnp.exp(sw[profile.density_switch] * g) * c.pd[profile.pd_row, 0]
        dd = thermo(z, db, profile.mass, profile.alpha)

        if sw[15]:
            below_turbopause = z <= profile.altl if profile.inclusive else z < profile.altl
            b = thermo(pdm[2], db, profile.mass - xmm, profile.alpha - 1.0)
            dm = thermo(z, b, xmm, 0.0)
            corrected = (
                dnet(dd, dm, zhm28, xmm, profile.mass)
                * mixing_correction(profile, c, z, b28, b, flux_factor)
                * chemistry_correction(profile, c, z)
            )
            dd = jnp.where(below_turbopause, corrected, dd)
            if profile.departure:
                dd = dd * departure_correction(c, z, flux_factor)

        d[profile.slot] = dd

    # Anomalous oxygen
    g16h, magnetic = globe7(c.pd[8], inp, flags, basis, magnetic)
    pdm = c.pdm[7]
    db16h = pdm[0] * jnp.exp(sw[21] * g16h) * c.pd[8, 0]
    tho = pdm[9] * c.pdl[0, 6]
    dd = thermo(z, db16h, 16.0, 0.0, t_inf=tho, t_lb=tho)
    zsht = pdm[5]
    zmho = pdm[4]
    zsho = scaleh(zmho, 16.0, tho, gsurf, re)
    d[8] = dd * jnp.exp(-zsht / zsho * (jnp.exp(-(z - zmho) / zsht) - 1.0))

    d[5] = _mass_density(d)

    # Temperature at altitude
    tz = thermo(jnp.abs(alt), 1.0, 0.0, 0.0)

    d = jnp.stack(d)
    if sw[0]:
        d = d * 1.0e6
        d = d.at[5].divide(1000.0)
        dm28 = dm28 * 1.0e6

    return ThermosphereResult(
        d=d,
        t=jnp.stack([tinf, tz]),
        dm28=dm28,
        tn1=tn1,
        tgn1=tgn1,
        magnetic=magnetic,
    )


def gtd7(coefficients: MsisCoefficients, inp: Input, flags: Flags = Flags()) -> Output:
    """NRLMSISE-00 main driver (thermosphere and lower atmosphere).

    Above 72.5 km the thermospheric model :func:`gts7` is used directly.
    Below, the temperature follows two further spline layers built from the
    ``pma``/``pavgm`` tables, the species blend linearly to full mixing
    under 62.5 km, and O, H, N and anomalous O are set to zero.

    The total mass density ``d[5]`` excludes anomalous oxygen; see
    :func:`gtd7d`.

    Args:
        coefficients: Model coefficients.
        inp: Model input.
        flags: Model switches.  Default: CGS units, every term enabled.

    Returns:
        :class:`Output` with densities and temperatures.

    Examples:
        ```python
        from msisjax.coefficients import load_default_coefficients
        from msisjax.nrlmsise00 import Flags, gtd7, make_input

        c = load_default_coefficients()
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0, lst=16.0)
        out = gtd7(c, inp, Flags())
        out.t  # [1250.54, 1241.42]
        ```
    """
    c = coefficients
    sw = flags.sw
    alt = inp.alt
    dtype = alt.dtype

    # Latitude variation of gravity, none for sw[2] = 0
    xlat = inp.g_lat if sw[2] else jnp.full_like(inp.g_lat, 45.0)
    gsurf, re = glatf(xlat)
    xmm = c.pdm[2, 4]

    basis = globe_basis(inp)
    altt = jnp.maximum(alt, MSIS_ZN2_TOP)
    upper = gts7(c, inp._replace(alt=altt), flags, gsurf, re, basis=basis)
    magnetic = upper.magnetic

    def g7s(row: Array) -> Array:
        return glob7s(row, inp, flags, basis, magnetic)

    pma, pavgm = c.pma, c.pavgm

    # Stratosphere/mesosphere nodes
    tn2_3 = pma[2, 0] * pavgm[2] / (1.0 - sw[20] * sw[22] * g7s(pma[2]))
    tn2 = jnp.stack(
        [
            upper.tn1[4],
            pma[0, 0] * pavgm[0] / (1.0 - sw[20] * g7s(pma[0])),
            pma[1, 0] * pavgm[1] / (1.0 - sw[20] * g7s(pma[1])),
            tn2_3,
        ]
    )
    tgn2_1 = (
        pavgm[8]
        * pma[9, 0]
        * (1.0 + sw[20] * sw[22] * g7s(pma[9]))
        * tn2_3
        * tn2_3
        / (pma[2, 0] * pavgm[2]) ** 2
    )
    tgn2 = jnp.stack([upper.tgn1[1], tgn2_1])

    # Troposphere/stratosphere nodes
    tn3_4 = pma[6, 0] * pavgm[6] / (1.0 - sw[22] * g7s(pma[6]))
    tn3 = jnp.stack(
        [
            tn2_3,
            pma[3, 0] * pavgm[3] / (1.0 - sw[22] * g7s(pma[3])),
            pma[4, 0] * pavgm[4] / (1.0 - sw[22] * g7s(pma[4])),
            pma[5, 0] * pavgm[5] / (1.0 - sw[22] * g7s(pma[5])),
            tn3_4,
        ]
    )
    tgn3_1 = (
        pma[7, 0]
        * pavgm[7]
        * (1.0 + sw[22] * g7s(pma[7]))
        * tn3_4
        * tn3_4
        / (pma[6, 0] * pavgm[6]) ** 2
    )
    tgn3 = jnp.stack([tgn2_1, tgn3_1])

    zn2 = jnp.asarray(ZN2, dtype=dtype)
    zn3 = jnp.asarray(ZN3, dtype=dtype)

    def middle(d0, xm, tz=0.0):
        return densm(alt, d0, xm, tz, zn3, tn3, tgn3, zn2, tn2, tgn2, gsurf, re)

    # Linear transition to full mixing below zn2[0]
    dmc = jnp.where(alt > _ZMIX, 1.0 - (MSIS_ZN2_TOP - alt) / (MSIS_ZN2_TOP - _ZMIX), 0.0)
    sd = upper.d
    dz28 = sd[2]
    dm28m = upper.dm28

    n2 = middle(dm28m, xmm)[0] * (1.0 + (sd[2] / dm28m - 1.0) * dmc)

    def scaled(slot: int, pdm_row: int) -> Array:
        ratio = c.pdm[pdm_row, 1]
        return n2 * ratio * (1.0 + (sd[slot] / (dz28 * ratio) - 1.0) * dmc)

    zero = jnp.zeros_like(alt)
    d_low = [
        scaled(0, 0),
        zero,
        n2,
        scaled(3, 3),
        scaled(4, 4),
        zero,
        zero,
        zero,
        zero,
    ]
    d_low[5] = _mass_density(d_low)
    if sw[0]:
        d_low[5] = d_low[5] / 1000.0
    d_low = jnp.stack(d_low)
    t_low = middle(1.0, 0.0)[1]

    above = alt >= MSIS_ZN2_TOP
    d = jnp.where(above, sd, d_low)
    t = jnp.stack([upper.t[0], jnp.where(above, upper.t[1], t_low)])
    return Output(d=d, t=t)


def gtd7d(coefficients: MsisCoefficients, inp: Input, flags: Flags = Flags()) -> Output:
    """NRLMSISE-00 driver with anomalous oxygen in the total mass density.

    Same as :func:`gtd7` but ``d[5]`` includes the anomalous oxygen
    contribution ``16 d[8]``, which matters for drag above about 500 km.

    Args:
        coefficients: Model coefficients.
        inp: Model input.
        flags: Model switches.

    Returns:
        :class:`Output` with the effective total mass density.
    """
    out = gtd7(coefficients, inp, flags)
    d5 = _mass_density(out.d, include_anomalous_o=True)
    if flags.sw[0]:
        d5 = d5 / 1000.0
    return out._replace(d=out.d.at[5].set(d5))
