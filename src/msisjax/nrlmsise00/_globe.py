"""G(L) spherical-harmonic expansions of the NRLMSISE-00 model.

:func:`globe7` evaluates the full thermospheric expansion of a 150-term
coefficient row; :func:`glob7s` evaluates the reduced expansion of a
100-term row used for the lower thermosphere and middle atmosphere.

Both expansions share the Legendre polynomials and local time harmonics of
the evaluation point (:class:`GlobeBasis`).  The reduced expansion also
reuses the magnetic activity terms of the most recent full expansion; that
state is threaded explicitly as a :class:`MagneticState` value rather than
kept between calls.

Switch-dependent terms are selected with Python ``if`` statements at trace
time; coefficient- and input-dependent terms use ``jnp.where``.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from msisjax.constants import DEG2RAD, MSIS_DR, MSIS_HR, MSIS_SR
from msisjax.nrlmsise00._types import Flags, Input

_NO_LONGITUDE: float = -1000.0


class GlobeBasis(NamedTuple):
    """Quantities shared by every expansion at one evaluation point.

    Attributes:
        plg: Associated Legendre functions of ``sin(lat)``, shape ``(4, 9)``,
            indexed ``[order, degree]``.
        ctloc: ``cos(hr*lst)``.
        stloc: ``sin(hr*lst)``.
        c2tloc: ``cos(2*hr*lst)``.
        s2tloc: ``sin(2*hr*lst)``.
        c3tloc: ``cos(3*hr*lst)``.
        s3tloc: ``sin(3*hr*lst)``.
        df: ``f107 - f107a``.
        dfa: ``f107a - 150``.
    """

    plg: Array
    ctloc: Array
    stloc: Array
    c2tloc: Array
    s2tloc: Array
    c3tloc: Array
    s3tloc: Array
    df: Array
    dfa: Array


class MagneticState(NamedTuple):
    """Magnetic activity terms carried from one expansion to the next.

    Attributes:
        apdf: Daily-Ap activity function.
        apt0: Ap-history activity function.
    """

    apdf: Array
    apt0: Array

    @classmethod
    def initial(cls, like: ArrayLike) -> MagneticState:
        """Zero state with the dtype of *like*."""
        zero = jnp.zeros_like(jnp.asarray(like))
        return cls(apdf=zero, apt0=zero)


def legendre(g_lat: ArrayLike) -> Array:
    """Associated Legendre functions used by the expansions.

    Args:
        g_lat: Geodetic latitude [degrees].

    Returns:
        Array of shape ``(4, 9)``; entries not used by the model are zero.
    """
    c = jnp.sin(g_lat * DEG2RAD)
    s = jnp.cos(g_lat * DEG2RAD)
    c2 = c * c
    c4 = c2 * c2
    s2 = s * s
    zero = jnp.zeros_like(c)

    m0 = [zero] * 9
    m0[1] = c
    m0[2] = 0.5 * (3.0 * c2 - 1.0)
    m0[3] = 0.5 * (5.0 * c * c2 - 3.0 * c)
    m0[4] = (35.0 * c4 - 30.0 * c2 + 3.0) / 8.0
    m0[5] = (63.0 * c2 * c2 * c - 70.0 * c2 * c + 15.0 * c) / 8.0
    m0[6] = (11.0 * c * m0[5] - 5.0 * m0[4]) / 6.0

    m1 = [zero] * 9
    m1[1] = s
    m1[2] = 3.0 * c * s
    m1[3] = 1.5 * (5.0 * c2 - 1.0) * s
    m1[4] = 2.5 * (7.0 * c2 * c - 3.0 * c) * s
    m1[5] = 1.875 * (21.0 * c4 - 14.0 * c2 + 1.0) * s
    m1[6] = (11.0 * c * m1[5] - 6.0 * m1[4]) / 5.0

    m2 = [zero] * 9
    m2[2] = 3.0 * s2
    m2[3] = 15.0 * s2 * c
    m2[4] = 7.5 * (7.0 * c2 - 1.0) * s2
    m2[5] = 3.0 * c * m2[4] - 2.0 * m2[3]
    m2[6] = (11.0 * c * m2[5] - 7.0 * m2[4]) / 4.0
    m2[7] = (13.0 * c * m2[6] - 8.0 * m2[5]) / 5.0

    m3 = [zero] * 9
    m3[3] = 15.0 * s2 * s
    m3[4] = 105.0 * s2 * s * c
    m3[5] = (9.0 * c * m3[4] - 7.0 * m3[3]) / 2.0
    m3[6] = (11.0 * c * m3[5] - 8.0 * m3[4]) / 3.0

    return jnp.stack([jnp.stack(m0), jnp.stack(m1), jnp.stack(m2), jnp.stack(m3)])


def globe_basis(inp: Input) -> GlobeBasis:
    """Compute the Legendre functions, local time harmonics and flux terms.

    Args:
        inp: Model input.

    Returns:
        The :class:`GlobeBasis` for *inp*.
    """
    tloc = inp.lst
    return GlobeBasis(
        plg=legendre(inp.g_lat),
        ctloc=jnp.cos(MSIS_HR * tloc),
        stloc=jnp.sin(MSIS_HR * tloc),
        c2tloc=jnp.cos(2.0 * MSIS_HR * tloc),
        s2tloc=jnp.sin(2.0 * MSIS_HR * tloc),
        c3tloc=jnp.cos(3.0 * MSIS_HR * tloc),
        s3tloc=jnp.sin(3.0 * MSIS_HR * tloc),
        df=inp.f107 - inp.f107a,
        dfa=inp.f107a - 150.0,
    )


# ---------------------------------------------------------------------------
# Magnetic activity functions (Ap history)
# ---------------------------------------------------------------------------


def g0(a: ArrayLike, p: Array) -> Array:
    """Ap-dependent activity function of a single 3-hour index."""
    p24 = jnp.abs(p[24])
    return a - 4.0 + (p[25] - 1.0) * (a - 4.0 + (jnp.exp(-p24 * (a - 4.0)) - 1.0) / p24)


def sumex(ex: ArrayLike) -> Array:
    """Normalization of the exponentially weighted Ap history."""
    return 1.0 + (1.0 - ex**19) / (1.0 - ex) * jnp.sqrt(ex)


def sg0(ex: ArrayLike, p: Array, ap: Array) -> Array:
    """Exponentially weighted activity function of the Ap history.

    Args:
        ex: Decay factor per 3-hour interval, in ``[0, 1)``.
        p: Coefficient row.
        ap: Ap history, shape ``(7,)``.

    Returns:
        Weighted activity value.
    """
    return (
        g0(ap[1], p)
        + (
            g0(ap[2], p) * ex
            + g0(ap[3], p) * ex * ex
            + g0(ap[4], p) * ex**3
            + (g0(ap[5], p) * ex**4 + g0(ap[6], p) * ex**12) * (1.0 - ex**8) / (1.0 - ex)
        )
    ) / sumex(ex)


# ---------------------------------------------------------------------------
# Expansions
# ---------------------------------------------------------------------------


def globe7(
    p: Array,
    inp: Input,
    flags: Flags,
    basis: GlobeBasis,
    magnetic: MagneticState,
) -> tuple[Array, MagneticState]:
    """Full thermospheric G(L) expansion of one coefficient row.

    Sums the F10.7, time independent, annual, semiannual, diurnal,
    semidiurnal, terdiurnal, magnetic activity, longitudinal, UT and mixed
    UT/longitude/magnetic terms, each gated by its switch.

    Args:
        p: Coefficient row, shape ``(150,)``.
        inp: Model input.
        flags: Model switches.
        basis: Shared basis for *inp*.
        magnetic: Magnetic state from the previous expansion.  In history
            mode a row whose ``p[51]`` is zero has no magnetic terms and
            leaves ``apt0`` unchanged.

    Returns:
        Tuple of (expansion value including ``p[30]``, updated magnetic
        state).
    """
    sw, swc = flags.sw, flags.swc
    plg = basis.plg
    df, dfa = basis.df, basis.dfa
    doy, sec, tloc, g_long = inp.doy, inp.sec, inp.lst, inp.g_long
    zero = jnp.zeros_like(dfa)
    t = [zero] * 15

    cd32 = jnp.cos(MSIS_DR * (doy - p[31]))
    cd18 = jnp.cos(2.0 * MSIS_DR * (doy - p[17]))
    cd14 = jnp.cos(MSIS_DR * (doy - p[13]))
    cd39 = jnp.cos(2.0 * MSIS_DR * (doy - p[38]))

    # F10.7
    t[0] = p[19] * df * (1.0 + p[59] * dfa) + p[20] * df * df + p[21] * dfa + p[29] * dfa * dfa
    f1 = 1.0 + (p[47] * dfa + p[19] * df + p[20] * df * df) * swc[1]
    f2 = 1.0 + (p[49] * dfa + p[19] * df + p[20] * df * df) * swc[1]

    # Time independent
    t[1] = (
        (p[1] * plg[0, 2] + p[2] * plg[0, 4] + p[22] * plg[0, 6])
        + p[14] * plg[0, 2] * dfa * swc[1]
        + p[26] * plg[0, 1]
    )

    # Symmetrical annual and semiannual
    t[2] = p[18] * cd32
    t[3] = (p[15] + p[16] * plg[0, 2]) * cd18

    # Asymmetrical annual and semiannual
    t[4] = f1 * (p[9] * plg[0, 1] + p[10] * plg[0, 3]) * cd14
    t[5] = p[37] * plg[0, 1] * cd39

    if sw[7]:
        t71 = p[11] * plg[1, 2] * cd14 * swc[5]
        t72 = p[12] * plg[1, 2] * cd14 * swc[5]
        t[6] = f2 * (
            (p[3] * plg[1, 1] + p[4] * plg[1, 3] + p[27] * plg[1, 5] + t71) * basis.ctloc
            + (p[6] * plg[1, 1] + p[7] * plg[1, 3] + p[28] * plg[1, 5] + t72) * basis.stloc
        )

    if sw[8]:
        t81 = (p[23] * plg[2, 3] + p[35] * plg[2, 5]) * cd14 * swc[5]
        t82 = (p[33] * plg[2, 3] + p[36] * plg[2, 5]) * cd14 * swc[5]
        t[7] = f2 * (
            (p[5] * plg[2, 2] + p[41] * plg[2, 4] + t81) * basis.c2tloc
            + (p[8] * plg[2, 2] + p[42] * plg[2, 4] + t82) * basis.s2tloc
        )

    if sw[14]:
        t[13] = f2 * (
            (p[39] * plg[3, 3] + (p[93] * plg[3, 4] + p[46] * plg[3, 6]) * cd14 * swc[5])
            * basis.s3tloc
            + (p[40] * plg[3, 3] + (p[94] * plg[3, 4] + p[48] * plg[3, 6]) * cd14 * swc[5])
            * basis.c3tloc
        )

    # Magnetic activity
    apdf, apt0 = magnetic
    history = flags.use_ap_history
    has_magnetic = p[51] != 0.0
    if history:
        exp1 = jnp.exp(
            -10800.0 * jnp.abs(p[51]) / (1.0 + p[138] * (45.0 - jnp.abs(inp.g_lat)))
        )
        exp1 = jnp.minimum(exp1, 0.99999)
        p_floor = p.at[24].set(jnp.maximum(p[24], 1.0e-4))
        apt0 = jnp.where(has_magnetic, sg0(exp1, p_floor, inp.ap_history), apt0)
        t[8] = jnp.where(
            has_magnetic,
            apt0
            * (
                p[50]
                + p[96] * plg[0, 2]
                + p[54] * plg[0, 4]
                + (p[125] * plg[0, 1] + p[126] * plg[0, 3] + p[127] * plg[0, 5]) * cd14 * swc[5]
                + (p[128] * plg[1, 1] + p[129] * plg[1, 3] + p[130] * plg[1, 5])
                * swc[7]
                * jnp.cos(MSIS_HR * (tloc - p[131]))
            ),
            0.0,
        )
    else:
        apd = inp.ap - 4.0
        p44 = jnp.where(p[43] < 0.0, 1.0e-5, p[43])
        p45 = p[44]
        apdf = apd + (p45 - 1.0) * (apd + (jnp.exp(-p44 * apd) - 1.0) / p44)
        if sw[9]:
            t[8] = apdf * (
                p[32]
                + p[45] * plg[0, 2]
                + p[34] * plg[0, 4]
                + (p[100] * plg[0, 1] + p[101] * plg[0, 3] + p[102] * plg[0, 5]) * cd14 * swc[5]
                + (p[121] * plg[1, 1] + p[122] * plg[1, 3] + p[123] * plg[1, 5])
                * swc[7]
                * jnp.cos(MSIS_HR * (tloc - p[124]))
            )

    if sw[10]:
        has_longitude = g_long > _NO_LONGITUDE
        lon = DEG2RAD * g_long

        if sw[11]:
            t[10] = jnp.where(
                has_longitude,
                (1.0 + p[80] * dfa * swc[1])
                * (
                    (
                        p[64] * plg[1, 2]
                        + p[65] * plg[1, 4]
                        + p[66] * plg[1, 6]
                        + p[103] * plg[1, 1]
                        + p[104] * plg[1, 3]
                        + p[105] * plg[1, 5]
                        + swc[5] * (p[109] * plg[1, 1] + p[110] * plg[1, 3] + p[111] * plg[1, 5]) * cd14
                    )
                    * jnp.cos(lon)
                    + (
                        p[90] * plg[1, 2]
                        + p[91] * plg[1, 4]
                        + p[92] * plg[1, 6]
                        + p[106] * plg[1, 1]
                        + p[107] * plg[1, 3]
                        + p[108] * plg[1, 5]
                        + swc[5] * (p[112] * plg[1, 1] + p[113] * plg[1, 3] + p[114] * plg[1, 5]) * cd14
                    )
                    * jnp.sin(lon)
                ),
                0.0,
            )

        if sw[12]:
            ut = (
                (1.0 + p[95] * plg[0, 1])
                * (1.0 + p[81] * dfa * swc[1])
                * (1.0 + p[119] * plg[0, 1] * swc[5] * cd14)
                * (p[68] * plg[0, 1] + p[69] * plg[0, 3] + p[70] * plg[0, 5])
                * jnp.cos(MSIS_SR * (sec - p[71]))
            )
            ut_long = (
                swc[11]
                * (p[76] * plg[2, 3] + p[77] * plg[2, 5] + p[78] * plg[2, 7])
                * jnp.cos(MSIS_SR * (sec - p[79]) + 2.0 * lon)
                * (1.0 + p[137] * dfa * swc[1])
            )
            t[11] = jnp.where(has_longitude, ut + ut_long, 0.0)

        if sw[13]:
            if history:
                t[12] = jnp.where(
                    has_longitude & has_magnetic,
                    apt0
                    * swc[11]
                    * (1.0 + p[132] * plg[0, 1])
                    * (p[52] * plg[1, 2] + p[98] * plg[1, 4] + p[67] * plg[1, 6])
                    * jnp.cos(DEG2RAD * (g_long - p[97]))
                    + apt0
                    * swc[11]
                    * swc[5]
                    * (p[133] * plg[1, 1] + p[134] * plg[1, 3] + p[135] * plg[1, 5])
                    * cd14
                    * jnp.cos(DEG2RAD * (g_long - p[136]))
                    + apt0
                    * swc[12]
                    * (p[55] * plg[0, 1] + p[56] * plg[0, 3] + p[57] * plg[0, 5])
                    * jnp.cos(MSIS_SR * (sec - p[58])),
                    0.0,
                )
            else:
                t[12] = jnp.where(
                    has_longitude,
                    apdf
                    * swc[11]
                    * (1.0 + p[120] * plg[0, 1])
                    * (p[60] * plg[1, 2] + p[61] * plg[1, 4] + p[62] * plg[1, 6])
                    * jnp.cos(DEG2RAD * (g_long - p[63]))
                    + apdf
                    * swc[11]
                    * swc[5]
                    * (p[115] * plg[1, 1] + p[116] * plg[1, 3] + p[117] * plg[1, 5])
                    * cd14
                    * jnp.cos(DEG2RAD * (g_long - p[118]))
                    + apdf
                    * swc[12]
                    * (p[83] * plg[0, 1] + p[84] * plg[0, 3] + p[85] * plg[0, 5])
                    * jnp.cos(MSIS_SR * (sec - p[75])),
                    0.0,
                )

    total = p[30]
    for i in range(14):
        total = total + abs(sw[i + 1]) * t[i]

    return total, MagneticState(apdf=apdf, apt0=apt0)


def glob7s(
    p: Array,
    inp: Input,
    flags: Flags,
    basis: GlobeBasis,
    magnetic: MagneticState,
) -> Array:
    """Reduced G(L) expansion for the lower thermosphere and below.

    Only parameter set 2 rows are valid; a row whose ``p[99]`` is zero is
    read as set 2, and any other set yields ``-1``.

    Args:
        p: Coefficient row, shape ``(100,)``.
        inp: Model input.
        flags: Model switches.
        basis: Shared basis for *inp*.
        magnetic: Magnetic state of the most recent :func:`globe7` call.

    Returns:
        Expansion value.
    """
    sw, swc = flags.sw, flags.swc
    plg = basis.plg
    doy = inp.doy
    zero = jnp.zeros_like(basis.dfa)
    t = [zero] * 14

    cd32 = jnp.cos(MSIS_DR * (doy - p[31]))
    cd18 = jnp.cos(2.0 * MSIS_DR * (doy - p[17]))
    cd14 = jnp.cos(MSIS_DR * (doy - p[13]))
    cd39 = jnp.cos(2.0 * MSIS_DR * (doy - p[38]))

    t[0] = p[21] * basis.dfa
    t[1] = (
        p[1] * plg[0, 2]
        + p[2] * plg[0, 4]
        + p[22] * plg[0, 6]
        + p[26] * plg[0, 1]
        + p[14] * plg[0, 3]
        + p[59] * plg[0, 5]
    )
    t[2] = (p[18] + p[47] * plg[0, 2] + p[29] * plg[0, 4]) * cd32
    t[3] = (p[15] + p[16] * plg[0, 2] + p[30] * plg[0, 4]) * cd18
    t[4] = (p[9] * plg[0, 1] + p[10] * plg[0, 3] + p[20] * plg[0, 5]) * cd14
    t[5] = p[37] * plg[0, 1] * cd39

    if sw[7]:
        t71 = p[11] * plg[1, 2] * cd14 * swc[5]
        t72 = p[12] * plg[1, 2] * cd14 * swc[5]
        t[6] = (p[3] * plg[1, 1] + p[4] * plg[1, 3] + t71) * basis.ctloc + (
            p[6] * plg[1, 1] + p[7] * plg[1, 3] + t72
        ) * basis.stloc

    if sw[8]:
        t81 = (p[23] * plg[2, 3] + p[35] * plg[2, 5]) * cd14 * swc[5]
        t82 = (p[33] * plg[2, 3] + p[36] * plg[2, 5]) * cd14 * swc[5]
        t[7] = (p[5] * plg[2, 2] + p[41] * plg[2, 4] + t81) * basis.c2tloc + (
            p[8] * plg[2, 2] + p[42] * plg[2, 4] + t82
        ) * basis.s2tloc

    if sw[14]:
        t[13] = p[39] * plg[3, 3] * basis.s3tloc + p[40] * plg[3, 3] * basis.c3tloc

    if sw[9] == 1:
        t[8] = magnetic.apdf * (p[32] + p[45] * plg[0, 2] * swc[2])
    elif sw[9] == -1:
        t[8] = p[50] * magnetic.apt0 + p[96] * plg[0, 2] * magnetic.apt0 * swc[2]

    if sw[10] and sw[11]:
        lon = DEG2RAD * inp.g_long
        t[10] = jnp.where(
            inp.g_long > _NO_LONGITUDE,
            (
                1.0
                + plg[0, 1]
                * (
                    p[80] * swc[5] * jnp.cos(MSIS_DR * (doy - p[81]))
                    + p[85] * swc[6] * jnp.cos(2.0 * MSIS_DR * (doy - p[86]))
                )
                + p[83] * swc[3] * jnp.cos(MSIS_DR * (doy - p[84]))
                + p[87] * swc[4] * jnp.cos(2.0 * MSIS_DR * (doy - p[88]))
            )
            * (
                (
                    p[64] * plg[1, 2]
                    + p[65] * plg[1, 4]
                    + p[66] * plg[1, 6]
                    + p[74] * plg[1, 1]
                    + p[75] * plg[1, 3]
                    + p[76] * plg[1, 5]
                )
                * jnp.cos(lon)
                + (
                    p[90] * plg[1, 2]
                    + p[91] * plg[1, 4]
                    + p[92] * plg[1, 6]
                    + p[77] * plg[1, 1]
                    + p[78] * plg[1, 3]
                    + p[79] * plg[1, 5]
                )
                * jnp.sin(lon)
            ),
            0.0,
        )

    total = zero
    for i in range(14):
        total = total + abs(sw[i + 1]) * t[i]

    parameter_set = jnp.where(p[99] == 0.0, 2.0, p[99])
    return jnp.where(parameter_set == 2.0, total, -1.0)
