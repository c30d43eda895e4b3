"""Temperature and density profile evaluators.

``densu`` covers the thermosphere: a Bates temperature profile above the
joining altitude ``zn1[0]`` and a spline in inverse temperature down to
72.5 km.  ``densm`` covers the middle and lower atmosphere with two further
spline layers.  Both integrate the hydrostatic equation for the species
density and return ``(density, temperature)``.

Node arrays are never modified; any node replacement happens on local
copies.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from msisjax.constants import DEG2RAD, MSIS_RGAS
from msisjax.nrlmsise00._splines import spline, splini, splint

_EXPL_CAP: float = 50.0


def glatf(lat: ArrayLike) -> tuple[Array, Array]:
    """Latitude-dependent surface gravity and effective Earth radius.

    Args:
        lat: Geodetic latitude [degrees].

    Returns:
        Tuple of (surface gravity [cm/s^2], effective Earth radius [km]).
    """
    c2 = jnp.cos(2.0 * DEG2RAD * lat)
    gsurf = 980.616 * (1.0 - 0.0026373 * c2)
    re = 2.0 * gsurf / (3.085462e-6 + 2.27e-9 * c2) * 1.0e-5
    return gsurf, re


def zeta(zz: ArrayLike, zl: ArrayLike, re: ArrayLike) -> Array:
    """Geopotential height of *zz* above the reference altitude *zl* [km]."""
    return (zz - zl) * (re + zl) / (re + zz)


def scaleh(alt: ArrayLike, xm: ArrayLike, temp: ArrayLike, gsurf: ArrayLike, re: ArrayLike) -> Array:
    """Pressure scale height.

    Args:
        alt: Altitude [km].
        xm: Molecular weight [amu].
        temp: Temperature [K].
        gsurf: Surface gravity [cm/s^2].
        re: Effective Earth radius [km].

    Returns:
        Scale height [km].
    """
    g = gsurf / (1.0 + alt / re) ** 2
    return MSIS_RGAS * temp / (g * xm)


def _inverse_temperature_spline(
    zn: Array, tn: Array, tgn: Array, re: ArrayLike
) -> tuple[Array, Array, Array, Array]:
    """Set up the spline of ``1/T`` against normalized geopotential height.

    Returns:
        Tuple of (knots, inverse temperatures, second derivatives, zgdif).
    """
    n = zn.shape[0]
    z1 = zn[0]
    z2 = zn[n - 1]
    t1 = tn[0]
    t2 = tn[n - 1]
    zgdif = zeta(z2, z1, re)

    xs = zeta(zn, z1, re) / zgdif
    ys = 1.0 / tn
    yd1 = -tgn[0] / (t1 * t1) * zgdif
    yd2 = -tgn[1] / (t2 * t2) * zgdif * ((re + z2) / (re + z1)) ** 2
    return xs, ys, spline(xs, ys, yd1, yd2), zgdif


def densu(
    alt: ArrayLike,
    dlb: ArrayLike,
    tinf: ArrayLike,
    tlb: ArrayLike,
    xm: ArrayLike,
    alpha: ArrayLike,
    zlb: ArrayLike,
    s2: ArrayLike,
    zn1: Array,
    tn1: Array,
    tgn1: Array,
    gsurf: ArrayLike,
    re: ArrayLike,
) -> tuple[Array, Array]:
    """Thermospheric temperature and species density.

    Above the joining altitude ``zn1[0]`` the temperature follows the Bates
    profile ``tinf - (tinf - tlb) exp(-s2 zeta)``.  Below it a spline in
    inverse temperature is fitted through the nodes *zn1*, with the first
    node's temperature and gradient taken from the Bates profile at
    ``zn1[0]``.

    Args:
        alt: Altitude [km].
        dlb: Density at the lower boundary *zlb*.
        tinf: Exospheric temperature [K].
        tlb: Temperature at the lower boundary [K].
        xm: Species molecular weight [amu].  Zero returns the temperature in
            place of the density.
        alpha: Thermal diffusion coefficient.
        zlb: Lower boundary altitude [km].
        s2: Temperature profile shape parameter.
        zn1: Spline node altitudes [km], shape ``(5,)``, decreasing.
        tn1: Node temperatures [K], shape ``(5,)``.  ``tn1[0]`` is replaced
            by the Bates temperature at ``zn1[0]``.
        tgn1: End-node temperature gradients, shape ``(2,)``.  ``tgn1[0]`` is
            replaced by the Bates gradient at ``zn1[0]``.
        gsurf: Surface gravity [cm/s^2].
        re: Effective Earth radius [km].

    Returns:
        Tuple of (density, temperature [K]).
    """
    za = zn1[0]
    n = zn1.shape[0]
    z = jnp.maximum(alt, za)

    # Bates profile
    zg2 = zeta(z, zlb, re)
    tt = tinf - (tinf - tlb) * jnp.exp(-s2 * zg2)

    # Spline profile below za
    dta = (tinf - tt) * s2 * ((re + zlb) / (re + za)) ** 2
    tn1 = tn1.at[0].set(tt)
    tgn1 = tgn1.at[0].set(dta)
    xs, ys, y2out, zgdif = _inverse_temperature_spline(zn1, tn1, tgn1, re)
    x = zeta(jnp.maximum(alt, zn1[n - 1]), zn1[0], re) / zgdif
    tz_below = 1.0 / splint(xs, ys, y2out, x)

    below = alt < za
    tz = jnp.where(below, tz_below, tt)

    # Hydrostatic density above za
    glb = gsurf / (1.0 + zlb / re) ** 2
    gamma = xm * glb / (s2 * MSIS_RGAS * tinf)
    expl = jnp.exp(-s2 * gamma * zg2)
    expl = jnp.where((expl > _EXPL_CAP) | (tt <= 0.0), _EXPL_CAP, expl)
    densa = dlb * (tlb / tt) ** (1.0 + alpha + gamma) * expl

    # Continued through the spline layer below za
    glb = gsurf / (1.0 + zn1[0] / re) ** 2
    gamm = xm * glb * zgdif / MSIS_RGAS
    expl = gamm * splini(xs, ys, y2out, x)
    expl = jnp.where((expl > _EXPL_CAP) | (tz_below <= 0.0), _EXPL_CAP, expl)
    dens_below = densa * (tn1[0] / tz_below) ** (1.0 + alpha) * jnp.exp(-expl)

    density = jnp.where(below, dens_below, densa)
    density = jnp.where(xm == 0.0, tz, density)
    return density, tz


def _densm_layer(
    alt: ArrayLike,
    density: ArrayLike,
    xm: ArrayLike,
    zn: Array,
    tn: Array,
    tgn: Array,
    gsurf: ArrayLike,
    re: ArrayLike,
) -> tuple[Array, Array]:
    """Integrate one ``densm`` spline layer from ``zn[0]`` down to *alt*.

    Below ``zn[-1]`` the last spline interval is extrapolated.
    """
    xs, ys, y2out, zgdif = _inverse_temperature_spline(zn, tn, tgn, re)
    x = zeta(alt, zn[0], re) / zgdif
    tz = 1.0 / splint(xs, ys, y2out, x)

    glb = gsurf / (1.0 + zn[0] / re) ** 2
    gamm = xm * glb * zgdif / MSIS_RGAS
    expl = jnp.minimum(gamm * splini(xs, ys, y2out, x), _EXPL_CAP)
    layered = density * (tn[0] / tz) * jnp.exp(-expl)
    return jnp.where(xm != 0.0, layered, density), tz


def densm(
    alt: ArrayLike,
    d0: ArrayLike,
    xm: ArrayLike,
    tz: ArrayLike,
    zn3: Array,
    tn3: Array,
    tgn3: Array,
    zn2: Array,
    tn2: Array,
    tgn2: Array,
    gsurf: ArrayLike,
    re: ArrayLike,
) -> tuple[Array, Array]:
    """Middle and lower atmosphere temperature and density.

    Above ``zn2[0]`` the inputs pass through unchanged.  Between ``zn3[0]``
    and ``zn2[0]`` the stratosphere/mesosphere spline is used, and below
    ``zn3[0]`` the density is integrated further through the
    troposphere/stratosphere spline, which is extrapolated below the ground
    node for negative altitudes.

    Args:
        alt: Altitude [km].
        d0: Density at ``zn2[0]``.
        xm: Molecular weight [amu].  Zero returns the temperature in place
            of the density.
        tz: Temperature [K] returned unchanged above ``zn2[0]``.
        zn3: Lower layer node altitudes [km], shape ``(5,)``, decreasing.
        tn3: Lower layer node temperatures [K], shape ``(5,)``.
        tgn3: Lower layer end-node gradients, shape ``(2,)``.
        zn2: Upper layer node altitudes [km], shape ``(4,)``, decreasing.
        tn2: Upper layer node temperatures [K], shape ``(4,)``.
        tgn2: Upper layer end-node gradients, shape ``(2,)``.
        gsurf: Surface gravity [cm/s^2].
        re: Effective Earth radius [km].

    Returns:
        Tuple of (density, temperature [K]).

    Examples:
        ```python
        import jax.numpy as jnp
        from msisjax.nrlmsise00 import densm
        zn2 = jnp.array([72.5, 55.0, 45.0, 32.5])
        zn3 = jnp.array([32.5, 20.0, 15.0, 10.0, 0.0])
        tn2, tn3, tg = jnp.full(4, 250.0), jnp.full(5, 250.0), jnp.zeros(2)
        densm(72.5, 1.0, 1.0, 0.0, zn3, tn3, tg, zn2, tn2, tg, 980.0, 6356.0)
        # (1.0, 250.0)
        ```
    """
    alt_mid = jnp.maximum(alt, zn2[-1])
    d_mid, tz_mid = _densm_layer(alt_mid, d0, xm, zn2, tn2, tgn2, gsurf, re)
    d_low, tz_low = _densm_layer(alt, d_mid, xm, zn3, tn3, tgn3, gsurf, re)

    tz_out = jnp.where(alt > zn2[0], tz, jnp.where(alt > zn3[0], tz_mid, tz_low))
    d_out = jnp.where(alt > zn2[0], d0, jnp.where(alt > zn3[0], d_mid, d_low))
    d_out = jnp.where(xm == 0.0, tz_out, d_out)
    return d_out, tz_out
