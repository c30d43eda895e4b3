"""Chemistry, dissociation and turbopause corrections.

These blend the diffusive-equilibrium species profiles with their fully
mixed counterparts and apply the empirical departures from diffusive
equilibrium.  All functions are elementwise and JIT-compatible.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

_EXP_LIMIT: float = 70.0


def ccor(alt: ArrayLike, r: ArrayLike, h1: ArrayLike, zh: ArrayLike) -> Array:
    """Chemistry/dissociation correction factor.

    Args:
        alt: Altitude [km].
        r: Target ratio (log of the correction far below *zh*).
        h1: Transition scale length [km].
        zh: Altitude of half the correction [km].

    Returns:
        Correction factor, ``exp(r)`` far below *zh* and ``1`` far above.

    Examples:
        ```python
        from msisjax.nrlmsise00 import ccor
        ccor(1000.0, 15.0, 1.0, 2000.0)  # exp(15)
        ```
    """
    e = (alt - zh) / h1
    ex = jnp.exp(jnp.clip(e, -_EXP_LIMIT, _EXP_LIMIT))
    return jnp.where(
        e > _EXP_LIMIT,
        1.0,
        jnp.where(e < -_EXP_LIMIT, jnp.exp(r), jnp.exp(r / (1.0 + ex))),
    )


def ccor2(alt: ArrayLike, r: ArrayLike, h1: ArrayLike, zh: ArrayLike, h2: ArrayLike) -> Array:
    """Chemistry/dissociation correction with two transition scale lengths.

    Args:
        alt: Altitude [km].
        r: Target ratio.
        h1: First transition scale length [km].
        zh: Altitude of half the correction [km].
        h2: Second transition scale length [km].

    Returns:
        Correction factor.
    """
    e1 = (alt - zh) / h1
    e2 = (alt - zh) / h2
    ex1 = jnp.exp(jnp.clip(e1, -_EXP_LIMIT, _EXP_LIMIT))
    ex2 = jnp.exp(jnp.clip(e2, -_EXP_LIMIT, _EXP_LIMIT))
    return jnp.where(
        (e1 > _EXP_LIMIT) | (e2 > _EXP_LIMIT),
        1.0,
        jnp.where(
            (e1 < -_EXP_LIMIT) & (e2 < -_EXP_LIMIT),
            jnp.exp(r),
            jnp.exp(r / (1.0 + 0.5 * (ex1 + ex2))),
        ),
    )


def dnet(dd: ArrayLike, dm: ArrayLike, zhm: ArrayLike, xmm: ArrayLike, xm: ArrayLike) -> Array:
    """Turbopause correction combining diffusive and fully mixed densities.

    When both densities are positive the result moves smoothly from the
    mixed density *dm* (low altitude) to the diffusive density *dd* (high
    altitude).  Degenerate inputs are resolved without raising: both zero
    gives ``1``, a single zero returns the other density, and any other
    non-positive pair gives ``0``.

    Args:
        dd: Diffusive density.
        dm: Fully mixed density.
        zhm: Transition scale length [km].
        xmm: Fully mixed molecular weight.
        xm: Species molecular weight.

    Returns:
        Combined density.

    Examples:
        ```python
        from msisjax.nrlmsise00 import dnet
        dnet(0.0, 0.0, 1.0, 1.0, 1.0)  # 1.0
        dnet(1.0, 100.0, 1.0, 1.0, 1.0)  # 100.0
        ```
    """
    dtype = jnp.result_type(dd, dm, float)
    dd = jnp.asarray(dd, dtype=dtype)
    dm = jnp.asarray(dm, dtype=dtype)
    # Equal molecular weights give an infinite exponent, i.e. a hard switch
    a = zhm / (jnp.asarray(xmm, dtype=dtype) - xm)

    positive = (dm > 0.0) & (dd > 0.0)
    safe_dm = jnp.where(dm > 0.0, dm, 1.0)
    safe_dd = jnp.where(dd > 0.0, dd, 1.0)
    ylog = a * jnp.log(safe_dm / safe_dd)

    blended = jnp.where(
        ylog < -10.0,
        dd,
        jnp.where(ylog > 10.0, dm, dd * (1.0 + jnp.exp(ylog)) ** (1.0 / a)),
    )

    degenerate = jnp.where(
        (dd == 0.0) & (dm == 0.0),
        1.0,
        jnp.where(dm == 0.0, dd, jnp.where(dd == 0.0, dm, 0.0)),
    )
    return jnp.where(positive, blended, degenerate)
