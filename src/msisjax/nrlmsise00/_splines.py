"""Cubic spline routines used by the NRLMSISE-00 profile evaluators.

The knot count is taken from the array shapes and is always small (four or
five nodes), so every loop is unrolled at trace time.  All routines are
JIT-compatible and work under ``jax.vmap``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

_NATURAL_THRESHOLD: float = 0.99e30
"""End-point derivatives above this value select a natural spline end."""


def spline(x: Array, y: Array, yp1: ArrayLike, ypn: ArrayLike) -> Array:
    """Compute second derivatives of the interpolating cubic spline.

    Args:
        x: Strictly increasing knot abscissae, shape ``(n,)``.
        y: Knot ordinates, shape ``(n,)``.
        yp1: First derivative at ``x[0]``.  Values above ``0.99e30`` select
            a natural (zero second derivative) end condition.
        ypn: First derivative at ``x[n-1]``, same convention as *yp1*.

    Returns:
        Second derivatives at the knots, shape ``(n,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from msisjax.nrlmsise00 import spline
        x = jnp.array([0.0, 1.0, 2.0])
        y2 = spline(x, x**2, 0.0, 4.0)  # [2, 2, 2]
        ```
    """
    n = x.shape[0]

    natural_left = yp1 > _NATURAL_THRESHOLD
    y2 = [jnp.where(natural_left, 0.0, -0.5)]
    u = [
        jnp.where(
            natural_left,
            0.0,
            (3.0 / (x[1] - x[0])) * ((y[1] - y[0]) / (x[1] - x[0]) - yp1),
        )
    ]

    # Tridiagonal decomposition
    for i in range(1, n - 1):
        sig = (x[i] - x[i - 1]) / (x[i + 1] - x[i - 1])
        p = sig * y2[i - 1] + 2.0
        y2.append((sig - 1.0) / p)
        du = (y[i + 1] - y[i]) / (x[i + 1] - x[i]) - (y[i] - y[i - 1]) / (x[i] - x[i - 1])
        u.append((6.0 * du / (x[i + 1] - x[i - 1]) - sig * u[i - 1]) / p)

    natural_right = ypn > _NATURAL_THRESHOLD
    qn = jnp.where(natural_right, 0.0, 0.5)
    un = jnp.where(
        natural_right,
        0.0,
        (3.0 / (x[n - 1] - x[n - 2])) * (ypn - (y[n - 1] - y[n - 2]) / (x[n - 1] - x[n - 2])),
    )
    y2.append((un - qn * u[n - 2]) / (qn * y2[n - 2] + 1.0))

    # Back substitution
    for k in range(n - 2, -1, -1):
        y2[k] = y2[k] * y2[k + 1] + u[k]

    return jnp.stack(y2)


def _bracket(xa: Array, x: ArrayLike) -> tuple[Array, Array]:
    """Bisect for the knot interval ``[klo, khi]`` containing *x*.

    Outside the knot range the first or last interval is returned so the
    caller extrapolates with the end polynomial.
    """
    n = xa.shape[0]
    klo = jnp.asarray(0)
    khi = jnp.asarray(n - 1)
    for _ in range(max(n.bit_length(), 1)):
        active = (khi - klo) > 1
        k = (khi + klo) // 2
        upper = xa[k] > x
        khi = jnp.where(active & upper, k, khi)
        klo = jnp.where(active & ~upper, k, klo)
    return klo, khi


def splint(xa: Array, ya: Array, y2a: Array, x: ArrayLike) -> Array:
    """Evaluate the cubic spline at *x*.

    Args:
        xa: Knot abscissae, shape ``(n,)``.
        ya: Knot ordinates, shape ``(n,)``.
        y2a: Second derivatives from :func:`spline`, shape ``(n,)``.
        x: Evaluation point.  Points outside ``[xa[0], xa[n-1]]`` are
            extrapolated.

    Returns:
        Interpolated value.
    """
    klo, khi = _bracket(xa, x)
    h = xa[khi] - xa[klo]
    a = (xa[khi] - x) / h
    b = (x - xa[klo]) / h
    return (
        a * ya[klo]
        + b * ya[khi]
        + ((a * a * a - a) * y2a[klo] + (b * b * b - b) * y2a[khi]) * h * h / 6.0
    )


def splini(xa: Array, ya: Array, y2a: Array, x: ArrayLike) -> Array:
    """Integrate the cubic spline from ``xa[0]`` to *x*.

    The last interval is extended past ``xa[n-1]``; for ``x <= xa[0]`` the
    integral is zero.

    Args:
        xa: Knot abscissae, shape ``(n,)``.
        ya: Knot ordinates, shape ``(n,)``.
        y2a: Second derivatives from :func:`spline`, shape ``(n,)``.
        x: Upper integration limit.

    Returns:
        Integral value.
    """
    n = xa.shape[0]
    yi = jnp.zeros_like(ya[0])

    for klo in range(n - 1):
        khi = klo + 1
        xx = x
        if khi < n - 1:
            xx = jnp.minimum(x, xa[khi])

        h = xa[khi] - xa[klo]
        a = (xa[khi] - xx) / h
        b = (xx - xa[klo]) / h
        a2 = a * a
        b2 = b * b
        segment = (
            (1.0 - a2) * ya[klo] / 2.0
            + b2 * ya[khi] / 2.0
            + ((-(1.0 + a2 * a2) / 4.0 + a2 / 2.0) * y2a[klo] + (b2 * b2 / 4.0 - b2 / 2.0) * y2a[khi])
            * h
            * h
            / 6.0
        ) * h

        yi = jnp.where(x > xa[klo], yi + segment, yi)

    return yi
