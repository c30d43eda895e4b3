"""Floating-point precision used by msisjax.

Every value msisjax constructs (model inputs, Ap histories, coefficient
tables, activity indices) is converted with :func:`get_dtype`.  The default
is ``jnp.float32`` so the model runs unchanged on accelerators; selecting
``jnp.float64`` also turns on ``jax_enable_x64``.

The dtype is read while a function is traced, so set it once at start-up,
before anything is compiled with ``jax.jit``.

NRLMSISE-00 densities span some 60 orders of magnitude between the ground
and the exobase.  Use ``float64`` when comparing against published
reference output.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_DTYPE_NAMES = {
    jnp.float16: "jnp.float16",
    jnp.bfloat16: "jnp.bfloat16",
    jnp.float32: "jnp.float32",
    jnp.float64: "jnp.float64",
}

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Select the float dtype for values built by msisjax.

    Args:
        dtype: ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32`` or
            ``jnp.float64``.  ``jnp.float64`` enables ``jax_enable_x64``.

    Raises:
        ValueError: If *dtype* is not one of the supported float types.

    Examples:
        ```python
        import jax.numpy as jnp
        from msisjax import set_dtype
        set_dtype(jnp.float64)
        ```
    """
    global _dtype
    if dtype not in tuple(_DTYPE_NAMES):
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: {', '.join(_DTYPE_NAMES.values())}"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """The float dtype currently selected with :func:`set_dtype`."""
    return _dtype
