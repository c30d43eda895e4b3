"""Type definitions for the NRLMSISE-00 coefficient tables.

Provides :class:`MsisCoefficients`, an immutable container of the nine
published coefficient tables.  Being a :class:`~typing.NamedTuple`, it is a
JAX pytree and can be passed straight through ``jax.jit``.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array

TABLE_SHAPES: dict[str, tuple[int, ...]] = {
    "pt": (150,),
    "pd": (9, 150),
    "ps": (150,),
    "pdl": (2, 25),
    "ptl": (4, 100),
    "pma": (10, 100),
    "ptm": (10,),
    "pdm": (8, 10),
    "pavgm": (10,),
}
"""Required table names and their shapes, in declaration order."""


class MsisCoefficients(NamedTuple):
    """NRLMSISE-00 model coefficients.

    Attributes:
        pt: Exospheric temperature expansion, shape ``(150,)``.
        pd: Species density expansions (He, O, N2, TLB, O2, Ar, H, N,
            anomalous O), shape ``(9, 150)``.
        ps: Temperature gradient expansion, shape ``(150,)``.
        pdl: Turbopause and correction parameters, shape ``(2, 25)``.
        ptl: Lower thermosphere node temperature expansions,
            shape ``(4, 100)``.
        pma: Middle and lower atmosphere node temperature expansions,
            shape ``(10, 100)``.
        ptm: Temperature profile constants, shape ``(10,)``.
        pdm: Species profile constants, shape ``(8, 10)``.
        pavgm: Middle atmosphere node temperature averages, shape ``(10,)``.
    """

    pt: Array
    pd: Array
    ps: Array
    pdl: Array
    ptl: Array
    pma: Array
    ptm: Array
    pdm: Array
    pavgm: Array
