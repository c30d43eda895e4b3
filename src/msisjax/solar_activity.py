"""Solar and geomagnetic activity inputs for the atmosphere model.

The model itself consumes activity indices through a narrow interface:
the daily and 81-day average F10.7 flux, and the seven-element Ap history
(see :class:`~msisjax.nrlmsise00.ApCoef`).  :class:`SolarActivity` bundles
those values so that any data source can feed
:func:`~msisjax.atmosphere.input_from_datetime`.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from msisjax.config import get_dtype


class SolarActivity(NamedTuple):
    """Activity indices for one epoch.

    Attributes:
        f107: Daily F10.7 flux for the previous day [sfu].
        f107a: 81-day average F10.7 flux centred on the day [sfu].
        ap: Ap history, shape ``(7,)``; ``ap[0]`` is the daily Ap.
    """

    f107: Array
    f107a: Array
    ap: Array

    @property
    def daily_ap(self) -> Array:
        """Daily Ap index (``ap[0]``)."""
        return self.ap[0]


def constant_solar_activity(
    f107: float = 150.0,
    ap: float = 4.0,
    f107a: float | None = None,
) -> SolarActivity:
    """Create a :class:`SolarActivity` with constant values.

    Every element of the Ap history is set to *ap*.

    Args:
        f107: Daily F10.7 flux [sfu]. Default: 150.0.
        ap: Ap index. Default: 4.0.
        f107a: 81-day average F10.7 flux [sfu]. Defaults to *f107*.

    Returns:
        SolarActivity with constant values.

    Examples:
        ```python
        from msisjax.solar_activity import constant_solar_activity
        activity = constant_solar_activity(f107=200.0, ap=15.0)
        activity.daily_ap  # 15.0
        ```
    """
    if f107a is None:
        f107a = f107
    dtype = get_dtype()
    return SolarActivity(
        f107=jnp.array(f107, dtype=dtype),
        f107a=jnp.array(f107a, dtype=dtype),
        ap=jnp.full((7,), ap, dtype=dtype),
    )
