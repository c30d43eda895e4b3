"""Input, output and configuration types for NRLMSISE-00.

- :class:`Flags`: the 24 model switches.  Frozen and hashable so it can be
  passed as a static argument to ``jax.jit``; switch-dependent branches are
  resolved at trace time.
- :class:`ApCoef`: the seven-element magnetic index history, validated on
  construction and registered as a JAX pytree.
- :class:`Input` / :class:`Output`: immutable :class:`~typing.NamedTuple`
  pytrees holding one model evaluation's inputs and results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from msisjax.config import get_dtype

N_SWITCHES: int = 24
"""Number of entries in the model switch vector."""

_VALID_SWITCH_VALUES = (-1, 0, 1, 2)

_DEFAULT_SWITCHES: tuple[int, ...] = (0,) + (1,) * (N_SWITCHES - 1)


def tselec(switches: tuple[int, ...]) -> tuple[tuple[float, ...], tuple[float, ...]]:
    """Derive main-effect and cross-term multipliers from raw switch values.

    For every index other than 9 a switch of ``1`` turns both the main
    effect (``sw``) and the cross terms (``swc``) on, ``2`` keeps only the
    cross terms, and ``0`` turns both off.  Index 9 is passed through
    unchanged so ``-1`` can select the Ap-history formulation.

    Args:
        switches: Raw switch values, length 24.

    Returns:
        Tuple of (sw, swc) multipliers.
    """
    sw = []
    swc = []
    for i, value in enumerate(switches):
        if i == 9:
            sw.append(float(value))
            swc.append(float(value))
        else:
            sw.append(1.0 if value == 1 else 0.0)
            swc.append(1.0 if value > 0 else 0.0)
    return tuple(sw), tuple(swc)


@dataclass(frozen=True)
class Flags:
    """NRLMSISE-00 model switches.

    Index 0 selects the output units: ``0`` for cm^-3 and g/cm^3, ``1``
    for m^-3 and kg/m^3.  Indices 1-23 enable (``1``) or disable (``0``)
    individual terms, or keep only their cross terms (``2``):

    ====  ==========================================
    1     F10.7 effect on mean
    2     Time independent
    3     Symmetrical annual
    4     Symmetrical semiannual
    5     Asymmetrical annual
    6     Asymmetrical semiannual
    7     Diurnal
    8     Semidiurnal
    9     Daily Ap (``-1`` uses the Ap history)
    10    All UT/longitude effects
    11    Longitudinal
    12    UT and mixed UT/longitude
    13    Mixed Ap/UT/longitude
    14    Terdiurnal
    15    Departures from diffusive equilibrium
    16    All TINF variations
    17    All TLB variations
    18    All TN1 variations
    19    All S variations
    20    All TN2 variations
    21    All NLB variations
    22    All TN3 variations
    23    Turbo scale height variations
    ====  ==========================================

    Args:
        switches: The 24 switch values.  Defaults to CGS units with every
            term enabled.

    Raises:
        ValueError: If there are not exactly 24 switches or a switch is
            outside ``{-1, 0, 1, 2}``.

    Examples:
        ```python
        from msisjax.nrlmsise00 import Flags
        flags = Flags().with_switch(0, 1).with_switch(9, -1)
        flags.sw[9]  # -1.0
        ```
    """

    switches: tuple[int, ...] = _DEFAULT_SWITCHES

    def __post_init__(self) -> None:
        switches = tuple(int(s) for s in self.switches)
        if len(switches) != N_SWITCHES:
            raise ValueError(f"Flags requires {N_SWITCHES} switches, got {len(switches)}")
        for i, value in enumerate(switches):
            if value not in _VALID_SWITCH_VALUES:
                raise ValueError(
                    f"Switch {i} must be one of {_VALID_SWITCH_VALUES}, got {value}"
                )
        object.__setattr__(self, "switches", switches)

    @classmethod
    def si(cls) -> Flags:
        """All terms enabled with SI output units."""
        return cls((1,) * N_SWITCHES)

    @property
    def sw(self) -> tuple[float, ...]:
        """Main-effect multipliers."""
        return tselec(self.switches)[0]

    @property
    def swc(self) -> tuple[float, ...]:
        """Cross-term multipliers."""
        return tselec(self.switches)[1]

    @property
    def use_ap_history(self) -> bool:
        """Whether switch 9 selects the seven-element Ap history."""
        return self.switches[9] == -1

    def with_switch(self, index: int, value: int) -> Flags:
        """Return a copy with switch *index* set to *value*.

        Args:
            index: Switch index, 0-23.
            value: New switch value.

        Returns:
            New :class:`Flags` instance.
        """
        switches = list(self.switches)
        switches[index] = value
        return Flags(tuple(switches))


class ApCoef:
    """Seven-element geomagnetic Ap history.

    Elements, in order: daily Ap; 3-hour Ap for the current time; 3-hour Ap
    for 3, 6 and 9 hours before; the average of the eight 3-hour values
    from 12 to 33 hours before; the average of the eight 3-hour values from
    36 to 57 hours before.

    Registered as a JAX pytree with the data array as the sole leaf.

    Args:
        ap: Sequence of exactly seven Ap values.

    Raises:
        ValueError: If *ap* does not contain exactly seven values.
    """

    __slots__ = ("_ap",)

    def __init__(self, ap: ArrayLike) -> None:
        data = jnp.asarray(ap, dtype=get_dtype())
        if data.shape != (7,):
            raise ValueError(f"ApCoef requires exactly 7 values, got shape {data.shape}")
        self._ap = data

    @classmethod
    def _from_internal(cls, data: Array) -> ApCoef:
        """Create from a raw array without validation (pytree unflatten)."""
        obj = object.__new__(cls)
        obj._ap = data
        return obj

    @classmethod
    def constant(cls, ap: float) -> ApCoef:
        """History with every element equal to *ap*."""
        return cls([ap] * 7)

    @property
    def ap(self) -> Array:
        """The seven Ap values, shape ``(7,)``."""
        return self._ap

    def __repr__(self) -> str:
        return f"ApCoef({[float(a) for a in self._ap]})"


jax.tree_util.register_pytree_node(
    ApCoef,
    lambda a: ((a._ap,), None),
    lambda _, children: ApCoef._from_internal(children[0]),
)


class Input(NamedTuple):
    """Inputs for one NRLMSISE-00 evaluation.

    Being a :class:`~typing.NamedTuple`, ``Input`` is a JAX pytree and can
    be batched with ``jax.vmap``.

    Attributes:
        doy: Day of year.
        sec: Seconds in day (UT).
        alt: Altitude [km].
        g_lat: Geodetic latitude [degrees].
        g_long: Geodetic longitude [degrees].  Values at or below -1000
            disable the longitude-dependent terms.
        lst: Local apparent solar time [hours].
        f107a: 81-day average of F10.7 flux, centred on *doy*.
        f107: Daily F10.7 flux for the previous day.
        ap: Daily magnetic index.
        ap_a: Optional Ap history, used when switch 9 is ``-1``.  ``None``
            is read as an all-zero history.
    """

    doy: Array
    sec: Array
    alt: Array
    g_lat: Array
    g_long: Array
    lst: Array
    f107a: Array
    f107: Array
    ap: Array
    ap_a: ApCoef | None = None

    @property
    def ap_history(self) -> Array:
        """The Ap history array, zeros when no history was supplied."""
        if self.ap_a is None:
            return jnp.zeros(7, dtype=jnp.result_type(self.ap))
        return self.ap_a.ap


def make_input(
    doy: ArrayLike,
    sec: ArrayLike,
    alt: ArrayLike,
    g_lat: ArrayLike,
    g_long: ArrayLike,
    lst: ArrayLike | None = None,
    f107a: ArrayLike = 150.0,
    f107: ArrayLike = 150.0,
    ap: ArrayLike = 4.0,
    ap_a: ApCoef | ArrayLike | None = None,
) -> Input:
    """Build an :class:`Input` with values converted to the configured dtype.

    Args:
        doy: Day of year.
        sec: Seconds in day (UT).
        alt: Altitude [km].
        g_lat: Geodetic latitude [degrees].
        g_long: Geodetic longitude [degrees].
        lst: Local apparent solar time [hours].  Defaults to
            ``sec/3600 + g_long/15``.
        f107a: 81-day average F10.7 flux.  Default: 150.
        f107: Previous-day F10.7 flux.  Default: 150.
        ap: Daily Ap index.  Default: 4.
        ap_a: Optional Ap history, as an :class:`ApCoef` or seven values.

    Returns:
        A new :class:`Input`.

    Examples:
        ```python
        from msisjax.nrlmsise00 import make_input
        inp = make_input(172, 29000.0, 400.0, 60.0, -70.0, lst=16.0)
        ```
    """
    dtype = get_dtype()
    if lst is None:
        lst = jnp.asarray(sec, dtype=dtype) / 3600.0 + jnp.asarray(g_long, dtype=dtype) / 15.0
    if ap_a is not None and not isinstance(ap_a, ApCoef):
        ap_a = ApCoef(ap_a)
    return Input(
        doy=jnp.asarray(doy, dtype=dtype),
        sec=jnp.asarray(sec, dtype=dtype),
        alt=jnp.asarray(alt, dtype=dtype),
        g_lat=jnp.asarray(g_lat, dtype=dtype),
        g_long=jnp.asarray(g_long, dtype=dtype),
        lst=jnp.asarray(lst, dtype=dtype),
        f107a=jnp.asarray(f107a, dtype=dtype),
        f107=jnp.asarray(f107, dtype=dtype),
        ap=jnp.asarray(ap, dtype=dtype),
        ap_a=ap_a,
    )


class Output(NamedTuple):
    """Result of one NRLMSISE-00 evaluation.

    Number densities are in cm^-3 and the mass density in g/cm^3 when
    switch 0 is ``0``, or m^-3 and kg/m^3 when it is ``1``.

    Attributes:
        d: Densities, shape ``(9,)``: He, O, N2, O2, Ar, total mass
            density, H, N, anomalous O.
        t: Temperatures [K], shape ``(2,)``: exospheric, at altitude.
    """

    d: Array
    t: Array

    @property
    def total_mass_density(self) -> Array:
        """Total mass density (``d[5]``)."""
        return self.d[5]

    @property
    def exospheric_temperature(self) -> Array:
        """Exospheric temperature [K] (``t[0]``)."""
        return self.t[0]

    @property
    def local_temperature(self) -> Array:
        """Temperature at altitude [K] (``t[1]``)."""
        return self.t[1]
