"""NRLMSISE-00 empirical atmosphere model.

A JAX implementation of the NRLMSISE-00 thermosphere and lower atmosphere
model (Picone et al., 2002).  Every function is free of hidden state and
compatible with ``jax.jit`` (with :class:`Flags` static) and ``jax.vmap``.

Main entry points:

- :func:`gtd7`: species number densities, total mass density and
  temperatures.
- :func:`gtd7d`: as :func:`gtd7` with anomalous oxygen included in the
  total mass density (use this for drag).

The numerical building blocks (splines, corrections, profile integrators
and the G(L) expansions) are exported for direct use and testing.

Usage:
    ```python
    from msisjax.coefficients import load_default_coefficients
    from msisjax.nrlmsise00 import Flags, gtd7d, make_input

    c = load_default_coefficients()
    out = gtd7d(c, make_input(172, 29000.0, 400.0, 60.0, -70.0, lst=16.0), Flags())
    out.total_mass_density
    ```
"""

from msisjax.nrlmsise00._corrections import ccor, ccor2, dnet
from msisjax.nrlmsise00._driver import ZN2, ZN3, ThermosphereResult, gtd7, gtd7d, gts7
from msisjax.nrlmsise00._globe import (
    GlobeBasis,
    MagneticState,
    glob7s,
    globe7,
    globe_basis,
    legendre,
)
from msisjax.nrlmsise00._profiles import densm, densu, glatf, scaleh, zeta
from msisjax.nrlmsise00._species import SPECIES, SpeciesProfile
from msisjax.nrlmsise00._splines import spline, splini, splint
from msisjax.nrlmsise00._types import (
    N_SWITCHES,
    ApCoef,
    Flags,
    Input,
    Output,
    make_input,
    tselec,
)

__all__ = [
    "ApCoef",
    "Flags",
    "GlobeBasis",
    "Input",
    "MagneticState",
    "N_SWITCHES",
    "Output",
    "SPECIES",
    "SpeciesProfile",
    "ThermosphereResult",
    "ZN2",
    "ZN3",
    "ccor",
    "ccor2",
    "densm",
    "densu",
    "dnet",
    "glatf",
    "glob7s",
    "globe7",
    "globe_basis",
    "gtd7",
    "gtd7d",
    "gts7",
    "legendre",
    "make_input",
    "scaleh",
    "spline",
    "splini",
    "splint",
    "tselec",
    "zeta",
]
