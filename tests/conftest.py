import os

import jax.numpy as jnp
import numpy as np
import pytest

from msisjax.coefficients import (
    coefficients_from_arrays,
    load_coefficients_from_file,
    load_default_coefficients,
)
from msisjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    JAX starts in float32 and test_config.py switches the dtype back and
    forth, so every test gets float64 unless it explicitly overrides it.
    """
    set_dtype(jnp.float64)


def synthetic_tables() -> dict[str, np.ndarray]:
    """Smooth, physically plausible coefficient tables.

    Every expansion reduces to its leading term, so the model describes a
    spherically symmetric, time independent atmosphere.  The profile
    constants follow the published model closely enough for densities and
    temperatures to stay positive and finite at all altitudes.
    """
    expansion = np.zeros(150)
    expansion[0] = 1.0
    expansion[43] = 1.0

    pdl = np.ones((2, 25))
    pdl[1, 15] = 120.0
    pdl[0, 23] = 0.0
    pdl[0, 24] = 0.0

    lower = np.zeros((4, 100))
    lower[:, 0] = 1.0
    middle = np.zeros((10, 100))
    middle[:, 0] = 1.0

    return {
        "pt": expansion.copy(),
        "pd": np.tile(expansion, (9, 1)),
        "ps": expansion.copy(),
        "pdl": pdl,
        "ptl": lower,
        "pma": middle,
        "ptm": np.array([1041.3, 386.0, 195.0, 16.6728, 213.0, 120.0, 240.0, 187.0, -2.0, 0.0]),
        "pdm": np.array(
            [
                [2.456e7, 6.71072e-6, 100.0, 0.0, 110.0, 10.0, 0.0, 0.0, 0.0, 0.0],
                [8.594e10, 1.0, 105.0, -8.0, 110.0, 10.0, 90.0, 2.0, 0.0, 0.0],
                [2.81e11, 0.0, 105.0, 28.0, 28.95, 0.0, 0.0, 0.0, 0.0, 0.0],
                [3.3e10, 0.26827, 105.0, 1.0, 110.0, 10.0, 110.0, -10.0, 0.0, 0.0],
                [1.33e9, 1.19615e-2, 105.0, 0.0, 110.0, 10.0, 0.0, 0.0, 0.0, 0.0],
                [1.761e5, 1.0, 95.0, -8.0, 110.0, 10.0, 90.0, 2.0, 0.0, 0.0],
                [1.0e7, 1.0, 105.0, -8.0, 110.0, 10.0, 90.0, 2.0, 0.0, 0.0],
                [1.0e6, 1.0, 105.0, -8.0, 550.0, 76.0, 90.0, 2.0, 0.0, 4000.0],
            ]
        ),
        "pavgm": np.array([261.0, 264.0, 229.0, 217.0, 217.0, 223.0, 286.76, -2.9394, 2.5, 0.0]),
    }


@pytest.fixture
def synthetic_arrays():
    """Synthetic coefficient tables as numpy arrays."""
    return synthetic_tables()


@pytest.fixture
def synthetic_coefficients():
    """Synthetic coefficients for structural tests that need no published data."""
    return coefficients_from_arrays(**synthetic_tables())


@pytest.fixture
def reference_coefficients():
    """Published NRLMSISE-00 coefficients.

    Uses the copy bundled with msisjax, or the file at
    ``$MSISJAX_COEFFICIENTS_FILE`` when set.
    """
    path = os.environ.get("MSISJAX_COEFFICIENTS_FILE")
    if path is None:
        return load_default_coefficients()
    return load_coefficients_from_file(path)
