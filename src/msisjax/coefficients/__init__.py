"""NRLMSISE-00 model coefficients.

Loads the published coefficient tables from Dominik Brodowski's
``nrlmsise-00_data.c`` and exposes them as an immutable
:class:`MsisCoefficients` pytree.

Usage:
    ```python
    from msisjax.coefficients import load_default_coefficients
    c = load_default_coefficients()
    c.pt.shape  # (150,)
    ```
"""

from msisjax.coefficients._download import MSIS_COEFFICIENTS_URL, download_coefficients_file
from msisjax.coefficients._parsers import parse_c_arrays, parse_coefficients_source
from msisjax.coefficients._providers import (
    coefficients_from_arrays,
    load_cached_coefficients,
    load_coefficients_from_file,
    load_default_coefficients,
)
from msisjax.coefficients._types import TABLE_SHAPES, MsisCoefficients

__all__ = [
    "MSIS_COEFFICIENTS_URL",
    "MsisCoefficients",
    "TABLE_SHAPES",
    "coefficients_from_arrays",
    "download_coefficients_file",
    "load_cached_coefficients",
    "load_coefficients_from_file",
    "load_default_coefficients",
    "parse_c_arrays",
    "parse_coefficients_source",
]
