"""Parser for the published NRLMSISE-00 coefficient source file.

The coefficients are distributed as C array initializers
(``nrlmsise-00_data.c``), e.g.::

    double pd[9][150] = {
    {  1.09979E+00, -4.88060E-02, ... },
    ...
    };

Comments are ignored, every ``double`` array definition is collected (short
initializer lists are zero-filled, as in C), and
each required table is checked against its expected shape.
"""

from __future__ import annotations

import re

import numpy as np

from msisjax.coefficients._types import TABLE_SHAPES

_COMMENT_RE = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)
_ARRAY_RE = re.compile(
    r"double\s+(\w+)\s*((?:\[\s*\d+\s*\])+)\s*=\s*\{(.*?)\}\s*;",
    re.DOTALL,
)
_DIM_RE = re.compile(r"\[\s*(\d+)\s*\]")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?")


def parse_c_arrays(text: str) -> dict[str, np.ndarray]:
    """Extract every ``double`` array definition from C source text.

    As in C, an initializer list shorter than the declared size leaves the
    remaining trailing elements zero (the published source declares
    ``ptm[50]`` but initializes only ten values).

    Args:
        text: C source text.

    Returns:
        Mapping of array name to a float64 array with its declared shape.

    Raises:
        ValueError: If an array defines more values than its declared
            dimensions hold.
    """
    text = _COMMENT_RE.sub(" ", text)
    arrays: dict[str, np.ndarray] = {}
    for match in _ARRAY_RE.finditer(text):
        name, dims, body = match.groups()
        shape = tuple(int(d) for d in _DIM_RE.findall(dims))
        values = [float(v) for v in _NUMBER_RE.findall(body)]
        expected = int(np.prod(shape))
        if len(values) > expected:
            raise ValueError(
                f"Array '{name}' declares {expected} values {shape} but defines {len(values)}"
            )
        data = np.zeros(expected, dtype=np.float64)
        data[: len(values)] = values
        arrays[name] = data.reshape(shape)
    return arrays


def parse_coefficients_source(text: str) -> dict[str, np.ndarray]:
    """Parse and validate the NRLMSISE-00 coefficient tables.

    Tables in the source that the model does not use are dropped.  A table
    declared larger than the model reads (``ptm[50]``) is cut to its
    leading elements.

    Args:
        text: Contents of ``nrlmsise-00_data.c``.

    Returns:
        Mapping of each required table name to its float64 array.

    Raises:
        ValueError: If a required table is missing or too small.
    """
    arrays = parse_c_arrays(text)

    missing = [name for name in TABLE_SHAPES if name not in arrays]
    if missing:
        raise ValueError(f"Coefficient source is missing tables: {', '.join(missing)}")

    tables = {}
    for name, shape in TABLE_SHAPES.items():
        table = arrays[name]
        if table.ndim != len(shape) or any(have < need for have, need in zip(table.shape, shape)):
            raise ValueError(
                f"Coefficient table '{name}' has shape {table.shape}, expected {shape}"
            )
        tables[name] = table[tuple(slice(0, n) for n in shape)]
    return tables
