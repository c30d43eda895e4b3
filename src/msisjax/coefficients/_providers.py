"""Factory functions for creating :class:`MsisCoefficients` instances.

- :func:`coefficients_from_arrays`: Build from in-memory tables, validating
  their shapes (useful for testing or custom coefficient sets).
- :func:`load_coefficients_from_file`: Load from a local copy of
  ``nrlmsise-00_data.c``.
- :func:`load_default_coefficients`: Load the copy of ``nrlmsise-00_data.c``
  bundled with the package.
- :func:`load_cached_coefficients`: Load from a local cache, downloading the
  published source when missing or stale.
"""

from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path

import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from msisjax.coefficients._download import (
    _COEFFICIENTS_FILENAME,
    MSIS_COEFFICIENTS_URL,
    download_coefficients_file,
)
from msisjax.coefficients._parsers import parse_coefficients_source
from msisjax.coefficients._types import TABLE_SHAPES, MsisCoefficients
from msisjax.config import get_dtype
from msisjax.utils.caching import get_coefficients_cache_dir, is_file_stale

logger = logging.getLogger(__name__)


def coefficients_from_arrays(**tables: ArrayLike) -> MsisCoefficients:
    """Create :class:`MsisCoefficients` from the nine coefficient tables.

    Args:
        **tables: One keyword per table (``pt``, ``pd``, ``ps``, ``pdl``,
            ``ptl``, ``pma``, ``ptm``, ``pdm``, ``pavgm``).

    Returns:
        MsisCoefficients with every table converted to the configured dtype.

    Raises:
        ValueError: If a table is missing, unknown, or has the wrong shape.

    Examples:
        ```python
        from msisjax.coefficients import coefficients_from_arrays
        c = coefficients_from_arrays(pt=pt, pd=pd, ps=ps, pdl=pdl, ptl=ptl,
                                     pma=pma, ptm=ptm, pdm=pdm, pavgm=pavgm)
        ```
    """
    missing = [name for name in TABLE_SHAPES if name not in tables]
    if missing:
        raise ValueError(f"Missing coefficient tables: {', '.join(missing)}")
    unknown = [name for name in tables if name not in TABLE_SHAPES]
    if unknown:
        raise ValueError(f"Unknown coefficient tables: {', '.join(unknown)}")

    dtype = get_dtype()
    converted = {}
    for name, shape in TABLE_SHAPES.items():
        table = np.asarray(tables[name], dtype=np.float64)
        if table.shape != shape:
            raise ValueError(
                f"Coefficient table '{name}' has shape {table.shape}, expected {shape}"
            )
        converted[name] = jnp.asarray(table, dtype=dtype)
    return MsisCoefficients(**converted)


def load_coefficients_from_file(filepath: str | Path) -> MsisCoefficients:
    """Load the model coefficients from a ``nrlmsise-00_data.c`` file.

    Args:
        filepath: Path to the coefficient source file.

    Returns:
        MsisCoefficients ready for model evaluation.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a required table is missing or malformed.

    Examples:
        ```python
        from msisjax.coefficients import load_coefficients_from_file
        c = load_coefficients_from_file("path/to/nrlmsise-00_data.c")
        ```
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Coefficient file not found: {filepath}")

    tables = parse_coefficients_source(filepath.read_text(encoding="utf-8"))
    logger.debug("Loaded NRLMSISE-00 coefficients from %s", filepath)
    return coefficients_from_arrays(**tables)


def load_default_coefficients() -> MsisCoefficients:
    """Load the bundled copy of ``nrlmsise-00_data.c``.

    Uses ``importlib.resources`` to locate the data file bundled with the
    package, so no network access is needed.

    Returns:
        MsisCoefficients loaded from the bundled source file.

    Examples:
        ```python
        from msisjax.coefficients import load_default_coefficients
        c = load_default_coefficients()
        ```
    """
    data_pkg = importlib.resources.files("msisjax.data")
    resource = data_pkg.joinpath(_COEFFICIENTS_FILENAME)
    with importlib.resources.as_file(resource) as path:
        return load_coefficients_from_file(path)


def load_cached_coefficients(
    filepath: str | Path | None = None,
    *,
    url: str = MSIS_COEFFICIENTS_URL,
    max_age_days: float | None = None,
) -> MsisCoefficients:
    """Load the model coefficients from a local cache, downloading when needed.

    The coefficients are static, so by default a cached file never expires
    and is only downloaded when missing.  If a refresh is requested (via
    *max_age_days*) and the download fails, the existing cached copy is used
    instead.  With no cached copy the download error is raised.

    Args:
        filepath: Path to the cached file. When ``None`` (the default),
            uses ``<cache_dir>/coefficients/nrlmsise-00_data.c``.
        url: Source URL. Defaults to
            :data:`~msisjax.coefficients.MSIS_COEFFICIENTS_URL`.
        max_age_days: Maximum acceptable age of the cached file in days, or
            ``None`` to never refresh an existing file.

    Returns:
        MsisCoefficients loaded from the cached (or freshly downloaded) file.

    Raises:
        httpx.HTTPError: If the file is missing and cannot be downloaded.
        ValueError: If the cached file cannot be parsed.

    Examples:
        ```python
        from msisjax.coefficients import load_cached_coefficients
        c = load_cached_coefficients()
        ```
    """
    if filepath is None:
        filepath = get_coefficients_cache_dir() / _COEFFICIENTS_FILENAME
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath, max_age_days):
        try:
            download_coefficients_file(filepath, url=url)
        except Exception:
            if not filepath.exists():
                raise
            logger.warning(
                "Failed to refresh NRLMSISE-00 coefficients; using cached copy %s.",
                filepath,
                exc_info=True,
            )

    return load_coefficients_from_file(filepath)
