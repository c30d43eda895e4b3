"""Local cache for downloaded NRLMSISE-00 coefficient sources.

The coefficient tables never change, so a downloaded
``nrlmsise-00_data.c`` is kept indefinitely unless the caller asks for a
refresh by age.  Files live under ``$MSISJAX_CACHE`` when set, otherwise
under ``~/.cache/msisjax``, one subdirectory per kind of data.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

_ENV_VAR = "MSISJAX_CACHE"
_DEFAULT_SUBDIR = ".cache/msisjax"
_SECONDS_PER_DAY = 86400.0


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return the msisjax cache root (or one of its subdirectories).

    The directory is created on first use.

    Args:
        subdirectory: Optional name appended to the root (e.g.
            ``"coefficients"``).

    Returns:
        Path to the cache directory.
    """
    env = os.environ.get(_ENV_VAR)
    root = Path(env) if env is not None else Path.home() / _DEFAULT_SUBDIR
    if subdirectory is not None:
        root = root / subdirectory

    root.mkdir(parents=True, exist_ok=True)
    return root


def get_coefficients_cache_dir() -> Path:
    """Directory holding the cached ``nrlmsise-00_data.c``."""
    return get_cache_dir("coefficients")


def file_age_days(filepath: str | Path) -> float:
    """Days since a cached coefficient file was last written.

    Args:
        filepath: Path to the cached file.

    Returns:
        Age in days, never negative.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No cached file at '{filepath}'")
    return max(0.0, time.time() - filepath.stat().st_mtime) / _SECONDS_PER_DAY


def is_file_stale(filepath: str | Path, max_age_days: float | None) -> bool:
    """Whether a cached coefficient file has to be (re)downloaded.

    A missing file is always stale.  An existing file is stale only when
    *max_age_days* is given and the file is older than that.

    Args:
        filepath: Path to the cached file.
        max_age_days: Refresh age in days, or ``None`` to keep an existing
            file forever.

    Returns:
        ``True`` if the file should be downloaded.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return True
    if max_age_days is None:
        return False
    return file_age_days(filepath) > max_age_days
