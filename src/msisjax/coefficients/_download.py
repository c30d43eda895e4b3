"""Download the published NRLMSISE-00 coefficient source file.

Network errors are propagated to the caller so that higher-level code
(e.g. :func:`load_cached_coefficients`) can decide on fallback behaviour.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

MSIS_COEFFICIENTS_URL: str = (
    "https://raw.githubusercontent.com/magnific0/nrlmsise-00/master/nrlmsise-00_data.c"
)
"""Default URL of Dominik Brodowski's NRLMSISE-00 coefficient source."""

_COEFFICIENTS_FILENAME: str = "nrlmsise-00_data.c"
"""Canonical filename used for the cached coefficient source."""

_DEFAULT_TIMEOUT: float = 60.0
"""Default HTTP timeout in seconds."""


def download_coefficients_file(
    filepath: str | Path,
    *,
    url: str = MSIS_COEFFICIENTS_URL,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download the coefficient source file to *filepath*.

    Creates parent directories if they do not exist.

    Args:
        filepath: Destination path for the downloaded file.
        url: URL to fetch. Defaults to :data:`MSIS_COEFFICIENTS_URL`.
        timeout: HTTP timeout in seconds. Defaults to 60.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Downloading NRLMSISE-00 coefficients from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    filepath.write_text(response.text, encoding="utf-8")
    logger.info("NRLMSISE-00 coefficients written to %s", filepath)
    return filepath.resolve()
