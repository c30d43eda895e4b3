"""Shared utility functions for msisjax.

Provides the local cache used for downloaded coefficient sources.
"""

from msisjax.utils.caching import (
    file_age_days,
    get_cache_dir,
    get_coefficients_cache_dir,
    is_file_stale,
)

__all__ = [
    "file_age_days",
    "get_cache_dir",
    "get_coefficients_cache_dir",
    "is_file_stale",
]
