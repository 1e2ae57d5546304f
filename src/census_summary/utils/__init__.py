"""Utility functions for census-summary."""

from census_summary.utils.fips import (
    get_state_abbrev,
    get_state_name,
    normalize_state,
    normalize_state_abbrev,
)

__all__ = [
    "normalize_state",
    "normalize_state_abbrev",
    "get_state_name",
    "get_state_abbrev",
]
