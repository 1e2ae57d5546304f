"""FIPS code utility functions."""

from census_summary.data.constants import (
    FIPS_STATES,
    STATE_ABBREVS,
    fips_to_abbrevs,
    get_state_abbrev,
    get_state_name,
    normalize_state,
    normalize_state_abbrev,
)

__all__ = [
    "FIPS_STATES",
    "STATE_ABBREVS",
    "normalize_state",
    "normalize_state_abbrev",
    "get_state_name",
    "get_state_abbrev",
    "fips_to_abbrevs",
]
