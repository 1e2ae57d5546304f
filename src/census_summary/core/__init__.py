"""Core functionality for census-summary."""

from census_summary.core.errors import (
    CensusSummaryError,
    DataNotAvailableError,
    InvalidQuery,
    PreconditionMissing,
    UnknownReference,
)
from census_summary.core.geoid import GEOIDParser

__all__ = [
    "GEOIDParser",
    "CensusSummaryError",
    "PreconditionMissing",
    "InvalidQuery",
    "UnknownReference",
    "DataNotAvailableError",
]
