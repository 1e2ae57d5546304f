"""Summary file code tables and layouts."""

from census_summary.census.datasets import DatasetKind, SummaryFileFormat
from census_summary.census.summary_levels import (
    GEO_COMPONENTS,
    SUMMARY_LEVELS,
    resolve_geo_component,
    resolve_summary_level,
)

__all__ = [
    "DatasetKind",
    "SummaryFileFormat",
    "SUMMARY_LEVELS",
    "GEO_COMPONENTS",
    "resolve_summary_level",
    "resolve_geo_component",
]
