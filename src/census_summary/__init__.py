"""
census-summary: Read census summary files into pandas.

Extract table contents of the Census Bureau's summary files joined with
geography (names, codes, coordinates) from files stored locally.

Supports:
- ACS 1-Year and 5-Year Estimates (summary file format)
- Decennial Census 2020 PL 94-171 (legacy format)
"""

from census_summary.census.datasets import DatasetKind
from census_summary.census.summary_levels import resolve_geo_component, resolve_summary_level
from census_summary.config import Settings
from census_summary.core.errors import (
    CensusSummaryError,
    DataNotAvailableError,
    InvalidQuery,
    PreconditionMissing,
    UnknownReference,
)
from census_summary.core.query import (
    CensusSummary,
    lookup_content_file_segments,
    read_acs1year,
    read_acs5year,
    read_decennial,
    read_survey,
    resolve_areas,
)
from census_summary.core.search import (
    search_cbsa,
    search_fips,
    search_geocomponents,
    search_geoheaders,
    search_summarylevels,
    search_tablecontents,
)
from census_summary.core.spatial import to_geodataframe
from census_summary.data.manager import DatasetAvailability

__version__ = "0.1.0"
__all__ = [
    # Main API
    "CensusSummary",
    "DatasetKind",
    "Settings",
    "DatasetAvailability",
    "read_survey",
    "read_acs1year",
    "read_acs5year",
    "read_decennial",
    # Resolution
    "lookup_content_file_segments",
    "resolve_areas",
    "resolve_summary_level",
    "resolve_geo_component",
    # Search
    "search_tablecontents",
    "search_geoheaders",
    "search_summarylevels",
    "search_geocomponents",
    "search_fips",
    "search_cbsa",
    # Spatial
    "to_geodataframe",
    # Exceptions
    "CensusSummaryError",
    "PreconditionMissing",
    "InvalidQuery",
    "UnknownReference",
    "DataNotAvailableError",
]
