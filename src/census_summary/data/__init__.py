"""Data access for census-summary."""

from census_summary.data.catalog import CatalogRegistry, GeoHeaderLayout, TableContentCatalog
from census_summary.data.constants import FIPS_STATES
from census_summary.data.duckdb_engine import SearchEngine
from census_summary.data.manager import DataManager, DatasetAvailability, LocalFileAvailability

__all__ = [
    "DataManager",
    "DatasetAvailability",
    "LocalFileAvailability",
    "CatalogRegistry",
    "TableContentCatalog",
    "GeoHeaderLayout",
    "SearchEngine",
    "FIPS_STATES",
]
