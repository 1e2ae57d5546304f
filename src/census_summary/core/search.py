"""Keyword search over catalogs, code tables and dictionaries.

Keywords are separated by spaces; a row matches when every keyword occurs
in it, ignoring case. No keyword (or "*") returns every row.
"""

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from census_summary.census.datasets import DatasetKind
from census_summary.census.summary_levels import geo_components_frame, summary_levels_frame
from census_summary.core.query import CensusSummary
from census_summary.data.constants import normalize_state_abbrev
from census_summary.data.duckdb_engine import SearchEngine

DataRoot = Optional[Union[str, Path]]

# The FIPS dictionary's variants of the levels used in the summary files
FIPS_SUMMARY_LEVEL_FIXES = {"061": "060", "162": "160"}


def search_summarylevels(keyword: Optional[str] = None) -> pd.DataFrame:
    """Search summary level codes, descriptions and aliases."""
    return SearchEngine().search(summary_levels_frame(), keyword)


def search_geocomponents(keyword: Optional[str] = None) -> pd.DataFrame:
    """Search geographic component codes and names."""
    return SearchEngine().search(geo_components_frame(), keyword)


def search_tablecontents(
    dataset: Union[str, DatasetKind],
    year: int,
    keyword: Optional[str] = None,
    data_root: DataRoot = None,
) -> pd.DataFrame:
    """
    Search the table-content catalog of a dataset year.

    >>> search_tablecontents("acs5year", 2015, "median income")  # doctest: +SKIP
    """
    census = CensusSummary(data_root=data_root)
    catalog = census.content_catalog(dataset, year)
    return census.data_manager.search.search(catalog.frame, keyword)


def search_geoheaders(
    dataset: Union[str, DatasetKind],
    year: int,
    keyword: Optional[str] = None,
    data_root: DataRoot = None,
) -> pd.DataFrame:
    """Search the geo headers of a dataset year's geography files."""
    census = CensusSummary(data_root=data_root)
    layout = census.geo_layout(dataset, year)
    return census.data_manager.search.search(layout.frame, keyword)


def search_fips(
    keyword: Optional[str] = None,
    state: Optional[str] = None,
    data_root: DataRoot = None,
) -> pd.DataFrame:
    """
    Search FIPS codes of states, counties, county subdivisions, places and
    consolidated cities.

    Summary level 061 is reported as 060 and 162 as 160, the levels the
    summary files use for the same areas.

    Args:
        keyword: Keywords matched against names and codes
        state: Restrict to one state
        data_root: Data root, defaults to PATH_TO_CENSUS
    """
    census = CensusSummary(data_root=data_root)
    fips = census.data_manager.dict_fips()
    if state:
        fips = fips[fips["state_abbr"].str.upper() == normalize_state_abbrev(state)]

    searched = [c for c in fips.columns if c != "state_abbr"]
    found = census.data_manager.search.search(fips, keyword, searched)
    found["SUMLEV"] = found["SUMLEV"].replace(FIPS_SUMMARY_LEVEL_FIXES)
    return found


def search_cbsa(keyword: Optional[str] = None, data_root: DataRoot = None) -> pd.DataFrame:
    """Search CBSA codes and titles. Multi-county CBSAs have one row per county."""
    census = CensusSummary(data_root=data_root)
    cbsa = census.data_manager.dict_cbsa()
    return census.data_manager.search.search(cbsa, keyword, ["CBSA", "CBSA_title"])
