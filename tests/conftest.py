"""Pytest fixtures for census-summary tests."""

from pathlib import Path

import pandas as pd
import pytest

from census_summary.config import Settings, get_settings
from census_summary.core.query import CensusSummary
from census_summary.data.catalog import GeoHeaderLayout, TableContentCatalog
from census_summary.census.geoheaders import ACS_GEOHEADERS
from tests.functional.conftest import ACS5_CATALOG, create_data_root


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the developer's PATH_TO_CENSUS and cached settings out of tests."""
    monkeypatch.delenv("PATH_TO_CENSUS", raising=False)
    monkeypatch.setenv("SHOW_PROGRESS", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_root(tmp_path) -> Path:
    """Synthetic data root with Rhode Island ACS, decennial and reference files."""
    return create_data_root(tmp_path)


@pytest.fixture
def census(data_root) -> CensusSummary:
    return CensusSummary(data_root=data_root, settings=Settings(_env_file=None, show_progress=False))


@pytest.fixture
def acs5_catalog() -> TableContentCatalog:
    """ACS 5-year catalog with a sub-heading row in segment 0002."""
    frame = pd.DataFrame(
        ACS5_CATALOG, columns=["reference", "file_segment", "table_content", "table_name"]
    )
    return TableContentCatalog(frame, header_width=6, source="acs5year 2015")


@pytest.fixture
def acs_layout() -> GeoHeaderLayout:
    return GeoHeaderLayout(ACS_GEOHEADERS, source="ACS 5-year 2015 geography files")


@pytest.fixture
def sample_geography():
    """Geography rows as returned by read_geography."""
    return pd.DataFrame(
        {
            "GEOID": ["16000US4459000", "14000US44007000100", "04001US44"],
            "NAME": ["Providence city, Rhode Island", "Census Tract 1", "Rhode Island -- Urban"],
            "LOGRECNO": [5, 8, 2],
            "SUMLEV": ["160", "140", "040"],
            "GEOCOMP": ["00", "00", "01"],
            "STATE": ["44", "44", "44"],
            "PLACE": ["59000", None, None],
            "COUSUB": [None, None, None],
        }
    )


@pytest.fixture
def sample_reference():
    """Geo-reference rows as returned by DataManager.geo_reference."""
    return pd.DataFrame(
        {
            "GEOID": ["16000US4459000", "14000US44007000100"],
            "lon": [-71.4128, -71.4030],
            "lat": [41.824, 41.829],
            "STATE": ["99", "99"],
            "COUSUB": ["59000", "59000"],
            "PLACE": ["59000", "59000"],
        }
    )
