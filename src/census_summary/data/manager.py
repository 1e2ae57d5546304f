"""Data manager for locating and loading summary files under the data root."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import pandas as pd

from census_summary.census.acs import acs_geography_file, acs_segment_files
from census_summary.census.datasets import DatasetKind
from census_summary.census.decennial import (
    PL_YEARS,
    decennial_catalog_frame,
    decennial_geography_file,
    decennial_segment_file,
)
from census_summary.census.geoheaders import GEOHEADER_DESCRIPTIONS, builtin_geoheader_layout
from census_summary.core.errors import DataNotAvailableError
from census_summary.data.catalog import CatalogRegistry, GeoHeaderLayout, TableContentCatalog
from census_summary.data.constants import NATION_ABBREV
from census_summary.data.duckdb_engine import SearchEngine

logger = logging.getLogger(__name__)


class DatasetAvailability(Protocol):
    """Supplies summary files or reports them unavailable."""

    def ensure_available(self, state: str, data_type: str, paths: List[Path]) -> None:
        """Raise DataNotAvailableError unless every path can be read."""
        ...


class LocalFileAvailability:
    """Availability backed by files already extracted under the data root."""

    def ensure_available(self, state: str, data_type: str, paths: List[Path]) -> None:
        for path in paths:
            if not path.is_file():
                raise DataNotAvailableError(state, data_type, str(path))


class DataManager:
    """
    Locates and loads files under the data root.

    Directory structure:
    $PATH_TO_CENSUS/
    ├── acs5year/
    │   └── 2015/
    │       ├── g20155ri.csv                # Geography file
    │       ├── group1/e20155ri0003000.txt  # Estimates, larger geographies
    │       └── group2/m20155ri0003000.txt  # Margins, tracts and block groups
    ├── acs1year/
    │   └── 2019/
    │       ├── g20191ri.csv
    │       └── e20191ri0003000.txt
    ├── decennial/
    │   └── 2020/
    │       ├── rigeo2020.pl
    │       └── ri000012020.pl
    └── generated_data/
        ├── geoid_coord/geoid_coord_RI.csv  # Coordinates and containment
        ├── lookup/acs5year_2015.csv        # Table-content catalogs
        ├── geoheader/acs5year_2009.csv     # Geography layout overrides
        ├── dict_fips.csv
        └── dict_cbsa.csv
    """

    def __init__(
        self,
        data_root: Path,
        availability: Optional[DatasetAvailability] = None,
    ):
        """
        Initialize DataManager.

        Args:
            data_root: Directory holding the summary files
            availability: Collaborator asked for files before they are read.
                Defaults to checking the data root.
        """
        self.data_root = Path(data_root)
        self.generated_dir = self.data_root / "generated_data"
        self.availability = availability or LocalFileAvailability()
        self.catalogs = CatalogRegistry(self._load_contents, self._load_layout)

        self._dict_fips: Optional[pd.DataFrame] = None
        self._dict_cbsa: Optional[pd.DataFrame] = None
        self._search: Optional[SearchEngine] = None

    @property
    def search(self) -> SearchEngine:
        """Get or create the search engine."""
        if self._search is None:
            self._search = SearchEngine()
        return self._search

    # ==========================================================================
    # File locations
    # ==========================================================================

    def geography_file(self, kind: DatasetKind, year: int, state: str) -> Path:
        """Geography file of a state."""
        if kind is DatasetKind.DECENNIAL:
            return decennial_geography_file(self.data_root, year, state)
        return acs_geography_file(self.data_root, kind.value, year, state)

    def segment_files(
        self,
        kind: DatasetKind,
        year: int,
        state: str,
        file_segment: str,
        est_marg: str = "e",
    ) -> List[Path]:
        """Files holding one segment of a state, excluding optional ones."""
        if kind is DatasetKind.DECENNIAL:
            return [decennial_segment_file(self.data_root, year, state, file_segment)]
        paths = acs_segment_files(self.data_root, kind.value, year, state, file_segment, est_marg)
        if kind is DatasetKind.ACS5 and state.upper() == NATION_ABBREV:
            return paths[:1]
        return paths

    def geo_reference_file(self, state: str) -> Path:
        return self.generated_dir / "geoid_coord" / f"geoid_coord_{state.upper()}.csv"

    def content_catalog_file(self, kind: DatasetKind, year: int) -> Path:
        return self.generated_dir / "lookup" / f"{kind.value}_{year}.csv"

    def layout_file(self, kind: DatasetKind, year: int) -> Path:
        return self.generated_dir / "geoheader" / f"{kind.value}_{year}.csv"

    # ==========================================================================
    # Catalogs
    # ==========================================================================

    def _load_contents(self, kind: DatasetKind, year: int) -> TableContentCatalog:
        header_width = len(kind.file_format.segment_header)
        path = self.content_catalog_file(kind, year)
        if path.is_file():
            return TableContentCatalog.from_csv(path, header_width)
        if kind is DatasetKind.DECENNIAL and year in PL_YEARS:
            return TableContentCatalog(
                decennial_catalog_frame(), header_width, source=f"{kind.label} {year}"
            )
        raise DataNotAvailableError("all states", f"{kind.label} {year} table contents", str(path))

    def _load_layout(self, kind: DatasetKind, year: int) -> GeoHeaderLayout:
        path = self.layout_file(kind, year)
        if path.is_file():
            return GeoHeaderLayout.from_csv(path)
        columns = builtin_geoheader_layout(kind.value, year)
        if columns is None:
            raise DataNotAvailableError("all states", f"{kind.label} {year} geography layout", str(path))
        return GeoHeaderLayout(
            columns, source=f"{kind.label} {year} geography files", descriptions=GEOHEADER_DESCRIPTIONS
        )

    def content_catalog(self, kind: DatasetKind, year: int) -> TableContentCatalog:
        return self.catalogs.contents(kind, year)

    def geo_layout(self, kind: DatasetKind, year: int) -> GeoHeaderLayout:
        return self.catalogs.layout(kind, year)

    # ==========================================================================
    # Availability
    # ==========================================================================

    def ensure_state_data(
        self,
        kind: DatasetKind,
        year: int,
        state: str,
        segments: List[str],
        with_margin: bool = False,
    ) -> None:
        """
        Ask the availability collaborator for every file a state read needs.

        Raises:
            DataNotAvailableError: If any file is unavailable
        """
        paths = [self.geography_file(kind, year, state)]
        flags = ["e", "m"] if with_margin else ["e"]
        for segment in segments:
            for flag in flags:
                paths.extend(self.segment_files(kind, year, state, segment, flag))
        self.availability.ensure_available(state, f"{kind.label} {year}", paths)

    # ==========================================================================
    # Reference datasets
    # ==========================================================================

    def dict_fips(self) -> pd.DataFrame:
        """
        FIPS dictionary: one row per named area.

        Columns SUMLEV, state_abbr, STATE, COUNTY, COUSUB, PLACE, CONCIT, NAME.
        """
        if self._dict_fips is None:
            self._dict_fips = self._read_dictionary("dict_fips.csv")
        return self._dict_fips

    def dict_cbsa(self) -> pd.DataFrame:
        """CBSA dictionary with CBSA code and CBSA_title columns."""
        if self._dict_cbsa is None:
            self._dict_cbsa = self._read_dictionary("dict_cbsa.csv")
        return self._dict_cbsa

    def _read_dictionary(self, name: str) -> pd.DataFrame:
        path = self.generated_dir / name
        if not path.is_file():
            raise DataNotAvailableError("all states", name, str(path))
        logger.debug("Loading %s", path)
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    def geo_reference(self, state: str) -> Optional[pd.DataFrame]:
        """
        Load the precomputed geo-reference dataset of a state.

        Returns:
            Frame keyed by GEOID with numeric lon/lat and string geo-header
            columns, or None if the state has no reference file
        """
        path = self.geo_reference_file(state)
        if not path.is_file():
            return None

        logger.debug("Loading geo reference %s", path)
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        frame.columns = [c if c in ("lon", "lat") else c.upper() for c in frame.columns]
        for column in frame.columns:
            if column in ("lon", "lat"):
                frame[column] = pd.to_numeric(frame[column], errors="coerce")
            else:
                values = frame[column].str.strip()
                frame[column] = values.where(values != "")
        return frame.drop_duplicates(subset="GEOID")

    # ==========================================================================
    # Inventory
    # ==========================================================================

    def list_years(self) -> Dict[str, List[int]]:
        """Years with a directory under each dataset kind."""
        years: Dict[str, List[int]] = {}
        for kind in DatasetKind:
            base = self.data_root / kind.value
            if base.is_dir():
                found = sorted(int(p.name) for p in base.iterdir() if p.is_dir() and p.name.isdigit())
                if found:
                    years[kind.value] = found
        return years

    def list_states(self, kind: DatasetKind, year: int) -> List[str]:
        """State abbreviations with a geography file for a dataset year."""
        base = self.data_root / kind.value / str(year)
        if not base.is_dir():
            return []
        if kind is DatasetKind.DECENNIAL:
            pattern = re.compile(rf"^([a-z]{{2}})geo{year}\.pl$")
        else:
            pattern = re.compile(rf"^g{year}{kind.value[3]}([a-z]{{2}})\.csv$")
        states = []
        for path in base.iterdir():
            match = pattern.match(path.name)
            if match:
                states.append(match.group(1).upper())
        return sorted(states)
