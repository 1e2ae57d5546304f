"""Main CensusSummary class - the primary user interface."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
from tqdm import tqdm

from census_summary.census.acs import ESTIMATE, MARGIN
from census_summary.census.datasets import DatasetKind
from census_summary.census.geoheaders import NAMED_GEOHEADERS
from census_summary.census.summary_levels import (
    WILDCARD,
    geo_component_names,
    resolve_geo_component,
    resolve_summary_level,
)
from census_summary.config import Settings, get_settings
from census_summary.core.areas import AreaResolver, parse_area, select_areas
from census_summary.core.enricher import STATE_HEADER, enrich_geography
from census_summary.core.errors import InvalidQuery
from census_summary.core.resolver import (
    content_file_segments,
    organize_table_contents,
    parse_table_content,
    resolve_geo_headers,
)
from census_summary.data.catalog import GeoHeaderLayout, TableContentCatalog
from census_summary.data.constants import fips_to_abbrevs, normalize_state_abbrev
from census_summary.data.manager import DataManager, DatasetAvailability
from census_summary.data.merger import RECORD_KEY, merge_on_record_key
from census_summary.data.reader import content_column, read_contents, read_geography

logger = logging.getLogger(__name__)

StrOrList = Union[str, Sequence[str], None]

BEGIN_COLUMNS = ["area", "GEOID", "lon", "lat", "state"]
END_COLUMNS = ["GEOCOMP", "SUMLEV", "NAME"]
MARGIN_SUFFIX = "_margin"
RAW_PREFIX = "raw_"


def _as_list(value: StrOrList) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class CensusSummary:
    """
    Main interface for census-summary.

    Example usage:
        >>> census = CensusSummary(data_root="~/census_data")
        >>> df = census.read_survey(
        ...     "acs5year", 2015, "RI",
        ...     table_contents=["population = B01003_001"],
        ...     geo_headers=["PLACE"],
        ...     summary_level="place",
        ... )
    """

    def __init__(
        self,
        data_root: Optional[Union[str, Path]] = None,
        settings: Optional[Settings] = None,
        availability: Optional[DatasetAvailability] = None,
    ):
        """
        Initialize CensusSummary.

        Args:
            data_root: Directory holding the summary files. Defaults to
                PATH_TO_CENSUS from the settings.
            settings: Settings to use instead of the environment
            availability: Collaborator that supplies summary files or
                reports them unavailable. Defaults to files under the data root.
        """
        self.settings = settings or get_settings()
        self._data_root = Path(data_root).expanduser() if data_root is not None else None
        self._availability = availability
        self._data_manager: Optional[DataManager] = None
        self._areas: Optional[AreaResolver] = None

    @property
    def data_root(self) -> Path:
        """
        Directory holding the summary files.

        Raises:
            PreconditionMissing: If neither data_root nor PATH_TO_CENSUS is set
        """
        if self._data_root is None:
            self._data_root = self.settings.require_data_root()
        return self._data_root

    @property
    def data_manager(self) -> DataManager:
        if self._data_manager is None:
            self._data_manager = DataManager(self.data_root, availability=self._availability)
        return self._data_manager

    @property
    def area_resolver(self) -> AreaResolver:
        if self._areas is None:
            manager = self.data_manager
            self._areas = AreaResolver(manager.dict_fips, manager.dict_cbsa)
        return self._areas

    # ==========================================================================
    # Resolution
    # ==========================================================================

    def content_catalog(self, dataset: Union[str, DatasetKind], year: int) -> TableContentCatalog:
        return self.data_manager.content_catalog(DatasetKind.parse(dataset), int(year))

    def geo_layout(self, dataset: Union[str, DatasetKind], year: int) -> GeoHeaderLayout:
        return self.data_manager.geo_layout(DatasetKind.parse(dataset), int(year))

    def lookup_content_file_segments(
        self,
        year: int,
        dataset: Union[str, DatasetKind],
        references: Sequence[str],
    ) -> Dict[str, List[str]]:
        """
        Find the file segments holding table contents.

        Returns:
            File segment id -> canonical references it holds

        Raises:
            UnknownReference: If a reference is not in the year's catalog
        """
        catalog = self.content_catalog(dataset, year)
        return content_file_segments(catalog, [parse_table_content(r)[1] for r in references])

    def resolve_areas(self, areas: StrOrList) -> pd.DataFrame:
        """
        Resolve area specifiers to geo header codes.

        Returns:
            One row per specifier with geoheader, code, state and name; the
            code is null for areas that were not found
        """
        return self.area_resolver.resolve(_as_list(areas))

    # ==========================================================================
    # Reading
    # ==========================================================================

    def read_survey(
        self,
        dataset: Union[str, DatasetKind],
        year: int,
        states: StrOrList,
        table_contents: StrOrList = None,
        areas: StrOrList = None,
        geo_headers: StrOrList = None,
        summary_level: Union[str, int] = WILDCARD,
        geo_comp: Union[str, int] = "total",
        with_margin: bool = False,
        with_raw_geoheaders: bool = False,
        with_population: bool = True,
        show_progress: Optional[bool] = None,
    ) -> pd.DataFrame:
        """
        Read census summary data of selected areas or geo headers.

        Args:
            dataset: "acs1year", "acs5year" or "decennial"
            year: Survey year (end year for the 5-year survey)
            states: State abbreviations, e.g. ["RI", "MA"]; "US" for the
                nationwide files
            table_contents: Table content references, optionally named as
                "name = reference"
            areas: Area specifiers, e.g. "Lincoln town, RI",
                "PLACE = RI59000" or "Providence metro"
            geo_headers: Geo headers to return, e.g. ["PLACE", "CBSA"]
            summary_level: Summary level alias or code, "*" for all
            geo_comp: Geographic component alias or code, "*" for all
            with_margin: Also return margins of error (not for decennial)
            with_raw_geoheaders: Also return geo header values as found in
                the geography file, as raw_<HEADER>
            with_population: Add total population unless already requested
            show_progress: Show a progress bar over states. Defaults to the
                show_progress setting.

        Returns:
            DataFrame with area, GEOID, lon, lat and state first, then geo
            headers and contents, ending with GEOCOMP, SUMLEV and NAME

        Raises:
            InvalidQuery: If the arguments are inconsistent
            PreconditionMissing: If the data root is not configured
            UnknownReference: If a table content or geo header is not in the
                year's catalogs
            DataNotAvailableError: If summary files are missing
        """
        # Arguments
        kind = DatasetKind.parse(dataset)
        try:
            year = int(year)
        except (TypeError, ValueError) as e:
            raise InvalidQuery(f"Year must be an integer, got {year!r}") from e

        area_list = _as_list(areas)
        header_list = _as_list(geo_headers)
        if bool(area_list) == bool(header_list):
            raise InvalidQuery("Exactly one of areas and geo_headers must be given")
        if with_margin and not kind.has_margin:
            raise InvalidQuery(f"The {kind.label} has no margins of error")

        state_list = self._normalize_states(states)
        parsed_areas = [parse_area(text) for text in area_list]

        contents = _as_list(table_contents)
        if with_population:
            contents = self._with_population(kind, contents)

        # References
        manager = self.data_manager
        catalog = manager.content_catalog(kind, year)
        organized = organize_table_contents(contents, catalog)
        layout = manager.geo_layout(kind, year)
        if header_list:
            header_list = resolve_geo_headers(header_list, layout)
        else:
            resolve_geo_headers([a.geoheader for a in parsed_areas if a.geoheader], layout)

        sumlev = resolve_summary_level(summary_level)
        geocomp = resolve_geo_component(geo_comp)

        # Areas
        resolved_areas = None
        if parsed_areas:
            resolved_areas = self.area_resolver.resolve(parsed_areas)
            header_list = resolve_geo_headers(resolved_areas["geoheader"].dropna().unique(), layout)

        # Files
        references = [reference for _, reference in organized]
        segments = content_file_segments(catalog, references)
        for state in state_list:
            manager.ensure_state_data(kind, year, state, list(segments), with_margin)

        if show_progress is None:
            show_progress = self.settings.show_progress

        parts = []
        for state in tqdm(
            state_list,
            desc=f"Reading {kind.label} {year}",
            unit="state",
            disable=not show_progress,
        ):
            logger.info("Reading %s %s for %s", kind.label, year, state)
            parts.append(
                self._read_state(
                    kind,
                    year,
                    state,
                    catalog,
                    layout,
                    segments,
                    header_list,
                    sumlev,
                    geocomp,
                    with_margin,
                    with_raw_geoheaders,
                )
            )
        combined = pd.concat(parts, ignore_index=True)
        del parts

        combined["GEOCOMP"] = geo_component_names(combined["GEOCOMP"])
        combined["state"] = pd.Series(fips_to_abbrevs(combined[STATE_HEADER].tolist()), index=combined.index, dtype=object)

        if resolved_areas is not None:
            combined = select_areas(combined, resolved_areas)
            # Area mode hides the geo headers but keeps their raw_ columns
            shown_headers: List[str] = []
        else:
            shown_headers = header_list
            if len(header_list) == 1 and header_list[0] in NAMED_GEOHEADERS:
                header = header_list[0]
                combined["area"] = self.area_resolver.area_names(header, combined[header], combined["state"])

        raw_headers = header_list if with_raw_geoheaders else []
        return self._finalize(combined, organized, shown_headers, raw_headers, with_margin)

    def _normalize_states(self, states: StrOrList) -> List[str]:
        state_list = _as_list(states)
        if not state_list:
            raise InvalidQuery("At least one state must be given")
        try:
            return list(dict.fromkeys(normalize_state_abbrev(s) for s in state_list))
        except ValueError as e:
            raise InvalidQuery(str(e)) from e

    @staticmethod
    def _with_population(kind: DatasetKind, contents: List[str]) -> List[str]:
        """Prepend the total population content unless it is already requested."""
        reference = kind.population_reference
        parsed = [parse_table_content(c) for c in contents]
        if any(code.upper() == reference.upper() for _, code in parsed):
            return contents
        if any(alias == "population" for alias, _ in parsed):
            return [reference] + contents
        return [f"population = {reference}"] + contents

    def _read_state(
        self,
        kind: DatasetKind,
        year: int,
        state: str,
        catalog: TableContentCatalog,
        layout: GeoHeaderLayout,
        segments: Dict[str, List[str]],
        geo_headers: List[str],
        sumlev: str,
        geocomp: str,
        with_margin: bool,
        with_raw_geoheaders: bool,
    ) -> pd.DataFrame:
        """Read, enrich, merge and filter one state's data."""
        manager = self.data_manager
        headers = list(dict.fromkeys([STATE_HEADER] + geo_headers))

        geo = read_geography(manager.geography_file(kind, year, state), layout, headers, kind.file_format)
        if sumlev != WILDCARD:
            geo = geo[geo["SUMLEV"] == sumlev]
        if geocomp != WILDCARD:
            geo = geo[geo["GEOCOMP"] == geocomp]
        if with_raw_geoheaders:
            geo = geo.assign(**{RAW_PREFIX + h: geo[h] for h in geo_headers})

        geo = enrich_geography(geo, manager.geo_reference(state), headers, state)

        if segments:
            root = manager.data_root
            content = merge_on_record_key(read_contents(root, kind, year, state, segments, catalog, ESTIMATE))
            if with_margin:
                margin = merge_on_record_key(read_contents(root, kind, year, state, segments, catalog, MARGIN))
                content = merge_on_record_key([content, margin])
            geo = geo.merge(content, on=RECORD_KEY, how="inner", sort=False)

        logger.debug("%d rows for %s after filtering", len(geo), state)
        return geo.drop(columns=RECORD_KEY)

    @staticmethod
    def _finalize(
        combined: pd.DataFrame,
        organized: List[Tuple[str, str]],
        geo_headers: List[str],
        raw_headers: List[str],
        with_margin: bool,
    ) -> pd.DataFrame:
        """Rename contents to their names and order the columns."""
        renames = {}
        content_columns = []
        for name, reference in organized:
            renames[content_column(reference, ESTIMATE)] = name
            content_columns.append(name)
            if with_margin:
                renames[content_column(reference, MARGIN)] = name + MARGIN_SUFFIX
                content_columns.append(name + MARGIN_SUFFIX)
        combined = combined.rename(columns=renames)

        raw_columns = [RAW_PREFIX + h for h in raw_headers]
        begin = [c for c in BEGIN_COLUMNS if c in combined.columns]
        return combined[begin + geo_headers + raw_columns + content_columns + END_COLUMNS].reset_index(
            drop=True
        )


def read_survey(
    dataset: Union[str, DatasetKind],
    year: int,
    states: StrOrList,
    table_contents: StrOrList = None,
    areas: StrOrList = None,
    geo_headers: StrOrList = None,
    summary_level: Union[str, int] = WILDCARD,
    geo_comp: Union[str, int] = "total",
    with_margin: bool = False,
    with_raw_geoheaders: bool = False,
    with_population: bool = True,
    data_root: Optional[Union[str, Path]] = None,
    show_progress: Optional[bool] = None,
) -> pd.DataFrame:
    """Read census summary data; see CensusSummary.read_survey."""
    return CensusSummary(data_root=data_root).read_survey(
        dataset,
        year,
        states,
        table_contents=table_contents,
        areas=areas,
        geo_headers=geo_headers,
        summary_level=summary_level,
        geo_comp=geo_comp,
        with_margin=with_margin,
        with_raw_geoheaders=with_raw_geoheaders,
        with_population=with_population,
        show_progress=show_progress,
    )


def read_acs5year(year: int, states: StrOrList, **kwargs) -> pd.DataFrame:
    """Read ACS 5-year summary data; arguments as read_survey."""
    return read_survey(DatasetKind.ACS5, year, states, **kwargs)


def read_acs1year(year: int, states: StrOrList, **kwargs) -> pd.DataFrame:
    """Read ACS 1-year summary data; arguments as read_survey."""
    return read_survey(DatasetKind.ACS1, year, states, **kwargs)


def read_decennial(year: int, states: StrOrList, **kwargs) -> pd.DataFrame:
    """Read decennial census (PL 94-171) data; arguments as read_survey, without margins."""
    return read_survey(DatasetKind.DECENNIAL, year, states, **kwargs)


def lookup_content_file_segments(
    year: int,
    dataset: Union[str, DatasetKind],
    references: Sequence[str],
    data_root: Optional[Union[str, Path]] = None,
) -> Dict[str, List[str]]:
    """Map file segment ids to the references they hold."""
    return CensusSummary(data_root=data_root).lookup_content_file_segments(year, dataset, references)


def resolve_areas(areas: StrOrList, data_root: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """Resolve area specifiers to (geoheader, code, state, name) rows."""
    return CensusSummary(data_root=data_root).resolve_areas(areas)
