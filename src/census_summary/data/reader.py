"""Readers for summary geography files and content file segments.

Both file kinds are headerless delimited text. Columns are selected by
position from the layouts in the reference catalogs and named afterwards.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from census_summary.census.acs import ESTIMATE, MARGIN, acs_segment_files
from census_summary.census.datasets import DatasetKind, SummaryFileFormat
from census_summary.census.decennial import decennial_segment_file
from census_summary.census.geoheaders import KEY_COLUMNS
from census_summary.core.errors import DataNotAvailableError
from census_summary.data.catalog import GeoHeaderLayout, TableContentCatalog
from census_summary.data.constants import NATION_ABBREV

logger = logging.getLogger(__name__)

RECORD_KEY = "LOGRECNO"

# Placeholders the Census Bureau writes where a value is suppressed or missing
MISSING_VALUE_SENTINELS = (".", "")


def coerce_numeric(frame: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Convert content columns to numbers.

    Missing-value placeholders become NaN, never zero. Any other text that
    does not parse as a number is also NaN.

    Args:
        frame: Frame with string content columns
        columns: Columns to convert

    Returns:
        The same frame, converted in place
    """
    for column in columns:
        raw = frame[column].astype(object).str.strip()
        placeholders = raw.isna() | raw.isin(MISSING_VALUE_SENTINELS)
        frame[column] = pd.to_numeric(raw.where(~placeholders), errors="coerce").astype("float64")
        if placeholders.any():
            logger.debug("Converted %d placeholder values in %s to null", int(placeholders.sum()), column)
    return frame


def _read_columns(
    path: Path,
    sep: str,
    positions: List[int],
    names: List[str],
    encoding: str,
) -> pd.DataFrame:
    """Read the given column positions of a headerless file as strings."""
    logger.debug("Reading %s (columns %s)", path, positions)
    raw = pd.read_csv(
        path,
        sep=sep,
        header=None,
        dtype=str,
        usecols=sorted(set(positions)),
        encoding=encoding,
        keep_default_na=False,
    )
    frame = pd.DataFrame({name: raw[position] for name, position in zip(names, positions)})
    return frame


def read_geography(
    path: Path,
    layout: GeoHeaderLayout,
    geo_headers: List[str],
    file_format: SummaryFileFormat,
) -> pd.DataFrame:
    """
    Read one state's geography file.

    Args:
        path: Geography file
        layout: Column layout of the file
        geo_headers: Extra geo headers to read besides the key columns
        file_format: Delimiter and encoding of the dataset

    Returns:
        Frame with GEOID, NAME, LOGRECNO (int), SUMLEV, GEOCOMP and the
        requested geo headers (strings, null where blank)
    """
    names = list(KEY_COLUMNS) + [h for h in geo_headers if h not in KEY_COLUMNS]
    positions = [layout.position(name) for name in names]
    frame = _read_columns(path, file_format.geo_delimiter, positions, names, file_format.encoding)

    for name in names:
        if name != RECORD_KEY:
            values = frame[name].str.strip()
            frame[name] = values.where(values != "")
    frame[RECORD_KEY] = pd.to_numeric(frame[RECORD_KEY]).astype("int64")

    logger.debug("Read %d geography rows from %s", len(frame), path)
    return frame


def content_column(reference: str, est_marg: str = ESTIMATE) -> str:
    """Name of a content column tagged as estimate or margin, e.g. B01003_001_e."""
    return f"{reference}_{est_marg}"


def _segment_paths(
    root: Path,
    kind: DatasetKind,
    year: int,
    state: str,
    file_segment: str,
    est_marg: str,
) -> List[Path]:
    if kind is DatasetKind.DECENNIAL:
        return [decennial_segment_file(root, year, state, file_segment)]
    return acs_segment_files(root, kind.value, year, state, file_segment, est_marg)


def _is_optional_group(kind: DatasetKind, state: str, index: int) -> bool:
    """The nationwide aggregate has no group 2 (tracts and block groups) files."""
    return kind is DatasetKind.ACS5 and state.upper() == NATION_ABBREV and index == 1


def read_file_segment(
    root: Path,
    kind: DatasetKind,
    year: int,
    state: str,
    file_segment: str,
    references: List[str],
    catalog: TableContentCatalog,
    est_marg: str = ESTIMATE,
) -> pd.DataFrame:
    """
    Read requested contents from one file segment of a state.

    For the 5-year product the group 1 and group 2 files are stacked. A
    missing or empty group 2 file for the nationwide aggregate "US"
    contributes no rows.

    Args:
        root: Data root
        kind: Dataset kind
        year: Survey year
        state: State abbreviation, or "US"
        file_segment: Segment id
        references: Canonical references stored in this segment
        catalog: Table-content catalog of the dataset year
        est_marg: "e" for estimates, "m" for margins of error

    Returns:
        Frame with LOGRECNO and one numeric column per reference named
        <reference>_<est_marg>

    Raises:
        DataNotAvailableError: If a required file is missing
    """
    if est_marg not in (ESTIMATE, MARGIN):
        raise ValueError(f"est_marg must be '{ESTIMATE}' or '{MARGIN}', got {est_marg!r}")

    file_format = kind.file_format
    columns = [content_column(ref, est_marg) for ref in references]
    names = [RECORD_KEY] + columns
    positions = [file_format.segment_header.index(RECORD_KEY)] + [
        catalog.locate(ref).position for ref in references
    ]

    parts = []
    for index, path in enumerate(_segment_paths(root, kind, year, state, file_segment, est_marg)):
        try:
            parts.append(
                _read_columns(path, file_format.content_delimiter, positions, names, file_format.encoding)
            )
        except (FileNotFoundError, pd.errors.EmptyDataError):
            if _is_optional_group(kind, state, index):
                logger.warning("No group 2 file %s for %s; reading group 1 only", path.name, state)
                continue
            raise DataNotAvailableError(state, f"{kind.label} {year} segment {file_segment}", str(path))

    if parts:
        frame = pd.concat(parts, ignore_index=True)
    else:
        frame = pd.DataFrame({name: pd.Series([], dtype=str) for name in names})

    frame[RECORD_KEY] = pd.to_numeric(frame[RECORD_KEY]).astype("int64")
    coerce_numeric(frame, columns)

    logger.debug("Read %d rows of segment %s for %s", len(frame), file_segment, state)
    return frame


def read_contents(
    root: Path,
    kind: DatasetKind,
    year: int,
    state: str,
    segments: Dict[str, List[str]],
    catalog: TableContentCatalog,
    est_marg: str = ESTIMATE,
) -> List[pd.DataFrame]:
    """Read every segment in a segment -> references mapping, in mapping order."""
    return [
        read_file_segment(root, kind, year, state, segment, references, catalog, est_marg)
        for segment, references in segments.items()
    ]
