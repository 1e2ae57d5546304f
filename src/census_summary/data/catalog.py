"""Reference catalogs: where each table content and geo header lives on disk."""

import difflib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from census_summary.census.datasets import DatasetKind
from census_summary.core.errors import UnknownReference

logger = logging.getLogger(__name__)

# Catalog rows ending in ".5" are table sub-headings with no column in the files
SUBHEADING_SUFFIX = ".5"


@dataclass(frozen=True)
class ContentLocation:
    """Where a table content is stored."""

    reference: str  # canonical spelling from the catalog
    file_segment: str
    position: int  # 0-based column index within the segment file


class TableContentCatalog:
    """
    Maps table content references to file segments and column positions.

    Built from a frame with one row per reference, in on-disk column order
    within each file segment. Lookups are case-insensitive.
    """

    def __init__(self, frame: pd.DataFrame, header_width: int, source: str = "catalog"):
        """
        Initialize catalog.

        Args:
            frame: Rows with at least reference and file_segment columns
            header_width: Number of leading metadata columns in segment files
            source: Description used in error messages
        """
        missing = {"reference", "file_segment"} - set(frame.columns)
        if missing:
            raise ValueError(f"Catalog {source} is missing columns: {sorted(missing)}")

        self.source = source
        self._frame = frame.astype({"reference": str, "file_segment": str}).reset_index(drop=True)

        stored = self._frame[~self._frame["reference"].str.endswith(SUBHEADING_SUFFIX)]
        positions = stored.groupby("file_segment", sort=False).cumcount() + header_width

        self._locations: Dict[str, ContentLocation] = {}
        self._segments: Dict[str, List[str]] = {}
        for reference, segment, position in zip(
            stored["reference"], stored["file_segment"], positions
        ):
            self._locations[reference.upper()] = ContentLocation(reference, segment, int(position))
            self._segments.setdefault(segment, []).append(reference)

    @classmethod
    def from_csv(cls, path: Path, header_width: int) -> "TableContentCatalog":
        """Load a catalog file (reference, file_segment[, table_content, table_name])."""
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        return cls(frame, header_width, source=str(path))

    def __contains__(self, reference: str) -> bool:
        return reference.strip().upper() in self._locations

    def __len__(self) -> int:
        return len(self._locations)

    @property
    def frame(self) -> pd.DataFrame:
        """Catalog rows, for searching."""
        return self._frame.copy()

    def locate(self, reference: str) -> ContentLocation:
        """
        Find a table content.

        Raises:
            UnknownReference: If the reference is not stored in any file segment
        """
        key = reference.strip().upper()
        if key not in self._locations:
            suggestions = difflib.get_close_matches(key, list(self._locations), n=3)
            raise UnknownReference(
                reference,
                self.source,
                [self._locations[s].reference for s in suggestions],
            )
        return self._locations[key]

    def canonical(self, reference: str) -> str:
        """Catalog spelling of a reference."""
        return self.locate(reference).reference

    def segment_references(self, file_segment: str) -> List[str]:
        """All references stored in a file segment, in column order."""
        return list(self._segments.get(file_segment, []))

    def file_segments_for(self, references: Iterable[str]) -> Dict[str, List[str]]:
        """
        Group references by the file segment holding them.

        Segments are ordered by their first appearance in references.
        """
        grouped: Dict[str, List[str]] = {}
        for reference in references:
            location = self.locate(reference)
            members = grouped.setdefault(location.file_segment, [])
            if location.reference not in members:
                members.append(location.reference)
        return grouped


class GeoHeaderLayout:
    """Column layout of a geography file."""

    def __init__(
        self,
        columns: List[str],
        source: str = "geography layout",
        descriptions: Optional[Dict[str, str]] = None,
    ):
        self.columns = [c.strip().upper() for c in columns]
        self.source = source
        self.descriptions = descriptions or {}
        self._positions: Dict[str, int] = {}
        for position, name in enumerate(self.columns):
            self._positions.setdefault(name, position)

    @classmethod
    def from_csv(cls, path: Path) -> "GeoHeaderLayout":
        """Load a layout override file: reference[, description], one row per column."""
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        descriptions = None
        if "description" in frame.columns:
            descriptions = dict(zip(frame["reference"].str.strip().str.upper(), frame["description"]))
        return cls(frame["reference"].tolist(), source=str(path), descriptions=descriptions)

    @property
    def frame(self) -> pd.DataFrame:
        """Layout as rows of reference and description, for searching."""
        return pd.DataFrame(
            {
                "reference": self.columns,
                "description": [self.descriptions.get(c, "") for c in self.columns],
            }
        )

    def __contains__(self, name: str) -> bool:
        return name.strip().upper() in self._positions

    def position(self, name: str) -> int:
        """
        Column position of a geo header.

        Raises:
            UnknownReference: If the header is not in the layout
        """
        key = name.strip().upper()
        if key not in self._positions:
            suggestions = difflib.get_close_matches(key, self.columns, n=3)
            raise UnknownReference(name, self.source, suggestions)
        return self._positions[key]


CatalogKey = Tuple[DatasetKind, int]


class CatalogRegistry:
    """
    Explicit mapping from (dataset kind, year) to its catalogs.

    Catalogs are loaded once through the supplied loaders and are not
    modified afterwards.
    """

    def __init__(
        self,
        content_loader: Callable[[DatasetKind, int], TableContentCatalog],
        layout_loader: Callable[[DatasetKind, int], GeoHeaderLayout],
    ):
        self._content_loader = content_loader
        self._layout_loader = layout_loader
        self._contents: Dict[CatalogKey, TableContentCatalog] = {}
        self._layouts: Dict[CatalogKey, GeoHeaderLayout] = {}

    def register(
        self,
        kind: DatasetKind,
        year: int,
        contents: Optional[TableContentCatalog] = None,
        layout: Optional[GeoHeaderLayout] = None,
    ) -> None:
        """Register pre-built catalogs for a dataset year."""
        if contents is not None:
            self._contents[(kind, year)] = contents
        if layout is not None:
            self._layouts[(kind, year)] = layout

    def contents(self, kind: DatasetKind, year: int) -> TableContentCatalog:
        """Table-content catalog of a dataset year."""
        key = (kind, year)
        if key not in self._contents:
            logger.debug("Loading table content catalog for %s %s", kind.value, year)
            self._contents[key] = self._content_loader(kind, year)
        return self._contents[key]

    def layout(self, kind: DatasetKind, year: int) -> GeoHeaderLayout:
        """Geography file layout of a dataset year."""
        key = (kind, year)
        if key not in self._layouts:
            logger.debug("Loading geography layout for %s %s", kind.value, year)
            self._layouts[key] = self._layout_loader(kind, year)
        return self._layouts[key]

    def loaded(self) -> List[CatalogKey]:
        """Dataset years whose content catalogs are loaded."""
        return sorted(self._contents, key=lambda k: (k[0].value, k[1]))
