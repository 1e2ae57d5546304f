"""Resolve user-facing table content and geo header references."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from census_summary.census.geoheaders import KEY_COLUMNS
from census_summary.census.summary_levels import resolve_geo_component, resolve_summary_level
from census_summary.core.errors import InvalidQuery
from census_summary.data.catalog import GeoHeaderLayout, TableContentCatalog

logger = logging.getLogger(__name__)

__all__ = [
    "content_file_segments",
    "organize_table_contents",
    "parse_table_content",
    "resolve_geo_component",
    "resolve_geo_headers",
    "resolve_summary_level",
]


def parse_table_content(raw: str) -> Tuple[Optional[str], str]:
    """
    Split "alias = code" into its parts.

    >>> parse_table_content("population = B01003_001")
    ('population', 'B01003_001')
    >>> parse_table_content("B01003_001")
    (None, 'B01003_001')
    """
    if "=" in raw:
        alias, code = raw.split("=", 1)
        alias = alias.strip()
        if not alias:
            raise InvalidQuery(f"Empty name in table content {raw!r}")
        return alias, code.strip()
    return None, raw.strip()


def organize_table_contents(
    table_contents: Iterable[str],
    catalog: TableContentCatalog,
) -> List[Tuple[str, str]]:
    """
    Resolve table contents against a catalog.

    Args:
        table_contents: Codes, optionally as "alias = code"
        catalog: Catalog of the dataset year

    Returns:
        (name, canonical reference) pairs in request order. The name is the
        alias, or the canonical reference when none is given. A reference
        listed twice is kept once, with its first name.

    Raises:
        UnknownReference: If a code is not in the catalog
        InvalidQuery: If one name is given to two references
    """
    organized: List[Tuple[str, str]] = []
    by_name: Dict[str, str] = {}
    seen = set()

    for raw in table_contents:
        alias, code = parse_table_content(raw)
        reference = catalog.canonical(code)
        name = alias or reference

        if reference in seen:
            logger.debug("Table content %s requested more than once", reference)
            continue
        if name in by_name:
            raise InvalidQuery(
                f"The name {name!r} is given to both {by_name[name]} and {reference}"
            )

        seen.add(reference)
        by_name[name] = reference
        organized.append((name, reference))

    return organized


def content_file_segments(
    catalog: TableContentCatalog,
    references: Iterable[str],
) -> Dict[str, List[str]]:
    """Map each file segment to the requested references it holds."""
    return catalog.file_segments_for(references)


def resolve_geo_headers(
    geo_headers: Iterable[str],
    layout: GeoHeaderLayout,
) -> List[str]:
    """
    Validate geo headers against a geography layout.

    Returns:
        Upper-cased, de-duplicated headers in request order, excluding the
        key columns that are always read

    Raises:
        UnknownReference: If a header is not in the layout
    """
    resolved: List[str] = []
    for header in geo_headers:
        layout.position(header)
        name = header.strip().upper()
        if name not in resolved and name not in KEY_COLUMNS:
            resolved.append(name)
    return resolved
