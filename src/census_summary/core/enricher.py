"""Join geography rows with the precomputed geo-reference dataset."""

import logging
from typing import List, Optional

import pandas as pd

from census_summary.census.geoheaders import CONTAINMENT_GEOHEADERS
from census_summary.core.geoid import canonical_geoids

logger = logging.getLogger(__name__)

COORDINATES = ["lon", "lat"]

# Read from every geography file; filled reliably at all levels below the nation
STATE_HEADER = "STATE"

_KEY = "_geoid_key"


def enrich_geography(
    geography: pd.DataFrame,
    reference: Optional[pd.DataFrame],
    geo_headers: List[str],
    state: str = "",
) -> pd.DataFrame:
    """
    Add coordinates and corrected containment codes to geography rows.

    The raw geography files only fill COUSUB and PLACE at their own summary
    level. The reference dataset carries them for every GEOID, so those
    values replace the raw ones; rows without a reference match get null
    coordinates and null COUSUB and PLACE. All other headers keep their raw
    values.

    Args:
        geography: Rows from read_geography
        reference: Geo-reference dataset of the state, or None if missing
        geo_headers: Geo headers read from the geography file
        state: State abbreviation, for log messages

    Returns:
        New frame in the input row order with lon and lat added
    """
    result = geography.copy()

    if reference is None:
        logger.warning("No geo reference dataset for %s; lon/lat are null", state)
        for column in COORDINATES:
            result[column] = float("nan")
        return result

    replaced = [h for h in geo_headers if h in CONTAINMENT_GEOHEADERS and h in reference.columns]
    lookup = reference[["GEOID"] + COORDINATES + replaced].copy()
    lookup[_KEY] = canonical_geoids(lookup["GEOID"])
    lookup = lookup.drop(columns="GEOID").drop_duplicates(subset=_KEY)

    result = result.drop(columns=replaced)
    result[_KEY] = canonical_geoids(result["GEOID"])
    result = result.merge(lookup, on=_KEY, how="left", sort=False).drop(columns=_KEY)

    unmatched = int(result["lon"].isna().sum())
    if unmatched:
        logger.debug("%d of %d %s rows have no geo reference match", unmatched, len(result), state)
    return result
