"""Summary level and geographic component code tables."""

from typing import Dict, Union

import pandas as pd

from census_summary.core.errors import InvalidQuery

WILDCARD = "*"

# Summary levels present in ACS and decennial summary files
SUMMARY_LEVELS: Dict[str, str] = {
    "010": "United States",
    "020": "Region",
    "030": "Division",
    "040": "State",
    "050": "State-County",
    "060": "State-County-County Subdivision",
    "067": "State-County-County Subdivision-Subminor Civil Division",
    "070": "State-County-County Subdivision-Place/Remainder",
    "140": "State-County-Census Tract",
    "150": "State-County-Census Tract-Block Group",
    "155": "State-Place-County",
    "160": "State-Place",
    "170": "State-Consolidated City",
    "172": "State-Consolidated City-Place within Consolidated City",
    "230": "State-Alaska Native Regional Corporation",
    "250": "American Indian Area/Alaska Native Area/Hawaiian Home Land",
    "310": "Metropolitan Statistical Area/Micropolitan Statistical Area",
    "314": "Metropolitan Statistical Area-Metropolitan Division",
    "320": "State-Metropolitan Statistical Area/Micropolitan Statistical Area",
    "330": "Combined Statistical Area",
    "400": "Urban Area",
    "500": "State-Congressional District",
    "610": "State-State Legislative District (Upper Chamber)",
    "620": "State-State Legislative District (Lower Chamber)",
    "750": "State-County-Census Tract-Block Group-Block",
    "795": "State-Public Use Microdata Area",
    "860": "5-Digit ZIP Code Tabulation Area",
    "950": "State-School District (Elementary)",
    "960": "State-School District (Secondary)",
    "970": "State-School District (Unified)",
}

SUMMARY_LEVEL_ALIASES: Dict[str, str] = {
    "nation": "010",
    "us": "010",
    "region": "020",
    "division": "030",
    "state": "040",
    "county": "050",
    "county subdivision": "060",
    "cousub": "060",
    "tract": "140",
    "census tract": "140",
    "block group": "150",
    "place": "160",
    "consolidated city": "170",
    "metro": "310",
    "cbsa": "310",
    "csa": "330",
    "urban area": "400",
    "congressional district": "500",
    "block": "750",
    "puma": "795",
    "zcta": "860",
    "zip code": "860",
}

GEO_COMPONENTS: Dict[str, str] = {
    "00": "total",
    "01": "urban",
    "04": "urbanized area",
    "28": "urban cluster",
    "43": "rural",
}

GEO_COMPONENT_ALIASES: Dict[str, str] = {name: code for code, name in GEO_COMPONENTS.items()}


def _normalize_alias(alias: str) -> str:
    return " ".join(alias.strip().lower().replace("_", " ").replace("-", " ").split())


def resolve_summary_level(alias: Union[str, int]) -> str:
    """
    Convert a summary level alias or code to its 3-digit code.

    Args:
        alias: "county", "block group", ..., a numeric code like "050" or 50,
            or "*" for every summary level

    Returns:
        3-digit code, or "*"

    Raises:
        InvalidQuery: If the alias is not recognized
    """
    value = str(alias).strip()
    if value == WILDCARD:
        return WILDCARD
    if value.isdigit() and len(value) <= 3:
        return value.zfill(3)

    key = _normalize_alias(value)
    if key not in SUMMARY_LEVEL_ALIASES:
        valid = ", ".join(sorted(SUMMARY_LEVEL_ALIASES))
        raise InvalidQuery(f"Unknown summary level: {alias}. Use a 3-digit code or one of: {valid}")
    return SUMMARY_LEVEL_ALIASES[key]


def resolve_geo_component(alias: Union[str, int]) -> str:
    """
    Convert a geographic component alias or code to its 2-character code.

    "total" is "00", "urban" "01", "urbanized area" "04", "urban cluster" "28"
    and "rural" "43". Other components must be given as codes; "*" keeps all.

    Raises:
        InvalidQuery: If the alias is not recognized
    """
    value = str(alias).strip()
    if value == WILDCARD:
        return WILDCARD
    if value.isdigit() and len(value) <= 2:
        return value.zfill(2)
    if len(value) == 2 and value.isalnum():
        return value.upper()

    key = _normalize_alias(value)
    if key not in GEO_COMPONENT_ALIASES:
        valid = ", ".join(GEO_COMPONENT_ALIASES)
        raise InvalidQuery(
            f"Unknown geographic component: {alias}. Use a 2-digit code or one of: {valid}"
        )
    return GEO_COMPONENT_ALIASES[key]


def geo_component_names(codes: pd.Series) -> pd.Series:
    """Replace known geographic component codes with their names."""
    return codes.map(lambda code: GEO_COMPONENTS.get(code, code))


def summary_levels_frame() -> pd.DataFrame:
    """Summary level table with the aliases that resolve to each code."""
    aliases: Dict[str, list] = {}
    for alias, code in SUMMARY_LEVEL_ALIASES.items():
        aliases.setdefault(code, []).append(alias)
    return pd.DataFrame(
        {
            "code": list(SUMMARY_LEVELS),
            "summary_level": list(SUMMARY_LEVELS.values()),
            "aliases": [", ".join(aliases.get(code, [])) for code in SUMMARY_LEVELS],
        }
    )


def geo_components_frame() -> pd.DataFrame:
    """Geographic component table."""
    return pd.DataFrame(
        {"code": list(GEO_COMPONENTS), "geo_component": list(GEO_COMPONENTS.values())}
    )
