"""State FIPS codes, abbreviations and names."""

from typing import Dict, List, Optional

FIPS_STATES: Dict[str, str] = {
    "01": "Alabama",
    "02": "Alaska",
    "04": "Arizona",
    "05": "Arkansas",
    "06": "California",
    "08": "Colorado",
    "09": "Connecticut",
    "10": "Delaware",
    "11": "District of Columbia",
    "12": "Florida",
    "13": "Georgia",
    "15": "Hawaii",
    "16": "Idaho",
    "17": "Illinois",
    "18": "Indiana",
    "19": "Iowa",
    "20": "Kansas",
    "21": "Kentucky",
    "22": "Louisiana",
    "23": "Maine",
    "24": "Maryland",
    "25": "Massachusetts",
    "26": "Michigan",
    "27": "Minnesota",
    "28": "Mississippi",
    "29": "Missouri",
    "30": "Montana",
    "31": "Nebraska",
    "32": "Nevada",
    "33": "New Hampshire",
    "34": "New Jersey",
    "35": "New Mexico",
    "36": "New York",
    "37": "North Carolina",
    "38": "North Dakota",
    "39": "Ohio",
    "40": "Oklahoma",
    "41": "Oregon",
    "42": "Pennsylvania",
    "44": "Rhode Island",
    "45": "South Carolina",
    "46": "South Dakota",
    "47": "Tennessee",
    "48": "Texas",
    "49": "Utah",
    "50": "Vermont",
    "51": "Virginia",
    "53": "Washington",
    "54": "West Virginia",
    "55": "Wisconsin",
    "56": "Wyoming",
    "72": "Puerto Rico",
}

STATE_ABBREVS: Dict[str, str] = {
    "AL": "01",
    "AK": "02",
    "AZ": "04",
    "AR": "05",
    "CA": "06",
    "CO": "08",
    "CT": "09",
    "DE": "10",
    "DC": "11",
    "FL": "12",
    "GA": "13",
    "HI": "15",
    "ID": "16",
    "IL": "17",
    "IN": "18",
    "IA": "19",
    "KS": "20",
    "KY": "21",
    "LA": "22",
    "ME": "23",
    "MD": "24",
    "MA": "25",
    "MI": "26",
    "MN": "27",
    "MS": "28",
    "MO": "29",
    "MT": "30",
    "NE": "31",
    "NV": "32",
    "NH": "33",
    "NJ": "34",
    "NM": "35",
    "NY": "36",
    "NC": "37",
    "ND": "38",
    "OH": "39",
    "OK": "40",
    "OR": "41",
    "PA": "42",
    "RI": "44",
    "SC": "45",
    "SD": "46",
    "TN": "47",
    "TX": "48",
    "UT": "49",
    "VT": "50",
    "VA": "51",
    "WA": "53",
    "WV": "54",
    "WI": "55",
    "WY": "56",
    "PR": "72",
}

FIPS_TO_ABBREV: Dict[str, str] = {fips: abbrev for abbrev, fips in STATE_ABBREVS.items()}

# Nationwide summary files are published under this pseudo-state
NATION_ABBREV = "US"

_NAME_TO_FIPS: Dict[str, str] = {name.lower(): fips for fips, name in FIPS_STATES.items()}


def normalize_state(state: str) -> str:
    """
    Convert a state name, abbreviation, or FIPS code to a 2-digit FIPS code.

    Raises:
        ValueError: If the state is not recognized
    """
    value = state.strip()

    if value in FIPS_STATES:
        return value

    if value.upper() in STATE_ABBREVS:
        return STATE_ABBREVS[value.upper()]

    if value.lower() in _NAME_TO_FIPS:
        return _NAME_TO_FIPS[value.lower()]

    raise ValueError(f"Unknown state: {state}")


def normalize_state_abbrev(state: str) -> str:
    """
    Convert a state name, abbreviation, or FIPS code to an upper-case abbreviation.

    Summary files are named by abbreviation, so this is the form the readers use.
    The nationwide pseudo-state "US" is accepted as-is.
    """
    if state.strip().upper() == NATION_ABBREV:
        return NATION_ABBREV
    return FIPS_TO_ABBREV[normalize_state(state)]


def get_state_name(state_fips: str) -> str:
    """Get the state name for a FIPS code."""
    return FIPS_STATES.get(state_fips, f"Unknown ({state_fips})")


def get_state_abbrev(state_fips: str) -> str:
    """Get the state abbreviation for a FIPS code, or the code itself if unknown."""
    return FIPS_TO_ABBREV.get(state_fips, state_fips)


def fips_to_abbrevs(codes: List[str]) -> List[Optional[str]]:
    """Vectorised form of get_state_abbrev; blank or unknown codes become None."""
    return [FIPS_TO_ABBREV.get(code) if isinstance(code, str) else None for code in codes]
