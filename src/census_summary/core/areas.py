"""Area specifiers: parsing, resolution to geo header codes, and row selection.

Three forms are accepted:
- named areas, "Lincoln town, RI" or "Providence County, RI"
- code-style areas, "PLACE = RI59000" or "CBSA = 39300"
- metro areas, "Providence metro"
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from census_summary.core.errors import InvalidQuery
from census_summary.data.constants import get_state_name, normalize_state_abbrev

logger = logging.getLogger(__name__)

NAMED = "named"
CODE = "code"
METRO = "metro"

AREA_COLUMNS = ["geoheader", "code", "state", "name"]

# Summary levels in the FIPS dictionary and the geo header holding their code.
# 061 and 162 are the dictionary's variants of 060 and 160.
LEVEL_GEOHEADERS: Dict[str, str] = {
    "040": "STATE",
    "050": "COUNTY",
    "060": "COUSUB",
    "061": "COUSUB",
    "160": "PLACE",
    "162": "PLACE",
    "170": "CONCIT",
}

# A name shared by several levels resolves to the first present
NAMED_AREA_PREFERENCE = ["PLACE", "COUSUB", "COUNTY", "CONCIT", "STATE"]

_CODE_VALUE = re.compile(r"^([A-Za-z]{2})?(\w*)$")
_METRO_SUFFIX = re.compile(r"\s+metro$", re.IGNORECASE)


@dataclass(frozen=True)
class AreaSpecifier:
    """A parsed area specifier."""

    text: str
    kind: str
    geoheader: Optional[str] = None  # known up front for code-style and metro areas
    code: Optional[str] = None
    state: str = ""
    name: str = ""  # area name for named and metro areas


def parse_area(text: str) -> AreaSpecifier:
    """
    Parse one area specifier.

    Raises:
        InvalidQuery: If the text has none of the accepted forms
    """
    value = text.strip()

    if "=" in value:
        geoheader, code_value = (part.strip() for part in value.split("=", 1))
        match = _CODE_VALUE.match(code_value)
        if not geoheader or match is None:
            raise InvalidQuery(f"Cannot parse area {text!r}; expected a form like 'PLACE = RI59000'")
        try:
            state = normalize_state_abbrev(match.group(1)) if match.group(1) else ""
        except ValueError as e:
            raise InvalidQuery(f"Cannot parse area {text!r}: {e}") from e
        return AreaSpecifier(value, CODE, geoheader.upper(), match.group(2), state)

    if _METRO_SUFFIX.search(value):
        name = _METRO_SUFFIX.sub("", value).strip()
        if not name:
            raise InvalidQuery(f"Cannot parse area {text!r}; expected a form like 'Providence metro'")
        return AreaSpecifier(value, METRO, "CBSA", name=name)

    if "," in value:
        name, state = (part.strip() for part in value.rsplit(",", 1))
        if name and state:
            try:
                abbrev = normalize_state_abbrev(state)
            except ValueError as e:
                raise InvalidQuery(f"Cannot parse area {text!r}: {e}") from e
            return AreaSpecifier(value, NAMED, state=abbrev, name=name)

    raise InvalidQuery(
        f"Cannot parse area {text!r}. Use 'Name type, ST' (e.g. 'Lincoln town, RI'), "
        "'GEOHEADER = code' (e.g. 'PLACE = RI59000') or 'Name metro'."
    )


class AreaResolver:
    """
    Resolve area specifiers with the FIPS and CBSA dictionaries.

    The dictionaries are loaded on first use.
    """

    def __init__(
        self,
        fips_loader: Callable[[], pd.DataFrame],
        cbsa_loader: Callable[[], pd.DataFrame],
    ):
        self._fips_loader = fips_loader
        self._cbsa_loader = cbsa_loader

    @property
    def dict_fips(self) -> pd.DataFrame:
        return self._fips_loader()

    @property
    def dict_cbsa(self) -> pd.DataFrame:
        return self._cbsa_loader()

    def resolve(self, areas: Iterable[str]) -> pd.DataFrame:
        """
        Resolve area specifiers.

        Returns:
            One row per specifier with geoheader, code, state and name.
            Unresolved areas have a null code.

        Raises:
            InvalidQuery: If an area is malformed or ambiguous
        """
        rows = [self.resolve_one(parse_area(text) if isinstance(text, str) else text) for text in areas]
        return pd.DataFrame(rows, columns=AREA_COLUMNS)

    def resolve_one(self, area: AreaSpecifier) -> Dict[str, Optional[str]]:
        if area.kind == CODE:
            name = self.area_name(area.geoheader or "", area.code or "", area.state) or area.text
            return {"geoheader": area.geoheader, "code": area.code, "state": area.state, "name": name}
        if area.kind == METRO:
            return self._resolve_metro(area)
        return self._resolve_named(area)

    def _resolve_named(self, area: AreaSpecifier) -> Dict[str, Optional[str]]:
        fips = self.dict_fips
        matches = fips[
            (fips["state_abbr"].str.upper() == area.state)
            & (fips["NAME"].str.strip().str.lower() == area.name.lower())
        ]

        by_header: Dict[str, List[str]] = {}
        names: Dict[str, str] = {}
        for _, row in matches.iterrows():
            geoheader = LEVEL_GEOHEADERS.get(row["SUMLEV"])
            if geoheader is None:
                continue
            codes = by_header.setdefault(geoheader, [])
            if row[geoheader] not in codes:
                codes.append(row[geoheader])
            names.setdefault(geoheader, row["NAME"].strip())

        for geoheader in NAMED_AREA_PREFERENCE:
            codes = by_header.get(geoheader, [])
            if len(codes) > 1:
                raise InvalidQuery(
                    f"Area {area.text!r} matches several {geoheader} codes: {', '.join(codes)}. "
                    f"Use '{geoheader} = {area.state}<code>' instead."
                )
            if codes:
                name = f"{names[geoheader]}, {area.state}"
                return {"geoheader": geoheader, "code": codes[0], "state": area.state, "name": name}

        logger.warning("Area %r not found; it contributes no rows", area.text)
        return {"geoheader": None, "code": None, "state": area.state, "name": area.text}

    def _resolve_metro(self, area: AreaSpecifier) -> Dict[str, Optional[str]]:
        cbsa = self.dict_cbsa
        matches = cbsa[cbsa["CBSA_title"].str.lower().str.contains(area.name.lower(), regex=False)]
        codes = list(dict.fromkeys(matches["CBSA"]))

        if len(codes) > 1:
            titles = list(dict.fromkeys(matches["CBSA_title"]))
            raise InvalidQuery(f"Area {area.text!r} matches several metro areas: {'; '.join(titles)}")
        if not codes:
            logger.warning("Metro area %r not found; it contributes no rows", area.text)
            return {"geoheader": "CBSA", "code": None, "state": "", "name": area.text}

        title = matches["CBSA_title"].iloc[0]
        return {"geoheader": "CBSA", "code": codes[0], "state": "", "name": title}

    def area_name(self, geoheader: str, code: str, state: str) -> Optional[str]:
        """Name of the entity a geo header code identifies, if known."""
        if not code:
            return None
        if geoheader == "STATE":
            name = get_state_name(code)
            return None if name.startswith("Unknown") else name
        if geoheader == "CBSA":
            titles = self.dict_cbsa.loc[self.dict_cbsa["CBSA"] == code, "CBSA_title"]
            return titles.iloc[0] if len(titles) else None

        levels = [level for level, header in LEVEL_GEOHEADERS.items() if header == geoheader]
        if not levels:
            return None
        fips = self.dict_fips
        rows = fips[fips["SUMLEV"].isin(levels) & (fips[geoheader] == code)]
        if state:
            rows = rows[rows["state_abbr"].str.upper() == state]
        if rows.empty:
            return None
        row = rows.iloc[0]
        return f"{row['NAME']}, {row['state_abbr'].upper()}"

    def area_names(self, geoheader: str, codes: pd.Series, states: pd.Series) -> pd.Series:
        """Names for a column of geo header codes, null where unknown."""
        cache: Dict[tuple, Optional[str]] = {}
        names = []
        for code, state in zip(codes, states):
            if not isinstance(code, str):
                names.append(None)
                continue
            key = (code, state if isinstance(state, str) else "")
            if key not in cache:
                # CBSAs cross state lines; other codes are unique within a state
                cache[key] = self.area_name(geoheader, code, "" if geoheader == "CBSA" else key[1])
            names.append(cache[key])
        return pd.Series(names, index=codes.index, dtype=object)


def unique_areas(areas: pd.DataFrame) -> pd.DataFrame:
    """Resolved areas with unresolved ones dropped and duplicates collapsed (first name wins)."""
    resolved = areas[areas["code"].notna()]
    return resolved.drop_duplicates(subset=["geoheader", "code", "state"], keep="first").reset_index(drop=True)


def select_areas(frame: pd.DataFrame, areas: pd.DataFrame) -> pd.DataFrame:
    """
    Rows of frame within each area, tagged with the area name.

    A row is in an area when its geo header value starts with the area code
    and its state starts with the area state. Rows in several areas appear
    once per area.
    """
    parts = []
    for _, area in unique_areas(areas).iterrows():
        values = frame[area["geoheader"]].fillna("").astype(str)
        states = frame["state"].fillna("").astype(str)
        mask = values.str.startswith(area["code"]) & states.str.startswith(area["state"])
        if mask.any():
            parts.append(frame[mask].assign(area=area["name"]))

    if not parts:
        return frame.iloc[0:0].assign(area=pd.Series([], dtype=object))
    return pd.concat(parts, ignore_index=True)
