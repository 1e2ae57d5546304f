"""Helper functions for functional tests over a synthetic data root.

This module provides helper functions that write small but realistic
summary files for Rhode Island:
- ACS 5-year 2015 (group 1 and group 2 files, estimates and margins)
- ACS 5-year 2015 nationwide aggregate ("US", no group 2 files)
- ACS 1-year 2019
- Decennial census 2020 PL 94-171 legacy files
- generated_data/ reference datasets (catalogs, geo reference, dictionaries)

Functional tests may only import the public API; the hook below enforces it.
"""

import ast
import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import pytest

from census_summary.census.decennial import PL_SEGMENTS
from census_summary.census.geoheaders import ACS_GEOHEADERS, PL_GEOHEADERS_2020

# =============================================================================
# Import enforcement: functional tests should only use the public API
# =============================================================================

# - "census_summary" (the public API)
# - "census_summary.cli" or "census_summary.cli.commands" (CLI testing is allowed)
ALLOWED_IMPORT_PATTERNS = [
    r"^census_summary$",
    r"^census_summary\.cli(\..+)?$",
]


def _is_allowed_import(module_name: str) -> bool:
    if not module_name.startswith("census_summary"):
        return True
    return any(re.match(pattern, module_name) for pattern in ALLOWED_IMPORT_PATTERNS)


def _check_file_imports(filepath: Path) -> List[str]:
    """Check a test file for disallowed internal imports.

    Returns list of error messages for any violations found.
    """
    try:
        tree = ast.parse(filepath.read_text())
    except (SyntaxError, UnicodeDecodeError):
        return []

    errors = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if not _is_allowed_import(alias.name):
                    errors.append(
                        f"{filepath}:{node.lineno}: "
                        f"Internal import not allowed: 'import {alias.name}'. "
                        f"Use 'from census_summary import ...' instead."
                    )
        elif isinstance(node, ast.ImportFrom):
            if node.module and not _is_allowed_import(node.module):
                names = ", ".join(a.name for a in node.names)
                errors.append(
                    f"{filepath}:{node.lineno}: "
                    f"Internal import not allowed: 'from {node.module} import {names}'. "
                    f"Use 'from census_summary import ...' instead."
                )
    return errors


def pytest_collect_file(parent, file_path):
    """Check functional test files for internal imports during collection."""
    if file_path.suffix == ".py" and file_path.name.startswith("test_"):
        errors = _check_file_imports(file_path)
        if errors:
            error_msg = "\n".join(errors)
            pytest.fail(
                f"\n\nInternal import violations detected:\n{error_msg}\n\n"
                "Functional tests should only import from the public API:\n"
                "  - from census_summary import CensusSummary, read_acs5year, ...\n"
                "  - from census_summary.cli.commands import cli  (for CLI tests)\n"
            )


# =============================================================================
# Test geography
# =============================================================================

RI_FIPS = "44"

# Logical record numbers of the Rhode Island ACS 5-year rows
RI_STATE = 1
RI_URBAN = 2
PROVIDENCE_COUNTY = 3
LINCOLN_TOWN = 4
PROVIDENCE_CITY = 5
PAWTUCKET_CITY = 6
PROVIDENCE_METRO_PART = 7
PROVIDENCE_TRACT = 8
PROVIDENCE_BLOCK_GROUP = 9
LINCOLN_TRACT = 10

GROUP1_RECORDS = [1, 2, 3, 4, 5, 6, 7]
GROUP2_RECORDS = [8, 9, 10]

PROVIDENCE_CITY_GEOID = "16000US4459000"
PAWTUCKET_CITY_GEOID = "16000US4454640"
LINCOLN_TOWN_GEOID = "06000US4400741500"
PROVIDENCE_TRACT_GEOID = "14000US44007000100"
PROVIDENCE_BLOCK_GROUP_GEOID = "15000US440070001001"
LINCOLN_TRACT_GEOID = "14000US44007015000"

PROVIDENCE_LON = -71.4128
PROVIDENCE_LAT = 41.824

# Geography rows by LOGRECNO: headers other than the key columns are blank
# unless the file fills them at that summary level
RI_ACS_GEOGRAPHY: Dict[int, Dict[str, str]] = {
    RI_STATE: {"SUMLEV": "040", "GEOCOMP": "00", "STATE": "44",
               "GEOID": "04000US44", "NAME": "Rhode Island"},
    RI_URBAN: {"SUMLEV": "040", "GEOCOMP": "01", "STATE": "44",
               "GEOID": "04001US44", "NAME": "Rhode Island -- Urban"},
    PROVIDENCE_COUNTY: {"SUMLEV": "050", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
                        "CBSA": "39300", "GEOID": "05000US44007",
                        "NAME": "Providence County, Rhode Island"},
    LINCOLN_TOWN: {"SUMLEV": "060", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
                   "COUSUB": "41500", "GEOID": LINCOLN_TOWN_GEOID,
                   "NAME": "Lincoln town, Providence County, Rhode Island"},
    PROVIDENCE_CITY: {"SUMLEV": "160", "GEOCOMP": "00", "STATE": "44", "PLACE": "59000",
                      "CBSA": "39300", "GEOID": PROVIDENCE_CITY_GEOID,
                      "NAME": "Providence city, Rhode Island"},
    PAWTUCKET_CITY: {"SUMLEV": "160", "GEOCOMP": "00", "STATE": "44", "PLACE": "54640",
                     "CBSA": "39300", "GEOID": PAWTUCKET_CITY_GEOID,
                     "NAME": "Pawtucket city, Rhode Island"},
    PROVIDENCE_METRO_PART: {"SUMLEV": "320", "GEOCOMP": "00", "STATE": "44", "CBSA": "39300",
                            "GEOID": "32000US4439300",
                            "NAME": "Providence-Warwick, RI-MA Metro Area (part); Rhode Island"},
    PROVIDENCE_TRACT: {"SUMLEV": "140", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
                       "TRACT": "000100", "GEOID": PROVIDENCE_TRACT_GEOID,
                       "NAME": "Census Tract 1, Providence County, Rhode Island"},
    PROVIDENCE_BLOCK_GROUP: {"SUMLEV": "150", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
                             "TRACT": "000100", "BLKGRP": "1",
                             "GEOID": PROVIDENCE_BLOCK_GROUP_GEOID,
                             "NAME": "Block Group 1, Census Tract 1, Providence County, Rhode Island"},
    LINCOLN_TRACT: {"SUMLEV": "140", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
                    "TRACT": "015000", "GEOID": LINCOLN_TRACT_GEOID,
                    "NAME": "Census Tract 150, Providence County, Rhode Island"},
}

# Content values as written in the files; "." marks a suppressed value
RI_POPULATION = {1: "1056298", 2: "950000", 3: "628323", 4: "21105", 5: "178680",
                 6: "71148", 7: "1056298", 8: "3500", 9: "1200", 10: "4000"}
RI_POPULATION_MARGIN = {1: "0", 2: "120", 3: "0", 4: "15", 5: "30",
                        6: "25", 7: "0", 8: "180", 9: ".", 10: "210"}
RI_SEX_BY_AGE = {  # B01001_001, B01001_002, B01001_003
    1: ("1056298", "510997", "28431"), 2: ("950000", "460000", "25000"),
    3: ("628323", "303425", "18244"), 4: ("21105", "10135", "951"),
    5: ("178680", "86311", "."), 6: ("71148", "34385", "4301"),
    7: ("1056298", "510997", "28431"), 8: ("3500", "1700", "210"),
    9: ("1200", "590", "70"), 10: ("4000", "1950", "200"),
}
RI_MEDIAN_INCOME = {1: "56852", 3: ".", 4: "71257", 5: "37632", 8: "24750", 10: "65000"}

ACS5_CATALOG = [
    ("B01001_001", "0002", "Total:", "SEX BY AGE"),
    ("B01001_002", "0002", "Male:", "SEX BY AGE"),
    ("B01001_002.5", "0002", "Under 5 years (subheading)", "SEX BY AGE"),
    ("B01001_003", "0002", "Under 5 years", "SEX BY AGE"),
    ("B01003_001", "0003", "Total", "TOTAL POPULATION"),
    ("B19013_001", "0059", "Median household income in the past 12 months", "MEDIAN HOUSEHOLD INCOME"),
]

GEO_REFERENCE_RI = [
    # GEOID, lon, lat, COUNTY, COUSUB, PLACE
    ("04000US44", "-71.5247", "41.6772", "", "", ""),
    ("05000US44007", "-71.5780", "41.8697", "007", "", ""),
    (LINCOLN_TOWN_GEOID, "-71.4495", "41.9212", "007", "41500", ""),
    (PROVIDENCE_CITY_GEOID, str(PROVIDENCE_LON), str(PROVIDENCE_LAT), "007", "59000", "59000"),
    (PAWTUCKET_CITY_GEOID, "-71.3826", "41.8787", "007", "54640", "54640"),
    (PROVIDENCE_TRACT_GEOID, "-71.4030", "41.8290", "007", "59000", "59000"),
    (PROVIDENCE_BLOCK_GROUP_GEOID, "-71.4021", "41.8301", "007", "59000", "59000"),
    (LINCOLN_TRACT_GEOID, "-71.4410", "41.9150", "007", "41500", ""),
    ("7500000US440070001001000", "-71.4022", "41.8302", "007", "59000", "59000"),
]

DICT_FIPS = [
    # SUMLEV, state_abbr, STATE, COUNTY, COUSUB, PLACE, CONCIT, NAME
    ("040", "RI", "44", "", "", "", "", "Rhode Island"),
    ("050", "RI", "44", "007", "", "", "", "Providence County"),
    ("050", "RI", "44", "009", "", "", "", "Washington County"),
    ("061", "RI", "44", "007", "41500", "", "", "Lincoln town"),
    ("061", "RI", "44", "007", "59000", "", "", "Providence city"),
    ("061", "RI", "44", "007", "54640", "", "", "Pawtucket city"),
    ("162", "RI", "44", "", "", "59000", "", "Providence city"),
    ("162", "RI", "44", "", "", "54640", "", "Pawtucket city"),
    ("162", "RI", "44", "", "", "99990", "", "Harmony village"),
    ("162", "RI", "44", "", "", "99991", "", "Harmony village"),
    ("162", "UT", "49", "", "", "62360", "", "Providence city"),
]

DICT_CBSA = [
    # CBSA, CBSA_title, CSA, CSA_title, state_full, county_full
    ("39300", "Providence-Warwick, RI-MA", "148", "Boston-Worcester-Providence, MA-RI-NH-CT",
     "Rhode Island", "Providence County"),
    ("39300", "Providence-Warwick, RI-MA", "148", "Boston-Worcester-Providence, MA-RI-NH-CT",
     "Massachusetts", "Bristol County"),
    ("14460", "Boston-Cambridge-Newton, MA-NH", "148", "Boston-Worcester-Providence, MA-RI-NH-CT",
     "Massachusetts", "Suffolk County"),
    ("44140", "Springfield, MA", "521", "Springfield-Amherst Town-Northampton, MA",
     "Massachusetts", "Hampden County"),
    ("44100", "Springfield, IL", "522", "Springfield-Jacksonville-Lincoln, IL",
     "Illinois", "Sangamon County"),
]


# =============================================================================
# File writers
# =============================================================================


def _write_rows(path: Path, rows: List[List[str]], sep: str = ",") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(path, sep=sep, header=False, index=False)
    return path


def _geography_row(layout: List[str], values: Dict[str, str]) -> List[str]:
    return [values.get(column, "") for column in layout]


def create_acs_geography_rows(
    records: Dict[int, Dict[str, str]],
    stusab: str = "ri",
    fileid: str = "ACSSF",
) -> List[List[str]]:
    """Build ACS geography rows from LOGRECNO -> header values."""
    rows = []
    for logrecno, values in records.items():
        full = {"FILEID": fileid, "STUSAB": stusab, "LOGRECNO": f"{logrecno:07d}"}
        full.update(values)
        rows.append(_geography_row(ACS_GEOHEADERS, full))
    return rows


def create_acs_segment_rows(
    year: int,
    period: int,
    stusab: str,
    file_segment: str,
    values: Dict[int, tuple],
) -> List[List[str]]:
    """Build estimate/margin rows: 6 header columns followed by the contents."""
    return [
        ["ACSSF", f"{year}000{period}0", stusab, "000", file_segment, f"{logrecno:07d}", *contents]
        for logrecno, contents in values.items()
    ]


def _singles(values: Dict[int, str], records: List[int]) -> Dict[int, tuple]:
    return {r: (values[r],) for r in records if r in values}


def create_acs5_catalog(root: Path, year: int = 2015) -> Path:
    """Write generated_data/lookup/acs5year_<year>.csv."""
    path = root / "generated_data" / "lookup" / f"acs5year_{year}.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        ACS5_CATALOG, columns=["reference", "file_segment", "table_content", "table_name"]
    ).to_csv(path, index=False)
    return path


def create_acs5_ri(root: Path) -> Path:
    """Write the Rhode Island ACS 5-year 2015 geography and segment files."""
    base = root / "acs5year" / "2015"
    _write_rows(base / "g20155ri.csv", create_acs_geography_rows(RI_ACS_GEOGRAPHY))

    groups = {"group1": GROUP1_RECORDS, "group2": GROUP2_RECORDS}
    for group, records in groups.items():
        for flag, population in (("e", RI_POPULATION), ("m", RI_POPULATION_MARGIN)):
            _write_rows(
                base / group / f"{flag}20155ri0003000.txt",
                create_acs_segment_rows(2015, 5, "ri", "0003", _singles(population, records)),
            )
        sex_by_age = {r: RI_SEX_BY_AGE[r] for r in records}
        for flag in ("e", "m"):
            _write_rows(
                base / group / f"{flag}20155ri0002000.txt",
                create_acs_segment_rows(2015, 5, "ri", "0002", sex_by_age),
            )
            _write_rows(
                base / group / f"{flag}20155ri0059000.txt",
                create_acs_segment_rows(2015, 5, "ri", "0059", _singles(RI_MEDIAN_INCOME, records)),
            )
    return base


def create_acs5_us(root: Path, empty_group2: bool = False) -> Path:
    """
    Write the nationwide ACS 5-year 2015 files.

    The nationwide aggregate has no group 2 files; with empty_group2 an
    empty group 2 estimate file is written instead.
    """
    base = root / "acs5year" / "2015"
    records = {
        1: {"SUMLEV": "010", "GEOCOMP": "00", "GEOID": "01000US", "NAME": "United States"},
        2: {"SUMLEV": "040", "GEOCOMP": "00", "STATE": "44", "GEOID": "04000US44",
            "NAME": "Rhode Island"},
    }
    _write_rows(base / "g20155us.csv", create_acs_geography_rows(records, stusab="us"))
    for flag, values in (("e", {1: ("316515021",), 2: ("1056298",)}), ("m", {1: ("0",), 2: ("0",)})):
        _write_rows(
            base / "group1" / f"{flag}20155us0003000.txt",
            create_acs_segment_rows(2015, 5, "us", "0003", values),
        )
    if empty_group2:
        path = base / "group2" / "e20155us0003000.txt"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return base


def create_acs1_ri(root: Path) -> Path:
    """Write Rhode Island ACS 1-year 2019 files (single file per segment)."""
    base = root / "acs1year" / "2019"
    records = {r: RI_ACS_GEOGRAPHY[r] for r in (RI_STATE, PROVIDENCE_COUNTY, PROVIDENCE_CITY)}
    _write_rows(base / "g20191ri.csv", create_acs_geography_rows(records))
    values = {RI_STATE: ("1059361",), PROVIDENCE_COUNTY: ("638931",), PROVIDENCE_CITY: ("179883",)}
    margins = {RI_STATE: ("0",), PROVIDENCE_COUNTY: ("0",), PROVIDENCE_CITY: ("41",)}
    _write_rows(base / "e20191ri0003000.txt", create_acs_segment_rows(2019, 1, "ri", "0003", values))
    _write_rows(base / "m20191ri0003000.txt", create_acs_segment_rows(2019, 1, "ri", "0003", margins))

    path = root / "generated_data" / "lookup" / "acs1year_2019.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        [("B01003_001", "0003", "Total", "TOTAL POPULATION")],
        columns=["reference", "file_segment", "table_content", "table_name"],
    ).to_csv(path, index=False)
    return base


# Decennial 2020 rows: LOGRECNO -> (header values, P1_001N, P2_002N)
RI_PL_GEOGRAPHY = {
    1: ({"SUMLEV": "040", "GEOVAR": "00", "GEOCOMP": "00", "STATE": "44",
         "GEOID": "0400000US44", "NAME": "Rhode Island"}, 1097379, 182101),
    2: ({"SUMLEV": "050", "GEOVAR": "00", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
         "GEOID": "0500000US44007", "NAME": "Providence County"}, 660741, 164356),
    3: ({"SUMLEV": "160", "GEOVAR": "00", "GEOCOMP": "00", "STATE": "44", "PLACE": "59000",
         "GEOID": "1600000US4459000", "NAME": "Providence city"}, 190934, 84915),
    4: ({"SUMLEV": "750", "GEOVAR": "00", "GEOCOMP": "00", "STATE": "44", "COUNTY": "007",
         "TRACT": "000100", "BLKGRP": "1", "BLOCK": "1000",
         "GEOID": "7500000US440070001001000", "NAME": "Block 1000"}, 42, 7),
}

PL_P2_002N_INDEX = PL_SEGMENTS["00001"].index("P2_002N")


def create_decennial_ri(root: Path) -> Path:
    """Write Rhode Island 2020 PL 94-171 geography and segment 1 files."""
    base = root / "decennial" / "2020"
    geo_rows = []
    segment_rows = []
    width = len(PL_SEGMENTS["00001"])
    for logrecno, (values, total, hispanic) in RI_PL_GEOGRAPHY.items():
        full = {"FILEID": "PLST", "STUSAB": "RI", "LOGRECNO": f"{logrecno:07d}"}
        full.update(values)
        geo_rows.append(_geography_row(PL_GEOHEADERS_2020, full))

        contents = ["0"] * width
        contents[0] = str(total)
        contents[PL_P2_002N_INDEX] = str(hispanic)
        segment_rows.append(["PLST", "RI", "000", "01", f"{logrecno:07d}", *contents])

    _write_rows(base / "rigeo2020.pl", geo_rows, sep="|")
    _write_rows(base / "ri000012020.pl", segment_rows, sep="|")
    return base


def create_reference_data(root: Path, with_geo_reference: bool = True) -> Path:
    """Write geoid_coord_RI.csv, dict_fips.csv and dict_cbsa.csv."""
    generated = root / "generated_data"
    if with_geo_reference:
        path = generated / "geoid_coord" / "geoid_coord_RI.csv"
        path.parent.mkdir(parents=True, exist_ok=True)
        frame = pd.DataFrame(GEO_REFERENCE_RI, columns=["GEOID", "lon", "lat", "COUNTY", "COUSUB", "PLACE"])
        frame.insert(3, "STATE", RI_FIPS)
        frame.to_csv(path, index=False)

    generated.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        DICT_FIPS,
        columns=["SUMLEV", "state_abbr", "STATE", "COUNTY", "COUSUB", "PLACE", "CONCIT", "NAME"],
    ).to_csv(generated / "dict_fips.csv", index=False)
    pd.DataFrame(
        DICT_CBSA,
        columns=["CBSA", "CBSA_title", "CSA", "CSA_title", "state_full", "county_full"],
    ).to_csv(generated / "dict_cbsa.csv", index=False)
    return generated


def create_data_root(base: Path, with_geo_reference: bool = True) -> Path:
    """Create a complete synthetic data root under base."""
    root = base / "census"
    root.mkdir(parents=True, exist_ok=True)
    create_acs5_catalog(root)
    create_acs5_ri(root)
    create_acs5_us(root)
    create_acs1_ri(root)
    create_decennial_ri(root)
    create_reference_data(root, with_geo_reference=with_geo_reference)
    return root


def rows_by_geoid(frame: pd.DataFrame) -> Dict[str, pd.Series]:
    """Index result rows by GEOID for assertions."""
    return {row["GEOID"]: row for _, row in frame.iterrows()}


def find_row(frame: pd.DataFrame, geoid: str, area: Optional[str] = None) -> pd.Series:
    """The single row of a GEOID (within an area, if given)."""
    rows = frame[frame["GEOID"] == geoid]
    if area is not None:
        rows = rows[rows["area"] == area]
    assert len(rows) == 1, f"expected one row for {geoid}, got {len(rows)}"
    return rows.iloc[0]
