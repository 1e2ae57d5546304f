"""Decennial census 2020 PL 94-171 legacy format layout.

The Census Bureau provides PL 94-171 redistricting data in a "legacy format"
of pipe-delimited text files. Each state has:
- Geographic header file (xxgeo2020.pl)
- Segment 1 (xx000012020.pl) - Tables P1 and P2
- Segment 2 (xx000022020.pl) - Tables P3, P4, and H1
- Segment 3 (xx000032020.pl) - Table P5

Reference: https://www.census.gov/programs-surveys/decennial-census/about/rdo/summary-files.html
"""

from pathlib import Path
from typing import Dict, List

import pandas as pd

# First 5 columns of every segment file: FILEID, STUSAB, CHARITER, CIFSN, LOGRECNO
PL_SEGMENT_HEADER: List[str] = ["FILEID", "STUSAB", "CHARITER", "CIFSN", "LOGRECNO"]

# P1 table: 71 columns (P1_001N through P1_071N)
P1_COLUMNS = [f"P1_{i:03d}N" for i in range(1, 72)]

# P2 table: 73 columns
P2_COLUMNS = [f"P2_{i:03d}N" for i in range(1, 74)]

# P3 table: 71 columns
P3_COLUMNS = [f"P3_{i:03d}N" for i in range(1, 72)]

# P4 table: 73 columns
P4_COLUMNS = [f"P4_{i:03d}N" for i in range(1, 74)]

# H1 table: 3 columns
H1_COLUMNS = ["H1_001N", "H1_002N", "H1_003N"]

# P5 table: 10 columns (group quarters population)
P5_COLUMNS = [f"P5_{i:03d}N" for i in range(1, 11)]

PL_SEGMENTS: Dict[str, List[str]] = {
    "00001": P1_COLUMNS + P2_COLUMNS,
    "00002": P3_COLUMNS + P4_COLUMNS + H1_COLUMNS,
    "00003": P5_COLUMNS,
}

PL_YEARS = (2020,)

CONTENT_DESCRIPTIONS: Dict[str, str] = {
    # Table P1: Race
    "P1_001N": "Total Population",
    "P1_002N": "Population of one race",
    "P1_003N": "White alone",
    "P1_004N": "Black or African American alone",
    "P1_005N": "American Indian and Alaska Native alone",
    "P1_006N": "Asian alone",
    "P1_007N": "Native Hawaiian and Other Pacific Islander alone",
    "P1_008N": "Some Other Race alone",
    "P1_009N": "Population of two or more races",
    "P1_010N": "Population of two races",
    # Table P2: Hispanic or Latino by Race
    "P2_001N": "Total Population",
    "P2_002N": "Hispanic or Latino",
    "P2_003N": "Not Hispanic or Latino",
    "P2_004N": "Not Hispanic or Latino: Population of one race",
    "P2_005N": "Not Hispanic or Latino: White alone",
    "P2_006N": "Not Hispanic or Latino: Black or African American alone",
    "P2_007N": "Not Hispanic or Latino: American Indian and Alaska Native alone",
    "P2_008N": "Not Hispanic or Latino: Asian alone",
    "P2_009N": "Not Hispanic or Latino: Native Hawaiian and Other Pacific Islander alone",
    "P2_010N": "Not Hispanic or Latino: Some Other Race alone",
    "P2_011N": "Not Hispanic or Latino: Population of two or more races",
    # Table P3: Race for Population 18 Years and Over
    "P3_001N": "Total Population 18 years and over",
    "P3_002N": "Population 18+ of one race",
    "P3_003N": "Population 18+ White alone",
    "P3_004N": "Population 18+ Black or African American alone",
    "P3_005N": "Population 18+ American Indian and Alaska Native alone",
    "P3_006N": "Population 18+ Asian alone",
    "P3_007N": "Population 18+ Native Hawaiian and Other Pacific Islander alone",
    "P3_008N": "Population 18+ Some Other Race alone",
    "P3_009N": "Population 18+ of two or more races",
    # Table P4: Hispanic or Latino by Race for Population 18+
    "P4_001N": "Total Population 18 years and over",
    "P4_002N": "Hispanic or Latino 18+",
    "P4_003N": "Not Hispanic or Latino 18+",
    # Table H1: Housing Units
    "H1_001N": "Total Housing Units",
    "H1_002N": "Occupied Housing Units",
    "H1_003N": "Vacant Housing Units",
    # Table P5: Group Quarters Population
    "P5_001N": "Total group quarters population",
    "P5_002N": "Institutionalized population",
    "P5_007N": "Noninstitutionalized population",
}

TABLES: Dict[str, str] = {
    "P1": "Race",
    "P2": "Hispanic or Latino, and Not Hispanic or Latino by Race",
    "P3": "Race for the Population 18 Years and Over",
    "P4": "Hispanic or Latino by Race for the Population 18 Years and Over",
    "H1": "Occupancy Status",
    "P5": "Group Quarters Population by Major Group Quarters Type",
}


def decennial_catalog_frame() -> pd.DataFrame:
    """
    Build the table-content catalog of the PL 94-171 legacy files.

    Returns:
        DataFrame with reference, file_segment, table_content and table_name
        columns, rows in on-disk column order within each segment
    """
    rows = []
    for file_segment, references in PL_SEGMENTS.items():
        for reference in references:
            table = reference.split("_")[0]
            rows.append(
                {
                    "reference": reference,
                    "file_segment": file_segment,
                    "table_content": CONTENT_DESCRIPTIONS.get(reference, ""),
                    "table_name": TABLES[table],
                }
            )
    return pd.DataFrame(rows)


def decennial_geography_file(root: Path, year: int, state: str) -> Path:
    """Path of a state's geographic header file, e.g. decennial/2020/rigeo2020.pl."""
    return root / "decennial" / str(year) / f"{state.lower()}geo{year}.pl"


def decennial_segment_file(root: Path, year: int, state: str, file_segment: str) -> Path:
    """Path of one segment file, e.g. decennial/2020/ri000012020.pl."""
    return root / "decennial" / str(year) / f"{state.lower()}{file_segment}{year}.pl"
