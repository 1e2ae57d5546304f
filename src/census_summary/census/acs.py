"""American Community Survey (ACS) summary file layout.

ACS summary files are published per state as one geography file plus one
estimate ("e") and one margin-of-error ("m") file per file segment
("sequence"). The 5-year product splits every segment into two groups:
group 1 holds larger geographies, group 2 census tracts and block groups.

Reference: https://www.census.gov/programs-surveys/acs/data/summary-file.html
"""

from pathlib import Path
from typing import List

# Leading columns of every estimate/margin file, followed by the table contents
ACS_SEGMENT_HEADER: List[str] = ["FILEID", "FILETYPE", "STUSAB", "CHARITER", "SEQUENCE", "LOGRECNO"]

ESTIMATE = "e"
MARGIN = "m"


def acs_geography_file(root: Path, dataset: str, year: int, state: str) -> Path:
    """Path of a state's geography file, e.g. acs5year/2015/g20155ri.csv."""
    period = dataset[3]  # "1" or "5"
    return root / dataset / str(year) / f"g{year}{period}{state.lower()}.csv"


def acs_segment_files(
    root: Path,
    dataset: str,
    year: int,
    state: str,
    file_segment: str,
    est_marg: str = ESTIMATE,
) -> List[Path]:
    """
    Paths holding one file segment of a state.

    The 1-year product has a single file; the 5-year product has group1 and
    group2 files whose rows are concatenated.
    """
    period = dataset[3]
    name = f"{est_marg}{year}{period}{state.lower()}{file_segment}000.txt"
    base = root / dataset / str(year)
    if period == "5":
        return [base / "group1" / name, base / "group2" / name]
    return [base / name]
