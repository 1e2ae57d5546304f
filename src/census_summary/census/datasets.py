"""Survey dataset kinds and the flat-file format each one uses."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from census_summary.census.acs import ACS_SEGMENT_HEADER
from census_summary.census.decennial import PL_SEGMENT_HEADER
from census_summary.core.errors import InvalidQuery


@dataclass(frozen=True)
class SummaryFileFormat:
    """How a dataset's geography and content files are delimited."""

    geo_delimiter: str
    content_delimiter: str
    segment_header: List[str]
    encoding: str = "latin-1"


class DatasetKind(Enum):
    """Census summary file products."""

    ACS1 = "acs1year"
    ACS5 = "acs5year"
    DECENNIAL = "decennial"

    @property
    def label(self) -> str:
        """Human-readable name used in progress messages."""
        labels = {
            DatasetKind.ACS1: "ACS 1-year",
            DatasetKind.ACS5: "ACS 5-year",
            DatasetKind.DECENNIAL: "decennial census",
        }
        return labels[self]

    @property
    def has_margin(self) -> bool:
        """Whether margin-of-error files are published alongside estimates."""
        return self is not DatasetKind.DECENNIAL

    @property
    def population_reference(self) -> str:
        """Table content holding total population."""
        if self is DatasetKind.DECENNIAL:
            return "P1_001N"
        return "B01003_001"

    @property
    def file_format(self) -> SummaryFileFormat:
        if self is DatasetKind.DECENNIAL:
            return SummaryFileFormat(
                geo_delimiter="|",
                content_delimiter="|",
                segment_header=PL_SEGMENT_HEADER,
            )
        return SummaryFileFormat(
            geo_delimiter=",",
            content_delimiter=",",
            segment_header=ACS_SEGMENT_HEADER,
        )

    @classmethod
    def parse(cls, value: Union[str, "DatasetKind"]) -> "DatasetKind":
        """Accept an enum member, its value, or a loose alias such as "acs5"."""
        if isinstance(value, DatasetKind):
            return value

        key = value.strip().lower().replace("-", "").replace(" ", "").replace("_", "")
        aliases = {
            "acs1": cls.ACS1,
            "acs1year": cls.ACS1,
            "acs5": cls.ACS5,
            "acs5year": cls.ACS5,
            "decennial": cls.DECENNIAL,
            "decennialcensus": cls.DECENNIAL,
            "pl94171": cls.DECENNIAL,
        }
        if key not in aliases:
            valid = ", ".join(member.value for member in cls)
            raise InvalidQuery(f"Unknown dataset kind: {value}. Valid kinds: {valid}")
        return aliases[key]
