"""GEOID parsing utilities."""

from dataclasses import dataclass

import pandas as pd


@dataclass
class GEOIDComponents:
    """Parsed summary-file GEOID components."""

    summary_level: str  # 3 digits
    geo_component: str  # 2 characters
    geo_id: str  # FIPS-based identifier after "US"; empty for the nation

    @property
    def state_fips(self) -> str:
        """Return the 2-digit state FIPS code, or empty for national rows."""
        return self.geo_id[:2]

    @property
    def key(self) -> str:
        """Return the GEOID in the 5-digit-prefix form used by the reference dataset."""
        return f"{self.summary_level}{self.geo_component}US{self.geo_id}"


class GEOIDParser:
    """
    Parse summary-file GEOIDs.

    GEOID structure:
    - ACS: summary level (3) + geo component (2) + "US" + FIPS id,
      e.g. "16000US4459000"
    - 2020 PL 94-171: summary level (3) + geo variant (2) + geo component (2)
      + "US" + FIPS id, e.g. "1600000US4459000"
    """

    @staticmethod
    def parse(geoid: str) -> GEOIDComponents:
        """
        Parse a summary-file GEOID.

        Raises:
            ValueError: If the GEOID has neither prefix form
        """
        prefix, sep, geo_id = geoid.partition("US")
        if not sep or not prefix.isalnum():
            raise ValueError(f"Not a summary-file GEOID: {geoid!r}")
        if len(prefix) == 5:
            return GEOIDComponents(prefix[:3], prefix[3:5], geo_id)
        if len(prefix) == 7:
            return GEOIDComponents(prefix[:3], prefix[5:7], geo_id)
        raise ValueError(f"Not a summary-file GEOID: {geoid!r}")

    @staticmethod
    def canonical(geoid: str) -> str:
        """Return the reference-dataset form of a GEOID, or the input if unparseable."""
        try:
            return GEOIDParser.parse(geoid).key
        except ValueError:
            return geoid


def canonical_geoids(geoids: pd.Series) -> pd.Series:
    """Vectorized GEOIDParser.canonical; nulls stay null."""
    return geoids.map(lambda g: GEOIDParser.canonical(g) if isinstance(g, str) else g)
