"""Tests for summary level and geographic component code tables."""

import pandas as pd
import pytest

from census_summary.census.summary_levels import (
    SUMMARY_LEVELS,
    geo_component_names,
    geo_components_frame,
    resolve_geo_component,
    resolve_summary_level,
    summary_levels_frame,
)
from census_summary.core.errors import InvalidQuery


class TestResolveSummaryLevel:
    """Tests for summary level aliases."""

    @pytest.mark.parametrize(
        "alias,code",
        [
            ("state", "040"),
            ("county", "050"),
            ("county subdivision", "060"),
            ("tract", "140"),
            ("block group", "150"),
            ("block_group", "150"),
            ("place", "160"),
            ("metro", "310"),
            ("block", "750"),
            ("PLACE", "160"),
        ],
    )
    def test_aliases(self, alias, code):
        assert resolve_summary_level(alias) == code

    def test_numeric_codes_are_padded(self):
        assert resolve_summary_level("050") == "050"
        assert resolve_summary_level(50) == "050"
        assert resolve_summary_level("40") == "040"

    def test_wildcard(self):
        assert resolve_summary_level("*") == "*"

    def test_unknown_alias(self):
        with pytest.raises(InvalidQuery, match="Unknown summary level"):
            resolve_summary_level("galaxy")

    def test_every_alias_has_a_described_code(self):
        codes = summary_levels_frame()["code"].tolist()
        assert all(code in SUMMARY_LEVELS for code in codes)


class TestResolveGeoComponent:
    """Tests for geographic component aliases."""

    def test_names(self):
        assert resolve_geo_component("total") == "00"
        assert resolve_geo_component("urban") == "01"
        assert resolve_geo_component("urbanized area") == "04"
        assert resolve_geo_component("urban cluster") == "28"
        assert resolve_geo_component("rural") == "43"

    def test_codes(self):
        assert resolve_geo_component("01") == "01"
        assert resolve_geo_component(1) == "01"
        assert resolve_geo_component("a0") == "A0"

    def test_wildcard(self):
        assert resolve_geo_component("*") == "*"

    def test_unknown_name(self):
        with pytest.raises(InvalidQuery):
            resolve_geo_component("suburban")

    def test_component_names(self):
        """Test that known codes get names and unknown codes are kept."""
        names = geo_component_names(pd.Series(["00", "01", "89"]))
        assert names.tolist() == ["total", "urban", "89"]


class TestFrames:
    """Tests for the searchable code tables."""

    def test_summary_levels_frame_lists_aliases(self):
        frame = summary_levels_frame()
        place = frame[frame["code"] == "160"].iloc[0]
        assert place["summary_level"] == "State-Place"
        assert "place" in place["aliases"]

    def test_geo_components_frame(self):
        frame = geo_components_frame()
        assert list(frame.columns) == ["code", "geo_component"]
        assert "rural" in frame["geo_component"].tolist()
