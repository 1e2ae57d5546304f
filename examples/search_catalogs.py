"""Example of finding table contents, codes and areas before reading data."""

from census_summary import (
    resolve_areas,
    search_cbsa,
    search_fips,
    search_summarylevels,
    search_tablecontents,
)

# Table contents mentioning both words
print(search_tablecontents("acs5year", 2015, "median household income").head().to_string(index=False))

# Summary level aliases
print(search_summarylevels("tract").to_string(index=False))

# FIPS codes of places and county subdivisions named Providence in Rhode Island
print(search_fips("providence", state="RI").to_string(index=False))

# Metro areas
print(search_cbsa("providence").to_string(index=False))

# How area specifiers resolve
print(resolve_areas(["Lincoln town, RI", "Providence metro", "COUNTY = RI007"]).to_string(index=False))
