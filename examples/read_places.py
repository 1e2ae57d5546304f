"""Example of reading ACS 5-year data for places and named areas.

Set PATH_TO_CENSUS to the directory holding the extracted summary files
(acs5year/, generated_data/, ...) before running.
"""

from census_summary import CensusSummary, to_geodataframe

census = CensusSummary()

# Example 1: every place in Rhode Island, with median household income
print("=" * 60)
print("Places in Rhode Island")
print("=" * 60)

places = census.read_survey(
    "acs5year",
    2015,
    "RI",
    table_contents=["income = B19013_001"],
    geo_headers=["PLACE"],
    summary_level="place",
)
print(places[["area", "population", "income"]].head(10).to_string(index=False))

# Example 2: census tracts within a town and a city, with margins of error
print("\n" + "=" * 60)
print("Tracts in Lincoln town and Providence city")
print("=" * 60)

tracts = census.read_survey(
    "acs5year",
    2015,
    "RI",
    areas=["Lincoln town, RI", "PLACE = RI59000"],
    summary_level="tract",
    with_margin=True,
)
for area, rows in tracts.groupby("area"):
    total = rows["population"].sum()
    print(f"  {area}: {len(rows)} tracts, population {total:,.0f}")

# Example 3: map-ready points
gdf = to_geodataframe(places)
print(f"\n{gdf.geometry.notna().sum()} of {len(gdf)} places have coordinates")
