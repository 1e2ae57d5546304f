"""Conversion of result tables to point geometries."""

from typing import Any, List, Optional, cast

import geopandas as gpd
import pandas as pd
from shapely.geometry import Point

NAD83 = "EPSG:4269"


def to_geodataframe(
    result: pd.DataFrame,
    lon_column: str = "lon",
    lat_column: str = "lat",
    crs: str = NAD83,
) -> gpd.GeoDataFrame:
    """
    Convert a result table to a GeoDataFrame of representative points.

    Rows without coordinates get an empty geometry.

    Args:
        result: Table with longitude and latitude columns
        lon_column: Name of longitude column
        lat_column: Name of latitude column
        crs: Coordinate reference system of the coordinates

    Returns:
        GeoDataFrame with the same rows and columns plus geometry
    """
    missing = {lon_column, lat_column} - set(result.columns)
    if missing:
        raise ValueError(f"Result has no coordinate columns: {sorted(missing)}")

    point_list: List[Optional[Point]] = [
        Point(lon, lat) if pd.notna(lon) and pd.notna(lat) else None
        for lon, lat in zip(result[lon_column], result[lat_column])
    ]
    geometry = gpd.GeoSeries(cast(Any, point_list), index=result.index, crs=crs)
    return gpd.GeoDataFrame(result.copy(), geometry=geometry, crs=crs)
