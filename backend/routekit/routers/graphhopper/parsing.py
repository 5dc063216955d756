"""
GraphHopper response parsing.

Pure functions from provider JSON to the shared result types.
"""
from typing import Optional

import polyline

from routekit.core.models import (
    Direction,
    Directions,
    IntervalType,
    Isochrone,
    Isochrones,
    Matrix,
    WaypointLike,
    as_lat_lon,
)

POLYLINE_PRECISION = 5


def decode_points(encoded: str) -> list[list[float]]:
    """Decode a precision-5 polyline into GeoJSON ``[lon, lat]`` positions."""
    return [
        list(position)
        for position in polyline.decode(encoded, POLYLINE_PRECISION, geojson=True)
    ]


def parse_path_geometry(path: dict) -> Optional[dict]:
    """Geometry of a route path as a GeoJSON LineString."""
    points = path.get("points")
    if path.get("points_encoded") and isinstance(points, str):
        return {"type": "LineString", "coordinates": decode_points(points)}
    return points


def parse_directions_response(response: dict) -> Directions:
    """
    Parse a ``/route`` response.

    Args:
        response: Decoded response body

    Returns:
        Directions with one entry per returned path
    """
    directions = tuple(
        Direction(
            feature={
                "type": "Feature",
                "geometry": parse_path_geometry(path),
                "properties": {
                    "duration": path.get("time"),
                    "distance": path.get("distance"),
                },
            },
            raw=path,
        )
        for path in response.get("paths", [])
    )
    return Directions(directions=directions, raw=response)


def parse_isochrone_response(
    response: dict,
    center: WaypointLike,
    interval_type: IntervalType,
) -> Isochrones:
    """
    Parse an ``/isochrone`` response.

    Args:
        response: Decoded response body
        center: The originally requested location
        interval_type: Whether isochrones or isodistances were requested
    """
    lat_lon = as_lat_lon(center)
    isochrones = tuple(
        Isochrone(
            center=lat_lon,
            interval=(polygon.get("properties") or {}).get("bucket"),
            interval_type=interval_type,
            feature=polygon,
        )
        for polygon in response.get("polygons", [])
    )
    return Isochrones(isochrones=isochrones, raw=response)


def parse_matrix_response(response: dict) -> Matrix:
    """Parse a ``/matrix`` response; missing grids become a single empty row."""
    durations = response.get("times")
    distances = response.get("distances")
    return Matrix(
        durations=[[]] if durations is None else durations,
        distances=[[]] if distances is None else distances,
        raw=response,
    )
