"""SafePath Geometry Utilities.

Great-circle distance, midpoints and GeoJSON conversion for route segments,
plus the bounding-box containment test used by the point-of-interest lookup.
Coordinates are WGS84 (EPSG:4326) degrees throughout; GeoJSON output uses
(lng, lat) axis order.
"""

import math
from typing import Any, Dict, Optional, Tuple

from shapely.geometry import LineString, Point, box, mapping

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points.

    Args:
        lat1: Latitude of the first point in degrees
        lng1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lng2: Longitude of the second point in degrees

    Returns:
        Distance in kilometres on a sphere of radius 6371 km
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def midpoint(lat1: float, lng1: float, lat2: float, lng2: float) -> Tuple[float, float]:
    """Arithmetic midpoint of two coordinates as (lat, lng)."""
    return (lat1 + lat2) / 2, (lng1 + lng2) / 2


def is_finite_coordinate(lat: Any, lng: Any) -> bool:
    """True when both values are real numbers other than NaN or infinity."""
    try:
        return math.isfinite(float(lat)) and math.isfinite(float(lng))
    except (TypeError, ValueError):
        return False


def segment_feature(
    from_lat: float,
    from_lng: float,
    to_lat: float,
    to_lng: float,
    properties: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a GeoJSON LineString Feature for one route segment.

    Args:
        from_lat: Segment start latitude
        from_lng: Segment start longitude
        to_lat: Segment end latitude
        to_lng: Segment end longitude
        properties: Feature properties

    Returns:
        GeoJSON Feature dict with (lng, lat) coordinates
    """
    line = LineString([(from_lng, from_lat), (to_lng, to_lat)])
    geometry = mapping(line)
    return {
        "type": "Feature",
        "geometry": {
            "type": geometry["type"],
            "coordinates": [list(coord) for coord in geometry["coordinates"]],
        },
        "properties": properties or {},
    }


def feature_collection(features: list) -> Dict[str, Any]:
    """Wrap features in a GeoJSON FeatureCollection."""
    return {"type": "FeatureCollection", "features": features}


def bbox_contains(
    north: float, south: float, east: float, west: float, lat: float, lng: float
) -> bool:
    """Whether a point lies inside a bounding box, edges included."""
    return box(west, south, east, north).covers(Point(lng, lat))
