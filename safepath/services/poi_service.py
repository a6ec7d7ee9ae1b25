"""Point-of-interest lookup."""

from typing import Iterable, List

from safepath.schemas.heatmap import Bounds
from safepath.schemas.poi import PointOfInterest
from safepath.utils.geometry import bbox_contains, haversine_km, midpoint


class PoiService:
    """Bounding-box filter over the static POI list."""

    def __init__(self, pois: Iterable[PointOfInterest]):
        self.pois = list(pois)

    def within(self, bounds: Bounds) -> List[PointOfInterest]:
        """POIs inside a fully specified box, with distance from its centre.

        Returns an empty list unless all four sides are given.
        """
        if not bounds.is_closed():
            return []

        center_lat, center_lng = midpoint(bounds.north, bounds.east, bounds.south, bounds.west)
        return [
            poi.model_copy(
                update={
                    "safety_level": poi.safety_level or "medium",
                    "distance": haversine_km(center_lat, center_lng, poi.lat, poi.lng),
                }
            )
            for poi in self.pois
            if bbox_contains(bounds.north, bounds.south, bounds.east, bounds.west, poi.lat, poi.lng)
        ]
