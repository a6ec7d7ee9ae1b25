"""Risk-aware walking path synthesis.

Builds a path between two coordinates out of straight segments. Except for
the "fastest" algorithm, a single waypoint is placed next to the midpoint,
pushed one way or the other depending on the risk estimated there. Every
segment is annotated with the risk and dominant category at its midpoint.
"""

import logging
from typing import List, Optional, Tuple

from safepath.config import get_settings
from safepath.core.exceptions import InvalidCoordinateError
from safepath.models.dataset import SpatialDataset
from safepath.schemas.route import (
    Coordinate,
    PathPoint,
    PathSegment,
    RouteMetrics,
    RouteResult,
)
from safepath.services.risk_service import RiskInterpolator
from safepath.utils.geometry import (
    feature_collection,
    haversine_km,
    is_finite_coordinate,
    midpoint,
    segment_feature,
)

logger = logging.getLogger(__name__)
settings = get_settings()

FASTEST = "fastest"
SAFE_AWARE = "safe-aware"

# Waypoint displacement in degrees, larger where the midpoint is risky
HIGH_RISK_THRESHOLD = 0.5
HIGH_RISK_OFFSET = 0.01
LOW_RISK_OFFSET = 0.005


class RouteSynthesizer:
    """Synthesizes risk-annotated walking paths over one dataset snapshot."""

    def __init__(self, dataset: SpatialDataset, walking_speed_kmh: Optional[float] = None):
        self.dataset = dataset
        self.interpolator = RiskInterpolator(dataset)
        self.walking_speed_kmh = walking_speed_kmh or settings.WALKING_SPEED_KMH

    def synthesize(
        self, start: Coordinate, end: Coordinate, algorithm: str = SAFE_AWARE
    ) -> RouteResult:
        """Build a path from start to end.

        Args:
            start: Path origin
            end: Path destination
            algorithm: "fastest" for a direct line, "safe-aware" for a waypoint
                shifted north-west of the midpoint; any other value shifts it
                south-east instead

        Returns:
            RouteResult with GeoJSON geometry, segments and metrics

        Raises:
            InvalidCoordinateError: If start or end is not a finite coordinate
        """
        for label, coord in (("start", start), ("end", end)):
            if coord is None or not is_finite_coordinate(coord.lat, coord.lng):
                raise InvalidCoordinateError(f"Path {label} must have finite lat/lng")

        coordinates = [
            (start.lat, start.lng),
            *self.generate_waypoints(start, end, algorithm),
            (end.lat, end.lng),
        ]

        segments = [
            self._build_segment(coordinates[i], coordinates[i + 1])
            for i in range(len(coordinates) - 1)
        ]

        features = [
            segment_feature(
                segment.from_.lat,
                segment.from_.lng,
                segment.to.lat,
                segment.to.lng,
                properties={"risk": segment.risk_score},
            )
            for segment in segments
        ]

        total_distance = sum(segment.distance for segment in segments)
        total_duration = sum(segment.duration for segment in segments)
        average_risk = sum(segment.risk_score for segment in segments) / (len(segments) or 1)

        logger.info(
            "Path synthesized",
            extra={
                "extra_fields": {
                    "algorithm": algorithm,
                    "segments": len(segments),
                    "distance_km": round(total_distance, 3),
                    "average_risk": round(average_risk, 3),
                }
            },
        )

        return RouteResult(
            geometry=feature_collection(features),
            segments=segments,
            metrics=RouteMetrics(
                distance=total_distance,
                duration=total_duration,
                safety=1.0 - average_risk,
            ),
        )

    def generate_waypoints(
        self, start: Coordinate, end: Coordinate, algorithm: str
    ) -> List[Tuple[float, float]]:
        """Intermediate (lat, lng) points between start and end.

        Returns:
            No waypoint for "fastest", otherwise exactly one
        """
        if algorithm == FASTEST:
            return []

        mid_lat, mid_lng = midpoint(start.lat, start.lng, end.lat, end.lng)
        risk = self.interpolator.estimate_risk(mid_lat, mid_lng)
        offset = HIGH_RISK_OFFSET if risk > HIGH_RISK_THRESHOLD else LOW_RISK_OFFSET
        sign = 1 if algorithm == SAFE_AWARE else -1
        return [(mid_lat + offset * sign, mid_lng - offset * sign)]

    def _build_segment(
        self, origin: Tuple[float, float], destination: Tuple[float, float]
    ) -> PathSegment:
        """Annotate one straight leg with risk, distance and walking time."""
        from_lat, from_lng = origin
        to_lat, to_lng = destination
        mid_lat, mid_lng = midpoint(from_lat, from_lng, to_lat, to_lng)
        distance = haversine_km(from_lat, from_lng, to_lat, to_lng)

        return PathSegment(
            from_=PathPoint(lat=from_lat, lng=from_lng),
            to=PathPoint(lat=to_lat, lng=to_lng),
            risk_score=self.interpolator.estimate_risk(mid_lat, mid_lng),
            dominant_category=self.interpolator.estimate_dominant_category(mid_lat, mid_lng),
            distance=distance,
            duration=distance / self.walking_speed_kmh * 60,
            instructions=f"Walk {distance * 1000:.0f} meters",
        )
