"""Path request/response schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """Geographic coordinate."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class PathPoint(BaseModel):
    """Point along a synthesized path.

    Waypoints are offset from the midpoint, so near a pole or the antimeridian
    they may fall just outside the request coordinate range.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., allow_inf_nan=False)
    lng: float = Field(..., allow_inf_nan=False)


class PathRequest(BaseModel):
    """Request for a risk-aware walking path."""

    start: Coordinate
    end: Coordinate
    algorithm: Optional[str] = Field(
        default=None,
        description=(
            "'fastest', 'safe-aware', or any other value for the opposite bias; "
            "defaults to the configured algorithm"
        ),
    )


class PathSegment(BaseModel):
    """Straight walking leg between two consecutive path coordinates."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: PathPoint = Field(..., alias="from")
    to: PathPoint
    risk_score: float = Field(..., alias="riskScore", ge=0.0, le=1.0)
    dominant_category: str = Field(..., alias="dominantCategory")
    distance: float = Field(..., ge=0.0, description="Segment length in kilometres")
    duration: float = Field(..., ge=0.0, description="Walking time in minutes")
    instructions: str


class RouteMetrics(BaseModel):
    """Whole-path summary."""

    distance: float = Field(..., ge=0.0, description="Total length in kilometres")
    duration: float = Field(..., ge=0.0, description="Total walking time in minutes")
    safety: float = Field(..., ge=0.0, le=1.0, description="1 minus the mean segment risk")


class RouteResult(BaseModel):
    """Synthesized path with GeoJSON geometry, segments and metrics."""

    geometry: Dict[str, Any] = Field(
        ...,
        description="GeoJSON FeatureCollection, one LineString per segment with a 'risk' property",
    )
    segments: List[PathSegment]
    metrics: RouteMetrics
