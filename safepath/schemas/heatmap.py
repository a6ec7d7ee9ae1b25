"""Heatmap query/response schemas."""

import math
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Bounds(BaseModel):
    """Map viewport. A missing or non-finite side places no constraint."""

    north: Optional[float] = None
    south: Optional[float] = None
    east: Optional[float] = None
    west: Optional[float] = None

    @field_validator("north", "south", "east", "west", mode="before")
    @classmethod
    def drop_non_finite(cls, v):
        """Treat unparseable or infinite values as an open side."""
        if v is None:
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None

    def contains(self, lat: float, lng: float) -> bool:
        """Whether a coordinate satisfies every bounded side."""
        if self.north is not None and lat > self.north:
            return False
        if self.south is not None and lat < self.south:
            return False
        if self.east is not None and lng > self.east:
            return False
        if self.west is not None and lng < self.west:
            return False
        return True

    def is_closed(self) -> bool:
        """True when all four sides are bounded."""
        return None not in (self.north, self.south, self.east, self.west)


class BucketCell(BaseModel):
    """One grid cell of the density surface for a single category."""

    lat: float = Field(..., description="Cell centre latitude, snapped to the grid")
    lng: float = Field(..., description="Cell centre longitude, snapped to the grid")
    category: str
    count: int = Field(..., ge=1, description="Incidents falling in the cell")
    score: float = Field(..., ge=0.0, le=1.0, description="Highest point score in the cell")
    intensity: float = Field(..., ge=0.0, le=1.0, description="Render intensity (0-1)")

    class Config:
        json_schema_extra = {
            "example": {
                "lat": 51.5075,
                "lng": -0.128,
                "category": "theft",
                "count": 14,
                "score": 0.7,
                "intensity": 0.7,
            }
        }


class HeatmapResponse(BaseModel):
    """Heatmap query result. Points carry no particular order."""

    points: List[BucketCell]
