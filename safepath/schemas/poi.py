"""Point-of-interest schemas."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PointOfInterest(BaseModel):
    """Place shown on the map (police station, hospital, open venue, ...)."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    lat: float
    lng: float
    safety_level: str = Field(default="medium")
    distance: float | None = Field(
        default=None, description="Kilometres from the centre of the queried box"
    )


class PoiResponse(BaseModel):
    """POIs inside the requested bounding box."""

    items: List[PointOfInterest]
