"""Incident and scored point schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from safepath.utils.scoring import parse_period


class RawIncident(BaseModel):
    """One reported incident as delivered by an ingestion source.

    Values are kept as reported; the risk scorer decides whether the record
    is usable.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    period: str = Field(..., description="Reporting period, YYYY-MM or YYYY-MM-DD")
    category: str
    resolution: str = Field(default="", description="Case resolution status")


class ScoredPoint(BaseModel):
    """Incident location with a heuristic risk score.

    This is also the record format of the persisted heatmap snapshot.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "lat": 51.5074,
                "lng": -0.1278,
                "period": "2024-01",
                "category": "theft",
                "count": 3,
                "score": 0.7,
            }
        },
    )

    lat: float = Field(..., allow_inf_nan=False)
    lng: float = Field(..., allow_inf_nan=False)
    period: str
    category: str
    count: int = Field(default=1, ge=1, description="Number of merged incidents")
    score: float = Field(..., ge=0.0, le=1.0, description="Risk score (0-1, higher is riskier)")

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: str) -> str:
        """Reject periods that do not parse as a date."""
        parse_period(v)
        return v
