"""Point risk scorer.

Turns a single reported incident into a scored heatmap point.
"""

from safepath.core.exceptions import InvalidIncidentError
from safepath.schemas.incident import RawIncident, ScoredPoint
from safepath.utils.geometry import is_finite_coordinate
from safepath.utils.scoring import calculate_risk_score, parse_period


def score_incident(incident: RawIncident) -> ScoredPoint:
    """Score one incident.

    Args:
        incident: Incident as delivered by the ingestion source

    Returns:
        ScoredPoint with count 1 and score = resolution base + winter boost,
        clamped to [0, 1]

    Raises:
        InvalidIncidentError: Non-finite coordinates or a period that is not
            a valid YYYY-MM[-DD] date
    """
    if not is_finite_coordinate(incident.lat, incident.lng):
        raise InvalidIncidentError(
            f"Incident coordinates ({incident.lat}, {incident.lng}) are not finite"
        )

    try:
        parse_period(incident.period)
        score = calculate_risk_score(incident.resolution, incident.period)
    except ValueError as e:
        raise InvalidIncidentError(str(e)) from e

    return ScoredPoint(
        lat=incident.lat,
        lng=incident.lng,
        period=incident.period,
        category=incident.category,
        count=1,
        score=score,
    )
