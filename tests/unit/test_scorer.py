"""Unit tests for the point risk scorer."""

import pytest

from safepath.core.exceptions import InvalidIncidentError, ValidationError
from safepath.ingestion.scorer import score_incident
from safepath.schemas.incident import RawIncident


def make_incident(**overrides) -> RawIncident:
    fields = {
        "lat": 51.5,
        "lng": -0.12,
        "period": "2024-06",
        "category": "theft",
        "resolution": "Offender charged",
    }
    fields.update(overrides)
    return RawIncident(**fields)


def test_winter_incident_under_investigation():
    """Test a January incident under investigation scores 0.3."""
    point = score_incident(make_incident(period="2024-01", resolution="Under investigation"))

    assert point.score == pytest.approx(0.3)
    assert point.count == 1
    assert point.lat == 51.5
    assert point.lng == -0.12
    assert point.period == "2024-01"
    assert point.category == "theft"


@pytest.mark.parametrize(
    "resolution,period,expected",
    [
        ("Under investigation", "2024-06", 0.2),
        ("No further action", "2024-06", 0.4),
        ("No further action", "2023-12", 0.5),
        ("Offender charged", "2024-06", 0.6),
        ("Offender charged", "2024-02", 0.7),
        ("", "2024-02-14", 0.7),
    ],
)
def test_score_by_resolution_and_season(resolution, period, expected):
    """Test resolution base plus winter boost."""
    point = score_incident(make_incident(resolution=resolution, period=period))
    assert point.score == pytest.approx(expected)


@pytest.mark.parametrize("lat,lng", [(float("nan"), 0.0), (51.5, float("inf"))])
def test_non_finite_coordinates_rejected(lat, lng):
    """Test incidents with NaN or infinite coordinates are rejected."""
    with pytest.raises(InvalidIncidentError) as exc_info:
        score_incident(make_incident(lat=lat, lng=lng))

    assert exc_info.value.status_code == 422
    assert isinstance(exc_info.value, ValidationError)


@pytest.mark.parametrize("period", ["2024", "2024-13", "June 2024", ""])
def test_invalid_period_rejected(period):
    """Test incidents whose period is not a date are rejected."""
    with pytest.raises(InvalidIncidentError):
        score_incident(make_incident(period=period))


def test_dated_period_london_theft():
    """Test a full-date January theft under investigation."""
    point = score_incident(
        RawIncident(
            lat=51.5074,
            lng=-0.1278,
            period="2024-01-15",
            category="theft",
            resolution="Under investigation",
        )
    )

    assert point.score == pytest.approx(0.3)
    assert point.count == 1
    assert point.period == "2024-01-15"
