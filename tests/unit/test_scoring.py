"""Unit tests for scoring utilities."""

from datetime import date

import pytest

from safepath.utils.scoring import (
    calculate_cutoff,
    calculate_risk_score,
    clamp,
    get_period_month,
    get_resolution_risk,
    get_season_boost,
    parse_period,
)


def test_clamp():
    """Test clamping to the unit interval."""
    assert clamp(-0.5) == 0.0
    assert clamp(0.42) == 0.42
    assert clamp(1.7) == 1.0
    assert clamp(5, 0, 10) == 5


def test_get_resolution_risk():
    """Test base risk per resolution status."""
    assert get_resolution_risk("Under investigation") == 0.2
    assert get_resolution_risk("No further action") == 0.4
    assert get_resolution_risk("Offender charged") == 0.6
    assert get_resolution_risk("") == 0.6

    # Matching is exact
    assert get_resolution_risk("under investigation") == 0.6


def test_get_period_month():
    """Test month extraction from periods."""
    assert get_period_month("2024-01") == 1
    assert get_period_month("2023-12-15") == 12

    with pytest.raises(ValueError):
        get_period_month("2024")
    with pytest.raises(ValueError):
        get_period_month("2024-13")


def test_get_season_boost():
    """Test the winter boost for December, January and February."""
    assert get_season_boost("2023-12") == 0.1
    assert get_season_boost("2024-01") == 0.1
    assert get_season_boost("2024-02-29") == 0.1
    assert get_season_boost("2024-03") == 0.0
    assert get_season_boost("2024-11") == 0.0


def test_parse_period():
    """Test period parsing for both supported formats."""
    assert parse_period("2024-03") == date(2024, 3, 1)
    assert parse_period("2024-03-17") == date(2024, 3, 17)

    for bad in ("", "March 2024", "2024-13", "2024/03"):
        with pytest.raises(ValueError):
            parse_period(bad)


def test_calculate_cutoff():
    """Test calendar month subtraction for the time window."""
    assert calculate_cutoff(6, date(2024, 7, 1)) == date(2024, 1, 1)
    assert calculate_cutoff(0, date(2024, 7, 1)) == date(2024, 7, 1)
    # End of month clamps instead of overflowing
    assert calculate_cutoff(1, date(2024, 3, 31)) == date(2024, 2, 29)


def test_calculate_cutoff_before_year_one():
    """Test a window reaching past year 1 starts at the earliest date."""
    assert calculate_cutoff(100000, date(2024, 7, 1)) == date.min
    assert calculate_cutoff(24282, date(2024, 7, 1)) == date(1, 1, 1)
    assert calculate_cutoff(24295, date(2024, 7, 1)) == date.min


def test_calculate_risk_score():
    """Test combined resolution and season scoring."""
    assert calculate_risk_score("Under investigation", "2024-01") == pytest.approx(0.3)
    assert calculate_risk_score("No further action", "2024-06") == pytest.approx(0.4)
    assert calculate_risk_score("Offender charged", "2024-12") == pytest.approx(0.7)


@pytest.mark.parametrize(
    "resolution", ["Under investigation", "No further action", "Other", ""]
)
@pytest.mark.parametrize("period", ["2024-01", "2024-05", "2024-12-24"])
def test_risk_score_in_unit_interval(resolution, period):
    """Test every score stays within [0, 1]."""
    assert 0.0 <= calculate_risk_score(resolution, period) <= 1.0
