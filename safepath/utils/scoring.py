"""Scoring utilities for incident risk calculations.

Functions for deriving a heuristic risk score from an incident's resolution
status and reporting period, and for the period arithmetic used by the
heatmap time filter.
"""

from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from safepath.config import (
    DEFAULT_RESOLUTION_RISK,
    RESOLUTION_BASE_RISK,
    WINTER_BOOST,
    WINTER_MONTHS,
)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Restrict value to the closed range [low, high]."""
    return max(low, min(high, value))


def get_resolution_risk(resolution: str) -> float:
    """Base risk for a case resolution status.

    Args:
        resolution: Resolution text as reported (matched exactly)

    Returns:
        0.2 for "Under investigation", 0.4 for "No further action",
        0.6 for anything else
    """
    return RESOLUTION_BASE_RISK.get(resolution, DEFAULT_RESOLUTION_RISK)


def get_period_month(period: str) -> int:
    """Month number from a ``YYYY-MM[-DD]`` period string.

    Raises:
        ValueError: If the second ``-`` field is missing or not a month
    """
    parts = period.split("-")
    if len(parts) < 2:
        raise ValueError(f"Period '{period}' has no month component")
    month = int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Period '{period}' has month {month} out of range")
    return month


def get_season_boost(period: str) -> float:
    """Extra risk for incidents reported in winter (Dec, Jan, Feb)."""
    return WINTER_BOOST if get_period_month(period) in WINTER_MONTHS else 0.0


def parse_period(period: str) -> date:
    """Parse a ``YYYY-MM`` or ``YYYY-MM-DD`` period to a date.

    Month-only periods resolve to the first day of the month.

    Raises:
        ValueError: If the period matches neither format
    """
    for fmt in ("%Y-%m-%d", "%Y-%m"):
        try:
            return datetime.strptime(period, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Period '{period}' is not YYYY-MM or YYYY-MM-DD")


def calculate_cutoff(months_back: int, today: date | None = None) -> date:
    """Earliest period date still inside a months-back window.

    Args:
        months_back: Number of calendar months to look back
        today: Reference date (defaults to today)

    Returns:
        ``today`` minus ``months_back`` calendar months, or ``date.min`` when
        that falls before year 1
    """
    reference = today or date.today()
    try:
        return reference - relativedelta(months=months_back)
    except (ValueError, OverflowError):
        return date.min


def calculate_risk_score(resolution: str, period: str) -> float:
    """Heuristic incident risk in [0, 1].

    Args:
        resolution: Case resolution status
        period: Reporting period (``YYYY-MM[-DD]``)

    Returns:
        Base risk for the resolution plus the winter boost, clamped to [0, 1]
    """
    return clamp(get_resolution_risk(resolution) + get_season_boost(period))
