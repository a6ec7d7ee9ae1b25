"""Deduplicating aggregator.

Collapses scored points that share a location (to four decimal places), a
category and a reporting period into one canonical heatmap point. The result
is the dataset every downstream query reads.
"""

import logging
from typing import Dict, Iterable, Tuple

from safepath.models.dataset import SpatialDataset
from safepath.schemas.incident import ScoredPoint

logger = logging.getLogger(__name__)

# Four decimal places is roughly 11 m of latitude
KEY_PRECISION = 4

# (rounded lat, rounded lng, category, period)
AggregationKey = Tuple[float, float, str, str]


def aggregation_key(point: ScoredPoint) -> AggregationKey:
    """Identity of a point for deduplication purposes."""
    return (
        round(point.lat, KEY_PRECISION),
        round(point.lng, KEY_PRECISION),
        point.category,
        point.period,
    )


def merge_points(existing: ScoredPoint, incoming: ScoredPoint) -> ScoredPoint:
    """Combine two points with the same key.

    Counts add up and the higher score wins; both operations are commutative
    and associative, so merge order never changes the result.
    """
    return existing.model_copy(
        update={
            "count": existing.count + incoming.count,
            "score": max(existing.score, incoming.score),
        }
    )


def aggregate(points: Iterable[ScoredPoint]) -> SpatialDataset:
    """Deduplicate scored points into a spatial dataset.

    Args:
        points: Scored points in any order

    Returns:
        SpatialDataset holding exactly one point per aggregation key, with
        coordinates canonicalized to the key precision and sorted by key
    """
    merged: Dict[AggregationKey, ScoredPoint] = {}
    total = 0

    for point in points:
        total += 1
        key = aggregation_key(point)
        existing = merged.get(key)
        if existing is None:
            lat, lng, _, _ = key
            merged[key] = point.model_copy(update={"lat": lat, "lng": lng})
        else:
            merged[key] = merge_points(existing, point)

    logger.info(f"Aggregated {total} scored points into {len(merged)} heatmap points")
    return SpatialDataset(merged[key] for key in sorted(merged))
