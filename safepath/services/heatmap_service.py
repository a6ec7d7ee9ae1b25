"""Heatmap density service.

Buckets the scored points of a dataset snapshot into a resolution-dependent
grid for map rendering, filtered by viewport, time window and category.
"""

import logging
import math
from datetime import date
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from safepath.config import HEATMAP_CELL_SIZES
from safepath.models.dataset import SpatialDataset
from safepath.schemas.heatmap import Bounds, BucketCell
from safepath.utils.scoring import calculate_cutoff, parse_period

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = HEATMAP_CELL_SIZES["medium"]

# (lat grid index, lng grid index, category)
BucketKey = Tuple[int, int, str]

_period_date = lru_cache(maxsize=4096)(parse_period)


def get_cell_size(resolution: Optional[str]) -> float:
    """Grid cell size in degrees for a map resolution.

    Args:
        resolution: "high", "low", or anything else for medium

    Returns:
        0.0025 for high, 0.01 for low, 0.005 otherwise
    """
    return HEATMAP_CELL_SIZES.get(resolution or "", DEFAULT_CELL_SIZE)


def grid_index(value: float, cell_size: float) -> int:
    """Index of the nearest grid line; halves round up."""
    return math.floor(value / cell_size + 0.5)


def snap(value: float, cell_size: float) -> float:
    """Round a coordinate to the nearest multiple of the cell size."""
    return round(grid_index(value, cell_size) * cell_size, 7)


class HeatmapService:
    """Answers density queries over one dataset snapshot."""

    def __init__(self, dataset: SpatialDataset):
        self.dataset = dataset

    def query(
        self,
        bounds: Optional[Bounds] = None,
        months_back: int = 6,
        categories: Optional[Iterable[str]] = None,
        resolution: Optional[str] = "medium",
        today: Optional[date] = None,
    ) -> List[BucketCell]:
        """Bucket the points matching the filters into grid cells.

        Args:
            bounds: Viewport; missing sides are unconstrained
            months_back: Only periods on or after today minus this many months
            categories: Categories to keep (empty or None keeps all)
            resolution: Map resolution selecting the cell size
            today: Reference date for the time window (defaults to today)

        Returns:
            One BucketCell per (snapped lat, snapped lng, category), unordered
        """
        bounds = bounds or Bounds()
        wanted = set(categories or ())
        cutoff = calculate_cutoff(months_back, today)
        cell_size = get_cell_size(resolution)

        buckets: Dict[BucketKey, Dict] = {}

        for point in self.dataset:
            if not bounds.contains(point.lat, point.lng):
                continue
            if wanted and point.category not in wanted:
                continue
            if _period_date(point.period) < cutoff:
                continue

            key = (
                grid_index(point.lat, cell_size),
                grid_index(point.lng, cell_size),
                point.category,
            )
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = {
                    "lat": snap(point.lat, cell_size),
                    "lng": snap(point.lng, cell_size),
                    "count": 0,
                    "score": 0.0,
                }
            bucket["count"] += point.count
            bucket["score"] = max(bucket["score"], point.score)

        logger.debug(
            "Heatmap query bucketed",
            extra={
                "extra_fields": {
                    "points": len(self.dataset),
                    "cells": len(buckets),
                    "resolution": resolution,
                    "months_back": months_back,
                }
            },
        )

        return [
            BucketCell(
                lat=bucket["lat"],
                lng=bucket["lng"],
                category=category,
                count=bucket["count"],
                score=bucket["score"],
                intensity=min(1.0, bucket["score"]),
            )
            for (_, _, category), bucket in buckets.items()
        ]
