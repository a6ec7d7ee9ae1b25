"""Heatmap API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from safepath.config import get_settings
from safepath.core.rate_limit import limiter, rate_limit_queries
from safepath.dependencies import get_dataset
from safepath.models.dataset import SpatialDataset
from safepath.schemas.heatmap import Bounds, HeatmapResponse
from safepath.services.heatmap_service import HeatmapService

router = APIRouter()
settings = get_settings()


def parse_categories(categories: str) -> list[str]:
    """Split a comma-separated category filter, dropping empty entries."""
    return [category.strip() for category in categories.split(",") if category.strip()]


@router.get(
    "",
    response_model=HeatmapResponse,
    summary="Get incident density heatmap",
    description="""
    Returns incident density cells for the current map viewport.

    Scored incident points are bucketed into a square grid whose cell size
    depends on the requested resolution, separately per category.

    **Resolutions:**
    - `high`: 0.0025° cells
    - `medium`: 0.005° cells (default)
    - `low`: 0.01° cells

    Any bound that is missing or not a number leaves that side of the
    viewport open. Cells are returned in no particular order.
    """,
)
@limiter.limit(rate_limit_queries)
async def get_heatmap(
    request: Request,
    north: Optional[str] = Query(default=None, description="Northern latitude bound"),
    south: Optional[str] = Query(default=None, description="Southern latitude bound"),
    east: Optional[str] = Query(default=None, description="Eastern longitude bound"),
    west: Optional[str] = Query(default=None, description="Western longitude bound"),
    months_back: int = Query(
        default=settings.DEFAULT_MONTHS_BACK,
        alias="monthsBack",
        ge=0,
        description="Months of incident history to include",
    ),
    categories: str = Query(default="", description="Comma-separated category filter"),
    resolution: str = Query(
        default=settings.DEFAULT_RESOLUTION, description="'low', 'medium' or 'high'"
    ),
    dataset: SpatialDataset = Depends(get_dataset),
):
    """Get heatmap cells for a viewport."""
    bounds = Bounds(north=north, south=south, east=east, west=west)
    points = HeatmapService(dataset).query(
        bounds=bounds,
        months_back=months_back,
        categories=parse_categories(categories),
        resolution=resolution,
    )
    return HeatmapResponse(points=points)
