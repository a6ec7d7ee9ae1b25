"""Point-of-interest API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from safepath.dependencies import get_snapshot_store
from safepath.repositories.snapshot_repository import SnapshotStore
from safepath.schemas.heatmap import Bounds
from safepath.schemas.poi import PoiResponse
from safepath.services.poi_service import PoiService

router = APIRouter()


@router.get(
    "",
    response_model=PoiResponse,
    summary="Get points of interest in a bounding box",
    description="""
    Returns the points of interest inside the viewport, each with its
    distance in kilometres from the viewport centre. All four bounds are
    required; if any is missing or not a number the list is empty.
    """,
)
async def get_pois(
    north: Optional[str] = Query(default=None),
    south: Optional[str] = Query(default=None),
    east: Optional[str] = Query(default=None),
    west: Optional[str] = Query(default=None),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Get POIs for a viewport."""
    bounds = Bounds(north=north, south=south, east=east, west=west)
    return PoiResponse(items=PoiService(store.pois).within(bounds))
