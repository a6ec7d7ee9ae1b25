"""Admin endpoints for snapshot maintenance."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from safepath.dependencies import get_snapshot_repository, get_snapshot_store
from safepath.repositories.snapshot_repository import SnapshotRepository, SnapshotStore

logger = logging.getLogger(__name__)
router = APIRouter()


class ReloadResponse(BaseModel):
    """Result of a snapshot reload."""

    status: str
    points: int
    pois: int


@router.post(
    "/reload",
    response_model=ReloadResponse,
    summary="Reload the heatmap snapshot",
    description="""
    Re-read the heatmap snapshot and POI files from disk and swap them in.

    Requests already running keep the snapshot they started with; later
    requests see the new one. If loading fails the current snapshot stays
    in service and 503 is returned.
    """,
)
async def reload_snapshot(
    store: SnapshotStore = Depends(get_snapshot_store),
    repository: SnapshotRepository = Depends(get_snapshot_repository),
):
    """Reload snapshot files into the running service."""
    dataset = store.reload(repository)
    logger.info(f"Admin reload complete: {len(dataset)} points")
    return ReloadResponse(status="reloaded", points=len(dataset), pois=len(store.pois))
