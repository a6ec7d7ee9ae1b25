"""FastAPI dependencies."""

from fastapi import Depends, Request

from safepath.config import Settings, get_settings
from safepath.models.dataset import SpatialDataset
from safepath.repositories.snapshot_repository import SnapshotRepository, SnapshotStore


def get_settings_dependency() -> Settings:
    """Get settings instance as a dependency."""
    return get_settings()


def get_snapshot_store(request: Request) -> SnapshotStore:
    """Snapshot holder created at application startup."""
    return request.app.state.snapshot_store


def get_dataset(store: SnapshotStore = Depends(get_snapshot_store)) -> SpatialDataset:
    """Dataset snapshot for the duration of one request."""
    return store.dataset


def get_snapshot_repository(
    settings: Settings = Depends(get_settings_dependency),
) -> SnapshotRepository:
    """Repository over the configured snapshot files."""
    return SnapshotRepository(settings.HEATMAP_DATA_PATH, settings.POI_DATA_PATH)
