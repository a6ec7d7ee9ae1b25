"""Pytest configuration and fixtures."""

import json
import os
from datetime import date
from typing import Generator, List

import pytest
from dateutil.relativedelta import relativedelta
from fastapi.testclient import TestClient

# Set test environment before the app reads its settings
os.environ["APP_ENV"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["HEATMAP_DATA_PATH"] = "tests/does-not-exist/heatmap.json"
os.environ["POI_DATA_PATH"] = "tests/does-not-exist/poi.json"

from safepath.dependencies import get_snapshot_repository, get_snapshot_store
from safepath.main import app
from safepath.models.dataset import SpatialDataset
from safepath.repositories.snapshot_repository import SnapshotRepository, SnapshotStore
from safepath.schemas.incident import ScoredPoint
from safepath.schemas.poi import PointOfInterest


def months_ago(months: int) -> str:
    """YYYY-MM period a number of months before today."""
    return (date.today() - relativedelta(months=months)).strftime("%Y-%m")


@pytest.fixture
def recent_period() -> str:
    """Period well inside the default six-month window."""
    return months_ago(1)


@pytest.fixture
def old_period() -> str:
    """Period outside any window shorter than two years."""
    return months_ago(30)


@pytest.fixture
def sample_points(recent_period: str, old_period: str) -> List[ScoredPoint]:
    """Scored points around central London."""
    return [
        ScoredPoint(
            lat=51.5074, lng=-0.1278, period=recent_period, category="theft", count=2, score=0.7
        ),
        ScoredPoint(
            lat=51.5072, lng=-0.1279, period=recent_period, category="theft", count=1, score=0.3
        ),
        ScoredPoint(
            lat=51.5101, lng=-0.1340, period=recent_period, category="robbery", count=1, score=0.5
        ),
        ScoredPoint(
            lat=51.5033, lng=-0.1196, period=recent_period, category="burglary", count=3, score=0.6
        ),
        ScoredPoint(
            lat=51.5155, lng=-0.1419, period=old_period, category="theft", count=4, score=0.9
        ),
    ]


@pytest.fixture
def sample_dataset(sample_points: List[ScoredPoint]) -> SpatialDataset:
    """Dataset snapshot built from the sample points."""
    return SpatialDataset(sample_points)


@pytest.fixture
def sample_pois() -> List[PointOfInterest]:
    """A few points of interest, one outside central London."""
    return [
        PointOfInterest(name="Charing Cross Police Station", lat=51.5096, lng=-0.1248),
        PointOfInterest(name="St Thomas' Hospital", lat=51.4988, lng=-0.1187, safety_level="high"),
        PointOfInterest(name="Heathrow", lat=51.4700, lng=-0.4543),
    ]


@pytest.fixture
def snapshot_store(
    sample_dataset: SpatialDataset, sample_pois: List[PointOfInterest]
) -> SnapshotStore:
    """In-memory snapshot holder with the sample data."""
    return SnapshotStore(sample_dataset, sample_pois)


@pytest.fixture
def snapshot_files(tmp_path, sample_points, sample_pois):
    """Sample data written as snapshot files; returns (heatmap_path, poi_path)."""
    heatmap_path = tmp_path / "heatmap.json"
    poi_path = tmp_path / "poi.json"
    heatmap_path.write_text(json.dumps([p.model_dump() for p in sample_points]))
    poi_path.write_text(json.dumps([p.model_dump(exclude_none=True) for p in sample_pois]))
    return heatmap_path, poi_path


@pytest.fixture
def snapshot_repository(snapshot_files) -> SnapshotRepository:
    """Repository over the sample snapshot files."""
    heatmap_path, poi_path = snapshot_files
    return SnapshotRepository(heatmap_path, poi_path)


@pytest.fixture(scope="function")
def client(
    snapshot_store: SnapshotStore, snapshot_repository: SnapshotRepository
) -> Generator[TestClient, None, None]:
    """Create a test client serving the sample snapshot."""
    app.dependency_overrides[get_snapshot_store] = lambda: snapshot_store
    app.dependency_overrides[get_snapshot_repository] = lambda: snapshot_repository

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
