"""Heatmap snapshot persistence and the in-memory snapshot holder."""

import json
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from safepath.core.exceptions import SnapshotLoadError
from safepath.models.dataset import SpatialDataset
from safepath.schemas.incident import ScoredPoint
from safepath.schemas.poi import PointOfInterest

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Reads and writes the JSON snapshot files.

    The heatmap snapshot is a flat JSON array of scored point records; the POI
    file is a JSON array of place records.
    """

    def __init__(self, heatmap_path: str | Path, poi_path: Optional[str | Path] = None):
        self.heatmap_path = Path(heatmap_path)
        self.poi_path = Path(poi_path) if poi_path else None

    def _read_json_array(self, path: Path) -> list:
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise SnapshotLoadError(f"Snapshot file not found: {path}")
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotLoadError(f"Could not read snapshot {path}: {str(e)}")

        if not isinstance(data, list):
            raise SnapshotLoadError(f"Snapshot {path} must contain a JSON array")
        return data

    def load_dataset(self) -> SpatialDataset:
        """Load the heatmap snapshot.

        Raises:
            SnapshotLoadError: Missing file, malformed JSON or an invalid record
        """
        records = self._read_json_array(self.heatmap_path)
        try:
            points = [ScoredPoint.model_validate(record) for record in records]
        except PydanticValidationError as e:
            raise SnapshotLoadError(f"Invalid record in {self.heatmap_path}: {str(e)}")

        logger.info(f"Loaded {len(points)} heatmap points from {self.heatmap_path}")
        return SpatialDataset(points)

    def save_dataset(self, dataset: SpatialDataset) -> Path:
        """Write a dataset as the heatmap snapshot.

        The file is written next to the target and renamed into place, so a
        reader never sees a partial snapshot.
        """
        self.heatmap_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.heatmap_path.with_suffix(self.heatmap_path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(dataset.to_records(), f, indent=2)
        tmp_path.replace(self.heatmap_path)

        logger.info(f"Saved {len(dataset)} heatmap points to {self.heatmap_path}")
        return self.heatmap_path

    def load_pois(self) -> List[PointOfInterest]:
        """Load the POI list; no configured file means no POIs."""
        if self.poi_path is None:
            return []
        records = self._read_json_array(self.poi_path)
        try:
            pois = [PointOfInterest.model_validate(record) for record in records]
        except PydanticValidationError as e:
            raise SnapshotLoadError(f"Invalid record in {self.poi_path}: {str(e)}")

        logger.info(f"Loaded {len(pois)} points of interest from {self.poi_path}")
        return pois


class SnapshotStore:
    """Holds the snapshot currently served to queries.

    Queries read ``dataset`` once and keep using that object. A reload builds
    a complete new snapshot first and only then swaps the reference, so no
    query can observe a partially loaded dataset.
    """

    def __init__(
        self,
        dataset: Optional[SpatialDataset] = None,
        pois: Iterable[PointOfInterest] = (),
    ):
        self._lock = threading.Lock()
        self._dataset = dataset if dataset is not None else SpatialDataset()
        self._pois: Tuple[PointOfInterest, ...] = tuple(pois)

    @property
    def dataset(self) -> SpatialDataset:
        return self._dataset

    @property
    def pois(self) -> Tuple[PointOfInterest, ...]:
        return self._pois

    def swap(
        self,
        dataset: SpatialDataset,
        pois: Optional[Iterable[PointOfInterest]] = None,
    ) -> SpatialDataset:
        """Replace the served dataset, and the POIs when given.

        Returns:
            The dataset that was served before
        """
        new_pois = tuple(pois) if pois is not None else None
        with self._lock:
            previous, self._dataset = self._dataset, dataset
            if new_pois is not None:
                self._pois = new_pois
        return previous

    def reload(self, repository: SnapshotRepository) -> SpatialDataset:
        """Reload dataset and POIs from disk and swap them in.

        Raises:
            SnapshotLoadError: The current snapshot stays in place
        """
        dataset = repository.load_dataset()
        pois = repository.load_pois()
        self.swap(dataset, pois)
        logger.info(f"Snapshot reloaded with {len(dataset)} points")
        return dataset
