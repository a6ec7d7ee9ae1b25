"""Offline heatmap build: raw incidents to a scored, deduplicated snapshot."""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from safepath.core.exceptions import InvalidIncidentError
from safepath.ingestion.aggregator import aggregate
from safepath.ingestion.csv_loader import load_raw_incidents
from safepath.ingestion.scorer import score_incident
from safepath.models.dataset import SpatialDataset
from safepath.repositories.snapshot_repository import SnapshotRepository
from safepath.schemas.incident import RawIncident, ScoredPoint

logger = logging.getLogger(__name__)


def score_incidents(incidents: Iterable[RawIncident]) -> Tuple[List[ScoredPoint], int]:
    """Score a batch, skipping records the scorer rejects.

    Returns:
        Tuple of (scored points, number of rejected incidents)
    """
    scored: List[ScoredPoint] = []
    rejected = 0
    for incident in incidents:
        try:
            scored.append(score_incident(incident))
        except InvalidIncidentError as e:
            rejected += 1
            logger.warning(f"Rejected incident: {e.message}")
    return scored, rejected


def build_dataset(incidents: Iterable[RawIncident]) -> SpatialDataset:
    """Score and aggregate incidents into a spatial dataset."""
    scored, rejected = score_incidents(incidents)
    if rejected:
        logger.warning(f"{rejected} incidents rejected during scoring")
    return aggregate(scored)


def process_crime_data(raw_dir: str | Path, output_path: str | Path) -> int:
    """Build the heatmap snapshot from the raw CSV directory.

    Args:
        raw_dir: Directory of raw incident CSV files
        output_path: Where to write the JSON snapshot

    Returns:
        Number of aggregated heatmap points written
    """
    incidents = load_raw_incidents(raw_dir)
    dataset = build_dataset(incidents)
    SnapshotRepository(output_path).save_dataset(dataset)
    return len(dataset)
