"""Domain models."""

from safepath.models.dataset import SpatialDataset

__all__ = ["SpatialDataset"]
