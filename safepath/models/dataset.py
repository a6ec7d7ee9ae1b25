"""Immutable spatial dataset snapshot."""

from typing import Iterable, Iterator, List, Tuple

from safepath.schemas.incident import ScoredPoint


class SpatialDataset:
    """Read-only collection of aggregated scored points.

    Every heatmap and routing query runs against one of these. A refreshed
    dataset is a new instance; an existing instance never changes.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[ScoredPoint] = ()):
        self._points: Tuple[ScoredPoint, ...] = tuple(points)

    @property
    def points(self) -> Tuple[ScoredPoint, ...]:
        return self._points

    def __iter__(self) -> Iterator[ScoredPoint]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)

    def __repr__(self) -> str:
        return f"SpatialDataset(points={len(self._points)})"

    def categories(self) -> List[str]:
        """Distinct incident categories, sorted."""
        return sorted({point.category for point in self._points})

    def to_records(self) -> List[dict]:
        """Plain dicts in snapshot file order."""
        return [point.model_dump() for point in self._points]
