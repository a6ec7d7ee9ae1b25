"""Risk-weighted interpolation.

Estimates risk and the dominant incident category at an arbitrary coordinate
by inverse-distance weighting over every point of a dataset snapshot.
"""

from safepath.models.dataset import SpatialDataset
from safepath.utils.geometry import haversine_km
from safepath.utils.scoring import clamp

FALLBACK_CATEGORY = "general"


class RiskInterpolator:
    """Inverse-distance risk estimates over one dataset snapshot.

    Each estimate scans the whole dataset, so a call costs O(n).
    """

    def __init__(self, dataset: SpatialDataset):
        self.dataset = dataset

    def estimate_risk(self, lat: float, lng: float) -> float:
        """Distance-weighted mean point score at a coordinate.

        Each point weighs ``1 / (1 + d)`` where ``d`` is its great-circle
        distance in km from the coordinate.

        Returns:
            Risk in [0, 1], or 0.0 for an empty dataset
        """
        total = 0.0
        weight_sum = 0.0
        for point in self.dataset:
            weight = 1.0 / (1.0 + haversine_km(lat, lng, point.lat, point.lng))
            total += point.score * weight
            weight_sum += weight

        if weight_sum == 0:
            return 0.0
        return clamp(total / weight_sum)

    def estimate_dominant_category(self, lat: float, lng: float) -> str:
        """Category of the point with the highest ``score / (1 + d)``.

        Exact ties go to the alphabetically first category, so the answer does
        not depend on dataset order.

        Returns:
            The winning category, or "general" when no point has a positive
            weight (including an empty dataset)
        """
        best_category = FALLBACK_CATEGORY
        best_weight = 0.0
        for point in self.dataset:
            weight = point.score / (1.0 + haversine_km(lat, lng, point.lat, point.lng))
            if weight <= 0:
                continue
            if weight > best_weight or (weight == best_weight and point.category < best_category):
                best_category = point.category
                best_weight = weight
        return best_category
