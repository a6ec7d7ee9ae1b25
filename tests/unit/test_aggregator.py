"""Unit tests for the deduplicating aggregator."""

import itertools

import pytest

from safepath.ingestion.aggregator import aggregate, aggregation_key, merge_points
from safepath.models.dataset import SpatialDataset
from safepath.schemas.incident import ScoredPoint


def make_point(lat=51.50001, lng=-0.12001, category="theft", period="2024-01", count=1, score=0.3):
    return ScoredPoint(
        lat=lat, lng=lng, period=period, category=category, count=count, score=score
    )


def test_duplicates_collapse_to_one_point():
    """Test points rounding to the same key merge with summed count and max score."""
    dataset = aggregate(
        [
            make_point(lat=51.50001, lng=-0.12001, score=0.3),
            make_point(lat=51.50002, lng=-0.12002, score=0.7),
        ]
    )

    assert isinstance(dataset, SpatialDataset)
    assert len(dataset) == 1
    point = dataset.points[0]
    assert point.count == 2
    assert point.score == 0.7
    assert point.lat == 51.5
    assert point.lng == -0.12


def test_distinct_keys_kept_apart():
    """Test category, period and location each separate points."""
    dataset = aggregate(
        [
            make_point(),
            make_point(category="robbery"),
            make_point(period="2024-02"),
            make_point(lat=51.5010),
        ]
    )

    assert len(dataset) == 4
    assert all(point.count == 1 for point in dataset)


def test_one_point_per_key():
    """Test no two output points share an aggregation key."""
    points = [
        make_point(lat=51.5 + i * 0.00004, category=category, score=score)
        for i in range(6)
        for category, score in (("theft", 0.2), ("robbery", 0.6))
    ]
    dataset = aggregate(points)

    keys = [aggregation_key(point) for point in dataset]
    assert len(keys) == len(set(keys))
    assert sum(point.count for point in dataset) == len(points)


def test_aggregate_independent_of_order():
    """Test every input permutation yields the same dataset."""
    points = [
        make_point(lat=51.50001, score=0.3),
        make_point(lat=51.50003, score=0.6, count=2),
        make_point(lat=51.50004, score=0.4),
        make_point(lat=51.6, category="burglary", score=0.5),
    ]
    expected = aggregate(points).to_records()

    for permutation in itertools.permutations(points):
        assert aggregate(permutation).to_records() == expected


def test_merge_points_commutative():
    """Test merge gives the same count and score in either order."""
    a = make_point(score=0.2, count=3)
    b = make_point(score=0.6, count=1)

    ab = merge_points(a, b)
    ba = merge_points(b, a)
    assert (ab.count, ab.score) == (ba.count, ba.score) == (4, 0.6)


def test_scores_stay_in_unit_interval():
    """Test merged scores never exceed the inputs' maximum."""
    dataset = aggregate([make_point(score=s) for s in (0.0, 0.7, 1.0, 0.3)])

    assert len(dataset) == 1
    assert dataset.points[0].score == pytest.approx(1.0)


def test_aggregate_empty():
    """Test no input gives an empty dataset."""
    dataset = aggregate([])
    assert len(dataset) == 0
    assert not dataset


def test_near_identical_london_thefts_merge():
    """Test two thefts within a metre collapse to one point."""
    dataset = aggregate(
        [
            make_point(lat=51.50740001, lng=-0.12780001, period="2024-01", score=0.3),
            make_point(lat=51.50742, lng=-0.12779, period="2024-01", score=0.6),
        ]
    )

    assert len(dataset) == 1
    point = dataset.points[0]
    assert point.count == 2
    assert point.score == 0.6
    assert (point.lat, point.lng) == (51.5074, -0.1278)
