"""Unit tests for geometry utilities."""

import math

import pytest

from safepath.utils.geometry import (
    bbox_contains,
    feature_collection,
    haversine_km,
    is_finite_coordinate,
    midpoint,
    segment_feature,
)


def test_haversine_km():
    """Test great-circle distance on known values."""
    # One degree of longitude on the equator
    assert haversine_km(0, 0, 0, 1) == pytest.approx(6371.0 * math.pi / 180)
    assert haversine_km(51.5, -0.12, 51.5, -0.12) == 0.0

    # London to Paris is roughly 344 km
    assert haversine_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)


def test_haversine_km_symmetric():
    """Test distance does not depend on argument order."""
    a = haversine_km(51.5074, -0.1278, 51.5155, -0.1419)
    b = haversine_km(51.5155, -0.1419, 51.5074, -0.1278)
    assert a == pytest.approx(b)


def test_midpoint():
    """Test arithmetic midpoint."""
    assert midpoint(0, 0, 0, 1) == (0, 0.5)
    assert midpoint(51.0, -1.0, 52.0, 1.0) == (51.5, 0.0)


def test_is_finite_coordinate():
    """Test rejection of NaN, infinity and non-numbers."""
    assert is_finite_coordinate(51.5, -0.1)
    assert is_finite_coordinate(0, 0)
    assert not is_finite_coordinate(float("nan"), 0)
    assert not is_finite_coordinate(0, float("inf"))
    assert not is_finite_coordinate(None, 0)
    assert not is_finite_coordinate("north", 0)


def test_segment_feature():
    """Test GeoJSON segment uses (lng, lat) order."""
    feature = segment_feature(51.5, -0.12, 51.6, -0.13, properties={"risk": 0.4})

    assert feature["type"] == "Feature"
    assert feature["geometry"]["type"] == "LineString"
    assert feature["geometry"]["coordinates"] == [[-0.12, 51.5], [-0.13, 51.6]]
    assert feature["properties"] == {"risk": 0.4}


def test_feature_collection():
    """Test wrapping features in a collection."""
    feature = segment_feature(0, 0, 0, 1)
    collection = feature_collection([feature])

    assert collection["type"] == "FeatureCollection"
    assert collection["features"] == [feature]
    assert feature["properties"] == {}


def test_bbox_contains():
    """Test bounding box containment including edges."""
    assert bbox_contains(52, 51, 1, -1, 51.5, 0)
    assert bbox_contains(52, 51, 1, -1, 52, 1)
    assert not bbox_contains(52, 51, 1, -1, 52.1, 0)
    assert not bbox_contains(52, 51, 1, -1, 51.5, -1.5)
