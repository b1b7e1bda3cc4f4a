"""Unit tests for geographic calculations.

Pure function tests - no mocks needed, fast execution.
"""

import math

import pytest

from src.core.geo import (
    BoundingBox,
    calculate_distance,
    distance_between,
    is_within_bounds,
    filter_by_bounds,
)
from src.core.earthquake import Earthquake


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake for testing."""
    return Earthquake(
        id="test",
        time=1_700_000_000_000,
        magnitude=4.0,
        place="Test Location",
        latitude=37.7749,
        longitude=-122.4194,
        depth_km=10.0,
        url="https://example.com",
    )


class TestCalculateDistance:
    """Tests for calculate_distance() Haversine implementation."""

    def test_same_point_returns_zero(self):
        """Distance from point to itself should be zero."""
        distance = calculate_distance(37.7749, -122.4194, 37.7749, -122.4194)
        assert distance == pytest.approx(0.0, abs=0.001)

    def test_known_distance_sf_to_la(self):
        """SF to LA should be approximately 559 km."""
        distance = calculate_distance(37.7749, -122.4194, 34.0522, -118.2437)
        assert distance == pytest.approx(559, rel=0.02)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is about 111.19 km."""
        assert calculate_distance(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        """Distance should be the same in both directions."""
        d1 = calculate_distance(37.7749, -122.4194, 34.0522, -118.2437)
        d2 = calculate_distance(34.0522, -118.2437, 37.7749, -122.4194)

        assert d1 == pytest.approx(d2, rel=0.001)

    def test_across_antimeridian(self):
        """Points either side of 180 degrees are close, not half a world apart."""
        distance = calculate_distance(0, 179.5, 0, -179.5)
        assert distance == pytest.approx(111.19, abs=0.01)

    def test_near_antipodal_points(self):
        """Nearly opposite points give about half the circumference, no domain error."""
        distance = calculate_distance(0.08, 0.0, -0.08, 180.0)
        assert distance == pytest.approx(math.pi * 6371, rel=0.001)


class TestDistanceBetween:
    """Tests for distance_between()."""

    def test_distance_between_earthquakes(self, sample_earthquake):
        other = Earthquake(**{**sample_earthquake.__dict__, "id": "b", "latitude": 38.7749})
        assert distance_between(sample_earthquake, other) == pytest.approx(111.19, abs=0.01)

    def test_missing_coordinates(self, sample_earthquake):
        other = Earthquake(id="b", time=0)
        assert distance_between(sample_earthquake, other) is None


class TestBoundingBox:
    """Tests for BoundingBox dataclass."""

    def test_contains_point_inside(self):
        """Should return True for point inside box."""
        box = BoundingBox(
            min_latitude=35.0,
            max_latitude=40.0,
            min_longitude=-125.0,
            max_longitude=-120.0,
        )
        assert box.contains(37.0, -122.0)

    def test_excludes_point_outside(self):
        box = BoundingBox(35.0, 40.0, -125.0, -120.0)
        assert not box.contains(41.0, -122.0)
        assert not box.contains(37.0, -119.0)

    def test_edges_are_inclusive(self):
        box = BoundingBox(35.0, 40.0, -125.0, -120.0)
        assert box.contains(35.0, -125.0)
        assert box.contains(40.0, -120.0)

    def test_antimeridian_box(self):
        """A box from 160 to -150 wraps around 180 degrees."""
        box = BoundingBox(-55.0, -10.0, 160.0, -150.0)

        assert box.crosses_antimeridian
        assert box.contains(-41.0, 174.0)
        assert box.contains(-20.0, -175.0)
        assert not box.contains(-20.0, 0.0)


class TestBoundsFilters:
    """Tests for is_within_bounds() and filter_by_bounds()."""

    def test_is_within_bounds(self, sample_earthquake):
        box = BoundingBox(36.0, 38.5, -123.0, -121.0)
        assert is_within_bounds(sample_earthquake, box)

    def test_no_coordinates_never_within(self):
        box = BoundingBox(-90.0, 90.0, -180.0, 180.0)
        assert not is_within_bounds(Earthquake(id="x", time=0), box)

    def test_filter_by_bounds(self, sample_earthquake):
        far = Earthquake(**{**sample_earthquake.__dict__, "id": "far", "latitude": 10.0})
        box = BoundingBox(36.0, 38.5, -123.0, -121.0)

        result = filter_by_bounds([sample_earthquake, far], box)

        assert [e.id for e in result] == ["test"]
