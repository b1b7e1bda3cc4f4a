"""Geographic calculations - Pure functions.

This module provides distance and boundary calculations for earthquake locations.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass

from src.core.earthquake import Earthquake


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    A box whose min_longitude is greater than its max_longitude crosses the
    antimeridian (e.g. 160 to -150 covers the South Pacific).

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @property
    def crosses_antimeridian(self) -> bool:
        return self.min_longitude > self.max_longitude

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        if not self.min_latitude <= latitude <= self.max_latitude:
            return False

        if self.crosses_antimeridian:
            return longitude >= self.min_longitude or longitude <= self.max_longitude

        return self.min_longitude <= longitude <= self.max_longitude


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push antipodal pairs just past 1.0
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(first: Earthquake, second: Earthquake) -> float | None:
    """Distance in kilometers between two epicenters.

    Pure function.

    Returns:
        Distance in kilometers, or None if either location is unknown
    """
    if not (first.has_valid_coordinates and second.has_valid_coordinates):
        return None

    return calculate_distance(
        first.latitude,
        first.longitude,
        second.latitude,
        second.longitude,
    )


def is_within_bounds(earthquake: Earthquake, bounds: BoundingBox) -> bool:
    """Check if an earthquake is within a bounding box.

    Pure function. Earthquakes without coordinates are never inside.

    Args:
        earthquake: Earthquake to check
        bounds: Bounding box to check against

    Returns:
        True if earthquake is within bounds
    """
    if not earthquake.has_valid_coordinates:
        return False
    return bounds.contains(earthquake.latitude, earthquake.longitude)


def filter_by_bounds(
    earthquakes: list[Earthquake],
    bounds: BoundingBox,
) -> list[Earthquake]:
    """Filter earthquakes to only those within a bounding box.

    Pure function.

    Args:
        earthquakes: List of earthquakes to filter
        bounds: Bounding box to filter by

    Returns:
        Earthquakes within the bounds
    """
    return [e for e in earthquakes if is_within_bounds(e, bounds)]
