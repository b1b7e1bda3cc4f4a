"""Earthquake data models and parsing - Pure functions.

This module is the ingestion boundary: raw USGS GeoJSON features are turned
into typed, immutable Earthquake objects exactly once. Records that cannot be
used anywhere downstream (no id, no time) are dropped here; records with
partial data (no magnitude, no coordinates) are kept with None fields so that
each consumer can decide how to treat them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


logger = logging.getLogger(__name__)


# PAGER alert levels accepted from the feed, lowest to highest severity
ALERT_LEVELS = ("none", "green", "yellow", "orange", "red")


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Attributes:
        id: Unique USGS event ID
        time: Event time in milliseconds since the Unix epoch (UTC)
        magnitude: Earthquake magnitude, None if not reported
        place: Human-readable location description
        alert: PAGER alert level (none/green/yellow/orange/red), None if absent
        tsunami: Tsunami flag as reported by USGS (0 or 1), None if absent
        longitude: Epicenter longitude, None if coordinates are invalid
        latitude: Epicenter latitude, None if coordinates are invalid
        depth_km: Depth in kilometers, None if not reported
        url: USGS event detail URL
        mag_type: Magnitude type (e.g., 'ml', 'md', 'mb')
    """
    id: str
    time: int
    magnitude: float | None = None
    place: str | None = None
    alert: str | None = None
    tsunami: int | None = None
    longitude: float | None = None
    latitude: float | None = None
    depth_km: float | None = None
    url: str | None = None
    mag_type: str | None = None

    @property
    def time_utc(self) -> datetime:
        """Return the event time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.time / 1000, tz=timezone.utc)

    @property
    def has_valid_coordinates(self) -> bool:
        """True if both latitude and longitude are known."""
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """Return (latitude, longitude) tuple, or None if unknown."""
        if not self.has_valid_coordinates:
            return None
        return (self.latitude, self.longitude)


def _is_number(value: Any) -> bool:
    """Check for a real int/float (bool is excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_alert(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    level = value.strip().lower()
    return level if level in ALERT_LEVELS else None


def _parse_tsunami(value: Any) -> int | None:
    if value is True or value == 1:
        return 1
    if value is False or value == 0:
        return 0
    return None


def parse_earthquake(feature: Any) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if the
    record has no usable id or time.

    Args:
        feature: GeoJSON feature dict from the USGS feed (an Earthquake is
            passed through unchanged)

    Returns:
        Earthquake object or None if the feature is unusable
    """
    if isinstance(feature, Earthquake):
        return feature

    if not isinstance(feature, dict):
        return None

    event_id = feature.get("id")
    if not isinstance(event_id, str) or not event_id:
        return None

    props = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    if not isinstance(props, dict) or not isinstance(geometry, dict):
        return None

    time_ms = props.get("time")
    if not _is_number(time_ms):
        return None

    magnitude = props.get("mag")
    magnitude = float(magnitude) if _is_number(magnitude) else None

    longitude = latitude = depth_km = None
    coords = geometry.get("coordinates")
    if isinstance(coords, (list, tuple)) and len(coords) >= 2:
        if _is_number(coords[0]) and _is_number(coords[1]):
            longitude = float(coords[0])
            latitude = float(coords[1])
        if len(coords) >= 3 and _is_number(coords[2]):
            depth_km = float(coords[2])

    place = props.get("place")
    url = props.get("url")
    mag_type = props.get("magType")

    return Earthquake(
        id=event_id,
        time=int(time_ms),
        magnitude=magnitude,
        place=place if isinstance(place, str) else None,
        alert=_parse_alert(props.get("alert")),
        tsunami=_parse_tsunami(props.get("tsunami")),
        longitude=longitude,
        latitude=latitude,
        depth_km=depth_km,
        url=url if isinstance(url, str) else None,
        mag_type=mag_type if isinstance(mag_type, str) else None,
    )


def parse_earthquakes(features: Any) -> list[Earthquake]:
    """Parse a list of GeoJSON features into Earthquakes.

    Pure function (apart from logging): invalid features are dropped and
    counted; input order is preserved. Anything that is not a list or tuple
    is treated as an empty batch.

    Args:
        features: Raw feature list from the feed

    Returns:
        List of valid Earthquake objects in input order
    """
    if not isinstance(features, (list, tuple)):
        if features is not None:
            logger.warning(
                "Expected a list of features, got %s; treating as empty",
                type(features).__name__,
            )
        return []

    earthquakes = []
    rejected = 0

    for feature in features:
        earthquake = parse_earthquake(feature)
        if earthquake is None:
            rejected += 1
            continue
        earthquakes.append(earthquake)

    if rejected:
        logger.warning(
            "Skipped %d malformed features (of %d)",
            rejected,
            len(features),
        )

    return earthquakes


def parse_feature_collection(geojson: Any) -> list[Earthquake]:
    """Parse a full GeoJSON FeatureCollection into Earthquakes.

    Args:
        geojson: FeatureCollection dict from the USGS feed

    Returns:
        List of valid Earthquake objects in feed order
    """
    if not isinstance(geojson, dict):
        return []
    return parse_earthquakes(geojson.get("features", []))


def is_major(earthquake: Earthquake, threshold: float) -> bool:
    """Check if an earthquake meets a magnitude threshold.

    Pure function. Missing magnitude never qualifies.
    """
    return earthquake.magnitude is not None and earthquake.magnitude >= threshold


def filter_by_magnitude(
    earthquakes: list[Earthquake],
    min_magnitude: float | None = None,
    max_magnitude: float | None = None,
) -> list[Earthquake]:
    """Filter earthquakes by magnitude range.

    Pure function. Earthquakes without a magnitude are dropped whenever a
    bound is given.

    Args:
        earthquakes: List of earthquakes to filter
        min_magnitude: Minimum magnitude (inclusive), None for no minimum
        max_magnitude: Maximum magnitude (inclusive), None for no maximum

    Returns:
        Filtered list of earthquakes
    """
    result = earthquakes

    if min_magnitude is not None:
        result = [e for e in result if e.magnitude is not None and e.magnitude >= min_magnitude]

    if max_magnitude is not None:
        result = [e for e in result if e.magnitude is not None and e.magnitude <= max_magnitude]

    return result
