"""Cluster summaries - Pure functions.

Turns a raw Cluster into a descriptive record: magnitude and time
statistics, a stable key that survives small membership changes between
refreshes, and human-readable slug/title/description strings.
"""

import math
import re
from dataclasses import dataclass

from src.core.clustering import Cluster
from src.core.earthquake import Earthquake


STABLE_KEY_VERSION = "v1"

# Stable keys bucket the cluster start time into 6-hour blocks
STABLE_KEY_TIME_BUCKET_MS = 6 * 60 * 60 * 1000

MS_PER_HOUR = 60 * 60 * 1000


@dataclass(frozen=True)
class ClusterSummary:
    """Descriptive statistics for a single cluster.

    Attributes:
        stable_key: Key derived from location, start time block and epicenter
        slug: URL-safe identifier
        title: Short human-readable title
        description: One-sentence description
        strongest_earthquake: Highest-magnitude member
        earthquake_ids: Member IDs in cluster order
        earthquake_count: Number of members
        max_magnitude: Largest magnitude (None if no member has one)
        min_magnitude: Smallest magnitude (None if no member has one)
        mean_magnitude: Mean magnitude over members that have one
        start_time: Earliest member time (epoch ms)
        end_time: Latest member time (epoch ms)
        duration_hours: end_time - start_time in hours
        depth_range: "min-maxkm" or "Unknown"
        centroid_latitude: Latitude of the strongest earthquake
        centroid_longitude: Longitude of the strongest earthquake
        significance_score: max_magnitude * log10(earthquake_count)
    """
    stable_key: str
    slug: str
    title: str
    description: str
    strongest_earthquake: Earthquake
    earthquake_ids: tuple[str, ...]
    earthquake_count: int
    max_magnitude: float | None
    min_magnitude: float | None
    mean_magnitude: float | None
    start_time: int
    end_time: int
    duration_hours: float
    depth_range: str
    centroid_latitude: float | None
    centroid_longitude: float | None
    significance_score: float


def get_strongest_earthquake(earthquakes: tuple[Earthquake, ...]) -> Earthquake:
    """Return the highest-magnitude earthquake; the first one wins ties.

    Pure function.
    """
    strongest = earthquakes[0]
    for earthquake in earthquakes[1:]:
        if (earthquake.magnitude or 0.0) > (strongest.magnitude or 0.0):
            strongest = earthquake
    return strongest


def format_depth_range(earthquakes: tuple[Earthquake, ...]) -> str:
    """Format member depths as "min-maxkm".

    Pure function.
    """
    depths = [e.depth_km for e in earthquakes if e.depth_km is not None]
    if not depths:
        return "Unknown"
    return f"{min(depths):.1f}-{max(depths):.1f}km"


def _slugify(text: str) -> str:
    text = re.sub(r"[^a-z0-9\s-]", "", text.lower()).strip()
    text = re.sub(r"\s+", "-", text)
    return re.sub(r"-+", "-", text)


def _location_component(place: str | None) -> str:
    """General area of a place ("10km NE of Ridgecrest, CA" -> "ridgecrest-ca")."""
    if not place:
        return "unknown-location"
    general = place.split(" of ")[-1]
    component = _slugify(general)[:30]
    return component or "unknown-location"


def generate_stable_key(start_time: int, strongest: Earthquake) -> str:
    """Build a key that identifies the same cluster across refreshes.

    Pure function.
    """
    location = _location_component(strongest.place)
    time_block = start_time // STABLE_KEY_TIME_BUCKET_MS

    geo = "0.0-0.0"
    if strongest.has_valid_coordinates:
        geo = f"{strongest.latitude:.1f}-{strongest.longitude:.1f}"

    return f"{STABLE_KEY_VERSION}_{location}_{time_block}_{geo}"


def generate_slug(
    earthquake_count: int,
    place: str | None,
    max_magnitude: float | None,
    stable_key: str,
) -> str:
    """Build a URL slug for a cluster.

    Pure function.
    """
    location = _slugify(place or "unknown-location")[:30].strip("-")

    key_parts = stable_key.split("_")
    time_part = key_parts[2]
    geo_part = re.sub(r"[^a-z0-9-]", "", key_parts[3].replace(".", "d"))[:15]

    mag_str = f"{max_magnitude:.1f}" if max_magnitude is not None else "unknown"

    return f"{earthquake_count}-quakes-near-{location}-m{mag_str}-{time_part}-{geo_part}"


def summarize_cluster(cluster: Cluster) -> ClusterSummary:
    """Compute a ClusterSummary for a cluster.

    Pure function.

    Args:
        cluster: Cluster to summarize (always has at least one member)

    Returns:
        ClusterSummary
    """
    members = cluster.earthquakes
    strongest = get_strongest_earthquake(members)

    magnitudes = [e.magnitude for e in members if e.magnitude is not None]
    max_magnitude = max(magnitudes) if magnitudes else None
    min_magnitude = min(magnitudes) if magnitudes else None
    mean_magnitude = sum(magnitudes) / len(magnitudes) if magnitudes else None

    start_time = min(e.time for e in members)
    end_time = max(e.time for e in members)
    duration_hours = (end_time - start_time) / MS_PER_HOUR

    count = len(members)
    location_name = strongest.place or "Unknown Location"
    stable_key = generate_stable_key(start_time, strongest)

    mag_label = f"M{max_magnitude:.1f}" if max_magnitude is not None else "unknown magnitude"
    duration_label = (
        f"approx {duration_hours:.1f} hours" if duration_hours > 0 else "a short period"
    )

    significance = (max_magnitude or 0.0) * math.log10(count)

    return ClusterSummary(
        stable_key=stable_key,
        slug=generate_slug(count, strongest.place, max_magnitude, stable_key),
        title=f"Cluster: {count} events near {location_name}, max {mag_label}",
        description=(
            f"A cluster of {count} earthquakes occurred near {location_name}. "
            f"Strongest: {mag_label}. Duration: {duration_label}."
        ),
        strongest_earthquake=strongest,
        earthquake_ids=tuple(e.id for e in members),
        earthquake_count=count,
        max_magnitude=max_magnitude,
        min_magnitude=min_magnitude,
        mean_magnitude=mean_magnitude,
        start_time=start_time,
        end_time=end_time,
        duration_hours=duration_hours,
        depth_range=format_depth_range(members),
        centroid_latitude=strongest.latitude,
        centroid_longitude=strongest.longitude,
        significance_score=significance,
    )


def summarize_clusters(
    clusters: list[Cluster],
    min_magnitude: float | None = None,
) -> list[ClusterSummary]:
    """Summarize clusters, most significant first.

    Pure function.

    Args:
        clusters: Clusters to summarize
        min_magnitude: Drop clusters whose strongest member is below this

    Returns:
        Summaries sorted by significance score, descending
    """
    summaries = [summarize_cluster(c) for c in clusters if c.earthquakes]

    if min_magnitude is not None:
        summaries = [
            s for s in summaries
            if s.max_magnitude is not None and s.max_magnitude >= min_magnitude
        ]

    return sorted(summaries, key=lambda s: s.significance_score, reverse=True)
