"""Spatial clustering of earthquakes - Pure functions.

Greedy, magnitude-priority clustering:

1. Earthquakes are sorted by magnitude, strongest first (missing magnitude
   counts as 0). The sort is stable, so equal magnitudes keep input order.
2. The strongest unprocessed earthquake becomes the seed of a new cluster.
3. Every other unprocessed earthquake within max_distance_km of the *seed*
   joins the cluster.
4. Clusters smaller than min_quakes are discarded, but their members stay
   processed and are never reconsidered.

Membership is a star around the seed, not a connected component: two members
may be further than max_distance_km from each other, and a pair of nearby
earthquakes can stay unclustered if one of them was consumed by a failed
cluster attempt. Time between earthquakes is not considered.
"""

import logging
from dataclasses import dataclass

from src.core.earthquake import Earthquake
from src.core.geo import distance_between


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cluster:
    """A group of earthquakes anchored on a seed.

    Attributes:
        earthquakes: Members in the order they were added, seed first
    """
    earthquakes: tuple[Earthquake, ...]

    @property
    def seed(self) -> Earthquake:
        """The earthquake that started this cluster."""
        return self.earthquakes[0]

    @property
    def size(self) -> int:
        return len(self.earthquakes)

    @property
    def ids(self) -> list[str]:
        return [e.id for e in self.earthquakes]


def _sort_key(earthquake: Earthquake) -> float:
    return earthquake.magnitude if earthquake.magnitude is not None else 0.0


def sort_by_magnitude(earthquakes: list[Earthquake]) -> list[Earthquake]:
    """Sort earthquakes strongest first, keeping input order for ties.

    Pure function.
    """
    return sorted(earthquakes, key=_sort_key, reverse=True)


def _is_candidate(earthquake: Earthquake, processed_ids: set[str]) -> bool:
    return (
        bool(earthquake.id)
        and earthquake.id not in processed_ids
        and earthquake.has_valid_coordinates
    )


def find_clusters(
    earthquakes: list[Earthquake],
    max_distance_km: float,
    min_quakes: int,
) -> list[Cluster]:
    """Find clusters of earthquakes based on geographic proximity.

    Pure function (apart from logging warnings for unusable earthquakes).

    Args:
        earthquakes: Earthquakes to cluster (non-list input yields [])
        max_distance_km: Maximum distance from the seed for membership
        min_quakes: Minimum number of earthquakes for a cluster to be kept

    Returns:
        Clusters in the order their seeds were processed, strongest seed first
    """
    if not isinstance(earthquakes, (list, tuple)):
        return []

    clusters: list[Cluster] = []
    processed_ids: set[str] = set()

    sorted_earthquakes = sort_by_magnitude(earthquakes)

    for index, seed in enumerate(sorted_earthquakes):
        if not seed.id:
            logger.warning("Skipping earthquake with missing id during clustering")
            continue

        if seed.id in processed_ids:
            continue

        if not seed.has_valid_coordinates:
            logger.warning(
                "Skipping earthquake %s due to invalid coordinates",
                seed.id,
            )
            continue

        members = [seed]
        processed_ids.add(seed.id)

        # Earlier entries are already processed or have no coordinates
        for other in sorted_earthquakes[index + 1:]:
            if not _is_candidate(other, processed_ids):
                continue

            distance = distance_between(seed, other)

            if distance <= max_distance_km:
                members.append(other)
                processed_ids.add(other.id)

        if len(members) >= min_quakes:
            clusters.append(Cluster(earthquakes=tuple(members)))

    logger.debug(
        "Found %d clusters among %d earthquakes",
        len(clusters),
        len(sorted_earthquakes),
    )

    return clusters
