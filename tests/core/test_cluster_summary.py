"""Unit tests for cluster summaries, stable keys and slugs."""

import math

import pytest

from src.core.cluster_summary import (
    format_depth_range,
    generate_slug,
    generate_stable_key,
    get_strongest_earthquake,
    summarize_cluster,
    summarize_clusters,
)
from src.core.clustering import Cluster
from src.core.earthquake import Earthquake


T0 = 1_700_000_000_000
HOUR = 3_600_000


@pytest.fixture
def ridgecrest_cluster():
    """Three earthquakes near Ridgecrest over two hours."""
    main = Earthquake(
        id="a",
        time=T0,
        magnitude=5.0,
        place="10km NE of Ridgecrest, CA",
        latitude=35.77,
        longitude=-117.6,
        depth_km=8.0,
    )
    return Cluster(earthquakes=(
        main,
        Earthquake(**{**main.__dict__, "id": "b", "time": T0 + 2 * HOUR,
                      "magnitude": 3.0, "depth_km": 2.0, "place": "5km S of Trona, CA"}),
        Earthquake(**{**main.__dict__, "id": "c", "time": T0 + HOUR,
                      "magnitude": 4.0, "depth_km": 12.5}),
    ))


class TestSummarizeCluster:
    """Tests for summarize_cluster()."""

    def test_magnitude_statistics(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)

        assert summary.earthquake_count == 3
        assert summary.max_magnitude == 5.0
        assert summary.min_magnitude == 3.0
        assert summary.mean_magnitude == pytest.approx(4.0)
        assert summary.strongest_earthquake.id == "a"
        assert summary.earthquake_ids == ("a", "b", "c")

    def test_time_span(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)

        assert summary.start_time == T0
        assert summary.end_time == T0 + 2 * HOUR
        assert summary.duration_hours == pytest.approx(2.0)

    def test_depth_and_centroid(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)

        assert summary.depth_range == "2.0-12.5km"
        assert summary.centroid_latitude == 35.77
        assert summary.centroid_longitude == -117.6

    def test_title_and_description(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)

        assert summary.title == "Cluster: 3 events near 10km NE of Ridgecrest, CA, max M5.0"
        assert summary.description == (
            "A cluster of 3 earthquakes occurred near 10km NE of Ridgecrest, CA. "
            "Strongest: M5.0. Duration: approx 2.0 hours."
        )

    def test_key_and_slug(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)

        assert summary.stable_key == "v1_ridgecrest-ca_78703_35.8--117.6"
        assert summary.slug == "3-quakes-near-10km-ne-of-ridgecrest-ca-m5.0-78703-35d8--117d6"

    def test_significance_score(self, ridgecrest_cluster):
        summary = summarize_cluster(ridgecrest_cluster)
        assert summary.significance_score == pytest.approx(5.0 * math.log10(3))

    def test_instantaneous_cluster(self):
        a = Earthquake(id="a", time=T0, magnitude=3.0, place="Somewhere")
        summary = summarize_cluster(Cluster(earthquakes=(a, Earthquake(id="b", time=T0))))

        assert summary.duration_hours == 0
        assert "Duration: a short period." in summary.description
        assert summary.depth_range == "Unknown"


class TestHelpers:
    """Tests for the summary helper functions."""

    def test_strongest_first_wins_ties(self):
        a = Earthquake(id="a", time=1, magnitude=4.0)
        b = Earthquake(id="b", time=2, magnitude=4.0)
        assert get_strongest_earthquake((a, b)) is a

    def test_depth_range_unknown(self):
        assert format_depth_range((Earthquake(id="a", time=1),)) == "Unknown"

    def test_stable_key_without_coordinates(self):
        strongest = Earthquake(id="a", time=0, place=None)
        assert generate_stable_key(0, strongest) == "v1_unknown-location_0_0.0-0.0"

    def test_stable_key_same_within_time_bucket(self):
        """Refreshes inside the same 6-hour block keep the same key."""
        strongest = Earthquake(id="a", time=0, place="Near Town", latitude=1.0, longitude=2.0)
        block_start = 78703 * 6 * HOUR
        assert generate_stable_key(block_start, strongest) == generate_stable_key(
            block_start + 5 * HOUR, strongest
        )

    def test_slug_unknown_magnitude(self):
        slug = generate_slug(4, None, None, "v1_unknown-location_10_0.0-0.0")
        assert slug == "4-quakes-near-unknown-location-munknown-10-0d0-0d0"


class TestSummarizeClusters:
    """Tests for summarize_clusters()."""

    @pytest.fixture
    def clusters(self):
        def make(prefix, magnitude, count):
            return Cluster(earthquakes=tuple(
                Earthquake(id=f"{prefix}{i}", time=T0, magnitude=magnitude)
                for i in range(count)
            ))
        return [make("small", 3.0, 3), make("big", 6.0, 3), make("many", 4.0, 10)]

    def test_sorted_by_significance(self, clusters):
        summaries = summarize_clusters(clusters)
        assert [s.strongest_earthquake.id for s in summaries] == ["many0", "big0", "small0"]

    def test_min_magnitude_filter(self, clusters):
        summaries = summarize_clusters(clusters, min_magnitude=4.0)
        assert [s.max_magnitude for s in summaries] == [4.0, 6.0]

    def test_empty(self):
        assert summarize_clusters([]) == []
