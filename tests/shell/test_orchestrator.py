"""Tests for the Orchestrator module.

Tests the coordination between functional core and imperative shell.
Uses mocks for shell components to test orchestration logic.
"""

import random
from unittest.mock import Mock

import pytest
import requests

from src.core.config import ClusterConfig, Config
from src.core.state import Horizon
from src.orchestrator import Orchestrator, RefreshResult


NOW = 1_700_000_000_000
HOUR = 3_600_000


def _feature(event_id, age_ms, mag=3.0, lat=35.7, lon=-117.5, place="10km NE of Ridgecrest, CA"):
    return {
        "id": event_id,
        "properties": {"mag": mag, "time": NOW - age_ms, "place": place},
        "geometry": {"coordinates": [lon, lat, 8.0]},
    }


@pytest.fixture
def feeds():
    """GeoJSON per horizon: a Ridgecrest swarm plus one distant event."""
    swarm = [_feature(f"rc{i}", (i + 1) * HOUR, mag=2.0 + i) for i in range(4)]
    distant = _feature("jp1", 2 * HOUR, mag=5.0, lat=36.0, lon=140.0, place="Off Honshu, Japan")
    features = swarm + [distant]
    return {
        Horizon.SHORT: {"metadata": {"generated": NOW - 1000}, "features": features},
        Horizon.MEDIUM: {"metadata": {}, "features": features},
        Horizon.LONG: {"metadata": {}, "features": features},
    }


@pytest.fixture
def mock_feed_client(feeds):
    """Create a mock feed client returning canned GeoJSON."""
    client = Mock()
    client.fetch_feed.side_effect = lambda horizon: feeds[horizon]
    return client


@pytest.fixture
def orchestrator(mock_feed_client):
    return Orchestrator(Config(), feed_client=mock_feed_client, rng=random.Random(0))


class TestRefreshResult:
    """Tests for RefreshResult dataclass."""

    def test_success(self):
        result = RefreshResult(horizon=Horizon.SHORT, fetch_time_ms=NOW, earthquakes_fetched=3)

        assert result.success
        assert result.summary == "short: 3 earthquakes"

    def test_failure(self):
        result = RefreshResult(horizon=Horizon.LONG, fetch_time_ms=NOW, error="boom")

        assert not result.success
        assert result.summary == "long: failed (boom)"


class TestRefresh:
    """Tests for Orchestrator.refresh()."""

    def test_refresh_updates_state(self, orchestrator, mock_feed_client):
        result = orchestrator.refresh(Horizon.SHORT, now_ms=NOW)

        assert result.success
        assert result.earthquakes_fetched == 5
        mock_feed_client.fetch_feed.assert_called_once_with(Horizon.SHORT)
        assert len(orchestrator.state.earthquakes_last_24_hours) == 5
        assert orchestrator.state.last_updated == NOW - 1000

    def test_refresh_swaps_state_reference(self, orchestrator):
        before = orchestrator.state

        orchestrator.refresh(Horizon.SHORT, now_ms=NOW)

        assert orchestrator.state is not before
        assert before.earthquakes_last_24_hours == ()

    def test_accepts_horizon_name(self, orchestrator):
        assert orchestrator.refresh("medium", now_ms=NOW).horizon is Horizon.MEDIUM

    def test_fetch_error_keeps_state(self, orchestrator, mock_feed_client):
        orchestrator.refresh(Horizon.SHORT, now_ms=NOW)
        before = orchestrator.state
        mock_feed_client.fetch_feed.side_effect = requests.ConnectionError("down")

        result = orchestrator.refresh(Horizon.SHORT, now_ms=NOW + HOUR)

        assert not result.success
        assert "down" in result.error
        assert orchestrator.state is before

    def test_null_sections_refresh_to_empty(self, orchestrator, mock_feed_client):
        mock_feed_client.fetch_feed.side_effect = None
        mock_feed_client.fetch_feed.return_value = {"metadata": None, "features": None}

        result = orchestrator.refresh(Horizon.SHORT, now_ms=NOW)

        assert result.success
        assert result.earthquakes_fetched == 0
        assert orchestrator.state.earthquakes_last_24_hours == ()

    def test_refresh_all(self, orchestrator, mock_feed_client):
        results = orchestrator.refresh_all(now_ms=NOW)

        assert [r.horizon for r in results] == [Horizon.SHORT, Horizon.MEDIUM, Horizon.LONG]
        assert all(r.success for r in results)
        assert mock_feed_client.fetch_feed.call_count == 3
        assert orchestrator.state.has_long_data

    def test_refresh_all_partial_failure(self, orchestrator, mock_feed_client, feeds):
        def fetch(horizon):
            if horizon is Horizon.LONG:
                raise requests.HTTPError("503")
            return feeds[horizon]
        mock_feed_client.fetch_feed.side_effect = fetch

        results = orchestrator.refresh_all(now_ms=NOW)

        assert [r.success for r in results] == [True, True, False]
        assert not orchestrator.state.has_long_data


class TestClusters:
    """Tests for cluster detection over the 72-hour window."""

    def test_find_active_clusters(self, orchestrator):
        orchestrator.refresh(Horizon.MEDIUM, now_ms=NOW)

        clusters = orchestrator.find_active_clusters()

        assert len(clusters) == 1
        assert clusters[0].seed.id == "rc3"
        assert sorted(clusters[0].ids) == ["rc0", "rc1", "rc2", "rc3"]

    def test_no_clusters_before_medium_refresh(self, orchestrator):
        orchestrator.refresh(Horizon.SHORT, now_ms=NOW)
        assert orchestrator.find_active_clusters() == []

    def test_cluster_summaries_filtered_by_magnitude(self, mock_feed_client):
        config = Config(clusters=ClusterConfig(min_cluster_magnitude=6.0))
        orchestrator = Orchestrator(config, feed_client=mock_feed_client)
        orchestrator.refresh(Horizon.MEDIUM, now_ms=NOW)

        assert orchestrator.cluster_summaries() == []

    def test_cluster_summaries(self, orchestrator):
        orchestrator.refresh(Horizon.MEDIUM, now_ms=NOW)

        summaries = orchestrator.cluster_summaries()

        assert len(summaries) == 1
        assert summaries[0].earthquake_count == 4
        assert summaries[0].max_magnitude == 5.0


class TestSnapshot:
    """Tests for Orchestrator.snapshot()."""

    def test_snapshot_sections(self, orchestrator):
        orchestrator.refresh_all(now_ms=NOW)

        snapshot = orchestrator.snapshot()

        assert snapshot["state"]["short"]["counts"]["last_24_hours"] == 5
        assert len(snapshot["clusters"]) == 1
        assert snapshot["statistics_24_hours"]["total"] == 5
        assert snapshot["regions_24_hours"][0]["name"] == "California & W. USA"
        assert snapshot["state"]["notable"]["last"]["id"] == "jp1"

    def test_empty_snapshot(self, orchestrator):
        snapshot = orchestrator.snapshot()

        assert snapshot["clusters"] == []
        assert snapshot["statistics_24_hours"]["total"] == 0
        assert snapshot["regions_24_hours"] == []

    def test_publishes_refresh_intervals(self, mock_feed_client):
        config = Config(refresh_interval_seconds={Horizon.SHORT: 60, Horizon.LONG: 3600})
        orchestrator = Orchestrator(config, feed_client=mock_feed_client)

        intervals = orchestrator.snapshot()["refresh_interval_seconds"]

        assert intervals == {"short": 60, "long": 3600}

    def test_default_refresh_intervals(self, orchestrator):
        assert orchestrator.snapshot()["refresh_interval_seconds"] == {
            "short": 300,
            "medium": 300,
            "long": 1800,
        }
