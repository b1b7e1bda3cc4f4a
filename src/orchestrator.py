"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It owns the single mutable
reference to the derived state and swaps it after every reduction.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Any

import requests

from src.core.cluster_summary import ClusterSummary, summarize_clusters
from src.core.clustering import Cluster, find_clusters
from src.core.config import Config
from src.core.formatter import (
    format_cluster_summary,
    format_region_counts,
    format_state,
    format_statistics,
)
from src.core.reducer import reduce
from src.core.state import DerivedState, Horizon
from src.core.stats import calculate_regional_distribution, calculate_statistics
from src.shell.usgs_client import USGSFeedClient


logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    """Result of refreshing one horizon.

    Attributes:
        horizon: The horizon that was refreshed
        fetch_time_ms: Fetch time used as "now" for the windows
        earthquakes_fetched: Features in the feed response
        error: Error message if the fetch failed (state unchanged)
    """
    horizon: Horizon
    fetch_time_ms: int
    earthquakes_fetched: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if the refresh was applied."""
        return self.error is None

    @property
    def summary(self) -> str:
        """Human-readable summary of the refresh."""
        if self.error:
            return f"{self.horizon.value}: failed ({self.error})"
        return f"{self.horizon.value}: {self.earthquakes_fetched} earthquakes"


def _now_ms() -> int:
    return int(time.time() * 1000)


class Orchestrator:
    """Coordinates feed fetching and state aggregation.

    This class wires together:
    - USGS feed client (fetches the GeoJSON summary feeds)
    - Aggregation reducer (pure per-horizon transitions)
    - Cluster finder and summaries (on demand over the 72-hour window)
    """

    def __init__(
        self,
        config: Config,
        feed_client: USGSFeedClient | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            feed_client: USGS feed client (created if not provided)
            rng: Random source for sampling (non-deterministic if None)
        """
        self.config = config
        self.feed_client = feed_client or USGSFeedClient(
            base_url=config.feed.base_url,
            timeout=config.feed.timeout_seconds,
            feed_names=config.feed.feed_names,
        )
        self.rng = rng
        self.state = DerivedState()

    def refresh(self, horizon: Horizon | str, now_ms: int | None = None) -> RefreshResult:
        """Fetch one horizon's feed and fold it into the state.

        Fetch errors are reported in the result; the state is left as is.

        Args:
            horizon: Which feed to refresh
            now_ms: Fetch time in epoch ms (current time if None)

        Returns:
            RefreshResult for this horizon
        """
        horizon = Horizon(horizon)
        fetch_time_ms = now_ms if now_ms is not None else _now_ms()

        try:
            geojson = self.feed_client.fetch_feed(horizon)
        except (requests.RequestException, ValueError) as e:
            logger.error("Failed to fetch %s feed: %s", horizon.value, e)
            return RefreshResult(
                horizon=horizon,
                fetch_time_ms=fetch_time_ms,
                error=f"Failed to fetch {horizon.value} feed: {e}",
            )

        features = geojson.get("features", [])

        # Pure core function; the reference swap is the only mutation
        self.state = reduce(
            self.state,
            horizon,
            features,
            fetch_time_ms,
            metadata=geojson.get("metadata"),
            config=self.config.aggregation,
            rng=self.rng,
        )

        return RefreshResult(
            horizon=horizon,
            fetch_time_ms=fetch_time_ms,
            earthquakes_fetched=len(features) if isinstance(features, list) else 0,
        )

    def refresh_all(
        self,
        horizons: list[Horizon] | None = None,
        now_ms: int | None = None,
    ) -> list[RefreshResult]:
        """Refresh several horizons (all of them by default) in order.

        Args:
            horizons: Horizons to refresh
            now_ms: Shared fetch time in epoch ms (current time if None)

        Returns:
            One RefreshResult per horizon
        """
        horizons = horizons or list(Horizon)
        fetch_time_ms = now_ms if now_ms is not None else _now_ms()

        results = [self.refresh(h, fetch_time_ms) for h in horizons]

        for result in results:
            if result.success:
                logger.info("Refreshed %s", result.summary)
            else:
                logger.error("Refresh %s", result.summary)

        return results

    def find_active_clusters(self) -> list[Cluster]:
        """Cluster the current 72-hour window."""
        return find_clusters(
            list(self.state.earthquakes_last_72_hours),
            self.config.clusters.max_distance_km,
            self.config.clusters.min_quakes,
        )

    def cluster_summaries(self) -> list[ClusterSummary]:
        """Summaries of the active clusters, most significant first."""
        return summarize_clusters(
            self.find_active_clusters(),
            self.config.clusters.min_cluster_magnitude,
        )

    def snapshot(self) -> dict[str, Any]:
        """Render the current state and the views derived from it.

        Returns:
            JSON-serializable dict
        """
        last_24_hours = list(self.state.earthquakes_last_24_hours)
        aggregation = self.config.aggregation

        return {
            "state": format_state(self.state),
            "clusters": [format_cluster_summary(s) for s in self.cluster_summaries()],
            "statistics_24_hours": format_statistics(
                calculate_statistics(
                    last_24_hours,
                    aggregation.feelable_quake_threshold,
                    aggregation.major_quake_threshold,
                )
            ),
            "regions_24_hours": format_region_counts(
                calculate_regional_distribution(last_24_hours)
            ),
            "refresh_interval_seconds": {
                horizon.value: seconds
                for horizon, seconds in self.config.refresh_interval_seconds.items()
            },
        }
