"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS real-time summary
feeds. All I/O is contained here; aggregation logic is in the core module.
"""

import logging
from typing import Any

import requests

from src.core.config import DEFAULT_FEED_NAMES, USGS_FEED_BASE
from src.core.state import Horizon


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


class USGSFeedClient:
    """Client for fetching earthquake summary feeds from USGS.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_FEED_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        feed_names: dict[Horizon, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS feed client.

        Args:
            base_url: Summary feed base URL
            timeout: Request timeout in seconds
            feed_names: Feed name per horizon (defaults to all_day/week/month)
            session: Optional requests session to reuse connections
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.feed_names = feed_names or dict(DEFAULT_FEED_NAMES)
        self.session = session or requests.Session()

    def feed_url(self, horizon: Horizon) -> str:
        """Build the GeoJSON URL for a horizon's feed."""
        return f"{self.base_url}/{self.feed_names[horizon]}.geojson"

    def fetch_feed(self, horizon: Horizon) -> dict[str, Any]:
        """Fetch the GeoJSON FeatureCollection for a horizon.

        This method performs HTTP I/O.

        Args:
            horizon: Which feed to fetch

        Returns:
            Raw GeoJSON response from USGS

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the body is not a JSON object
        """
        url = self.feed_url(horizon)

        logger.info(
            "Fetching %s feed from USGS",
            horizon.value,
            extra={"url": url},
        )

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected feed payload type: {type(data).__name__}")

        metadata = data.get("metadata") or {}
        count = metadata.get("count", len(data.get("features") or []))

        logger.info(
            "Fetched %d earthquakes from USGS %s feed",
            count,
            horizon.value,
        )

        return data
