"""Derived state - Pure data structures.

DerivedState is the single value the rest of the application reads from.
It is never mutated: every refresh produces a new instance (see
src/core/reducer.py) and the owner swaps its reference.
"""

from dataclasses import dataclass, field
from enum import Enum

from src.core.alerts import AlertSummary, TsunamiSummary
from src.core.earthquake import Earthquake
from src.core.histogram import DailyCount, HistogramBucket
from src.core.notable import NotableEvents


class Horizon(str, Enum):
    """Independent refresh granularities, one per USGS summary feed."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


@dataclass(frozen=True)
class DerivedState:
    """Aggregated views over the most recent feed of each horizon.

    Attributes (short horizon):
        data_fetch_time: Fetch time of the last short refresh (epoch ms)
        last_updated: Feed generation time reported by USGS (epoch ms)
        earthquakes_last_hour: [now-1h, now)
        earthquakes_prior_hour: [now-2h, now-1h)
        earthquakes_last_24_hours: [now-24h, now)
        alert: Highest active PAGER alert in the last 24 hours
        tsunami: Tsunami warning status in the last 24 hours

    Attributes (medium horizon):
        medium_fetch_time: Fetch time of the last medium refresh (epoch ms)
        earthquakes_last_72_hours: [now-72h, now)
        earthquakes_prior_24_hours: [now-48h, now-24h)
        earthquakes_last_7_days: [now-7d, now)
        globe_earthquakes: 72-hour earthquakes, strongest first, capped
        daily_counts_7_days: Per-day counts for the last 7 days
        sampled_earthquakes_last_7_days: Priority sample of the 7-day window
        magnitude_distribution_7_days: Histogram of the 7-day window

    Attributes (long horizon):
        long_fetch_time: Fetch time of the last long refresh (epoch ms)
        all_earthquakes: Every earthquake in the long feed
        earthquakes_last_14_days / earthquakes_last_30_days: Rolling windows
        earthquakes_prior_7_days: [now-14d, now-7d)
        earthquakes_prior_14_days: [now-28d, now-14d)
        daily_counts_14_days / daily_counts_30_days: Per-day counts
        sampled_earthquakes_last_14_days / sampled_earthquakes_last_30_days
        magnitude_distribution_14_days / magnitude_distribution_30_days

    Attributes (all horizons):
        notable: Two most recent major earthquakes ever observed
    """
    # Short horizon
    data_fetch_time: int | None = None
    last_updated: int | None = None
    earthquakes_last_hour: tuple[Earthquake, ...] = ()
    earthquakes_prior_hour: tuple[Earthquake, ...] = ()
    earthquakes_last_24_hours: tuple[Earthquake, ...] = ()
    alert: AlertSummary = field(default_factory=AlertSummary)
    tsunami: TsunamiSummary = field(default_factory=TsunamiSummary)

    # Medium horizon
    medium_fetch_time: int | None = None
    earthquakes_last_72_hours: tuple[Earthquake, ...] = ()
    earthquakes_prior_24_hours: tuple[Earthquake, ...] = ()
    earthquakes_last_7_days: tuple[Earthquake, ...] = ()
    globe_earthquakes: tuple[Earthquake, ...] = ()
    daily_counts_7_days: tuple[DailyCount, ...] = ()
    sampled_earthquakes_last_7_days: tuple[Earthquake, ...] = ()
    magnitude_distribution_7_days: tuple[HistogramBucket, ...] = ()

    # Long horizon
    long_fetch_time: int | None = None
    all_earthquakes: tuple[Earthquake, ...] = ()
    earthquakes_last_14_days: tuple[Earthquake, ...] = ()
    earthquakes_last_30_days: tuple[Earthquake, ...] = ()
    earthquakes_prior_7_days: tuple[Earthquake, ...] = ()
    earthquakes_prior_14_days: tuple[Earthquake, ...] = ()
    daily_counts_14_days: tuple[DailyCount, ...] = ()
    daily_counts_30_days: tuple[DailyCount, ...] = ()
    sampled_earthquakes_last_14_days: tuple[Earthquake, ...] = ()
    sampled_earthquakes_last_30_days: tuple[Earthquake, ...] = ()
    magnitude_distribution_14_days: tuple[HistogramBucket, ...] = ()
    magnitude_distribution_30_days: tuple[HistogramBucket, ...] = ()

    # Cross-horizon
    notable: NotableEvents = field(default_factory=NotableEvents)

    @property
    def has_long_data(self) -> bool:
        """True once the long horizon has been reduced at least once."""
        return self.long_fetch_time is not None
