"""Functional Core - Pure functions with no side effects.

This module contains all aggregation logic as pure functions:
- Earthquake parsing (ingestion boundary)
- Time windows and deduplication
- Spatial clustering and cluster summaries
- Priority sampling, histograms, daily counts
- Alert consolidation and notable-event tracking
- The per-horizon aggregation reducer

All functions here are deterministic and have no I/O, except sampling,
which takes an injectable random source.
"""

from src.core.earthquake import Earthquake, parse_earthquake, parse_earthquakes
from src.core.geo import calculate_distance
from src.core.windows import filter_by_days, filter_by_hours
from src.core.dedup import deduplicate
from src.core.clustering import Cluster, find_clusters
from src.core.cluster_summary import ClusterSummary, summarize_cluster, summarize_clusters
from src.core.sampling import sample_with_priority
from src.core.histogram import calculate_magnitude_distribution, calculate_daily_counts
from src.core.alerts import consolidate_alerts, detect_tsunami
from src.core.notable import NotableEvents, consolidate_notable_events
from src.core.state import DerivedState, Horizon
from src.core.reducer import reduce, reduce_short, reduce_medium, reduce_long

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_earthquake",
    "parse_earthquakes",
    # Geo
    "calculate_distance",
    # Windows / dedup
    "filter_by_hours",
    "filter_by_days",
    "deduplicate",
    # Clustering
    "Cluster",
    "find_clusters",
    "ClusterSummary",
    "summarize_cluster",
    "summarize_clusters",
    # Aggregation
    "sample_with_priority",
    "calculate_magnitude_distribution",
    "calculate_daily_counts",
    "consolidate_alerts",
    "detect_tsunami",
    "NotableEvents",
    "consolidate_notable_events",
    # State
    "DerivedState",
    "Horizon",
    "reduce",
    "reduce_short",
    "reduce_medium",
    "reduce_long",
]
