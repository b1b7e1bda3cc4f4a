"""Output formatting - Pure functions.

This module renders derived state into JSON-ready dicts for rendering
collaborators. All functions are pure with no side effects.
"""

from typing import Any

from src.core.alerts import AlertSummary, TsunamiSummary
from src.core.cluster_summary import ClusterSummary
from src.core.earthquake import Earthquake
from src.core.histogram import DailyCount, HistogramBucket
from src.core.notable import NotableEvents
from src.core.state import DerivedState
from src.core.stats import EarthquakeStatistics, RegionCount


def format_earthquake(earthquake: Earthquake | None) -> dict[str, Any] | None:
    """Render an earthquake as a GeoJSON-like feature dict.

    Pure function.
    """
    if earthquake is None:
        return None

    coordinates = None
    if earthquake.has_valid_coordinates:
        coordinates = [earthquake.longitude, earthquake.latitude, earthquake.depth_km]

    return {
        "id": earthquake.id,
        "properties": {
            "time": earthquake.time,
            "mag": earthquake.magnitude,
            "place": earthquake.place,
            "alert": earthquake.alert,
            "tsunami": earthquake.tsunami,
            "url": earthquake.url,
            "magType": earthquake.mag_type,
        },
        "geometry": {
            "type": "Point",
            "coordinates": coordinates,
        },
    }


def format_earthquakes(earthquakes: tuple[Earthquake, ...] | list[Earthquake]) -> list[dict[str, Any]]:
    """Render a list of earthquakes. Pure function."""
    return [format_earthquake(e) for e in earthquakes]


def format_histogram(buckets: tuple[HistogramBucket, ...]) -> list[dict[str, Any]]:
    """Pure function."""
    return [{"name": b.name, "count": b.count, "color": b.color} for b in buckets]


def format_daily_counts(counts: tuple[DailyCount, ...]) -> list[dict[str, Any]]:
    """Pure function."""
    return [{"dateString": c.date_label, "count": c.count} for c in counts]


def format_alert(alert: AlertSummary) -> dict[str, Any]:
    """Pure function."""
    return {
        "level": alert.level,
        "triggering_events": format_earthquakes(alert.triggering_earthquakes),
    }


def format_tsunami(tsunami: TsunamiSummary) -> dict[str, Any]:
    """Pure function."""
    return {
        "warning": tsunami.warning,
        "triggering_event": format_earthquake(tsunami.triggering_earthquake),
    }


def format_notable(notable: NotableEvents) -> dict[str, Any]:
    """Pure function."""
    return {
        "last": format_earthquake(notable.last),
        "previous": format_earthquake(notable.previous),
        "delta_ms": notable.delta_ms,
    }


def format_statistics(stats: EarthquakeStatistics) -> dict[str, Any]:
    """Pure function. Averages are rounded for display."""
    def _round(value: float | None, digits: int) -> float | None:
        return round(value, digits) if value is not None else None

    return {
        "total": stats.total,
        "average_magnitude": _round(stats.average_magnitude, 2),
        "strongest_magnitude": stats.strongest_magnitude,
        "significant_count": stats.significant_count,
        "feelable_count": stats.feelable_count,
        "average_depth_km": _round(stats.average_depth_km, 1),
        "deepest_km": stats.deepest_km,
        "highest_alert_level": stats.highest_alert_level,
    }


def format_region_counts(region_counts: list[RegionCount]) -> list[dict[str, Any]]:
    """Pure function."""
    return [
        {"name": rc.region.name, "count": rc.count, "color": rc.region.color}
        for rc in region_counts
    ]


def format_cluster_summary(summary: ClusterSummary) -> dict[str, Any]:
    """Render a cluster summary.

    Pure function.
    """
    return {
        "stable_key": summary.stable_key,
        "slug": summary.slug,
        "title": summary.title,
        "description": summary.description,
        "strongest_quake_id": summary.strongest_earthquake.id,
        "earthquake_ids": list(summary.earthquake_ids),
        "quake_count": summary.earthquake_count,
        "max_magnitude": summary.max_magnitude,
        "min_magnitude": summary.min_magnitude,
        "mean_magnitude": summary.mean_magnitude,
        "start_time": summary.start_time,
        "end_time": summary.end_time,
        "duration_hours": summary.duration_hours,
        "depth_range": summary.depth_range,
        "centroid_lat": summary.centroid_latitude,
        "centroid_lon": summary.centroid_longitude,
        "significance_score": summary.significance_score,
    }


def format_state(state: DerivedState) -> dict[str, Any]:
    """Render the full derived state.

    Pure function. Windowed lists are rendered as counts plus the arrays the
    charts consume directly (samples, globe, histograms, daily counts).

    Args:
        state: Derived state to render

    Returns:
        JSON-serializable dict
    """
    return {
        "short": {
            "data_fetch_time": state.data_fetch_time,
            "last_updated": state.last_updated,
            "counts": {
                "last_hour": len(state.earthquakes_last_hour),
                "prior_hour": len(state.earthquakes_prior_hour),
                "last_24_hours": len(state.earthquakes_last_24_hours),
            },
            "earthquakes_last_hour": format_earthquakes(state.earthquakes_last_hour),
            "alert": format_alert(state.alert),
            "tsunami": format_tsunami(state.tsunami),
        },
        "medium": {
            "fetch_time": state.medium_fetch_time,
            "counts": {
                "last_72_hours": len(state.earthquakes_last_72_hours),
                "prior_24_hours": len(state.earthquakes_prior_24_hours),
                "last_7_days": len(state.earthquakes_last_7_days),
            },
            "globe_earthquakes": format_earthquakes(state.globe_earthquakes),
            "daily_counts_7_days": format_daily_counts(state.daily_counts_7_days),
            "sampled_earthquakes_last_7_days": format_earthquakes(state.sampled_earthquakes_last_7_days),
            "magnitude_distribution_7_days": format_histogram(state.magnitude_distribution_7_days),
        },
        "long": {
            "fetch_time": state.long_fetch_time,
            "counts": {
                "all": len(state.all_earthquakes),
                "last_14_days": len(state.earthquakes_last_14_days),
                "last_30_days": len(state.earthquakes_last_30_days),
                "prior_7_days": len(state.earthquakes_prior_7_days),
                "prior_14_days": len(state.earthquakes_prior_14_days),
            },
            "daily_counts_14_days": format_daily_counts(state.daily_counts_14_days),
            "daily_counts_30_days": format_daily_counts(state.daily_counts_30_days),
            "sampled_earthquakes_last_14_days": format_earthquakes(state.sampled_earthquakes_last_14_days),
            "sampled_earthquakes_last_30_days": format_earthquakes(state.sampled_earthquakes_last_30_days),
            "magnitude_distribution_14_days": format_histogram(state.magnitude_distribution_14_days),
            "magnitude_distribution_30_days": format_histogram(state.magnitude_distribution_30_days),
        },
        "notable": format_notable(state.notable),
    }
