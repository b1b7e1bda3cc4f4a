"""Magnitude histograms and daily counts - Pure functions.

This module aggregates earthquakes into fixed buckets for charting.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.core.earthquake import Earthquake


@dataclass(frozen=True)
class MagnitudeRange:
    """A histogram bucket definition.

    Attributes:
        name: Display label (e.g., "2-2.9")
        lower: Lower bound (inclusive)
        upper: Upper bound (exclusive)
    """
    name: str
    lower: float
    upper: float

    def contains(self, magnitude: float) -> bool:
        return self.lower <= magnitude < self.upper


@dataclass(frozen=True)
class HistogramBucket:
    """Count of earthquakes in one magnitude range.

    Attributes:
        name: Range label
        count: Number of earthquakes in the range
        color: Hex color for charting
    """
    name: str
    count: int
    color: str


@dataclass(frozen=True)
class DailyCount:
    """Count of earthquakes on one UTC calendar day.

    Attributes:
        date_label: Short date label (e.g., "Mar 5")
        count: Number of earthquakes that day
    """
    date_label: str
    count: int


# Contiguous and exhaustive: every real magnitude falls in exactly one range
MAGNITUDE_RANGES: tuple[MagnitudeRange, ...] = (
    MagnitudeRange("<1", -math.inf, 1.0),
    MagnitudeRange("1-1.9", 1.0, 2.0),
    MagnitudeRange("2-2.9", 2.0, 3.0),
    MagnitudeRange("3-3.9", 3.0, 4.0),
    MagnitudeRange("4-4.9", 4.0, 5.0),
    MagnitudeRange("5-5.9", 5.0, 6.0),
    MagnitudeRange("6-6.9", 6.0, 7.0),
    MagnitudeRange("7+", 7.0, math.inf),
)


def get_magnitude_color(magnitude: float | None) -> str:
    """Get hex color for magnitude visualization.

    Pure function.

    Args:
        magnitude: Earthquake magnitude (None for unknown)

    Returns:
        Hex color string (e.g., "#FACC15")
    """
    if magnitude is None:
        return "#94A3B8"  # slate-400
    if magnitude < 1.0:
        return "#67E8F9"  # cyan-300
    if magnitude < 2.5:
        return "#22D3EE"  # cyan-400
    if magnitude < 4.0:
        return "#34D399"  # emerald-400
    if magnitude < 5.0:
        return "#FACC15"  # yellow-400
    if magnitude < 6.0:
        return "#FB923C"  # orange-400
    if magnitude < 7.0:
        return "#F87171"  # red-400
    return "#1E293B"  # slate-800


def calculate_magnitude_distribution(
    earthquakes: list[Earthquake],
    ranges: tuple[MagnitudeRange, ...] = MAGNITUDE_RANGES,
) -> list[HistogramBucket]:
    """Count earthquakes per magnitude range.

    Pure function. Earthquakes without a magnitude are skipped; the first
    matching range wins.

    Args:
        earthquakes: Earthquakes to aggregate
        ranges: Ordered, non-overlapping ranges

    Returns:
        One HistogramBucket per range, in range order
    """
    counts = [0] * len(ranges)

    for earthquake in earthquakes:
        if earthquake.magnitude is None:
            continue
        for i, magnitude_range in enumerate(ranges):
            if magnitude_range.contains(earthquake.magnitude):
                counts[i] += 1
                break

    return [
        HistogramBucket(
            name=r.name,
            count=count,
            color=get_magnitude_color(0.0 if r.lower == -math.inf else r.lower),
        )
        for r, count in zip(ranges, counts)
    ]


def format_day_label(timestamp_ms: int) -> str:
    """Format an epoch-ms timestamp as a UTC day label like "Mar 5".

    Pure function.
    """
    day = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return f"{day:%b} {day.day}"


def initial_daily_counts(num_days: int, base_time_ms: int) -> list[DailyCount]:
    """Zeroed day buckets ending on the day of base_time_ms, oldest first.

    Pure function.
    """
    base = datetime.fromtimestamp(base_time_ms / 1000, tz=timezone.utc)
    labels = [
        format_day_label(int((base - timedelta(days=i)).timestamp() * 1000))
        for i in range(num_days)
    ]
    return [DailyCount(date_label=label, count=0) for label in reversed(labels)]


def calculate_daily_counts(
    earthquakes: list[Earthquake],
    num_days: int,
    base_time_ms: int,
) -> list[DailyCount]:
    """Count earthquakes per UTC day over the last num_days days.

    Pure function. Earthquakes on days outside the buckets are ignored.

    Args:
        earthquakes: Earthquakes to count
        num_days: Number of day buckets
        base_time_ms: Reference time; its day is the newest bucket

    Returns:
        DailyCount per day, oldest first
    """
    buckets = initial_daily_counts(num_days, base_time_ms)
    counts = {b.date_label: 0 for b in buckets}

    for earthquake in earthquakes:
        label = format_day_label(earthquake.time)
        if label in counts:
            counts[label] += 1

    return [DailyCount(date_label=b.date_label, count=counts[b.date_label]) for b in buckets]
