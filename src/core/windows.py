"""Time window filters - Pure functions.

All windows are half-open intervals measured back from "now":
an earthquake is inside [now - start, now - end) when
``start_time <= time < end_time``.
"""

import time

from src.core.earthquake import Earthquake


MS_PER_HOUR = 3_600_000
MS_PER_DAY = 24 * MS_PER_HOUR


def _filter_window(
    earthquakes: list[Earthquake],
    start_ms_ago: float,
    end_ms_ago: float,
    now_ms: int | None,
) -> list[Earthquake]:
    if not isinstance(earthquakes, (list, tuple)):
        return []

    if now_ms is None:
        now_ms = int(time.time() * 1000)

    start_time = now_ms - start_ms_ago
    end_time = now_ms - end_ms_ago
    return [e for e in earthquakes if start_time <= e.time < end_time]


def filter_by_hours(
    earthquakes: list[Earthquake],
    start_hours_ago: float,
    end_hours_ago: float = 0,
    now_ms: int | None = None,
) -> list[Earthquake]:
    """Select earthquakes between start_hours_ago and end_hours_ago.

    Pure function.

    Args:
        earthquakes: Earthquakes to filter (non-list input yields [])
        start_hours_ago: Older edge of the window (inclusive)
        end_hours_ago: Newer edge of the window (exclusive)
        now_ms: Reference time in epoch milliseconds (current time if None)

    Returns:
        Earthquakes inside the window, in input order
    """
    return _filter_window(
        earthquakes,
        start_hours_ago * MS_PER_HOUR,
        end_hours_ago * MS_PER_HOUR,
        now_ms,
    )


def filter_by_days(
    earthquakes: list[Earthquake],
    start_days_ago: float,
    end_days_ago: float = 0,
    now_ms: int | None = None,
) -> list[Earthquake]:
    """Day-granularity variant of filter_by_hours().

    Pure function.
    """
    return _filter_window(
        earthquakes,
        start_days_ago * MS_PER_DAY,
        end_days_ago * MS_PER_DAY,
        now_ms,
    )
