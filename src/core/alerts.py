"""Alert consolidation - Pure functions.

Determines the single highest PAGER alert level currently active and the
earthquakes that carry it, and detects tsunami flags. Callers pass the
earthquakes of the last 24 hours.
"""

from dataclasses import dataclass, field

from src.core.earthquake import Earthquake


# Lower value = more severe. none/green never count as active alerts.
ALERT_PRIORITY = {"red": 0, "orange": 1, "yellow": 2}


@dataclass(frozen=True)
class AlertSummary:
    """The highest active alert level.

    Attributes:
        level: Highest level among red/orange/yellow, None if no active alert
        triggering_earthquakes: Every earthquake carrying exactly that level
    """
    level: str | None = None
    triggering_earthquakes: tuple[Earthquake, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.level is not None


@dataclass(frozen=True)
class TsunamiSummary:
    """Tsunami warning status.

    Attributes:
        warning: True if any earthquake carries the tsunami flag
        triggering_earthquake: Most recent flagged earthquake
    """
    warning: bool = False
    triggering_earthquake: Earthquake | None = None


def get_highest_alert_level(earthquakes: list[Earthquake]) -> str | None:
    """Return the most severe active alert level, or None.

    Pure function.
    """
    levels = [e.alert for e in earthquakes if e.alert in ALERT_PRIORITY]
    if not levels:
        return None
    return min(levels, key=lambda level: ALERT_PRIORITY[level])


def consolidate_alerts(earthquakes: list[Earthquake]) -> AlertSummary:
    """Find the highest active alert and its triggering earthquakes.

    Pure function.

    Args:
        earthquakes: Earthquakes in the alert window (last 24 hours)

    Returns:
        AlertSummary; empty when no yellow/orange/red alert is present
    """
    level = get_highest_alert_level(earthquakes)
    if level is None:
        return AlertSummary()

    return AlertSummary(
        level=level,
        triggering_earthquakes=tuple(e for e in earthquakes if e.alert == level),
    )


def detect_tsunami(earthquakes: list[Earthquake]) -> TsunamiSummary:
    """Detect tsunami-flagged earthquakes.

    Pure function.

    Args:
        earthquakes: Earthquakes in the alert window (last 24 hours)

    Returns:
        TsunamiSummary with the most recent flagged earthquake
    """
    flagged = [e for e in earthquakes if e.tsunami == 1]
    if not flagged:
        return TsunamiSummary()

    return TsunamiSummary(
        warning=True,
        triggering_earthquake=max(flagged, key=lambda e: e.time),
    )
