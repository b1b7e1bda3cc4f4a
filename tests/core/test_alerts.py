"""Unit tests for alert consolidation and tsunami detection."""

from src.core.alerts import (
    AlertSummary,
    consolidate_alerts,
    detect_tsunami,
    get_highest_alert_level,
)
from src.core.earthquake import Earthquake


def _quake(event_id, alert=None, tsunami=None, time_ms=0):
    return Earthquake(id=event_id, time=time_ms, magnitude=5.0, alert=alert, tsunami=tsunami)


class TestConsolidateAlerts:
    """Tests for consolidate_alerts()."""

    def test_highest_level_wins(self):
        earthquakes = [
            _quake("a", "yellow"),
            _quake("b", "orange"),
            _quake("c", "green"),
            _quake("d", "orange"),
        ]

        summary = consolidate_alerts(earthquakes)

        assert summary.level == "orange"
        assert [e.id for e in summary.triggering_earthquakes] == ["b", "d"]
        assert summary.is_active

    def test_red_outranks_everything(self):
        earthquakes = [_quake("a", "yellow"), _quake("b", "red"), _quake("c", "orange")]
        assert consolidate_alerts(earthquakes).level == "red"

    def test_green_and_none_are_not_active(self):
        earthquakes = [_quake("a", "green"), _quake("b", "none"), _quake("c")]

        summary = consolidate_alerts(earthquakes)

        assert summary == AlertSummary()
        assert not summary.is_active
        assert summary.triggering_earthquakes == ()

    def test_empty(self):
        assert consolidate_alerts([]) == AlertSummary()
        assert get_highest_alert_level([]) is None


class TestDetectTsunami:
    """Tests for detect_tsunami()."""

    def test_most_recent_flagged_earthquake(self):
        earthquakes = [
            _quake("old", tsunami=1, time_ms=10),
            _quake("new", tsunami=1, time_ms=30),
            _quake("unflagged", tsunami=0, time_ms=50),
        ]

        summary = detect_tsunami(earthquakes)

        assert summary.warning is True
        assert summary.triggering_earthquake.id == "new"

    def test_no_warning(self):
        summary = detect_tsunami([_quake("a", tsunami=0), _quake("b")])

        assert summary.warning is False
        assert summary.triggering_earthquake is None
