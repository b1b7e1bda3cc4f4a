"""Notable earthquake tracking - Pure functions.

Each refresh only sees a bounded window of the feed, but the "last major
earthquake" display must not disappear when that earthquake rolls out of the
window. The tracker folds newly seen major earthquakes into the previously
tracked pair, so the pointers only ever move to more recent events.
"""

from dataclasses import dataclass

from src.core.dedup import deduplicate
from src.core.earthquake import Earthquake, is_major


@dataclass(frozen=True)
class NotableEvents:
    """The two most recent major earthquakes ever observed.

    Attributes:
        last: Most recent major earthquake
        previous: The one before it
        delta_ms: last.time - previous.time, None unless both are set
    """
    last: Earthquake | None = None
    previous: Earthquake | None = None
    delta_ms: int | None = None


def select_major_earthquakes(
    earthquakes: list[Earthquake],
    threshold: float,
) -> list[Earthquake]:
    """Earthquakes whose magnitude meets the major threshold.

    Pure function.
    """
    return [e for e in earthquakes if is_major(e, threshold)]


def consolidate_notable_events(
    previous_last: Earthquake | None,
    previous_previous: Earthquake | None,
    candidates: list[Earthquake],
) -> NotableEvents:
    """Merge new major earthquakes with the currently tracked pair.

    Pure function. Ordering is by time, newest first, so the result holds the
    two most recent qualifying earthquakes, not the two largest.

    Args:
        previous_last: Currently tracked most recent major earthquake
        previous_previous: Currently tracked second most recent
        candidates: Major earthquakes seen in this refresh

    Returns:
        NotableEvents for the new state
    """
    pool = list(candidates)
    for tracked in (previous_last, previous_previous):
        if tracked is not None:
            pool.append(tracked)

    ordered = sorted(deduplicate(pool), key=lambda e: e.time, reverse=True)

    last = ordered[0] if ordered else None
    previous = ordered[1] if len(ordered) > 1 else None
    delta_ms = last.time - previous.time if last and previous else None

    return NotableEvents(last=last, previous=previous, delta_ms=delta_ms)
