"""Deduplication logic - Pure functions.

Overlapping feed fetches can deliver the same USGS event more than once.
Everything downstream relies on ids being unique within a list, so batches
are deduplicated here, keeping the first occurrence of each id.
"""

from src.core.earthquake import Earthquake


def get_earthquake_ids(earthquakes: list[Earthquake]) -> set[str]:
    """Extract IDs from a list of earthquakes.

    Pure function.

    Args:
        earthquakes: List of earthquakes

    Returns:
        Set of earthquake IDs
    """
    return {e.id for e in earthquakes}


def deduplicate(earthquakes: list[Earthquake]) -> list[Earthquake]:
    """Remove repeated IDs, keeping the first occurrence.

    Pure function. Order of the surviving earthquakes is preserved.

    Args:
        earthquakes: Earthquakes that may contain repeated IDs

    Returns:
        Earthquakes with unique IDs
    """
    if not isinstance(earthquakes, (list, tuple)):
        return []

    seen: set[str] = set()
    unique = []

    for earthquake in earthquakes:
        if earthquake.id in seen:
            continue
        seen.add(earthquake.id)
        unique.append(earthquake)

    return unique


def has_duplicate_ids(earthquakes: list[Earthquake]) -> bool:
    """Check whether any ID appears more than once.

    Pure function.
    """
    return len(get_earthquake_ids(earthquakes)) != len(earthquakes)
