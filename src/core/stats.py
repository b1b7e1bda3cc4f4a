"""Summary statistics and regional distribution - Pure functions."""

from dataclasses import dataclass

from src.core.alerts import get_highest_alert_level
from src.core.earthquake import Earthquake, is_major
from src.core.geo import BoundingBox, is_within_bounds


@dataclass(frozen=True)
class Region:
    """A named geographic region used for activity breakdowns.

    Attributes:
        name: Display name
        bounds: Region bounding box
        color: Hex color for charting
    """
    name: str
    bounds: BoundingBox
    color: str


@dataclass(frozen=True)
class RegionCount:
    """Number of earthquakes attributed to a region."""
    region: Region
    count: int


@dataclass(frozen=True)
class EarthquakeStatistics:
    """Aggregate statistics over a set of earthquakes.

    Attributes:
        total: Number of earthquakes
        average_magnitude: Mean of known magnitudes
        strongest_magnitude: Largest known magnitude
        significant_count: Earthquakes at or above the significant threshold
        feelable_count: Earthquakes at or above the feelable threshold
        average_depth_km: Mean of known depths
        deepest_km: Largest known depth
        highest_alert_level: Most severe active PAGER level
    """
    total: int = 0
    average_magnitude: float | None = None
    strongest_magnitude: float | None = None
    significant_count: int = 0
    feelable_count: int = 0
    average_depth_km: float | None = None
    deepest_km: float | None = None
    highest_alert_level: str | None = None


# The final region is the fallback for anything not matched before it
REGIONS: tuple[Region, ...] = (
    Region("Alaska & W. Canada", BoundingBox(50, 72, -170, -125), "#A78BFA"),
    Region("California & W. USA", BoundingBox(30, 50, -125, -110), "#F472B6"),
    Region("Japan & Kuril Isl.", BoundingBox(25, 50, 125, 155), "#34D399"),
    Region("Indonesia & Philippines", BoundingBox(-10, 25, 95, 140), "#F59E0B"),
    Region("S. America (Andes)", BoundingBox(-55, 10, -80, -60), "#60A5FA"),
    Region("Mediterranean", BoundingBox(30, 45, -10, 40), "#818CF8"),
    Region("Central America", BoundingBox(5, 30, -118, -77), "#FBBF24"),
    Region("New Zealand & S. Pacific", BoundingBox(-55, -10, 160, -150), "#C4B5FD"),
    Region("Other / Oceanic", BoundingBox(-90, 90, -180, 180), "#9CA3AF"),
)


def get_region_for_earthquake(
    earthquake: Earthquake,
    regions: tuple[Region, ...] = REGIONS,
) -> Region:
    """Return the first region containing the earthquake.

    Pure function. Earthquakes without coordinates, or outside every
    specific region, fall back to the last region.
    """
    for region in regions[:-1]:
        if is_within_bounds(earthquake, region.bounds):
            return region
    return regions[-1]


def calculate_regional_distribution(
    earthquakes: list[Earthquake],
    regions: tuple[Region, ...] = REGIONS,
) -> list[RegionCount]:
    """Count earthquakes per region, busiest first.

    Pure function. Regions without earthquakes are omitted; ties keep
    region order.
    """
    counts = {region.name: 0 for region in regions}
    for earthquake in earthquakes:
        counts[get_region_for_earthquake(earthquake, regions).name] += 1

    result = [
        RegionCount(region=region, count=counts[region.name])
        for region in regions
        if counts[region.name] > 0
    ]
    return sorted(result, key=lambda rc: rc.count, reverse=True)


def top_active_regions(
    earthquakes: list[Earthquake],
    limit: int = 2,
) -> list[RegionCount]:
    """The busiest regions. Pure function."""
    return calculate_regional_distribution(earthquakes)[:limit]


def calculate_statistics(
    earthquakes: list[Earthquake],
    feelable_threshold: float,
    significant_threshold: float,
) -> EarthquakeStatistics:
    """Compute summary statistics.

    Pure function. Aggregates with no data are None.

    Args:
        earthquakes: Earthquakes to summarize
        feelable_threshold: Minimum magnitude counted as feelable
        significant_threshold: Minimum magnitude counted as significant

    Returns:
        EarthquakeStatistics
    """
    if not earthquakes:
        return EarthquakeStatistics()

    magnitudes = [e.magnitude for e in earthquakes if e.magnitude is not None]
    depths = [e.depth_km for e in earthquakes if e.depth_km is not None]

    return EarthquakeStatistics(
        total=len(earthquakes),
        average_magnitude=sum(magnitudes) / len(magnitudes) if magnitudes else None,
        strongest_magnitude=max(magnitudes) if magnitudes else None,
        significant_count=sum(1 for e in earthquakes if is_major(e, significant_threshold)),
        feelable_count=sum(1 for e in earthquakes if is_major(e, feelable_threshold)),
        average_depth_km=sum(depths) / len(depths) if depths else None,
        deepest_km=max(depths) if depths else None,
        highest_alert_level=get_highest_alert_level(earthquakes),
    )
