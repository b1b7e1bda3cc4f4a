"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.state import Horizon


# USGS real-time summary feeds
USGS_FEED_BASE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

DEFAULT_FEED_NAMES = {
    Horizon.SHORT: "all_day",
    Horizon.MEDIUM: "all_week",
    Horizon.LONG: "all_month",
}

DEFAULT_REFRESH_INTERVALS = {
    Horizon.SHORT: 300,
    Horizon.MEDIUM: 300,
    Horizon.LONG: 1800,
}


@dataclass(frozen=True)
class AggregationConfig:
    """Thresholds and budgets used by the aggregation reducer.

    Attributes:
        major_quake_threshold: Minimum magnitude of a notable earthquake; also
            the priority cutoff for sampling
        feelable_quake_threshold: Minimum magnitude considered feelable
        sample_size_7_days: Render budget for the 7-day sample
        sample_size_14_days: Render budget for the 14-day sample
        sample_size_30_days: Render budget for the 30-day sample
        globe_event_limit: Maximum earthquakes kept for the globe view
    """
    major_quake_threshold: float = 4.5
    feelable_quake_threshold: float = 2.5
    sample_size_7_days: int = 300
    sample_size_14_days: int = 500
    sample_size_30_days: int = 700
    globe_event_limit: int = 900


@dataclass(frozen=True)
class ClusterConfig:
    """Cluster finder parameters.

    Attributes:
        max_distance_km: Maximum distance from a cluster's seed
        min_quakes: Minimum earthquakes for a cluster to be kept
        min_cluster_magnitude: Summaries whose strongest earthquake is below
            this are dropped (None keeps all)
    """
    max_distance_km: float = 100.0
    min_quakes: int = 3
    min_cluster_magnitude: float | None = None


@dataclass
class FeedConfig:
    """Where and how to fetch the USGS feeds.

    Attributes:
        base_url: Summary feed base URL
        timeout_seconds: HTTP timeout
        feed_names: Feed name per horizon (e.g., "all_day")
    """
    base_url: str = USGS_FEED_BASE
    timeout_seconds: int = 30
    feed_names: dict[Horizon, str] = field(default_factory=lambda: dict(DEFAULT_FEED_NAMES))


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        aggregation: Reducer thresholds and budgets
        clusters: Cluster finder parameters
        feed: Feed locations
        refresh_interval_seconds: Suggested polling interval per horizon,
            published in the snapshot for the external scheduler
    """
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    clusters: ClusterConfig = field(default_factory=ClusterConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    refresh_interval_seconds: dict[Horizon, int] = field(
        default_factory=lambda: dict(DEFAULT_REFRESH_INTERVALS)
    )


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def _validate_positive(value: float, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []
    aggregation = config.aggregation

    for name in ("sample_size_7_days", "sample_size_14_days", "sample_size_30_days", "globe_event_limit"):
        errors.extend(_validate_positive(getattr(aggregation, name), f"aggregation.{name}"))

    if aggregation.feelable_quake_threshold > aggregation.major_quake_threshold:
        errors.append(ValidationError(
            field="aggregation",
            message=(
                f"feelable_quake_threshold ({aggregation.feelable_quake_threshold}) > "
                f"major_quake_threshold ({aggregation.major_quake_threshold})"
            ),
            severity="warning",
        ))

    if config.clusters.max_distance_km < 0:
        errors.append(ValidationError(
            field="clusters.max_distance_km",
            message=f"Must not be negative, got {config.clusters.max_distance_km}",
        ))

    if config.clusters.min_quakes < 1:
        errors.append(ValidationError(
            field="clusters.min_quakes",
            message=f"Must be at least 1, got {config.clusters.min_quakes}",
        ))
    elif config.clusters.min_quakes == 1:
        errors.append(ValidationError(
            field="clusters.min_quakes",
            message="min_quakes of 1 turns every earthquake into a cluster",
            severity="warning",
        ))

    errors.extend(_validate_positive(config.feed.timeout_seconds, "feed.timeout_seconds"))

    if not config.feed.base_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed.base_url",
            message=f"Not an HTTP(S) URL: {config.feed.base_url}",
        ))

    for horizon in Horizon:
        if horizon not in config.feed.feed_names:
            errors.append(ValidationError(
                field="feed.feed_names",
                message=f"No feed configured for horizon '{horizon.value}'",
            ))
        interval = config.refresh_interval_seconds.get(horizon)
        if interval is not None:
            errors.extend(_validate_positive(
                interval,
                f"refresh_interval_seconds.{horizon.value}",
            ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
