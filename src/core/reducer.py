"""Aggregation reducer - Pure state transitions.

One handler per horizon turns (previous state, raw feed batch, fetch time)
into a new DerivedState. Each handler replaces only the fields its horizon
owns, plus the notable-event pointers which every horizon folds forward.

Handlers never raise: malformed features are dropped at the ingestion
boundary, and anything unexpected is logged and the previous state returned.
"""

import logging
import random
from dataclasses import replace
from typing import Any, Callable

from src.core.alerts import consolidate_alerts, detect_tsunami
from src.core.config import AggregationConfig
from src.core.dedup import deduplicate
from src.core.earthquake import Earthquake, parse_earthquakes
from src.core.histogram import calculate_daily_counts, calculate_magnitude_distribution
from src.core.notable import NotableEvents, consolidate_notable_events, select_major_earthquakes
from src.core.sampling import sample_with_priority
from src.core.state import DerivedState, Horizon
from src.core.windows import filter_by_days, filter_by_hours


logger = logging.getLogger(__name__)


def _is_valid_fetch_time(fetch_time_ms: Any) -> bool:
    return isinstance(fetch_time_ms, (int, float)) and not isinstance(fetch_time_ms, bool)


def _ingest(features: Any) -> list[Earthquake]:
    """Parse and deduplicate a raw batch; all windows derive from this."""
    return deduplicate(parse_earthquakes(features))


def _fold_notable(
    state: DerivedState,
    earthquakes: list[Earthquake],
    config: AggregationConfig,
) -> NotableEvents:
    majors = select_major_earthquakes(earthquakes, config.major_quake_threshold)
    return consolidate_notable_events(
        state.notable.last,
        state.notable.previous,
        majors,
    )


def _generated_time(metadata: Any, fetch_time_ms: int) -> int:
    """Feed generation time from metadata, falling back to the fetch time."""
    if isinstance(metadata, dict):
        generated = metadata.get("generated")
        if _is_valid_fetch_time(generated):
            return int(generated)
    return fetch_time_ms


def _reduce_short(
    state: DerivedState,
    earthquakes: list[Earthquake],
    fetch_time_ms: int,
    metadata: Any,
    config: AggregationConfig,
    rng: random.Random | None,
) -> DerivedState:
    last_24_hours = filter_by_hours(earthquakes, 24, 0, fetch_time_ms)

    return replace(
        state,
        data_fetch_time=fetch_time_ms,
        last_updated=_generated_time(metadata, fetch_time_ms),
        earthquakes_last_hour=tuple(filter_by_hours(earthquakes, 1, 0, fetch_time_ms)),
        earthquakes_prior_hour=tuple(filter_by_hours(earthquakes, 2, 1, fetch_time_ms)),
        earthquakes_last_24_hours=tuple(last_24_hours),
        alert=consolidate_alerts(last_24_hours),
        tsunami=detect_tsunami(last_24_hours),
        notable=_fold_notable(state, earthquakes, config),
    )


def _reduce_medium(
    state: DerivedState,
    earthquakes: list[Earthquake],
    fetch_time_ms: int,
    metadata: Any,
    config: AggregationConfig,
    rng: random.Random | None,
) -> DerivedState:
    last_72_hours = filter_by_hours(earthquakes, 72, 0, fetch_time_ms)
    last_7_days = filter_by_days(earthquakes, 7, 0, fetch_time_ms)

    globe = sorted(
        last_72_hours,
        key=lambda e: e.magnitude if e.magnitude is not None else 0.0,
        reverse=True,
    )[:config.globe_event_limit]

    sampled = sample_with_priority(
        last_7_days,
        config.sample_size_7_days,
        config.major_quake_threshold,
        rng,
    )

    return replace(
        state,
        medium_fetch_time=fetch_time_ms,
        earthquakes_last_72_hours=tuple(last_72_hours),
        earthquakes_prior_24_hours=tuple(filter_by_hours(earthquakes, 48, 24, fetch_time_ms)),
        earthquakes_last_7_days=tuple(last_7_days),
        globe_earthquakes=tuple(globe),
        daily_counts_7_days=tuple(calculate_daily_counts(last_7_days, 7, fetch_time_ms)),
        sampled_earthquakes_last_7_days=tuple(sampled),
        magnitude_distribution_7_days=tuple(calculate_magnitude_distribution(last_7_days)),
        notable=_fold_notable(state, earthquakes, config),
    )


def _reduce_long(
    state: DerivedState,
    earthquakes: list[Earthquake],
    fetch_time_ms: int,
    metadata: Any,
    config: AggregationConfig,
    rng: random.Random | None,
) -> DerivedState:
    last_14_days = filter_by_days(earthquakes, 14, 0, fetch_time_ms)
    last_30_days = filter_by_days(earthquakes, 30, 0, fetch_time_ms)

    sampled_14 = sample_with_priority(
        last_14_days,
        config.sample_size_14_days,
        config.major_quake_threshold,
        rng,
    )
    sampled_30 = sample_with_priority(
        last_30_days,
        config.sample_size_30_days,
        config.major_quake_threshold,
        rng,
    )

    return replace(
        state,
        long_fetch_time=fetch_time_ms,
        all_earthquakes=tuple(earthquakes),
        earthquakes_last_14_days=tuple(last_14_days),
        earthquakes_last_30_days=tuple(last_30_days),
        earthquakes_prior_7_days=tuple(filter_by_days(earthquakes, 14, 7, fetch_time_ms)),
        earthquakes_prior_14_days=tuple(filter_by_days(earthquakes, 28, 14, fetch_time_ms)),
        daily_counts_14_days=tuple(calculate_daily_counts(last_14_days, 14, fetch_time_ms)),
        daily_counts_30_days=tuple(calculate_daily_counts(last_30_days, 30, fetch_time_ms)),
        sampled_earthquakes_last_14_days=tuple(sampled_14),
        sampled_earthquakes_last_30_days=tuple(sampled_30),
        magnitude_distribution_14_days=tuple(calculate_magnitude_distribution(last_14_days)),
        magnitude_distribution_30_days=tuple(calculate_magnitude_distribution(last_30_days)),
        notable=_fold_notable(state, earthquakes, config),
    )


_HANDLERS: dict[Horizon, Callable[..., DerivedState]] = {
    Horizon.SHORT: _reduce_short,
    Horizon.MEDIUM: _reduce_medium,
    Horizon.LONG: _reduce_long,
}


def reduce(
    state: DerivedState | None,
    horizon: Horizon,
    features: Any,
    fetch_time_ms: Any,
    metadata: dict[str, Any] | None = None,
    config: AggregationConfig | None = None,
    rng: random.Random | None = None,
) -> DerivedState:
    """Produce the next DerivedState for one horizon's refresh.

    Pure function (apart from logging and the sampling shuffle).

    Args:
        state: Previous state (None for the initial empty state)
        horizon: Which horizon's feed this batch came from
        features: Raw GeoJSON feature list (non-list input counts as empty)
        fetch_time_ms: Fetch time in epoch ms, used as "now" for all windows
        metadata: Feed metadata (only "generated" is read)
        config: Thresholds and budgets (defaults if None)
        rng: Random source for sampling (non-deterministic if None)

    Returns:
        New DerivedState; the previous state if the refresh could not be applied
    """
    state = state if state is not None else DerivedState()
    config = config or AggregationConfig()

    try:
        horizon = Horizon(horizon)
    except ValueError:
        logger.warning("Unknown horizon %r, state unchanged", horizon)
        return state

    handler = _HANDLERS[horizon]

    if not _is_valid_fetch_time(fetch_time_ms):
        logger.warning(
            "Invalid fetch time %r for %s refresh, state unchanged",
            fetch_time_ms,
            horizon.value,
        )
        return state

    try:
        earthquakes = _ingest(features)
        new_state = handler(state, earthquakes, int(fetch_time_ms), metadata, config, rng)
    except Exception:
        logger.exception("Failed to reduce %s refresh, state unchanged", horizon.value)
        return state

    logger.info(
        "Reduced %s refresh: %d earthquakes",
        horizon.value,
        len(earthquakes),
    )
    return new_state


def reduce_short(
    state: DerivedState | None,
    features: Any,
    fetch_time_ms: Any,
    metadata: dict[str, Any] | None = None,
    config: AggregationConfig | None = None,
) -> DerivedState:
    """Short horizon (1h / prior hour / 24h, alerts, tsunami)."""
    return reduce(state, Horizon.SHORT, features, fetch_time_ms, metadata, config)


def reduce_medium(
    state: DerivedState | None,
    features: Any,
    fetch_time_ms: Any,
    metadata: dict[str, Any] | None = None,
    config: AggregationConfig | None = None,
    rng: random.Random | None = None,
) -> DerivedState:
    """Medium horizon (72h, prior 24h, 7 days, globe, 7-day charts)."""
    return reduce(state, Horizon.MEDIUM, features, fetch_time_ms, metadata, config, rng)


def reduce_long(
    state: DerivedState | None,
    features: Any,
    fetch_time_ms: Any,
    metadata: dict[str, Any] | None = None,
    config: AggregationConfig | None = None,
    rng: random.Random | None = None,
) -> DerivedState:
    """Long horizon (14 / 30 days, prior periods, long-range charts)."""
    return reduce(state, Horizon.LONG, features, fetch_time_ms, metadata, config, rng)
