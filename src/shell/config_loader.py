"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, AggregationConfig, ...) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import (
    AggregationConfig,
    ClusterConfig,
    Config,
    DEFAULT_FEED_NAMES,
    DEFAULT_REFRESH_INTERVALS,
    FeedConfig,
    USGS_FEED_BASE,
    validate_config,
)
from src.core.state import Horizon


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be an ${ENV_VAR} placeholder.

    Args:
        value: Value to resolve

    Returns:
        Resolved value (unchanged if not a placeholder or the var is unset)
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_horizon_map(data: dict[str, Any], cast: type, defaults: dict) -> dict[Horizon, Any]:
    """Parse a {short|medium|long: value} mapping over the defaults."""
    result = dict(defaults)
    for key, value in (data or {}).items():
        try:
            horizon = Horizon(key)
        except ValueError:
            logger.warning("Ignoring unknown horizon '%s' in config", key)
            continue
        result[horizon] = cast(_resolve_value(value))
    return result


def _parse_aggregation(data: dict[str, Any]) -> AggregationConfig:
    """Parse aggregation thresholds and budgets."""
    defaults = AggregationConfig()
    return AggregationConfig(
        major_quake_threshold=float(_resolve_value(
            data.get("major_quake_threshold", defaults.major_quake_threshold))),
        feelable_quake_threshold=float(_resolve_value(
            data.get("feelable_quake_threshold", defaults.feelable_quake_threshold))),
        sample_size_7_days=int(data.get("sample_size_7_days", defaults.sample_size_7_days)),
        sample_size_14_days=int(data.get("sample_size_14_days", defaults.sample_size_14_days)),
        sample_size_30_days=int(data.get("sample_size_30_days", defaults.sample_size_30_days)),
        globe_event_limit=int(data.get("globe_event_limit", defaults.globe_event_limit)),
    )


def _parse_clusters(data: dict[str, Any]) -> ClusterConfig:
    """Parse cluster finder parameters."""
    defaults = ClusterConfig()
    min_cluster_magnitude = _resolve_value(data.get("min_cluster_magnitude"))
    return ClusterConfig(
        max_distance_km=float(_resolve_value(
            data.get("max_distance_km", defaults.max_distance_km))),
        min_quakes=int(_resolve_value(data.get("min_quakes", defaults.min_quakes))),
        min_cluster_magnitude=(
            float(min_cluster_magnitude) if min_cluster_magnitude is not None else None
        ),
    )


def _parse_feed(data: dict[str, Any]) -> FeedConfig:
    """Parse feed location settings."""
    return FeedConfig(
        base_url=_resolve_value(data.get("base_url", USGS_FEED_BASE)),
        timeout_seconds=int(_resolve_value(data.get("timeout_seconds", 30))),
        feed_names=_parse_horizon_map(data.get("feed_names", {}), str, DEFAULT_FEED_NAMES),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    return Config(
        aggregation=_parse_aggregation(data.get("aggregation") or {}),
        clusters=_parse_clusters(data.get("clusters") or {}),
        feed=_parse_feed(data.get("feed") or {}),
        refresh_interval_seconds=_parse_horizon_map(
            data.get("refresh_interval_seconds", {}),
            int,
            DEFAULT_REFRESH_INTERVALS,
        ),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for error in result.errors:
        if error.severity == "error":
            logger.error("Config error in %s: %s", error.field, error.message)
        else:
            logger.warning("Config warning in %s: %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: major threshold M%.1f, clusters %.0fkm/%d quakes",
        config.aggregation.major_quake_threshold,
        config.clusters.max_distance_km,
        config.clusters.min_quakes,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        MAJOR_QUAKE_THRESHOLD: Notable earthquake magnitude
        FEELABLE_QUAKE_THRESHOLD: Feelable earthquake magnitude
        CLUSTER_MAX_DISTANCE_KM: Cluster radius around a seed
        CLUSTER_MIN_QUAKES: Minimum cluster size
        USGS_FEED_BASE_URL: Summary feed base URL
        FEED_TIMEOUT_SECONDS: HTTP timeout

    Returns:
        Config object from environment
    """
    aggregation_defaults = AggregationConfig()
    cluster_defaults = ClusterConfig()

    aggregation = AggregationConfig(
        major_quake_threshold=float(os.environ.get(
            "MAJOR_QUAKE_THRESHOLD", aggregation_defaults.major_quake_threshold)),
        feelable_quake_threshold=float(os.environ.get(
            "FEELABLE_QUAKE_THRESHOLD", aggregation_defaults.feelable_quake_threshold)),
    )

    clusters = ClusterConfig(
        max_distance_km=float(os.environ.get(
            "CLUSTER_MAX_DISTANCE_KM", cluster_defaults.max_distance_km)),
        min_quakes=int(os.environ.get("CLUSTER_MIN_QUAKES", cluster_defaults.min_quakes)),
    )

    feed = FeedConfig(
        base_url=os.environ.get("USGS_FEED_BASE_URL", USGS_FEED_BASE),
        timeout_seconds=int(os.environ.get("FEED_TIMEOUT_SECONDS", "30")),
    )

    config = Config(aggregation=aggregation, clusters=clusters, feed=feed)
    _log_validation(config)
    return config
