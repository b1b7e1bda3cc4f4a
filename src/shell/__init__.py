"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS summary feed client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All aggregation logic should be in core.
"""

from src.shell.usgs_client import USGSFeedClient
from src.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "USGSFeedClient",
    "load_config",
    "load_config_from_env",
]
