"""Cloud Function Entry Point.

This module provides the entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration, refreshes the feeds through
the orchestrator and returns a JSON snapshot of the derived state.
"""

import logging
import os
import json
from typing import Any

import functions_framework
from flask import Request

from src.core.state import Horizon
from src.orchestrator import Orchestrator
from src.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Cached per process so notable-event continuity survives warm invocations
_orchestrator: Orchestrator | None = None


def _get_config():
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("USGS_FEED_BASE_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def _get_orchestrator() -> Orchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator(_get_config())
    return _orchestrator


def _parse_horizons(request: Any) -> list[Horizon]:
    """Read the optional comma-separated `horizon` query parameter.

    Raises:
        ValueError: If a horizon name is unknown
    """
    args = getattr(request, "args", None) or {}
    raw = args.get("horizon")
    if not raw:
        return list(Horizon)
    return [Horizon(name.strip().lower()) for name in raw.split(",") if name.strip()]


@functions_framework.http
def earthquake_snapshot(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Triggered by Cloud Scheduler or direct HTTP requests. Refreshes the
    requested horizons and returns the aggregated snapshot.

    Args:
        request: Flask request object (optional `horizon` query parameter)

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    logger.info("Starting earthquake feed refresh")

    try:
        try:
            horizons = _parse_horizons(request)
        except ValueError as e:
            logger.warning("Bad horizon parameter: %s", e)
            return {
                "status": "error",
                "message": str(e),
            }, 400

        orchestrator = _get_orchestrator()
        results = orchestrator.refresh_all(horizons)

        errors = [r.error for r in results if r.error]

        response = {
            "status": "success" if not errors else "partial_failure",
            "refreshed": [r.summary for r in results],
            "snapshot": orchestrator.snapshot(),
        }

        if errors:
            response["errors"] = errors

        logger.info("Completed refresh of %d horizons, %d failed", len(results), len(errors))

        status_code = 200 if not errors else 207  # 207 = Multi-Status
        return response, status_code

    except Exception as e:
        logger.exception("Unexpected error in earthquake snapshot")
        return {
            "status": "error",
            "message": str(e),
        }, 500


# For local testing
if __name__ == "__main__":
    # Mock request for local testing
    class MockRequest:
        args: dict[str, str] = {}

    response, status = earthquake_snapshot(MockRequest())
    print(f"\nResponse ({status}):")
    print(json.dumps(response, indent=2))
