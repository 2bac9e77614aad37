"""
Logging setup for the recipe import service.

Standard library loggers carry module-level diagnostics; logfire carries the
structured pipeline events. Logfire only ships data when a token is present.
"""

import logging

import logfire

from .settings import settings


def configure_logging() -> None:
    """Configure root logging and logfire from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    
    try:
        logfire.configure(
            token=settings.logfire_token,
            send_to_logfire="if-token-present",
            service_name="recipe-import",
        )
    except Exception as e:
        # Continue without logfire when the SDK cannot be configured
        logging.getLogger(__name__).warning(f"Logfire setup skipped: {e}")
