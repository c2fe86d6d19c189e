"""Sentry error reporting."""

import logging

import sentry_sdk

from sentry_sdk.integrations.logging import LoggingIntegration

from evoting.infrastructure.config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


def init_sentry(config: Settings | None = None) -> bool:
    """Initialize Sentry when a DSN is configured.

    Returns:
        True if Sentry was initialized
    """
    config = config or get_settings()
    if not config.sentry_dsn:
        logger.debug("Sentry DSN not configured, skipping initialization")
        return False

    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.environment,
        traces_sample_rate=0.1 if config.is_production else 1.0,
        send_default_pii=False,
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
    )
    logger.info("Sentry initialized for environment %s", config.environment)
    return True
