"""
Monitoring and Observability Configuration

Integrates Sentry for error tracking. Sentry stays disabled unless SENTRY_DSN
is configured; every helper here is then a no-op at the SDK level.
"""

import logging
import os
from typing import Optional, Dict, Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from config.settings import settings

logger = logging.getLogger(__name__)

# Client errors that are part of normal operation and never reported
EXPECTED_EXCEPTIONS = {
    'TokenMissingException',
    'InvalidTokenException',
    'DuplicateUserException',
    'DuplicateFavoriteException',
    'RequestValidationError',
}


def init_sentry(
    dsn: Optional[str] = None,
    environment: Optional[str] = None,
    traces_sample_rate: float = 0.1
) -> bool:
    """
    Initialize Sentry error tracking and performance monitoring

    Args:
        dsn: Sentry DSN (from env var SENTRY_DSN if not provided)
        environment: Environment name (production, staging, development)
        traces_sample_rate: Percentage of transactions to trace (0.0-1.0)

    Returns:
        True if Sentry initialized successfully, False otherwise

    Environment Variables:
        SENTRY_DSN: Sentry project DSN
        SENTRY_ENVIRONMENT: Environment name (overrides environment param)
        SENTRY_TRACES_SAMPLE_RATE: Traces sample rate (overrides param)
    """
    sentry_dsn = dsn or os.getenv('SENTRY_DSN')

    if not sentry_dsn:
        logger.info("ℹ️  SENTRY_DSN not configured - Sentry disabled")
        return False

    sentry_env = os.getenv('SENTRY_ENVIRONMENT') or environment or settings.ENVIRONMENT
    traces_rate = float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', traces_sample_rate))

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            release=f"smartfit-backend@{settings.APP_VERSION}",
            traces_sample_rate=traces_rate,
            integrations=[
                FastApiIntegration(
                    transaction_style="endpoint",
                    failed_request_status_codes=[500, 501, 502, 503, 504, 505]
                ),
                LoggingIntegration(
                    level=logging.INFO,
                    event_level=logging.ERROR
                ),
            ],
            before_send=before_send_filter,
            attach_stacktrace=True,
            send_default_pii=False,  # emails and password hashes stay local
            debug=settings.DEBUG,
        )
    except Exception as e:
        logger.error(f"❌ Failed to initialize Sentry: {str(e)}")
        return False

    logger.info(
        f"✅ Sentry initialized (environment={sentry_env}, "
        f"release=smartfit-backend@{settings.APP_VERSION}, traces={traces_rate * 100}%)"
    )
    return True


def before_send_filter(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Filter events before sending to Sentry

    Args:
        event: Sentry event dict
        hint: Additional context

    Returns:
        Modified event or None to drop the event
    """
    if event.get('transaction') == 'GET /api/health':
        return None

    if 'exception' in event:
        values = event['exception'].get('values') or [{}]
        if values[0].get('type', '') in EXPECTED_EXCEPTIONS:
            return None

    return event


def set_user(user_id: str) -> None:
    """Attach the authenticated user id to the current Sentry scope"""
    sentry_sdk.set_user({"id": user_id})


def capture_exception(exception: Exception, **tags: str) -> None:
    """
    Manually capture an exception to Sentry

    Example:
        capture_exception(e, component="mongodb")
    """
    with sentry_sdk.new_scope() as scope:
        for key, value in tags.items():
            scope.set_tag(key, value)
        sentry_sdk.capture_exception(exception)
