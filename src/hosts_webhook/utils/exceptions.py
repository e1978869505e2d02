"""Custom exceptions and error handling utilities."""

import logging
from typing import Optional

import sentry_sdk

from hosts_webhook.core.config import get_settings

logger = logging.getLogger(__name__)


class HostsWebhookError(Exception):
    """Base exception for hosts webhook errors."""


class DecodeError(HostsWebhookError):
    """Request body could not be decoded."""


class StoreError(HostsWebhookError):
    """Reading or writing the hosts file failed."""


def capture_exception(
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "error",
) -> None:
    """
    Capture exception to Sentry if configured, otherwise log it.

    Args:
        exception: The exception to capture
        context: Additional context to include
        level: Log level ('error', 'warning', 'info')
    """
    settings = get_settings()

    log_func = getattr(logger, level, logger.error)
    log_func("%s: %s", type(exception).__name__, exception, exc_info=True)

    if settings.sentry_dsn:
        if context:
            with sentry_sdk.push_scope() as scope:
                for key, value in context.items():
                    scope.set_extra(key, value)
                sentry_sdk.capture_exception(exception)
        else:
            sentry_sdk.capture_exception(exception)
