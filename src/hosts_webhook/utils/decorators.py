"""Decorators for error reporting and Sentry setup."""

import functools
import logging
from typing import Awaitable, Callable, TypeVar

import sentry_sdk

from hosts_webhook.core.config import get_settings

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable])


def sentry_exception_catcher(func: F) -> F:
    """
    Report unexpected exceptions raised by an async handler to Sentry.

    The exception is re-raised unchanged. Nothing is sent unless SENTRY_DSN
    is set.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if get_settings().sentry_dsn:
                with sentry_sdk.push_scope() as scope:
                    scope.set_tag("handler", func.__name__)
                    sentry_sdk.capture_exception(e)
            raise

    return wrapper  # type: ignore


def init_sentry() -> None:
    """Initialize Sentry SDK if configured."""
    settings = get_settings()

    if not settings.sentry_dsn:
        logger.debug("Sentry disabled, SENTRY_DSN not set")
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
