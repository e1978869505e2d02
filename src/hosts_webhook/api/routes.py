"""API routes implementing the external-dns webhook provider contract."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from hosts_webhook.api.models import (
    MEDIA_TYPE,
    DomainFilter,
    decode_changes,
    decode_endpoints,
    encode_endpoints,
    encode_model,
)
from hosts_webhook.core.config import Settings, get_settings
from hosts_webhook.core.hosts import apply_changes, parse_endpoints
from hosts_webhook.core.store import HostsStore, get_hosts_store
from hosts_webhook.utils.decorators import sentry_exception_catcher
from hosts_webhook.utils.exceptions import DecodeError, StoreError, capture_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@dataclass
class RouteDependencies:
    """Dependencies for route handlers."""

    settings: Settings = field(default_factory=get_settings)
    store: HostsStore = field(default_factory=get_hosts_store)


# Global dependencies instance (can be overridden for testing)
_dependencies: Optional[RouteDependencies] = None


def get_dependencies() -> RouteDependencies:
    """Get the current route dependencies."""
    global _dependencies  # pylint: disable=global-statement
    if _dependencies is None:
        _dependencies = RouteDependencies()
    return _dependencies


def set_dependencies(deps: RouteDependencies) -> None:
    """Set custom dependencies (useful for testing)."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = deps


def reset_dependencies() -> None:
    """Reset dependencies to default (useful for testing)."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = None


def _error_response(error: Exception, status_code: int) -> PlainTextResponse:
    """Plain-text error body carrying the error message."""
    return PlainTextResponse(str(error), status_code=status_code)


def _webhook_response(body: bytes, status_code: int = 200) -> Response:
    return Response(content=body, status_code=status_code, media_type=MEDIA_TYPE)


@router.get("/")
@sentry_exception_catcher
async def negotiate():
    """Advertise the media type and the (unrestricted) domain filter."""
    return _webhook_response(encode_model(DomainFilter()))


@router.get("/records")
@sentry_exception_catcher
async def get_records(deps: RouteDependencies = Depends(get_dependencies)):
    """Return every hosts-file entry as an A record endpoint."""
    try:
        content = await deps.store.read()
    except StoreError as e:
        capture_exception(e, {"hosts_file": deps.settings.hosts_file})
        return _error_response(e, 500)

    endpoints = parse_endpoints(content)
    logger.debug(f"Read {len(endpoints)} endpoints")

    return _webhook_response(encode_endpoints(endpoints))


@router.post("/records")
@sentry_exception_catcher
async def apply_records(
    request: Request,
    deps: RouteDependencies = Depends(get_dependencies),
):
    """
    Apply a change set to the hosts file.

    The whole body is decoded before the file is read, so a malformed
    request never changes the file.
    """
    body = await request.body()

    try:
        changes = decode_changes(body)
    except DecodeError as e:
        logger.warning(f"Rejected change set: {e}")
        return _error_response(e, 400)

    try:
        content = await deps.store.read()
        await deps.store.write(apply_changes(content, changes))
    except StoreError as e:
        capture_exception(e, {"hosts_file": deps.settings.hosts_file})
        return _error_response(e, 500)

    return Response(status_code=204, media_type=MEDIA_TYPE)


@router.post("/adjustendpoints")
@sentry_exception_catcher
async def adjust_endpoints(request: Request):
    """Return the submitted endpoints unchanged."""
    body = await request.body()

    try:
        endpoints = decode_endpoints(body)
    except DecodeError as e:
        logger.warning(f"Rejected endpoints: {e}")
        return _error_response(e, 400)

    return _webhook_response(encode_endpoints(endpoints))
