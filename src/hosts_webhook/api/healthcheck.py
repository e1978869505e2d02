"""Health check API endpoint."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.api_route("/healthz", methods=["GET", "POST", "PUT", "DELETE"])
async def healthz() -> PlainTextResponse:
    """Liveness probe, always ``ok``."""
    return PlainTextResponse("ok")
