"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hosts_webhook.api.healthcheck import router as healthcheck_router
from hosts_webhook.api.models import MEDIA_TYPE
from hosts_webhook.api.routes import router
from hosts_webhook.core.config import get_settings
from hosts_webhook.utils.decorators import init_sentry

# Configure logging for the application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logging.getLogger("hosts_webhook").setLevel(get_settings().log_level_name)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler."""
    init_sentry()
    settings = get_settings()

    logger.info("Hosts webhook provider starting...")
    logger.info(f"Listening on: {settings.listen_url}")
    logger.info(f"Hosts file: {settings.hosts_file}")
    logger.info(f"Atomic writes: {'enabled' if settings.atomic_write else 'disabled'}")
    logger.info(f"Sentry: {'enabled' if settings.sentry_dsn else 'disabled'}")
    logger.info(f"Media type: {MEDIA_TYPE}")

    yield

    logger.info("Hosts webhook provider shutting down...")


app = FastAPI(
    title="Hosts Webhook",
    description="external-dns webhook provider backed by the hosts file",
    version="1.0.0",
    lifespan=lifespan,
)

# Include API routes
app.include_router(router)
app.include_router(healthcheck_router)
