"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from counsel.api.chat import router as chat_router
from counsel.api.exceptions import register_exception_handlers
from counsel.api.health import router as health_router
from counsel.configs.config import get_app_config
from counsel.core.metrics import instrument_app
from counsel.infra.http import build_http_client
from counsel.infra.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the shared HTTP client for the lifetime of the process."""
    config = get_app_config()
    setup_logging(config.logging)
    logger.info("Starting Counsel (gateway=%s)", config.gateway.endpoint)
    if not config.gateway.api_key:
        logger.warning("Gateway API key is not configured; chat requests will fail.")

    async with asynccontextmanager(build_http_client)(app, config.gateway):
        yield

    logger.info("Shutting down Counsel")


def get_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Counsel",
        description="Academic guidance chat proxy",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    instrument_app(app)

    app.include_router(health_router)
    app.include_router(chat_router)

    return app


app = get_app()
