"""Exception handlers: every error becomes ``{"error": message}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from counsel.configs.config import get_api_config
from counsel.configs.system import APIConfig
from counsel.core.exceptions import InternalProxyError, ProxyError
from counsel.core.metrics import CHAT_REQUESTS_TOTAL

logger = logging.getLogger(__name__)


def _cors_headers() -> dict[str, str]:
    """Configured CORS headers, or the defaults when the config cannot load."""
    try:
        return get_api_config().cors_headers
    except ValidationError as e:
        logger.error("Invalid configuration, using default CORS headers: %s", e)
        return APIConfig().cors_headers


async def handle_proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
    CHAT_REQUESTS_TOTAL.labels(outcome=exc.outcome).inc()
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=_cors_headers(),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Failures outside a route body, e.g. while resolving dependencies."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await handle_proxy_error(request, InternalProxyError(str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, handle_proxy_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
