"""Shared ``httpx.AsyncClient`` lifespan dependency.

``build_http_client`` creates one pooled client per process, attaches
it to ``app.state`` and closes it on shutdown.  Request handlers read it
through ``get_http_client``.
"""

from collections.abc import AsyncGenerator

import httpx
from fastapi import FastAPI, Request

from counsel.configs.system import GatewayConfig


async def build_http_client(
    app: FastAPI, config: GatewayConfig
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create the pooled client; reads stay unbounded for long streams."""
    timeout = httpx.Timeout(None, connect=config.connect_timeout.total_seconds())
    client = httpx.AsyncClient(timeout=timeout)
    app.state.http_client = client
    try:
        yield client
    finally:
        await client.aclose()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency -- reads from ``app.state``."""
    return request.app.state.http_client
