"""FastAPI dependency factory for the gateway client."""

from typing import Annotated

import httpx
from fastapi import Depends

from counsel.configs.config import get_gateway_config
from counsel.configs.system import GatewayConfig
from counsel.infra.http import get_http_client

from .client import GatewayClient


def get_gateway_client(
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    config: Annotated[GatewayConfig, Depends(get_gateway_config)],
) -> GatewayClient:
    return GatewayClient(http, config)
