"""Upstream AI gateway streaming client."""

from .client import GatewayClient, relay  # noqa: F401
from .deps import get_gateway_client  # noqa: F401
