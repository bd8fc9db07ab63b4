"""Chat-completions streaming client for the upstream AI gateway."""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

import httpx

from counsel.configs.system import GatewayConfig
from counsel.core.exceptions import (
    GatewayNotConfigured,
    GatewayQuotaExceeded,
    GatewayRateLimited,
    GatewayServiceError,
    ProxyError,
)
from counsel.core.metrics import GATEWAY_RESPONSES_TOTAL
from counsel.infra.telemetry import (
    ATTR_GATEWAY_MESSAGES,
    ATTR_GATEWAY_MODEL,
    ATTR_GATEWAY_STATUS,
    SPAN_GATEWAY_OPEN,
    tracer,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[ProxyError]] = {
    429: GatewayRateLimited,
    402: GatewayQuotaExceeded,
}


class GatewayClient:
    """Opens streaming chat completions on a shared ``httpx.AsyncClient``.

    No retries: every non-success upstream status is mapped to a
    ``ProxyError`` and returned to the caller as-is.
    """

    def __init__(self, http: httpx.AsyncClient, config: GatewayConfig) -> None:
        self._http = http
        self._config = config

    def build_request(self, messages: Sequence[dict[str, Any]]) -> httpx.Request:
        if not self._config.api_key:
            raise GatewayNotConfigured()
        return self._http.build_request(
            "POST",
            self._config.endpoint,
            headers={"Authorization": f"Bearer {self._config.api_key}"},
            json={
                "model": self._config.model,
                "messages": list(messages),
                "stream": True,
            },
        )

    async def open_stream(self, messages: Sequence[dict[str, Any]]) -> httpx.Response:
        """Send the request and return once upstream headers arrive.

        The body is left unread on success; the caller owns the response
        and must close it (``relay`` does).
        """
        request = self.build_request(messages)
        with tracer.start_as_current_span(SPAN_GATEWAY_OPEN) as span:
            span.set_attribute(ATTR_GATEWAY_MODEL, self._config.model)
            span.set_attribute(ATTR_GATEWAY_MESSAGES, len(messages))
            response = await self._http.send(request, stream=True)
            span.set_attribute(ATTR_GATEWAY_STATUS, response.status_code)

        GATEWAY_RESPONSES_TOTAL.labels(status=str(response.status_code)).inc()
        if response.is_success:
            return response

        try:
            body = await response.aread()
        finally:
            await response.aclose()
        logger.error(
            "AI gateway error: %s %s",
            response.status_code,
            body.decode("utf-8", errors="replace"),
        )
        raise _STATUS_ERRORS.get(response.status_code, GatewayServiceError)()


async def relay(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield upstream body chunks as they arrive, then close the response.

    Cancellation (client disconnect) lands in ``finally`` so the upstream
    connection is closed instead of being drained.
    """
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    finally:
        await response.aclose()
