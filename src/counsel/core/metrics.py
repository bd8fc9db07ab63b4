"""Prometheus metrics for the chat proxy.

Business counters that complement the HTTP metrics from
``prometheus-fastapi-instrumentator``.  All metrics use the ``counsel_``
prefix.
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

logger = logging.getLogger(__name__)

CHAT_REQUESTS_TOTAL = Counter(
    "counsel_chat_requests_total",
    "Chat proxy requests by outcome",
    ["outcome"],  # streamed | ProxyError.outcome
)

GATEWAY_RESPONSES_TOTAL = Counter(
    "counsel_gateway_responses_total",
    "Upstream gateway responses by HTTP status",
    ["status"],
)

OUTCOME_STREAMED = "streamed"

_EXCLUDED_HANDLERS = ["/health", "/metrics"]


def instrument_app(app: FastAPI) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint."""
    Instrumentator(
        should_instrument_requests_inprogress=True,
        excluded_handlers=_EXCLUDED_HANDLERS,
    ).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    logger.info("Prometheus metrics initialised")
