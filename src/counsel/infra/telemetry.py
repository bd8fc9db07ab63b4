"""OpenTelemetry tracing helpers.

Only the OTEL *API* is used here: spans are no-ops until a deployment
installs a ``TracerProvider`` (e.g. via ``opentelemetry-instrument``).

Usage::

    from counsel.infra.telemetry import SPAN_CHAT_CONTEXT, tracer

    with tracer.start_as_current_span(SPAN_CHAT_CONTEXT) as span:
        ...
"""

from __future__ import annotations

from opentelemetry import trace

tracer = trace.get_tracer("counsel")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHAT_CONTEXT = "chat.context"
SPAN_GATEWAY_OPEN = "gateway.open_stream"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_CONTEXT_DOCUMENTS = "context.documents"
ATTR_CONTEXT_HAS_PROFILE = "context.has_profile"
ATTR_CONTEXT_CHARS = "context.chars"

ATTR_GATEWAY_MODEL = "gateway.model"
ATTR_GATEWAY_MESSAGES = "gateway.messages"
ATTR_GATEWAY_STATUS = "gateway.status"

