"""Chat proxy endpoint."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import StreamingResponse

from counsel.core.exceptions import InternalProxyError, ProxyError
from counsel.core.gateway import relay
from counsel.core.metrics import CHAT_REQUESTS_TOTAL, OUTCOME_STREAMED
from counsel.core.models import ChatRequest

from .deps import APIConfigDep, ChatProxyDep

logger = logging.getLogger(__name__)

STREAMING_RESPONSE_MEDIA_TYPE = "text/event-stream"

router = APIRouter(prefix="/api/v1", tags=["chat"])


@router.options("/chat")
async def chat_preflight(api_config: APIConfigDep) -> Response:
    """CORS preflight; answered without looking at credentials."""
    return Response(status_code=200, headers=api_config.cors_headers)


@router.post("/chat")
async def chat(
    request: Request,
    proxy: ChatProxyDep,
    api_config: APIConfigDep,
) -> StreamingResponse:
    """Relay the caller's conversation to the AI gateway.

    Errors before the upstream stream opens are JSON ``{"error": ...}``
    bodies; once streaming starts the upstream bytes pass through
    untouched.
    """
    try:
        session = await proxy.authenticate(request.headers.get("authorization"))
        chat_request = ChatRequest.model_validate(await request.json())
        upstream = await proxy.open_stream(session, chat_request)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Chat error")
        raise InternalProxyError(str(e)) from e

    CHAT_REQUESTS_TOTAL.labels(outcome=OUTCOME_STREAMED).inc()
    return StreamingResponse(
        relay(upstream),
        media_type=STREAMING_RESPONSE_MEDIA_TYPE,
        headers=api_config.cors_headers,
    )
