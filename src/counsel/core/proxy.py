"""Chat proxy service: authenticate, gather context, open the upstream stream."""

import asyncio
import logging
from typing import Annotated

import httpx
from fastapi import Depends

from counsel.configs.config import get_chat_config, get_store_config
from counsel.configs.system import ChatConfig, StoreConfig
from counsel.infra.telemetry import (
    ATTR_CONTEXT_CHARS,
    ATTR_CONTEXT_DOCUMENTS,
    ATTR_CONTEXT_HAS_PROFILE,
    SPAN_CHAT_CONTEXT,
    tracer,
)

from .context import build_context, build_messages, build_system_prompt
from .exceptions import InvalidCredentials, MissingCredentials
from .gateway import GatewayClient, get_gateway_client
from .models import ChatRequest
from .store import ContextStore, StoreSession, get_context_store

logger = logging.getLogger(__name__)


class ChatProxy:
    """Per-request proxy from a caller's conversation to the AI gateway."""

    def __init__(
        self,
        store: ContextStore,
        gateway: GatewayClient,
        store_config: StoreConfig,
        chat_config: ChatConfig,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._store_config = store_config
        self._chat_config = chat_config

    async def authenticate(self, authorization: str | None) -> StoreSession:
        if not authorization:
            raise MissingCredentials()
        session = await self._store.authenticate(authorization)
        if session is None:
            raise InvalidCredentials()
        return session

    async def system_prompt(self, session: StoreSession) -> str:
        """Build the system prompt from the caller's profile and documents.

        The two reads are independent and run concurrently.
        """
        with tracer.start_as_current_span(SPAN_CHAT_CONTEXT) as span:
            profile, documents = await asyncio.gather(
                session.get_profile(),
                session.list_documents(self._store_config.document_limit),
            )
            context = build_context(
                profile, documents, self._chat_config.document_excerpt_chars
            )
            span.set_attribute(ATTR_CONTEXT_HAS_PROFILE, profile is not None)
            span.set_attribute(ATTR_CONTEXT_DOCUMENTS, len(documents))
            span.set_attribute(ATTR_CONTEXT_CHARS, len(context))
        return build_system_prompt(context)

    async def open_stream(
        self, session: StoreSession, chat_request: ChatRequest
    ) -> httpx.Response:
        prompt = await self.system_prompt(session)
        logger.info(
            "Forwarding %d message(s) for caller %s (conversation %s)",
            len(chat_request.messages),
            session.caller.id,
            chat_request.conversation_id,
        )
        return await self._gateway.open_stream(
            build_messages(prompt, chat_request.messages)
        )


def get_chat_proxy(
    store: Annotated[ContextStore, Depends(get_context_store)],
    gateway: Annotated[GatewayClient, Depends(get_gateway_client)],
    store_config: Annotated[StoreConfig, Depends(get_store_config)],
    chat_config: Annotated[ChatConfig, Depends(get_chat_config)],
) -> ChatProxy:
    return ChatProxy(store, gateway, store_config, chat_config)
