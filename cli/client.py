"""API client for the chat proxy with OpenAI-style SSE parsing."""

import json
import logging
from typing import AsyncIterator

import httpx

from .config import CLIConfig

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"

# Sentinel event marking the upstream ``[DONE]`` line.
DONE_EVENT = {"type": "done"}


def parse_sse_line(line: str) -> dict | None:
    """Turn one SSE line into a client event.

    Returns ``None`` for blank lines, comments (``: keep-alive``), other
    fields and deltas without text.
    """
    line = line.strip()
    if not line.startswith(SSE_DATA_PREFIX):
        return None

    data = line[len(SSE_DATA_PREFIX):].strip()
    if data == SSE_DONE:
        return DONE_EVENT

    try:
        chunk = json.loads(data)
    except json.JSONDecodeError:
        logger.warning("Failed to parse SSE data: %s", data)
        return None

    choices = chunk.get("choices") or []
    if not choices:
        return None
    content = (choices[0].get("delta") or {}).get("content")
    if not content:
        return None
    return {"type": "content", "content": content}


def _error_event(status_code: int, body: bytes) -> dict:
    try:
        message = json.loads(body).get("error") or body.decode()
    except (json.JSONDecodeError, AttributeError, UnicodeDecodeError):
        message = body.decode(errors="replace")
    return {"type": "error", "message": message, "code": f"HTTP_{status_code}"}


class ChatAPIClient:
    """Client for the chat proxy endpoint."""

    def __init__(self, config: CLIConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(None, connect=10.0))

    async def chat(self, messages: list[dict]) -> AsyncIterator[dict]:
        """Send the conversation and stream events.

        Yields
        ------
        dict
            ``content`` events with text deltas, then a single ``done``
            event, or one ``error`` event.
        """
        payload = {
            "messages": messages,
            "conversationId": self.config.conversation_id,
        }
        logger.debug("POST %s with %d message(s)", self.config.url, len(messages))

        try:
            async with self.client.stream(
                "POST", self.config.url, json=payload, headers=self.config.headers
            ) as response:
                logger.debug("Response status: %s", response.status_code)

                if response.status_code != 200:
                    yield _error_event(response.status_code, await response.aread())
                    return

                async for line in response.aiter_lines():
                    event = parse_sse_line(line)
                    if event is None:
                        continue
                    yield event
                    if event is DONE_EVENT:
                        return

        except httpx.TimeoutException:
            yield {"type": "error", "message": "Request timed out.", "code": "TIMEOUT"}
        except httpx.ConnectError as e:
            yield {
                "type": "error",
                "message": f"Connection error: {e}",
                "code": "CONNECTION_ERROR",
            }

    async def close(self):
        await self.client.aclose()
