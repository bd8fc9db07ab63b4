"""Tests for the terminal client: SSE parsing, error bodies and history."""

import io
import json

import httpx
import pytest

from cli.client import DONE_EVENT, ChatAPIClient, parse_sse_line
from cli.config import CLIConfig
from cli.counsel_cli import CounselCLI

from .conftest import SSE_CHUNKS, aiter_chunks

URL = "http://proxy.test/api/v1/chat"


def _client(handler) -> ChatAPIClient:
    config = CLIConfig(url=URL, token="tok", conversation_id="conv-9")
    return ChatAPIClient(config, httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestParseSSELine:
    def test_content_delta(self):
        line = 'data: {"choices":[{"delta":{"content":"Hi"}}]}'
        assert parse_sse_line(line) == {"type": "content", "content": "Hi"}

    def test_done(self):
        assert parse_sse_line("data: [DONE]") is DONE_EVENT

    @pytest.mark.parametrize(
        "line",
        [
            "",
            ": keep-alive",
            "event: message",
            'data: {"choices":[]}',
            'data: {"choices":[{"delta":{"role":"assistant"}}]}',
            "data: {not json",
        ],
    )
    def test_ignored(self, line):
        assert parse_sse_line(line) is None


class TestChatAPIClient:
    @pytest.mark.asyncio
    async def test_streams_content_until_done(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, content=aiter_chunks(SSE_CHUNKS))

        messages = [{"role": "user", "content": "hello"}]
        events = [e async for e in _client(handler).chat(messages)]

        assert events == [
            {"type": "content", "content": "Hello"},
            {"type": "content", "content": ", student"},
            DONE_EVENT,
        ]
        assert requests[0].headers["authorization"] == "Bearer tok"
        assert json.loads(requests[0].content) == {
            "messages": [{"role": "user", "content": "hello"}],
            "conversationId": "conv-9",
        }

    @pytest.mark.asyncio
    async def test_json_error_body(self):
        def handler(request):
            return httpx.Response(
                429, json={"error": "Rate limit exceeded. Please try again in a moment."}
            )

        events = [e async for e in _client(handler).chat([])]
        assert events == [
            {
                "type": "error",
                "message": "Rate limit exceeded. Please try again in a moment.",
                "code": "HTTP_429",
            }
        ]

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        events = [e async for e in _client(handler).chat([])]
        assert events[0]["code"] == "CONNECTION_ERROR"


class TestCounselCLI:
    @pytest.mark.asyncio
    async def test_history_grows_with_replies(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, content=aiter_chunks(SSE_CHUNKS))

        output = io.StringIO()
        client = _client(handler)
        cli = CounselCLI(client.config, io.StringIO(), output, client=client)

        await cli.send("first")
        await cli.send("second")

        assert cli.history == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "Hello, student"},
            {"role": "user", "content": "second"},
            {"role": "assistant", "content": "Hello, student"},
        ]
        assert bodies[1]["messages"][0] == {"role": "user", "content": "first"}
        assert "Hello, student" in output.getvalue()

    @pytest.mark.asyncio
    async def test_failed_turn_not_kept(self):
        def handler(request):
            return httpx.Response(402, json={"error": "AI usage limit reached. Please contact support."})

        output = io.StringIO()
        client = _client(handler)
        cli = CounselCLI(client.config, io.StringIO(), output, client=client)

        await cli.send("hello")

        assert cli.history == []
        assert "Error [HTTP_402]: AI usage limit reached" in output.getvalue()

    @pytest.mark.asyncio
    async def test_run_exits_on_quit(self):
        def handler(request):
            return httpx.Response(200, content=aiter_chunks(SSE_CHUNKS))

        output = io.StringIO()
        client = _client(handler)
        cli = CounselCLI(client.config, io.StringIO("hi\nquit\n"), output, client=client)

        await cli.run()

        assert "Goodbye!" in output.getvalue()
        assert len(cli.history) == 2
