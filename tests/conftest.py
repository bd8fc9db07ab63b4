"""Shared fakes: an in-memory context store and a scripted upstream gateway."""

import json
from collections.abc import AsyncIterator, Iterator, Sequence

import httpx
import pytest
from fastapi.testclient import TestClient

from counsel.app import app
from counsel.configs.config import get_gateway_config
from counsel.configs.system import GatewayConfig
from counsel.core.models import Caller, Document, Profile
from counsel.core.store import ContextStore, StoreSession, get_context_store
from counsel.core.store.supabase import bearer_token
from counsel.infra.http import get_http_client

GATEWAY_URL = "https://gateway.test/v1/chat/completions"
GATEWAY_KEY = "test-gateway-key"
VALID_TOKEN = "valid-token"
CALLER_ID = "user-123"

SSE_CHUNKS = [
    b'data: {"choices":[{"delta":{"content":"Hello"}}]}\n\n',
    b'data: {"choices":[{"delta":{"content":", student"}}]}\n\n',
    b"data: [DONE]\n\n",
]


async def aiter_chunks(chunks: Sequence[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


class FakeSession(StoreSession):
    def __init__(
        self,
        caller: Caller,
        profile: Profile | None = None,
        documents: Sequence[Document] = (),
    ) -> None:
        super().__init__(caller)
        self.profile = profile
        self.documents = list(documents)
        self.document_limits: list[int] = []

    async def get_profile(self) -> Profile | None:
        return self.profile

    async def list_documents(self, limit: int) -> list[Document]:
        self.document_limits.append(limit)
        return self.documents[:limit]


class FakeStore(ContextStore):
    """Maps bearer tokens to sessions; unknown tokens are rejected."""

    def __init__(self, sessions: dict[str, FakeSession]) -> None:
        self.sessions = sessions
        self.seen: list[str] = []

    async def authenticate(self, authorization: str) -> StoreSession | None:
        self.seen.append(authorization)
        return self.sessions.get(bearer_token(authorization))


class FakeGateway:
    """Scripted upstream: a status, an error body or a list of SSE chunks."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.error_body = b""
        self.chunks: list[bytes] = list(SSE_CHUNKS)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, content=self.error_body)
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=aiter_chunks(self.chunks),
        )

    @property
    def payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    @property
    def system_prompt(self) -> str:
        return self.payload["messages"][0]["content"]


@pytest.fixture
def profile() -> Profile:
    return Profile(
        id=CALLER_ID,
        full_name="Ada Student",
        academic_level="Undergraduate",
        interests=["Robotics", "Mathematics"],
        skills=["Python", "Calculus"],
        academic_scores={"gpa": 3.8},
    )


@pytest.fixture
def session(profile: Profile) -> FakeSession:
    return FakeSession(
        Caller(id=CALLER_ID),
        profile=profile,
        documents=[Document(file_name="transcript.pdf", extracted_text="A in Physics")],
    )


@pytest.fixture
def fake_store(session: FakeSession) -> FakeStore:
    return FakeStore({VALID_TOKEN: session})


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(endpoint=GATEWAY_URL, api_key=GATEWAY_KEY)


@pytest.fixture
def api_client(
    fake_store: FakeStore,
    fake_gateway: FakeGateway,
    gateway_config: GatewayConfig,
) -> Iterator[TestClient]:
    """``TestClient`` with the store and upstream gateway replaced.

    The lifespan is not entered; the HTTP client comes from the override.
    """
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: fake_gateway.handler(request))
    )
    app.dependency_overrides[get_context_store] = lambda: fake_store
    app.dependency_overrides[get_http_client] = lambda: http
    app.dependency_overrides[get_gateway_config] = lambda: gateway_config
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
