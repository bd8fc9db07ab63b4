"""Supabase-backed context store.

Each session is a fresh ``AsyncClient`` that forwards the caller's own
``Authorization`` header, so the platform's row-level security decides
which rows are visible.  The auth and PostgREST sub-clients run on the
application's pooled ``httpx.AsyncClient``; headers travel per request,
so the pool never holds a caller's credential.
"""

import logging

import httpx
from supabase import AsyncClient, AuthError, PostgrestAPIError, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from counsel.configs.system import StoreConfig
from counsel.core.models import Caller, Document, Profile

from .base import ContextStore, StoreSession

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "
_DOCUMENT_COLUMNS = "file_name, extracted_text"


def bearer_token(authorization: str) -> str:
    """Strip an optional ``Bearer`` scheme from a header value."""
    value = authorization.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        return value[len(_BEARER_PREFIX):].strip()
    return value


class SupabaseStoreSession(StoreSession):
    def __init__(self, caller: Caller, client: AsyncClient, config: StoreConfig) -> None:
        super().__init__(caller)
        self._client = client
        self._config = config

    async def get_profile(self) -> Profile | None:
        try:
            response = await (
                self._client.table(self._config.profiles_table)
                .select("*")
                .eq("id", self.caller.id)
                .limit(1)
                .execute()
            )
        except PostgrestAPIError as e:
            logger.warning("Profile lookup failed for %s: %s", self.caller.id, e)
            return None

        rows = response.data or []
        if not rows:
            return None
        return Profile.model_validate(rows[0])

    async def list_documents(self, limit: int) -> list[Document]:
        try:
            response = await (
                self._client.table(self._config.documents_table)
                .select(_DOCUMENT_COLUMNS)
                .eq("user_id", self.caller.id)
                .limit(limit)
                .execute()
            )
        except PostgrestAPIError as e:
            logger.warning("Document lookup failed for %s: %s", self.caller.id, e)
            return []

        return [Document.model_validate(row) for row in response.data or []]


class SupabaseContextStore(ContextStore):
    """``ContextStore`` on the ``supabase`` async client."""

    def __init__(self, config: StoreConfig, http: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http

    async def _client_for(self, authorization: str) -> AsyncClient:
        options = AsyncClientOptions(
            headers={"Authorization": authorization},
            auto_refresh_token=False,
            persist_session=False,
            httpx_client=self._http,
        )
        return await acreate_client(self._config.url, self._config.anon_key, options)

    async def authenticate(self, authorization: str) -> StoreSession | None:
        client = await self._client_for(authorization)
        try:
            response = await client.auth.get_user(bearer_token(authorization))
        except AuthError as e:
            logger.info("Credential rejected by auth service: %s", e)
            return None

        user = getattr(response, "user", None)
        if user is None:
            return None
        caller = Caller(id=str(user.id), email=getattr(user, "email", None))
        return SupabaseStoreSession(caller, client, self._config)
