"""FastAPI dependency factory for the context store."""

from typing import Annotated

import httpx
from fastapi import Depends

from counsel.configs.config import get_store_config
from counsel.configs.system import StoreConfig
from counsel.infra.http import get_http_client

from .base import ContextStore
from .supabase import SupabaseContextStore


def get_context_store(
    config: Annotated[StoreConfig, Depends(get_store_config)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> ContextStore:
    """Per-request store on the shared HTTP pool.

    Override in tests via ``app.dependency_overrides``.
    """
    return SupabaseContextStore(config, http)
