"""Centralized FastAPI dependency type aliases.

Each alias wraps a single ``get_*`` factory, which tests can replace via
``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from counsel.configs.config import get_api_config
from counsel.configs.system import APIConfig
from counsel.core.proxy import ChatProxy, get_chat_proxy

APIConfigDep = Annotated[APIConfig, Depends(get_api_config)]
ChatProxyDep = Annotated[ChatProxy, Depends(get_chat_proxy)]
