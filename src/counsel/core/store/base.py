"""Context store interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from counsel.core.models import Caller, Document, Profile


class StoreSession(ABC):
    """Caller-scoped, read-only view of the data store."""

    def __init__(self, caller: Caller) -> None:
        self.caller = caller

    @abstractmethod
    async def get_profile(self) -> Profile | None:
        """Return the caller's profile, or ``None`` when absent."""

    @abstractmethod
    async def list_documents(self, limit: int) -> list[Document]:
        """Return up to *limit* of the caller's documents in store order."""


class ContextStore(ABC):
    """Credential-validating entry point to the data store."""

    @abstractmethod
    async def authenticate(self, authorization: str) -> StoreSession | None:
        """Resolve a raw ``Authorization`` header value to a session.

        Returns:
            ``None`` when the credential does not identify a caller.
        """
