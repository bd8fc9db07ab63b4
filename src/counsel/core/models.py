"""Read-only records loaded from the data store."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Caller(BaseModel):
    """Identity resolved from the caller's bearer credential."""

    id: str
    email: str | None = None


class Profile(BaseModel):
    """Row of the ``profiles`` table."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    full_name: str | None = None
    academic_level: str | None = None
    interests: list[str] | None = None
    skills: list[str] | None = None
    academic_scores: dict[str, Any] | None = None


class Document(BaseModel):
    """Row of the ``documents`` table (only the columns the context needs)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    user_id: str | None = None
    file_name: str | None = None
    extracted_text: str | None = None


class ChatRequest(BaseModel):
    """Inbound ``POST /chat`` body.

    Messages are forwarded upstream exactly as received.
    """

    messages: list[dict[str, Any]] = Field(
        description="Ordered ``{role, content}`` messages"
    )
    conversation_id: str | None = Field(default=None, alias="conversationId")
