"""Configuration for the terminal client."""

import uuid

from pydantic import BaseModel, Field


class CLIConfig(BaseModel):
    """Terminal client settings."""

    url: str = Field(
        default="http://localhost:8000/api/v1/chat",
        description="Full URL of the chat proxy endpoint",
    )
    token: str = Field(default="", description="Caller access token (JWT)")
    conversation_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Conversation identifier sent with each request",
    )

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": "text/event-stream"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers
