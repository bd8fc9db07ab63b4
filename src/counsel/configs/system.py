from datetime import timedelta

from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """Upstream AI gateway (OpenAI-compatible chat completions)."""

    endpoint: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="Chat completions endpoint URL",
    )
    api_key: str | None = Field(
        default=None, description="Bearer secret for the gateway"
    )
    model: str = Field(
        default="google/gemini-2.5-flash",
        description="Model identifier sent with every request",
    )
    connect_timeout: timedelta = Field(
        default=timedelta(seconds=10),
        description="Connect timeout; reads are unbounded while streaming",
    )


class StoreConfig(BaseModel):
    """Hosted data store (Supabase) connection settings."""

    url: str = Field(default="http://localhost:54321", description="Project URL")
    anon_key: str = Field(default="", description="Anonymous (public) API key")
    profiles_table: str = Field(default="profiles")
    documents_table: str = Field(default="documents")
    document_limit: int = Field(
        default=5, description="Maximum documents loaded into the context"
    )


class ChatConfig(BaseModel):
    """Context assembly settings."""

    document_excerpt_chars: int = Field(
        default=2000,
        description="Characters of extracted text kept per document",
    )


class APIConfig(BaseModel):
    """Inbound HTTP settings."""

    allow_origin: str = Field(default="*")
    allow_headers: str = Field(
        default="authorization, x-client-info, apikey, content-type"
    )

    @property
    def cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Headers": self.allow_headers,
        }


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="JSON lines instead of coloured dev output"
    )
