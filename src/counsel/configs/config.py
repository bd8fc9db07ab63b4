"""Configuration management using pydantic-settings.

**Not a singleton** -- each call to ``get_app_config()`` re-reads config
from the environment and disk.

Priority order (highest first):

1. Environment variables (``COUNSEL_`` prefix, ``__`` for nesting)
2. ``.env`` dotenv file
3. Static YAML (``configs/config.yaml``)
4. Init defaults / field defaults
5. File secrets
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import APIConfig, ChatConfig, GatewayConfig, LoggingConfig, StoreConfig

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "COUNSEL_"

DEFAULT_ENCODING = "utf-8"


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    gateway: GatewayConfig = Field(
        default_factory=GatewayConfig,
        description="Upstream AI gateway settings",
    )

    store: StoreConfig = Field(
        default_factory=StoreConfig,
        description="Hosted data store settings",
    )

    chat: ChatConfig = Field(
        default_factory=ChatConfig, description="Context assembly settings"
    )

    api: APIConfig = Field(
        default_factory=APIConfig, description="Inbound HTTP settings"
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging settings"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            init_settings,
            file_secret_settings,
        )


def get_app_config() -> AppConfig:
    """Get the application configuration (fresh on every call)."""
    return AppConfig()


def get_gateway_config() -> GatewayConfig:
    return get_app_config().gateway


def get_store_config() -> StoreConfig:
    return get_app_config().store


def get_chat_config() -> ChatConfig:
    return get_app_config().chat


def get_api_config() -> APIConfig:
    return get_app_config().api
