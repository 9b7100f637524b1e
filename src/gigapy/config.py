"""Configuration management - environment and .env driven."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gigapy.models.auth import Scope

DEFAULT_BASE_URL = "https://gigachat.devices.sberbank.ru/api/v1"
DEFAULT_AUTH_URL = "https://ngw.devices.sberbank.ru:9443/api/v2/oauth"


class Settings(BaseSettings):
    """Client settings from GIGACHAT_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="GIGACHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    auth_key: str = Field(default="", description="Authorization secret (base64 id:secret)")
    scope: Scope = Field(default=Scope.PERSONAL, description="Token audience")

    # Endpoints
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Resource API base URL")
    auth_url: str = Field(default=DEFAULT_AUTH_URL, description="Token endpoint URL")

    # Transport
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    # Models
    model: str = Field(default="GigaChat:latest", description="Default chat model")
    embeddings_model: str = Field(default="Embeddings", description="Default embeddings model")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
