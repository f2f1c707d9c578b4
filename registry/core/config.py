"""
Application settings loaded from environment variables.

Uses pydantic-settings so that every config value is validated at startup.
Nested groups are addressed with a double underscore, e.g.
``ALLOWLIST__TTL_SECONDS=60``.
"""

from typing import List

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class AllowlistSettings(BaseModel):
    """Remote allow-list used to gate mutations."""

    url: str = "https://www.owockibot.xyz/api/whitelist"
    ttl_seconds: float = 300.0
    timeout_seconds: float = 10.0


class RegistrySettings(BaseModel):
    """Behaviour switches for the project registry."""

    # When false, DELETE /projects/{id} only checks ownership if an owner
    # field is supplied.
    require_owner_on_delete: bool = False


class Settings(BaseSettings):
    """Central configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    APP_NAME: str = "Self-Curated Registry"
    ENV: str = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3013
    API_PREFIX: str = ""
    CORS_ORIGINS: List[str] = ["*"]

    allowlist: AllowlistSettings = AllowlistSettings()
    registry: RegistrySettings = RegistrySettings()


# Singleton, imported everywhere as `from registry.core.config import settings`
settings = Settings()
