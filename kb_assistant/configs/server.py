"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Uvicorn configuration for the API shell
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Uvicorn bind address settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SERVER_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(
        default=3001,
        validation_alias=AliasChoices("PORT", "SERVER_PORT"),
        description="Bind port",
    )
