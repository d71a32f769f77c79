"""
Generation configuration settings.

Settings for the Gemini chat model used to produce grounded answers.

Dependencies: pydantic, pydantic_settings
System role: Text generation configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Gemini generation model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    model: str = Field(default="gemini-2.5-flash", description="Gemini model ID")
    temperature: float = Field(default=0.2, description="Sampling temperature", ge=0.0, le=2.0)
    timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound on a single generation call",
        gt=0.0,
    )
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GENERATION_API_KEY"),
        description="Google Gemini API key",
    )
