"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Validation failures surface as ConfigurationError so the process fails
fast at startup instead of at the first request.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field, ValidationError

from kb_assistant.configs.base import BaseSettings
from kb_assistant.configs.generation import GenerationSettings
from kb_assistant.configs.retrieval import RetrievalSettings
from kb_assistant.configs.server import ServerSettings
from kb_assistant.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Returns:
        Settings: Validated application settings

    Raises:
        ConfigurationError: When any setting is invalid or inconsistent
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from kb_assistant.configs import get_settings
        settings = get_settings()
    """
    return load_settings()
