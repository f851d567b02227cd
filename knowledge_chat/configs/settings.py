"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError

from knowledge_chat.configs.base import ServiceSettings
from knowledge_chat.configs.database import DatabaseSettings
from knowledge_chat.configs.llm import LLMSettings
from knowledge_chat.configs.pipeline import PipelineSettings
from knowledge_chat.configs.usage import UsageSettings
from knowledge_chat.core.exceptions import ConfigurationError


class Settings(ServiceSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    usage: UsageSettings = Field(default_factory=UsageSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Raises:
        ConfigurationError: If any setting fails validation

    Usage:
        from knowledge_chat.configs import get_settings
        settings = get_settings()
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
