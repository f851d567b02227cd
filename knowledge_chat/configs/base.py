"""
Shared service settings.

Fields every settings class inherits: the .env source, the service
identity shown in the OpenAPI docs, CORS origins and the log level.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ServiceSettings(BaseSettings):
    """Settings shared by the knowledge chat service and its components."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_title: str = Field(
        default="Knowledge Chat RAG API",
        description="Title reported in the OpenAPI schema",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment name, logged at startup",
    )
    debug: bool = Field(default=False, description="FastAPI debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the chat and ingest endpoints",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

