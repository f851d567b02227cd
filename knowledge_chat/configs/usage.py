"""
Usage budget configuration settings.

Limits on external model calls per process. Unset limits mean unlimited.

Dependencies: pydantic, pydantic_settings
System role: Quota configuration for the usage budget
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_chat.configs.base import ServiceSettings


class UsageSettings(ServiceSettings):
    """External call quota configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="USAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    embed_limit: int | None = Field(default=None, ge=0, description="Max embedding calls")
    chat_limit: int | None = Field(default=None, ge=0, description="Max chat completion calls")
