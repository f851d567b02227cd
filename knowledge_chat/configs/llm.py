"""
Model provider configuration settings.

Settings for the Gemini chat and embedding models used as the
generation and embedding collaborators.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_chat.configs.base import ServiceSettings


class LLMSettings(ServiceSettings):
    """Gemini model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini chat model used for answer generation",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Output dimensionality requested from the embedding model",
    )
