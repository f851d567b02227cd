"""
RAG pipeline configuration settings.

Chunking, ranking, history and sampling parameters for ingestion and chat.
Defaults match the embedding provider limits (1500 chars per chunk,
96 inputs per embedding call).

Dependencies: pydantic, pydantic_settings
System role: Retrieval and generation tuning
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from knowledge_chat.configs.base import ServiceSettings

MAX_CHUNK_SIZE = 1500
MAX_CHUNK_OVERLAP = 300
MAX_EMBED_BATCH = 96


class PipelineSettings(ServiceSettings):
    """Chunking, retrieval and generation parameters."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=MAX_CHUNK_SIZE, ge=1, le=MAX_CHUNK_SIZE)
    chunk_overlap: int = Field(default=MAX_CHUNK_OVERLAP, ge=0, le=MAX_CHUNK_OVERLAP)
    max_batch_size: int = Field(
        default=MAX_EMBED_BATCH,
        ge=1,
        le=MAX_EMBED_BATCH,
        description="Chunks embedded per ingestion (extra chunks are dropped)",
    )

    top_k: int = Field(default=5, ge=1, description="Candidates kept before thresholding")
    similarity_threshold: float = Field(
        default=0.3,
        description="Results must score strictly above this value",
    )

    history_limit: int = Field(default=10, ge=0, description="History messages forwarded")
    max_tokens: int = Field(default=500, ge=1)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)

    @model_validator(mode="after")
    def _check_overlap(self) -> "PipelineSettings":
        if self.chunk_overlap > self.chunk_size * 0.2:
            raise ValueError("chunk_overlap cannot be larger than 20% of chunk_size")
        return self
