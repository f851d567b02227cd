"""
Knowledge base domain models.

Stored knowledge items and the per-query similarity results derived
from them.

Dependencies: pydantic
System role: Retrieval data structures
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeMetadata(BaseModel):
    """Provenance recorded for each ingested chunk."""

    model_config = ConfigDict(frozen=True, extra="allow")

    source_name: str = Field(default="", description="Uploaded file name")
    chunk_index: int = Field(default=0, description="Chunk position in the source")
    total_chunks: int = Field(default=0, description="Chunks produced from the source")
    ingestion_timestamp: str = Field(default="", description="ISO-8601 ingestion time")


class KnowledgeItem(BaseModel):
    """A stored chunk with its embedding. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    embedding: list[float] = Field(default_factory=list)
    metadata: KnowledgeMetadata = Field(default_factory=KnowledgeMetadata)


class SimilarityResult(BaseModel):
    """Retrieved context item returned to callers and fed into generation."""

    type: Literal["knowledge_base"] = "knowledge_base"
    id: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float = Field(description="Cosine similarity rounded to 4 decimals")
