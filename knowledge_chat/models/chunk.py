"""
Chunk domain model.

Represents one overlapping, word-aligned span of an ingested text.

Dependencies: pydantic
System role: Chunker output
"""

from pydantic import BaseModel, ConfigDict, Field


class TextChunk(BaseModel):
    """Immutable text chunk; index reflects position in the source."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text, stripped of surrounding whitespace")
    index: int = Field(ge=0, description="Zero-based position in the source text")
    total_chunks: int = Field(ge=0, description="Number of chunks produced from the source")
