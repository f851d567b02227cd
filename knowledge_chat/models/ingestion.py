"""
Ingestion domain models and schemas.

Per-item outcomes are kept internally; the wire only carries aggregate
statistics.

Dependencies: pydantic
System role: Ingestion results and API contracts
"""

from pydantic import BaseModel, Field


class ItemOutcome(BaseModel):
    """Result of persisting one knowledge item."""

    chunk_index: int
    stored: bool
    item_id: str | None = None
    error: str | None = None


class IngestionResult(BaseModel):
    """Aggregate result of one ingestion call."""

    success: bool
    source_name: str
    total_chunks: int = 0
    accepted_chunks: int = 0
    reason: str | None = None
    error: str | None = None
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    @property
    def stored_chunks(self) -> int:
        """Number of items that were actually persisted."""
        return sum(1 for outcome in self.outcomes if outcome.stored)


class IngestStats(BaseModel):
    """Upload statistics reported to the caller."""

    filename: str
    total_chunks: int
    accepted_chunks: int
    file_size: int


class IngestResponse(BaseModel):
    """Response of the ingest endpoint."""

    success: bool
    message: str
    stats: IngestStats
