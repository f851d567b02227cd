"""
Ingestion service.

Turns raw text into stored knowledge items: chunk, embed the first batch
in one call, then persist each item independently.

Dependencies: knowledge_chat.core, knowledge_chat.boundary.interfaces
System role: Ingestion pipeline orchestration
"""

import logging
import time
import uuid
from datetime import datetime, timezone

from knowledge_chat.boundary.interfaces import EmbeddingProvider, KnowledgeStore
from knowledge_chat.configs.pipeline import MAX_EMBED_BATCH
from knowledge_chat.core.chunker import TextChunker
from knowledge_chat.core.exceptions import EmbeddingError
from knowledge_chat.core.usage_budget import EMBED, UsageBudget
from knowledge_chat.models.ingestion import IngestionResult, ItemOutcome
from knowledge_chat.models.knowledge import KnowledgeItem, KnowledgeMetadata

logger = logging.getLogger(__name__)

UNCHUNKABLE_REASON = "unchunkable input"
EMBEDDING_FAILED_REASON = "embedding failed"


class IngestionService:
    """
    Ingestion pipeline for the knowledge base.

    Best-effort bulk write: no transaction spans the batch and failed
    inserts are not rolled back or retried.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        store: KnowledgeStore,
        chunker: TextChunker | None = None,
        budget: UsageBudget | None = None,
        max_batch_size: int = MAX_EMBED_BATCH,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            embedder: Embedding collaborator
            store: Knowledge store collaborator
            chunker: Text chunker (default 1500/300)
            budget: Usage budget consulted before embedding
            max_batch_size: Chunks embedded per call; the rest are dropped
        """
        self.embedder = embedder
        self.store = store
        self.chunker = chunker or TextChunker()
        self.budget = budget or UsageBudget()
        self.max_batch_size = max_batch_size

    async def ingest(self, raw_text: str, source_name: str) -> IngestionResult:
        """
        Ingest one document.

        Flow:
        1. Chunk the text (no chunks -> failure result, no side effects)
        2. Truncate to the first max_batch_size chunks
        3. Embed the batch in one call (failure -> failure result, nothing stored)
        4. Insert each item on its own, recording per-item outcomes

        Args:
            raw_text: Document text
            source_name: Source file name recorded in metadata

        Returns:
            IngestionResult: Aggregate counts plus per-item outcomes

        Raises:
            QuotaExhaustedError: If the embedding budget is spent
        """
        start_time = time.perf_counter()
        chunks = self.chunker.chunk(raw_text)
        if not chunks:
            logger.warning(f"{__name__}:ingest - no chunks produced for source={source_name}")
            return IngestionResult(
                success=False,
                source_name=source_name,
                reason=UNCHUNKABLE_REASON,
            )

        batch = chunks[: self.max_batch_size]
        if len(chunks) > len(batch):
            logger.warning(
                f"{__name__}:ingest - {len(chunks)} chunks truncated to {len(batch)} for source={source_name}"
            )

        self.budget.consume(EMBED)
        try:
            embeddings = await self.embedder.embed_batch([chunk.text for chunk in batch])
        except EmbeddingError as e:
            logger.error(f"{__name__}:ingest - embedding failed for source={source_name}: {e}")
            return IngestionResult(
                success=False,
                source_name=source_name,
                total_chunks=len(chunks),
                reason=EMBEDDING_FAILED_REASON,
                error=e.message,
            )

        ingestion_timestamp = datetime.now(timezone.utc).isoformat()
        outcomes: list[ItemOutcome] = []
        for chunk, embedding in zip(batch, embeddings):
            item = KnowledgeItem(
                id=str(uuid.uuid4()),
                content=chunk.text,
                embedding=embedding,
                metadata=KnowledgeMetadata(
                    source_name=source_name,
                    chunk_index=chunk.index,
                    total_chunks=len(chunks),
                    ingestion_timestamp=ingestion_timestamp,
                ),
            )
            try:
                await self.store.insert_item(item)
                outcomes.append(ItemOutcome(chunk_index=chunk.index, stored=True, item_id=item.id))
            except Exception as e:
                logger.error(f"{__name__}:ingest - knowledge item creation error chunk={chunk.index}: {e}")
                outcomes.append(ItemOutcome(chunk_index=chunk.index, stored=False, error=str(e)))

        result = IngestionResult(
            success=True,
            source_name=source_name,
            total_chunks=len(chunks),
            accepted_chunks=len(embeddings),
            outcomes=outcomes,
        )
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest - source={source_name} total_chunks={result.total_chunks} "
            f"accepted={result.accepted_chunks} stored={result.stored_chunks} "
            f"elapsed_ms={elapsed_ms:.1f}"
        )
        return result
