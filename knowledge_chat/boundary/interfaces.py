"""
Collaborator contracts.

Structural interfaces the pipeline depends on. Any provider satisfying
them can be substituted without touching the services.

Dependencies: typing, langchain_core.messages
System role: Ports for embedding, generation and storage
"""

from collections.abc import Sequence
from typing import Protocol

from langchain_core.messages import BaseMessage

from knowledge_chat.models.chat import ChatTurn, GenerationParams
from knowledge_chat.models.knowledge import KnowledgeItem


class EmbeddingProvider(Protocol):
    """Batch embedding capability."""

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed up to 96 texts in one call.

        Fails as a whole; never returns partial results.

        Raises:
            EmbeddingError: If the provider call fails
        """
        ...


class ChatProvider(Protocol):
    """Chat completion capability."""

    async def complete(self, messages: Sequence[BaseMessage], params: GenerationParams) -> ChatTurn:
        """
        Generate the next assistant turn.

        Raises:
            GenerationError: If the provider call fails
        """
        ...


class KnowledgeStore(Protocol):
    """Append-only knowledge item storage."""

    async def query_active_items(self) -> list[KnowledgeItem]:
        """
        All active items with a present embedding.

        Raises:
            StoreError: If the query fails
        """
        ...

    async def insert_item(self, item: KnowledgeItem) -> None:
        """
        Persist one item independently of any other.

        Raises:
            StoreError: If the insert fails
        """
        ...
