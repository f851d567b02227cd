"""
SQL knowledge store adapter.

Implements the KnowledgeStore contract on top of KnowledgeItemCRUD.
Every call opens its own session, so each insert commits or fails on
its own without affecting sibling inserts.

Dependencies: sqlalchemy, knowledge_chat.boundary.db
System role: Knowledge store business adapter
"""

import logging
import uuid

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from knowledge_chat.boundary.db.CRUD.knowledge_item_crud import knowledge_item_crud
from knowledge_chat.boundary.db.models.knowledge_item_model import KnowledgeItemModel
from knowledge_chat.core.exceptions import StoreError
from knowledge_chat.models.knowledge import KnowledgeItem, KnowledgeMetadata

logger = logging.getLogger(__name__)


class SqlKnowledgeStore:
    """Append-only knowledge store backed by SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory bound to the knowledge database
        """
        self._session_factory = session_factory

    async def query_active_items(self) -> list[KnowledgeItem]:
        """
        Load all active items with an embedding.

        Returns:
            list[KnowledgeItem]: Retrievable items; rows that fail conversion are skipped

        Raises:
            StoreError: If the query fails
        """
        try:
            async with self._session_factory() as session:
                rows = await knowledge_item_crud.get_active_with_embedding(session)
        except SQLAlchemyError as e:
            raise StoreError(f"Knowledge item query failed: {e}", operation="query") from e

        items: list[KnowledgeItem] = []
        for row in rows:
            try:
                item = _to_domain(row)
            except ValidationError as e:
                logger.error(f"{__name__}:query_active_items - skipping malformed item id={row.id}: {e}")
                continue
            if item.embedding:
                items.append(item)
        return items

    async def insert_item(self, item: KnowledgeItem) -> None:
        """
        Persist one item in its own transaction.

        Args:
            item: Knowledge item to store

        Raises:
            StoreError: If the insert fails
        """
        try:
            async with self._session_factory() as session:
                await knowledge_item_crud.create(
                    session,
                    id=uuid.UUID(item.id),
                    content=item.content,
                    embedding=list(item.embedding),
                    item_metadata=item.metadata.model_dump(),
                )
                await session.commit()
        except (SQLAlchemyError, ValueError) as e:
            raise StoreError(
                f"Knowledge item insert failed: {e}",
                operation="insert",
                details={"item_id": item.id},
            ) from e


def _to_domain(row: KnowledgeItemModel) -> KnowledgeItem:
    return KnowledgeItem(
        id=str(row.id),
        content=row.content,
        embedding=row.embedding or [],
        metadata=KnowledgeMetadata.model_validate(row.item_metadata or {}),
    )
