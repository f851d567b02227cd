"""
Knowledge item CRUD operations.

Adds the retrieval query on top of BaseCRUD: every active row that has
an embedding.

Dependencies: sqlalchemy, knowledge_chat.boundary.db
System role: Knowledge item data access
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_chat.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_chat.boundary.db.models.knowledge_item_model import KnowledgeItemModel


class KnowledgeItemCRUD(BaseCRUD[KnowledgeItemModel]):
    """CRUD operations for knowledge items."""

    def __init__(self) -> None:
        super().__init__(KnowledgeItemModel)

    async def get_active_with_embedding(self, session: AsyncSession) -> Sequence[KnowledgeItemModel]:
        """
        Fetch every retrievable item.

        Args:
            session: Async database session

        Returns:
            Active items whose embedding is not NULL, oldest first
        """
        stmt = (
            select(KnowledgeItemModel)
            .where(KnowledgeItemModel.is_inactive.is_(False))
            .where(KnowledgeItemModel.embedding.is_not(None))
            .order_by(KnowledgeItemModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


knowledge_item_crud = KnowledgeItemCRUD()
