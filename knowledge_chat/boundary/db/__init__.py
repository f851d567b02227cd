"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables()
  - KnowledgeItemModel: Stored knowledge chunk
  - knowledge_item_crud: CRUD singleton

Dependencies: sqlalchemy, knowledge_chat.configs
System role: Database adapter for the append-only knowledge base
"""

from knowledge_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from knowledge_chat.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from knowledge_chat.boundary.db.models.knowledge_item_model import KnowledgeItemModel
from knowledge_chat.boundary.db.CRUD import BaseCRUD, KnowledgeItemCRUD, knowledge_item_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "KnowledgeItemModel",
    "BaseCRUD",
    "KnowledgeItemCRUD",
    "knowledge_item_crud",
]
