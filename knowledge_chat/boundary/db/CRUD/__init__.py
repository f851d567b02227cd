"""CRUD operations."""

from knowledge_chat.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_chat.boundary.db.CRUD.knowledge_item_crud import KnowledgeItemCRUD, knowledge_item_crud

__all__ = ["BaseCRUD", "KnowledgeItemCRUD", "knowledge_item_crud"]
