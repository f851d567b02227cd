"""ORM models."""

from knowledge_chat.boundary.db.models.knowledge_item_model import KnowledgeItemModel

__all__ = ["KnowledgeItemModel"]
