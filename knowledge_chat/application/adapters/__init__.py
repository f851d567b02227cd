"""Application adapters."""

from knowledge_chat.application.adapters.knowledge_store import SqlKnowledgeStore

__all__ = ["SqlKnowledgeStore"]
