"""Application services."""

from knowledge_chat.application.services.chat_orchestrator import ChatOrchestrator
from knowledge_chat.application.services.ingestion_service import IngestionService

__all__ = ["ChatOrchestrator", "IngestionService"]
