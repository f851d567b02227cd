"""API routers."""

from knowledge_chat.api.routers.chat import router as chat_router
from knowledge_chat.api.routers.health import router as health_router
from knowledge_chat.api.routers.ingest import router as ingest_router

__all__ = ["chat_router", "health_router", "ingest_router"]
