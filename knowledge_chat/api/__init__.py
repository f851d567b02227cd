"""
API layer.

Aggregates routers into a single api_router mounted under /api/v1.
"""

from fastapi import APIRouter

from knowledge_chat.api.routers import chat_router, health_router, ingest_router

api_router = APIRouter()
api_router.include_router(chat_router)
api_router.include_router(ingest_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
