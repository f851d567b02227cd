"""FastAPI dependency getters."""

from knowledge_chat.api.deps.dependencies import (
    ServiceCache,
    get_chat_orchestrator,
    get_ingestion_service,
    get_service_cache,
    get_usage_budget,
)

__all__ = [
    "ServiceCache",
    "get_chat_orchestrator",
    "get_ingestion_service",
    "get_service_cache",
    "get_usage_budget",
]
