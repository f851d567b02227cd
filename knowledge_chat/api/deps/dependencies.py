"""
Dependency injection container.

Factory functions for FastAPI dependencies. Providers, store and services
are built lazily once per process and reused across requests.

Dependencies: knowledge_chat.configs, knowledge_chat.application, knowledge_chat.boundary
System role: DI container for service injection
"""

from fastapi import Depends

from knowledge_chat.application.adapters.knowledge_store import SqlKnowledgeStore
from knowledge_chat.application.services import ChatOrchestrator, IngestionService
from knowledge_chat.configs import Settings, get_settings
from knowledge_chat.core.usage_budget import UsageBudget


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._engine = None
        self._session_factory = None
        self._store = None
        self._embedder = None
        self._chat_provider = None
        self._budget = None
        self._chat_orchestrator = None
        self._ingestion_service = None

    @property
    def settings(self) -> Settings:
        """Get settings (process-wide singleton unless injected)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self):
        """Get cached async engine."""
        if self._engine is None:
            from knowledge_chat.boundary.db import get_async_engine
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self):
        """Get cached session factory bound to the cached engine."""
        if self._session_factory is None:
            from knowledge_chat.boundary.db import get_async_session_factory
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def store(self) -> SqlKnowledgeStore:
        """Get cached knowledge store."""
        if self._store is None:
            self._store = SqlKnowledgeStore(self.session_factory)
        return self._store

    @property
    def embedder(self):
        """Get cached Gemini embedding provider."""
        if self._embedder is None:
            from knowledge_chat.boundary.llm import GeminiEmbeddingProvider

            llm = self.settings.llm
            self._embedder = GeminiEmbeddingProvider(
                model=llm.embedding_model,
                output_dimensionality=llm.embedding_dimension,
                google_api_key=llm.google_api_key,
            )
        return self._embedder

    @property
    def chat_provider(self):
        """Get cached Gemini chat provider."""
        if self._chat_provider is None:
            from knowledge_chat.boundary.llm import GeminiChatProvider

            llm = self.settings.llm
            self._chat_provider = GeminiChatProvider(
                model=llm.chat_model,
                google_api_key=llm.google_api_key,
            )
        return self._chat_provider

    @property
    def budget(self) -> UsageBudget:
        """Get the process-wide usage budget."""
        if self._budget is None:
            usage = self.settings.usage
            self._budget = UsageBudget(
                embed_limit=usage.embed_limit,
                chat_limit=usage.chat_limit,
            )
        return self._budget

    @property
    def chat_orchestrator(self) -> ChatOrchestrator:
        """Get cached chat orchestrator."""
        if self._chat_orchestrator is None:
            from knowledge_chat.core.history import HistoryManager
            from knowledge_chat.models.chat import GenerationParams

            pipeline = self.settings.pipeline
            self._chat_orchestrator = ChatOrchestrator(
                embedder=self.embedder,
                chat_provider=self.chat_provider,
                store=self.store,
                budget=self.budget,
                history=HistoryManager(limit=pipeline.history_limit),
                params=GenerationParams(
                    max_tokens=pipeline.max_tokens,
                    temperature=pipeline.temperature,
                ),
                top_k=pipeline.top_k,
                threshold=pipeline.similarity_threshold,
            )
        return self._chat_orchestrator

    @property
    def ingestion_service(self) -> IngestionService:
        """Get cached ingestion service."""
        if self._ingestion_service is None:
            from knowledge_chat.core.chunker import TextChunker

            pipeline = self.settings.pipeline
            self._ingestion_service = IngestionService(
                embedder=self.embedder,
                store=self.store,
                chunker=TextChunker(pipeline.chunk_size, pipeline.chunk_overlap),
                budget=self.budget,
                max_batch_size=pipeline.max_batch_size,
            )
        return self._ingestion_service

    async def dispose(self) -> None:
        """Dispose the engine if one was created."""
        if self._engine is not None:
            await self._engine.dispose()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._store = None
        self._embedder = None
        self._chat_provider = None
        self._budget = None
        self._chat_orchestrator = None
        self._ingestion_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_usage_budget(cache: ServiceCache = Depends(get_service_cache)) -> UsageBudget:
    """
    Get the shared usage budget.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        UsageBudget: Process-wide budget
    """
    return cache.budget


def get_chat_orchestrator(cache: ServiceCache = Depends(get_service_cache)) -> ChatOrchestrator:
    """
    Get chat orchestrator instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        ChatOrchestrator: Orchestrator wired to Gemini and the SQL store
    """
    return cache.chat_orchestrator


def get_ingestion_service(cache: ServiceCache = Depends(get_service_cache)) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        IngestionService: Ingestion service wired to Gemini and the SQL store
    """
    return cache.ingestion_service
