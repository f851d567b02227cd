"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, collaborator mocks, sample knowledge items
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import math
import uuid
from unittest.mock import AsyncMock

import pytest

from knowledge_chat.models.chat import ChatTurn
from knowledge_chat.models.knowledge import KnowledgeItem, KnowledgeMetadata


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session in the test (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from knowledge_chat.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the in-memory engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session with rollback on exit
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_embedder() -> AsyncMock:
    """Embedding collaborator returning one unit vector per text."""
    embedder = AsyncMock()

    async def embed_batch(texts):
        return [[1.0, 0.0] for _ in texts]

    embedder.embed_batch.side_effect = embed_batch
    return embedder


@pytest.fixture
def mock_chat_provider() -> AsyncMock:
    """Chat collaborator returning a fixed answer."""
    provider = AsyncMock()
    provider.complete.return_value = ChatTurn(
        text="Paris is the capital of France.",
        model_identifier="gemini-2.5-flash",
    )
    return provider


@pytest.fixture
def mock_store() -> AsyncMock:
    """Knowledge store collaborator with no stored items."""
    store = AsyncMock()
    store.query_active_items.return_value = []
    store.insert_item.return_value = None
    return store


def _make_item(score: float, content: str | None = None) -> KnowledgeItem:
    return KnowledgeItem(
        id=str(uuid.uuid4()),
        content=content or f"item scoring {score}",
        embedding=[score, math.sqrt(1.0 - score * score)],
        metadata=KnowledgeMetadata(source_name="kb.txt", chunk_index=0, total_chunks=1),
    )


@pytest.fixture
def make_item():
    """
    Factory for items whose cosine similarity to [1, 0] equals score.

    Returns:
        Callable[[float, str | None], KnowledgeItem]
    """
    return _make_item

