"""
Test suite for ChatOrchestrator.

Covers each step of the staged protocol and the combined path, with
mocked embedding, chat and store collaborators.

System role: Verification of chat pipeline orchestration
"""

from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from knowledge_chat.application.services.chat_orchestrator import ChatOrchestrator
from knowledge_chat.core.exceptions import (
    EmbeddingError,
    GenerationError,
    QuotaExhaustedError,
    StoreError,
    ValidationError,
)
from knowledge_chat.core.usage_budget import CHAT, EMBED, UsageBudget
from knowledge_chat.models.chat import ConversationMessage, GenerationParams
from knowledge_chat.models.knowledge import SimilarityResult


@pytest.fixture
def orchestrator(
    mock_embedder: AsyncMock, mock_chat_provider: AsyncMock, mock_store: AsyncMock
) -> ChatOrchestrator:
    """Orchestrator with default limits and unlimited budget."""
    return ChatOrchestrator(
        embedder=mock_embedder,
        chat_provider=mock_chat_provider,
        store=mock_store,
    )


def _context() -> list[SimilarityResult]:
    return [SimilarityResult(id="a", content="Paris is in France.", score=0.91)]


def _history(count: int) -> list[ConversationMessage]:
    return [
        ConversationMessage(role="USER" if i % 2 == 0 else "CHATBOT", text=f"turn {i}")
        for i in range(count)
    ]


class TestRetrieve:
    """Test suite for ChatOrchestrator.retrieve()."""

    @pytest.mark.asyncio
    async def test_retrieve_should_return_ranked_relevant_items(
        self, orchestrator: ChatOrchestrator, mock_store: AsyncMock, make_item
    ) -> None:
        # Arrange
        mock_store.query_active_items.return_value = [make_item(0.4), make_item(0.2), make_item(0.8)]

        # Act
        context = await orchestrator.retrieve("Where is Paris?")

        # Assert
        assert [r.score for r in context] == [0.8, 0.4]

    @pytest.mark.asyncio
    async def test_retrieve_should_embed_only_the_message(
        self, orchestrator: ChatOrchestrator, mock_embedder: AsyncMock
    ) -> None:
        # Act
        await orchestrator.retrieve("Where is Paris?")

        # Assert
        mock_embedder.embed_batch.assert_awaited_once_with(["Where is Paris?"])

    @pytest.mark.asyncio
    async def test_retrieve_should_return_empty_when_embedding_fails(
        self, orchestrator: ChatOrchestrator, mock_embedder: AsyncMock, mock_store: AsyncMock
    ) -> None:
        # Arrange
        mock_embedder.embed_batch.side_effect = EmbeddingError("timeout")

        # Act
        context = await orchestrator.retrieve("Where is Paris?")

        # Assert
        assert context == []
        mock_store.query_active_items.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retrieve_should_return_empty_when_embedding_is_empty(
        self, orchestrator: ChatOrchestrator, mock_embedder: AsyncMock
    ) -> None:
        # Arrange
        mock_embedder.embed_batch.side_effect = None
        mock_embedder.embed_batch.return_value = [[]]

        # Act
        context = await orchestrator.retrieve("Where is Paris?")

        # Assert
        assert context == []

    @pytest.mark.asyncio
    async def test_retrieve_should_return_empty_when_store_query_fails(
        self, orchestrator: ChatOrchestrator, mock_store: AsyncMock
    ) -> None:
        # Arrange
        mock_store.query_active_items.side_effect = StoreError("connection lost", operation="query")

        # Act
        context = await orchestrator.retrieve("Where is Paris?")

        # Assert
        assert context == []

    @pytest.mark.asyncio
    async def test_retrieve_should_reject_empty_message(self, orchestrator: ChatOrchestrator) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.retrieve("   ")

    @pytest.mark.asyncio
    async def test_retrieve_should_raise_when_embed_quota_exhausted(
        self, mock_embedder: AsyncMock, mock_chat_provider: AsyncMock, mock_store: AsyncMock
    ) -> None:
        # Arrange
        orchestrator = ChatOrchestrator(
            mock_embedder, mock_chat_provider, mock_store, budget=UsageBudget(embed_limit=0)
        )

        # Act / Assert
        with pytest.raises(QuotaExhaustedError) as exc_info:
            await orchestrator.retrieve("Where is Paris?")
        assert exc_info.value.resource == EMBED
        mock_embedder.embed_batch.assert_not_awaited()


class TestAugment:
    """Test suite for ChatOrchestrator.augment()."""

    def test_augment_should_accept_empty_context(self, orchestrator: ChatOrchestrator) -> None:
        orchestrator.augment("question", [])

    def test_augment_should_reject_missing_context(self, orchestrator: ChatOrchestrator) -> None:
        with pytest.raises(ValidationError) as exc_info:
            orchestrator.augment("question", None)
        assert exc_info.value.details["field"] == "context"

    def test_augment_should_reject_missing_message(self, orchestrator: ChatOrchestrator) -> None:
        with pytest.raises(ValidationError):
            orchestrator.augment("", _context())


class TestGenerate:
    """Test suite for ChatOrchestrator.generate()."""

    @pytest.mark.asyncio
    async def test_generate_should_return_provider_turn(
        self, orchestrator: ChatOrchestrator
    ) -> None:
        # Act
        turn = await orchestrator.generate("Where is Paris?", _context(), [])

        # Assert
        assert turn.text == "Paris is the capital of France."
        assert turn.model_identifier == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_generate_should_forward_only_last_ten_history_messages(
        self, orchestrator: ChatOrchestrator, mock_chat_provider: AsyncMock
    ) -> None:
        # Act
        await orchestrator.generate("Where is Paris?", _context(), _history(12))

        # Assert
        messages = mock_chat_provider.complete.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        history = messages[1:-1]
        assert len(history) == 10
        assert history[0].content == "turn 2"
        assert isinstance(history[0], HumanMessage)
        assert isinstance(history[1], AIMessage)
        assert messages[-1].content == "Where is Paris?"

    @pytest.mark.asyncio
    async def test_generate_should_pass_sampling_params(
        self, mock_embedder: AsyncMock, mock_chat_provider: AsyncMock, mock_store: AsyncMock
    ) -> None:
        # Arrange
        params = GenerationParams(max_tokens=200, temperature=0.1)
        orchestrator = ChatOrchestrator(mock_embedder, mock_chat_provider, mock_store, params=params)

        # Act
        await orchestrator.generate("q", [], [])

        # Assert
        assert mock_chat_provider.complete.await_args.args[1] == params

    @pytest.mark.asyncio
    async def test_generate_should_default_to_500_tokens_at_0_4(
        self, orchestrator: ChatOrchestrator, mock_chat_provider: AsyncMock
    ) -> None:
        # Act
        await orchestrator.generate("q", [], [])

        # Assert
        params = mock_chat_provider.complete.await_args.args[1]
        assert params.max_tokens == 500
        assert params.temperature == 0.4

    @pytest.mark.asyncio
    async def test_generate_should_return_error_turn_on_provider_failure(
        self, orchestrator: ChatOrchestrator, mock_chat_provider: AsyncMock
    ) -> None:
        # Arrange
        mock_chat_provider.complete.side_effect = GenerationError("model overloaded")

        # Act
        turn = await orchestrator.generate("Where is Paris?", _context(), [])

        # Assert
        assert turn.model_identifier == "Error"
        assert turn.text.startswith("Error generating response: ")
        assert "model overloaded" in turn.text

    @pytest.mark.asyncio
    async def test_generate_should_raise_when_chat_quota_exhausted(
        self, mock_embedder: AsyncMock, mock_chat_provider: AsyncMock, mock_store: AsyncMock
    ) -> None:
        # Arrange
        orchestrator = ChatOrchestrator(
            mock_embedder, mock_chat_provider, mock_store, budget=UsageBudget(chat_limit=0)
        )

        # Act / Assert
        with pytest.raises(QuotaExhaustedError) as exc_info:
            await orchestrator.generate("q", [], [])
        assert exc_info.value.resource == CHAT
        mock_chat_provider.complete.assert_not_awaited()


class TestCombinedChat:
    """Test suite for ChatOrchestrator.chat()."""

    @pytest.mark.asyncio
    async def test_chat_should_retrieve_then_generate(
        self,
        orchestrator: ChatOrchestrator,
        mock_store: AsyncMock,
        mock_chat_provider: AsyncMock,
        make_item,
    ) -> None:
        # Arrange
        mock_store.query_active_items.return_value = [make_item(0.9, content="Paris is in France.")]

        # Act
        result = await orchestrator.chat("Where is Paris?", [])

        # Assert
        assert [r.content for r in result.context] == ["Paris is in France."]
        assert result.turn.text == "Paris is the capital of France."
        assert result.timestamp
        system_prompt = mock_chat_provider.complete.await_args.args[0][0].content
        assert "Paris is in France." in system_prompt
