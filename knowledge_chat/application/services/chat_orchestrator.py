"""
Chat orchestrator for retrieval-augmented answers.

Runs the staged protocol retrieve -> augment -> generate. Every step is a
stateless call: the message, retrieved context and history are passed in
by the caller each time, so steps can be retried individually. The
combined path chains retrieve and generate in one call.

Dependencies: knowledge_chat.core, knowledge_chat.boundary.interfaces
System role: Chat pipeline orchestration
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from knowledge_chat.boundary.interfaces import ChatProvider, EmbeddingProvider, KnowledgeStore
from knowledge_chat.core.exceptions import QuotaExhaustedError, ValidationError
from knowledge_chat.core.history import HistoryManager
from knowledge_chat.core.prompt import build_messages
from knowledge_chat.core.similarity import DEFAULT_THRESHOLD, DEFAULT_TOP_K, rank
from knowledge_chat.core.usage_budget import CHAT, EMBED, UsageBudget
from knowledge_chat.models.chat import ChatResult, ChatTurn, ConversationMessage, GenerationParams
from knowledge_chat.models.knowledge import SimilarityResult

logger = logging.getLogger(__name__)

ERROR_MODEL_IDENTIFIER = "Error"


class ChatOrchestrator:
    """
    Staged RAG chat pipeline.

    Retrieval failures degrade to an empty context. Generation failures
    are returned as a ChatTurn whose text describes the error and whose
    model identifier is "Error". Quota exhaustion is raised to the caller.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        chat_provider: ChatProvider,
        store: KnowledgeStore,
        budget: UsageBudget | None = None,
        history: HistoryManager | None = None,
        params: GenerationParams | None = None,
        top_k: int = DEFAULT_TOP_K,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            embedder: Embedding collaborator for the query
            chat_provider: Generation collaborator
            store: Knowledge store collaborator
            budget: Usage budget consulted before each external call
            history: History manager (last 10 messages by default)
            params: Sampling parameters (500 tokens, temperature 0.4 by default)
            top_k: Candidates considered after ranking
            threshold: Exclusive minimum similarity
        """
        self.embedder = embedder
        self.chat_provider = chat_provider
        self.store = store
        self.budget = budget or UsageBudget()
        self.history = history or HistoryManager()
        self.params = params or GenerationParams()
        self.top_k = top_k
        self.threshold = threshold

    async def retrieve(self, message: str) -> list[SimilarityResult]:
        """
        Retrieve relevant context for a message.

        Args:
            message: User's message

        Returns:
            list[SimilarityResult]: Ranked context (empty when nothing is
                relevant or a collaborator failed)

        Raises:
            ValidationError: If the message is empty
            QuotaExhaustedError: If the embedding budget is spent
        """
        _require_message(message)
        self.budget.consume(EMBED)

        try:
            vectors = await self.embedder.embed_batch([message])
        except QuotaExhaustedError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:retrieve - query embedding failed: {type(e).__name__}: {e}")
            return []

        query_embedding = vectors[0] if vectors else None
        if not query_embedding:
            logger.error(f"{__name__}:retrieve - failed to generate query embedding")
            return []

        try:
            candidates = await self.store.query_active_items()
        except Exception as e:
            logger.error(f"{__name__}:retrieve - knowledge item query failed: {type(e).__name__}: {e}")
            candidates = []

        context = rank(query_embedding, candidates, top_k=self.top_k, threshold=self.threshold)
        logger.info(f"{__name__}:retrieve - {len(context)} relevant items found")
        return context

    def augment(self, message: str, context: Sequence[SimilarityResult] | None) -> None:
        """
        Validate that a message and retrieved context were supplied.

        Prompt construction itself happens in generate; this step only
        exists so callers can report progress.

        Raises:
            ValidationError: If the message is empty or context is missing
        """
        _require_message(message)
        if context is None:
            raise ValidationError("No context supplied", field="context")

    async def generate(
        self,
        message: str,
        context: Sequence[SimilarityResult] | None,
        history: Sequence[ConversationMessage] | None = None,
    ) -> ChatTurn:
        """
        Generate an answer grounded in the supplied context.

        Args:
            message: User's message (sent last)
            context: Context items from retrieve (may be empty)
            history: Caller-held history; only the most recent turns are sent

        Returns:
            ChatTurn: Generated answer, or an error-flavoured turn with
                model identifier "Error"

        Raises:
            ValidationError: If the message is empty
            QuotaExhaustedError: If the chat budget is spent
        """
        _require_message(message)
        self.budget.consume(CHAT)

        try:
            messages = build_messages(message, context, self.history.to_messages(history))
            turn = await self.chat_provider.complete(messages, self.params)
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            return ChatTurn(
                text=f"Error generating response: {e}",
                model_identifier=ERROR_MODEL_IDENTIFIER,
            )

        logger.info(f"{__name__}:generate - model={turn.model_identifier} answer_len={len(turn.text)}")
        return turn

    async def chat(
        self,
        message: str,
        history: Sequence[ConversationMessage] | None = None,
    ) -> ChatResult:
        """
        Retrieve then generate in a single call.

        Args:
            message: User's message
            history: Caller-held history

        Returns:
            ChatResult: Context used, generated turn and completion time
        """
        context = await self.retrieve(message)
        turn = await self.generate(message, context, history)
        return ChatResult(
            context=context,
            turn=turn,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


def _require_message(message: str | None) -> None:
    if not message or not message.strip():
        raise ValidationError("Message is required", field="message")
