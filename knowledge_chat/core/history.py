"""
Conversation history manager.

Bounds caller-supplied dialogue turns to a context window and converts
them to LangChain messages. History is never stored server-side.

Dependencies: langchain_core.messages, knowledge_chat.models.chat
System role: History serialization for generation requests
"""

from collections.abc import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from knowledge_chat.models.chat import ChatRole, ConversationMessage

DEFAULT_HISTORY_LIMIT = 10


class HistoryManager:
    """Keeps the most recent turns and maps roles to message types."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.limit = limit

    def bound(self, history: Sequence[ConversationMessage] | None) -> list[ConversationMessage]:
        """
        Keep only the last ``limit`` messages.

        Older turns are dropped silently.

        Args:
            history: Caller-supplied history, oldest first

        Returns:
            list[ConversationMessage]: Most recent messages, oldest first
        """
        if not history or self.limit <= 0:
            return []
        return list(history[-self.limit:])

    def to_messages(self, history: Sequence[ConversationMessage] | None) -> list[BaseMessage]:
        """
        Convert bounded history to LangChain messages.

        Args:
            history: Caller-supplied history

        Returns:
            list[BaseMessage]: HumanMessage / AIMessage per turn
        """
        return [_to_message(msg) for msg in self.bound(history)]


def _to_message(msg: ConversationMessage) -> BaseMessage:
    if msg.role == ChatRole.USER:
        return HumanMessage(content=msg.text)
    return AIMessage(content=msg.text)
