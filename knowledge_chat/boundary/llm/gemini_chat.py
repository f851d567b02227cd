"""
Gemini chat provider.

Chat completion through LangChain's ChatGoogleGenerativeAI. One client is
kept per distinct set of sampling parameters.

Dependencies: langchain-google-genai, langchain_core.messages
System role: Answer generation adapter
"""

import logging
from collections.abc import Sequence

from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from knowledge_chat.core.exceptions import GenerationError
from knowledge_chat.models.chat import ChatTurn, GenerationParams

logger = logging.getLogger(__name__)


class GeminiChatProvider:
    """Gemini chat completion client."""

    def __init__(self, model: str = "gemini-2.5-flash", google_api_key: str | None = None) -> None:
        """
        Initialize provider.

        Args:
            model: Gemini chat model name
            google_api_key: API key (GOOGLE_API_KEY env var when None)
        """
        self._model = model
        self._google_api_key = google_api_key
        self._clients: dict[tuple[int, float], ChatGoogleGenerativeAI] = {}

    def _client_for(self, params: GenerationParams) -> ChatGoogleGenerativeAI:
        key = (params.max_tokens, params.temperature)
        if key not in self._clients:
            kwargs = {
                "model": self._model,
                "temperature": params.temperature,
                "max_output_tokens": params.max_tokens,
            }
            if self._google_api_key:
                kwargs["google_api_key"] = self._google_api_key
            self._clients[key] = ChatGoogleGenerativeAI(**kwargs)
        return self._clients[key]

    async def complete(self, messages: Sequence[BaseMessage], params: GenerationParams) -> ChatTurn:
        """
        Generate a reply for the assembled messages.

        Args:
            messages: System message, history and user message
            params: Sampling parameters

        Returns:
            ChatTurn: Reply text and the reporting model name

        Raises:
            GenerationError: If the provider call fails
        """
        try:
            response = await self._client_for(params).ainvoke(list(messages))
        except Exception as e:
            raise GenerationError(f"Chat completion failed: {e}", provider=self._model) from e

        if response.response_metadata.get("finish_reason") in ("MAX_TOKENS", "length"):
            logger.warning(f"{__name__}:complete - reply truncated at max_tokens={params.max_tokens}")

        model_name = response.response_metadata.get("model_name") or self._model
        return ChatTurn(text=_content_text(response.content), model_identifier=model_name)


def _content_text(content: str | list) -> str:
    """Flatten LangChain message content (string or content blocks)."""
    if isinstance(content, str):
        return content.strip()
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts).strip()
