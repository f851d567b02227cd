"""
Model provider boundary layer.

Gemini implementations of the embedding and chat collaborator contracts.

Dependencies: langchain_google_genai
System role: Model provider adapters
"""

from knowledge_chat.boundary.llm.gemini_chat import GeminiChatProvider
from knowledge_chat.boundary.llm.gemini_embedder import GeminiEmbeddingProvider

__all__ = ["GeminiChatProvider", "GeminiEmbeddingProvider"]
