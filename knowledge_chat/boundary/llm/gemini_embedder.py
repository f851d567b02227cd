"""
Gemini embedding provider.

Generates embeddings using Google Gemini through LangChain, with a fixed
output dimensionality so stored vectors stay comparable.

Dependencies: langchain-google-genai, python-dotenv, knowledge_chat.configs
System role: Embedding generation adapter
"""

import logging
from collections.abc import Sequence

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from knowledge_chat.configs.pipeline import MAX_EMBED_BATCH
from knowledge_chat.core.exceptions import EmbeddingError, ValidationError

load_dotenv()

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider:
    """Gemini embedding generator."""

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize Gemini embeddings client.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            google_api_key: API key (GOOGLE_API_KEY env var when None)
        """
        kwargs = {"model": model}
        if google_api_key:
            kwargs["google_api_key"] = google_api_key
        self._embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        self._model = model
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed a batch of texts in a single provider call.

        Args:
            texts: Up to 96 texts

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            ValidationError: If the batch exceeds 96 texts
            EmbeddingError: If the provider call fails or returns a short batch
        """
        if len(texts) > MAX_EMBED_BATCH:
            raise ValidationError(
                f"Embedding batch of {len(texts)} exceeds limit of {MAX_EMBED_BATCH}",
                field="texts",
            )
        if not texts:
            return []

        try:
            vectors = await self._embeddings.aembed_documents(
                list(texts),
                output_dimensionality=self._output_dimensionality,
            )
        except Exception as e:
            raise EmbeddingError(
                f"Embedding request failed: {e}",
                provider=self._model,
                details={"batch_size": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding provider returned a partial batch",
                provider=self._model,
                details={"expected": len(texts), "received": len(vectors)},
            )
        return [list(vector) for vector in vectors]
