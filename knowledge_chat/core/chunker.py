"""
Overlapping word-boundary text chunker.

Splits raw text into windows sized for the embedding provider's input
limit. Windows are cut at the last whitespace so words are never split,
and consecutive chunks share up to ``overlap`` characters.

Dependencies: knowledge_chat.models.chunk, knowledge_chat.configs.pipeline
System role: First stage of the ingestion pipeline
"""

import logging

from knowledge_chat.configs.pipeline import MAX_CHUNK_OVERLAP, MAX_CHUNK_SIZE
from knowledge_chat.models.chunk import TextChunk

logger = logging.getLogger(__name__)

MAX_OVERLAP_RATIO = 0.2


class TextChunker:
    """Fixed-size chunker with overlap and word-boundary trimming."""

    def __init__(self, chunk_size: int = MAX_CHUNK_SIZE, overlap: int = MAX_CHUNK_OVERLAP) -> None:
        """
        Initialize chunker configuration.

        Sizes above the provider limits are clamped, not rejected.

        Args:
            chunk_size: Maximum characters per chunk (clamped to 1500)
            overlap: Characters shared by consecutive chunks (clamped to 300)
        """
        if chunk_size > MAX_CHUNK_SIZE:
            logger.warning(f"{__name__}:__init__ - chunk_size {chunk_size} clamped to {MAX_CHUNK_SIZE}")
            chunk_size = MAX_CHUNK_SIZE
        if overlap > MAX_CHUNK_OVERLAP:
            logger.warning(f"{__name__}:__init__ - overlap {overlap} clamped to {MAX_CHUNK_OVERLAP}")
            overlap = MAX_CHUNK_OVERLAP
        self.chunk_size = chunk_size
        self.overlap = overlap

    @property
    def is_valid(self) -> bool:
        """Whether the configuration can produce chunks."""
        return (
            self.chunk_size > 0
            and self.overlap >= 0
            and self.overlap <= self.chunk_size * MAX_OVERLAP_RATIO
        )

    def chunk(self, text: str | None) -> list[TextChunk]:
        """
        Split text into overlapping chunks.

        Args:
            text: Raw document text

        Returns:
            list[TextChunk]: Chunks in source order; empty for empty input
                or an invalid configuration
        """
        if not self.is_valid:
            logger.error(
                f"{__name__}:chunk - overlap cannot be larger than 20% of chunk size "
                f"(chunk_size={self.chunk_size}, overlap={self.overlap})"
            )
            return []
        if not text:
            return []

        pieces: list[str] = []
        length = len(text)
        position = 0

        while position < length:
            end = position + self.chunk_size
            window = text[position:end]

            if end < length:
                cut = _last_whitespace(window)
                if cut > 0:
                    window = window[:cut]
                    end = position + cut

            piece = window.strip()
            if piece:
                pieces.append(piece)

            next_position = end - self.overlap
            # A whitespace cut closer to the window start than the overlap
            # would stall the cursor.
            position = next_position if next_position > position else end

        total = len(pieces)
        logger.debug(f"{__name__}:chunk - produced {total} chunks from {length} chars")
        return [TextChunk(text=piece, index=i, total_chunks=total) for i, piece in enumerate(pieces)]


def _last_whitespace(window: str) -> int:
    """Index of the last whitespace character in window, or -1."""
    for i in range(len(window) - 1, -1, -1):
        if window[i].isspace():
            return i
    return -1


def chunk_text(
    text: str | None,
    chunk_size: int = MAX_CHUNK_SIZE,
    overlap: int = MAX_CHUNK_OVERLAP,
) -> list[TextChunk]:
    """Chunk text with a one-off TextChunker."""
    return TextChunker(chunk_size=chunk_size, overlap=overlap).chunk(text)
