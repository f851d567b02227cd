"""
Knowledge item ORM model.

One row per ingested chunk: content, embedding and provenance metadata.
Rows are created once and never updated by the pipeline; deactivation
is an operator concern via is_inactive.

Dependencies: sqlalchemy, knowledge_chat.boundary.db.base
System role: Knowledge base persistence
"""

from sqlalchemy import JSON, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class KnowledgeItemModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge item ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        content: Chunk text
        embedding: JSON array of floats (NULL when not embedded)
        item_metadata: JSON provenance (source_name, chunk_index, ...)
        is_inactive: Hidden from retrieval when True
        created_at: Row creation timestamp (UTC)
    """

    __tablename__ = "knowledge_items"

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Chunk text",
    )

    embedding: Mapped[list[float] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        default=None,
        doc="Embedding vector",
    )

    item_metadata: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Provenance metadata",
    )

    is_inactive: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Excluded from retrieval when set",
    )
