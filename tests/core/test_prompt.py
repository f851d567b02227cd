"""
Test suite for grounded prompt assembly.

System role: Verification of generation request layout
"""

import json

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from knowledge_chat.core.prompt import (
    CONTEXT_HEADER,
    NO_RECORDS_MARKER,
    build_messages,
    format_context,
)
from knowledge_chat.models.knowledge import SimilarityResult


def _result(content: str, score: float) -> SimilarityResult:
    return SimilarityResult(id="id-1", content=content, metadata={"source_name": "kb.txt"}, score=score)


class TestFormatContext:
    """Test suite for format_context()."""

    def test_format_context_should_emit_one_json_object_per_line(self) -> None:
        # Act
        block = format_context([_result("alpha", 0.9), _result("beta", 0.5)])

        # Assert
        lines = block.strip().split("\n")
        assert lines[0] == CONTEXT_HEADER
        parsed = [json.loads(line) for line in lines[1:]]
        assert [p["content"] for p in parsed] == ["alpha", "beta"]
        assert parsed[0]["type"] == "knowledge_base"
        assert parsed[0]["score"] == 0.9

    def test_format_context_should_use_marker_when_empty(self) -> None:
        # Act
        block = format_context([])

        # Assert
        assert block == f"{CONTEXT_HEADER}\n{NO_RECORDS_MARKER}\n"

    def test_format_context_should_treat_none_as_empty(self) -> None:
        assert NO_RECORDS_MARKER in format_context(None)


class TestBuildMessages:
    """Test suite for build_messages()."""

    def test_build_messages_should_order_system_history_question(self) -> None:
        # Arrange
        history = [HumanMessage(content="earlier question"), AIMessage(content="earlier answer")]

        # Act
        messages = build_messages("What now?", [_result("alpha", 0.9)], history)

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert [m.content for m in messages[1:3]] == ["earlier question", "earlier answer"]
        assert isinstance(messages[-1], HumanMessage)
        assert messages[-1].content == "What now?"
        assert len(messages) == 4

    def test_build_messages_should_embed_context_in_system_message(self) -> None:
        # Act
        messages = build_messages("q", [_result("the refund window is 30 days", 0.8)], [])

        # Assert
        system = messages[0].content
        assert "helpful assistant" in system
        assert CONTEXT_HEADER in system
        assert "the refund window is 30 days" in system

    def test_build_messages_should_keep_braces_in_context_literal(self) -> None:
        """Test JSON braces in context are not treated as template variables."""
        # Act
        messages = build_messages("q", [_result("{not_a_variable}", 0.8)], [])

        # Assert
        assert "{not_a_variable}" in messages[0].content
