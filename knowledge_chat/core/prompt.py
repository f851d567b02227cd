"""
Grounded answer prompt.

Builds the instruction-bearing system message that carries the retrieved
context, followed by the bounded history and the user's message.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from collections.abc import Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from knowledge_chat.models.knowledge import SimilarityResult

CONTEXT_HEADER = "Relevant Knowledge Base Data:"
NO_RECORDS_MARKER = "No specific records found for this query."

SYSTEM_PROMPT = """You are a helpful assistant. Answer questions based on the provided knowledge base data.

IMPORTANT: Format your responses for readability:
- Use short paragraphs (2-3 sentences max)
- Add blank lines between paragraphs
- Use bullet points for lists
- Use numbered lists for steps
- Keep responses concise and well-structured

Context:
{context}"""

GROUNDED_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def format_context(context: Sequence[SimilarityResult] | None) -> str:
    """
    Serialize context items, one JSON object per line.

    Args:
        context: Retrieved context items

    Returns:
        str: Context block, or the no-records marker when empty
    """
    lines = [CONTEXT_HEADER]
    if context:
        lines.extend(item.model_dump_json() for item in context)
    else:
        lines.append(NO_RECORDS_MARKER)
    return "\n".join(lines) + "\n"


def build_messages(
    question: str,
    context: Sequence[SimilarityResult] | None,
    history: Sequence[BaseMessage],
) -> list[BaseMessage]:
    """
    Assemble the full generation request.

    Args:
        question: User's latest message (always last)
        context: Retrieved context items
        history: Already-bounded history messages

    Returns:
        list[BaseMessage]: [system, *history, human]
    """
    return GROUNDED_CHAT_PROMPT.invoke({
        "context": format_context(context),
        "history": list(history),
        "question": question,
    }).to_messages()
