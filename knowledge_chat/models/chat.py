"""
Chat domain models and schemas.

Conversation turns, generation parameters, and the request/response
DTOs of the staged chat protocol. All state between steps travels in
these payloads.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knowledge_chat.models.knowledge import SimilarityResult


class ChatRole(str, Enum):
    """Speaker of a conversation message."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"


class ConversationMessage(BaseModel):
    """Single caller-supplied dialogue turn."""

    role: ChatRole
    text: str

    @field_validator("role", mode="before")
    @classmethod
    def _normalise_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if value == "CHATBOT":
                return ChatRole.ASSISTANT
        return value


class GenerationParams(BaseModel):
    """Sampling parameters forwarded to the chat provider."""

    max_tokens: int = 500
    temperature: float = 0.4


class ChatTurn(BaseModel):
    """Generated answer and the model that produced it."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    text: str
    model_identifier: str = Field(alias="modelIdentifier")


class ChatRequest(BaseModel):
    """Request body shared by the combined call and every step."""

    message: str = Field(default="", description="User question or message")
    history: list[ConversationMessage] = Field(default_factory=list)
    context: list[SimilarityResult] | None = Field(
        default=None,
        description="Context returned by the retrieve step",
    )


class CombinedChatResponse(BaseModel):
    """Response of the single-call chat path."""

    success: bool = True
    message: str
    context: list[SimilarityResult]
    model: str
    timestamp: str


class RetrieveStepResponse(BaseModel):
    """Response of the retrieve step."""

    success: bool = True
    step: Literal["retrieve"] = "retrieve"
    context: list[SimilarityResult]


class AugmentStepResponse(BaseModel):
    """Response of the augment step."""

    success: bool = True
    step: Literal["augment"] = "augment"


class GenerateStepResponse(BaseModel):
    """Response of the generate step."""

    success: bool = True
    step: Literal["generate"] = "generate"
    response: ChatTurn


class ChatResult(BaseModel):
    """Outcome of the combined retrieve-then-generate path."""

    context: list[SimilarityResult]
    turn: ChatTurn
    timestamp: str
