"""Chat API endpoints.

Routes:
- POST /chat - Retrieve context and generate an answer in one call
- POST /chat?step=retrieve - Retrieve relevant context for a message
- POST /chat?step=augment - Confirm message and context were supplied
- POST /chat?step=generate - Generate an answer from supplied context and history

Dependencies: knowledge_chat.application.services.chat_orchestrator
System role: Chat messaging HTTP API
"""

import logging
from enum import Enum

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from knowledge_chat.api.deps import get_chat_orchestrator, get_usage_budget
from knowledge_chat.api.errors import exception_response
from knowledge_chat.application.services.chat_orchestrator import ChatOrchestrator
from knowledge_chat.core.exceptions import KnowledgeChatException
from knowledge_chat.core.usage_budget import UsageBudget
from knowledge_chat.models.chat import (
    AugmentStepResponse,
    ChatRequest,
    CombinedChatResponse,
    GenerateStepResponse,
    RetrieveStepResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatStep(str, Enum):
    """Individually callable chat steps."""

    RETRIEVE = "retrieve"
    AUGMENT = "augment"
    GENERATE = "generate"


def _ok(payload: BaseModel) -> JSONResponse:
    return JSONResponse(content=payload.model_dump(mode="json", by_alias=True))


@router.post("")
async def chat(
    request: ChatRequest,
    step: ChatStep | None = Query(default=None, description="Run a single step only"),
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
    budget: UsageBudget = Depends(get_usage_budget),
) -> JSONResponse:
    """Run the chat pipeline, or one step of it.

    Without a step the message is answered end to end. With a step the
    caller drives the protocol and carries context and history between
    calls.

    Args:
        request: Message plus optional history and context
        step: retrieve, augment or generate
        orchestrator: Injected ChatOrchestrator
        budget: Injected usage budget (remaining usage is logged)

    Returns:
        JSONResponse: Step-specific success body or an error envelope
            (400 validation, 429 quota, 500 otherwise)
    """
    step_name = step.value if step else None
    logger.info(f"{__name__}:chat - START step={step_name} history={len(request.history)}")

    try:
        if step is ChatStep.RETRIEVE:
            context = await orchestrator.retrieve(request.message)
            return _ok(RetrieveStepResponse(context=context))

        if step is ChatStep.AUGMENT:
            orchestrator.augment(request.message, request.context)
            return _ok(AugmentStepResponse())

        if step is ChatStep.GENERATE:
            turn = await orchestrator.generate(request.message, request.context, request.history)
            return _ok(GenerateStepResponse(response=turn))

        result = await orchestrator.chat(request.message, request.history)
        return _ok(
            CombinedChatResponse(
                message=result.turn.text,
                context=result.context,
                model=result.turn.model_identifier,
                timestamp=result.timestamp,
            )
        )

    except KnowledgeChatException as e:
        logger.warning(f"{__name__}:chat - step={step_name} {type(e).__name__}: {e.message}")
        return exception_response(e, step=step_name)

    finally:
        logger.info(f"{__name__}:chat - remaining usage {budget.remaining()}")
