"""
Error envelope mapping.

Converts domain exceptions into {success: false, step?, error} responses
and registers app-level handlers for malformed bodies and unexpected
failures.

Dependencies: fastapi, knowledge_chat.core.exceptions, knowledge_chat.observability
System role: HTTP error translation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from knowledge_chat.core.exceptions import (
    KnowledgeChatException,
    QuotaExhaustedError,
    ValidationError,
)
from knowledge_chat.models.common import ErrorEnvelope
from knowledge_chat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def status_for(exc: Exception) -> int:
    """Map an exception to its HTTP status code."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, QuotaExhaustedError):
        return 429
    return 500


def error_response(
    error: str,
    status_code: int,
    step: str | None = None,
) -> JSONResponse:
    """
    Build an error envelope response.

    Args:
        error: Human-readable error message
        status_code: HTTP status code
        step: Chat step that failed, if any

    Returns:
        JSONResponse: Envelope without null fields
    """
    envelope = ErrorEnvelope(step=step, error=error)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


def exception_response(exc: Exception, step: str | None = None) -> JSONResponse:
    """Build an error envelope response from a domain exception."""
    message = exc.message if isinstance(exc, KnowledgeChatException) else str(exc)
    return error_response(message, status_for(exc), step=step)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    detail = first.get("msg", "Invalid request")
    logger.warning(f"{__name__}:validation - {request.method} {request.url.path}: {location} {detail}")
    return error_response(
        f"Malformed request: {location} {detail}".strip(),
        422,
        step=request.query_params.get("step"),
    )


async def _domain_exception_handler(request: Request, exc: KnowledgeChatException) -> JSONResponse:
    logger.error(f"{__name__}:domain - {request.method} {request.url.path}: {exc}")
    return exception_response(exc)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(
        logger,
        f"{__name__}:unhandled - {request.method} {request.url.path}",
        exc,
        path=request.url.path,
    )
    return error_response("Internal server error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach envelope-producing exception handlers to the app."""
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(KnowledgeChatException, _domain_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
