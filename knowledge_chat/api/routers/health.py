"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/usage

Dependencies: knowledge_chat.api.deps, knowledge_chat.core.usage_budget
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from knowledge_chat.api.deps import ServiceCache, get_service_cache, get_usage_budget
from knowledge_chat.core.usage_budget import UsageBudget

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class UsageResponse(BaseModel):
    """Remaining external call budget (None means unlimited)."""

    remaining: dict[str, int | None]


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(cache: ServiceCache = Depends(get_service_cache)) -> HealthResponse:
    """Database health check."""
    try:
        async with cache.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:health_check_db - {type(e).__name__}: {e}")
        return HealthResponse(status="unhealthy", message="Database connection failed")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/usage", response_model=UsageResponse)
async def usage(budget: UsageBudget = Depends(get_usage_budget)) -> UsageResponse:
    """Report remaining usage budget."""
    return UsageResponse(remaining=budget.remaining())
