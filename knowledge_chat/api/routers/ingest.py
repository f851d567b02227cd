"""Ingestion API endpoints.

Routes:
- POST /ingest - Upload a text file into the knowledge base

Dependencies: knowledge_chat.application.services.ingestion_service
System role: Knowledge base ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from knowledge_chat.api.deps import get_ingestion_service, get_usage_budget
from knowledge_chat.api.errors import error_response, exception_response
from knowledge_chat.application.services.ingestion_service import (
    UNCHUNKABLE_REASON,
    IngestionService,
)
from knowledge_chat.core.exceptions import KnowledgeChatException
from knowledge_chat.core.usage_budget import UsageBudget
from knowledge_chat.models.ingestion import IngestResponse, IngestStats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["ingest"])

LEGACY_FILE_FIELD = "custpage_rag_data_source_file"


@router.post("")
async def ingest_file(
    file: UploadFile | None = File(default=None),
    legacy_file: UploadFile | None = File(default=None, alias=LEGACY_FILE_FIELD),
    service: IngestionService = Depends(get_ingestion_service),
    budget: UsageBudget = Depends(get_usage_budget),
) -> JSONResponse:
    """Ingest an uploaded UTF-8 text file.

    Args:
        file: Uploaded file (multipart field "file")
        legacy_file: Same upload under its older field name
        service: Injected IngestionService
        budget: Injected usage budget (remaining usage is logged)

    Returns:
        JSONResponse: Ingestion outcome with upload statistics, or an
            error envelope
    """
    upload = file or legacy_file
    if upload is None:
        return error_response("No file provided", 400)

    raw = await upload.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning(f"{__name__}:ingest_file - {upload.filename} is not valid UTF-8")
        text = ""
    if not text:
        return error_response("Failed to extract file content", 400)

    filename = upload.filename or "upload"
    logger.info(f"{__name__}:ingest_file - START filename={filename} size={len(raw)}")

    try:
        result = await service.ingest(text, filename)
    except KnowledgeChatException as e:
        logger.warning(f"{__name__}:ingest_file - {type(e).__name__}: {e.message}")
        return exception_response(e)
    finally:
        logger.info(f"{__name__}:ingest_file - remaining usage {budget.remaining()}")

    stats = IngestStats(
        filename=filename,
        total_chunks=result.total_chunks,
        accepted_chunks=result.accepted_chunks,
        file_size=len(raw),
    )

    if result.success:
        body = IngestResponse(success=True, message="File ingestion complete", stats=stats)
        return JSONResponse(content=body.model_dump())

    if result.reason == UNCHUNKABLE_REASON:
        body = IngestResponse(success=False, message="Unable to chunk the file", stats=stats)
        return JSONResponse(status_code=400, content=body.model_dump())

    return error_response(
        result.error or "File ingestion failed",
        500,
    )
