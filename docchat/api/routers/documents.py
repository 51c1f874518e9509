"""
Document upload API endpoints.

Routes: POST /upload

Dependencies: docchat.application.services.ingestion_service, docchat.configs
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from docchat.api.deps import get_ingestion_service, get_settings_dependency
from docchat.application.services.ingestion_service import IngestionService
from docchat.configs import Settings
from docchat.configs.upload import UploadSettings
from docchat.core.exceptions import ValidationError
from docchat.core.text_extractor import base_mime_type
from docchat.models.document import UploadedFile, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

INVALID_TYPE_MESSAGE = "Invalid file type. Only PDF, TXT, DOC, and DOCX files are allowed."


async def read_uploads(files: list[UploadFile], limits: UploadSettings) -> list[UploadedFile]:
    """
    Validate multipart files and read them into memory.

    Args:
        files: Files from the `documents` form field
        limits: Upload count, size, and MIME constraints

    Returns:
        list[UploadedFile]: Validated uploads in request order

    Raises:
        ValidationError: Too many files, unsupported type, or oversized file
    """
    if len(files) > limits.max_files:
        raise ValidationError(
            f"Too many files. Maximum: {limits.max_files}",
            field="documents",
            details={"count": len(files)},
        )

    uploads = []
    for file in files:
        filename = file.filename or "document"
        mime_type = base_mime_type(file.content_type)

        if mime_type not in limits.allowed_mime_types:
            logger.warning(
                "Upload rejected: invalid file type",
                extra={"document_name": filename, "mime_type": mime_type},
            )
            raise ValidationError(
                INVALID_TYPE_MESSAGE,
                field="documents",
                details={"filename": filename, "mimetype": mime_type},
            )

        data = await file.read()
        if len(data) > limits.max_file_size:
            raise ValidationError(
                f"File too large. Maximum size: {limits.max_file_size // (1024 * 1024)}MB",
                field="documents",
                details={"filename": filename, "size": len(data)},
            )

        uploads.append(UploadedFile(filename=filename, mime_type=mime_type, data=data))

    return uploads


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_documents(
    session_id: str | None = Form(default=None, alias="sessionId"),
    documents: list[UploadFile] | None = File(default=None),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    settings: Settings = Depends(get_settings_dependency),
) -> UploadResponse:
    """
    Upload 1-10 documents to a session via multipart form.

    Files are processed one at a time. A failing file is reported in
    `errors` without aborting the rest of the batch.

    Args:
        session_id: Session identifier from the `sessionId` form field
        documents: Files from the `documents` form field
        ingestion_service: Injected IngestionService
        settings: Application settings

    Returns:
        UploadResponse: Per-file results and per-file errors

    Raises:
        ValidationError: Missing session id, no files, or a rejected file
    """
    if not session_id:
        raise ValidationError("Session ID is required", field="sessionId")
    if not documents:
        raise ValidationError("No files uploaded", field="documents")

    logger.info(
        f"{__name__}:upload_documents - START",
        extra={"session_id": session_id, "file_count": len(documents)},
    )

    uploads = await read_uploads(documents, settings.upload)
    batch = await ingestion_service.ingest_batch(session_id, uploads)

    logger.info(
        f"{__name__}:upload_documents - END",
        extra={
            "session_id": session_id,
            "succeeded": len(batch.results),
            "failed": len(batch.errors),
        },
    )

    return UploadResponse(
        message=f"Processed {len(batch.results)} documents successfully",
        results=batch.results,
        errors=batch.errors or None,
    )
