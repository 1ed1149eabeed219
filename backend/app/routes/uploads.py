"""
Glee Threads Backend — Upload Routes
======================================

What:  POST /api/upload (store an image) and GET /api/files/{path} (serve
       images stored by the local backend).
Who:   The customizer page (customer artwork) and the admin product form.

Processing Steps (upload):
    1. Read the multipart `file` field into memory (bounded by MAX_UPLOAD_SIZE)
    2. Name it from ?filename=, the part's own filename, or upload-<ms>.png
    3. Delegate to BlobStorageService, which returns the blob descriptor

Error responses (handled by global exception handlers):
    HTTP 400: no file / file too large (ValidationError)
    HTTP 500: missing blob token (StorefrontError) or storage failure
              (BlobStorageError → {"error": "Upload failed", "details": ...})
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import FileResponse

from app.exceptions import NotFoundError, ValidationError
from app.schemas.common import ErrorResponse
from app.schemas.store import UploadResponse
from app.services.blob_service import blob_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Uploads"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"description": "File body missing or too large", "model": ErrorResponse},
        500: {"description": "Storage misconfigured or upload failed", "model": ErrorResponse},
    },
    summary="Upload an image",
)
async def upload_file(
    file: Optional[UploadFile] = File(default=None, description="Image to store"),
    filename: Optional[str] = Query(default=None, description="Name to store the file under"),
) -> UploadResponse:
    if file is None:
        raise ValidationError("File body missing", field="file")

    try:
        content = await file.read()
        logger.info(
            "Received upload: filename=%s, size=%d bytes",
            filename or file.filename or "unknown",
            len(content),
        )
        return await blob_service.upload(
            content,
            filename=filename or file.filename,
            content_type=file.content_type,
        )
    finally:
        await file.close()


@router.get(
    "/files/{file_path:path}",
    responses={
        200: {"description": "Stored file"},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve a locally stored upload",
)
async def serve_file(file_path: str) -> FileResponse:
    full_path = blob_service.resolve_local(file_path)
    if full_path is None:
        raise ValidationError("Invalid file path")
    if not full_path.is_file():
        raise NotFoundError("File not found", resource="file", resource_id=file_path)

    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
