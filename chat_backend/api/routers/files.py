"""File API endpoints.

Routes:
- POST /upload - Store a .txt/.md/.json attachment, returns its fileId
- GET /files/{file_id} - Decoded, size-capped content of an attachment

Dependencies: chat_backend.application.services.upload_service, chat_backend.application.adapters
System role: Attachment HTTP API (pass-through to blob storage)
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from chat_backend.api.deps import get_attachment_resolver, get_upload_service
from chat_backend.application.adapters.attachment_resolver import (
    AttachmentResolver,
    normalize_file_id,
)
from chat_backend.application.services.upload_service import UploadService
from chat_backend.core.exceptions import AttachmentNotFoundError, ValidationError
from chat_backend.models.common import SuccessResponse
from chat_backend.models.file import FileContentResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


@router.post("/upload", response_model=SuccessResponse[UploadResponse])
async def upload_file(
    file: UploadFile = File(...),
    upload_service: UploadService = Depends(get_upload_service),
) -> SuccessResponse[UploadResponse]:
    """Store an uploaded attachment.

    Reads at most one byte past the size cap so oversized uploads are
    rejected without buffering them whole.

    Args:
        file: Multipart file field
        upload_service: Injected UploadService

    Returns:
        SuccessResponse[UploadResponse]: fileId, stored name and size
    """
    data = await file.read(upload_service.max_upload_bytes + 1)
    result = await upload_service.upload(file.filename, data)
    return SuccessResponse[UploadResponse](data=result)


@router.get("/files/{file_id}", response_model=SuccessResponse[FileContentResponse])
async def get_file(
    file_id: str,
    resolver: AttachmentResolver = Depends(get_attachment_resolver),
) -> SuccessResponse[FileContentResponse]:
    """Return the decoded content of an attachment.

    Args:
        file_id: Upload identifier
        resolver: Injected AttachmentResolver

    Returns:
        SuccessResponse[FileContentResponse]: Capped content
    """
    normalized = normalize_file_id(file_id)
    if normalized is None:
        raise ValidationError("fileId required", field="fileId")
    content = await resolver.resolve(normalized)
    if content is None:
        raise AttachmentNotFoundError(normalized)
    return SuccessResponse[FileContentResponse](
        data=FileContentResponse(file_id=normalized, content=content)
    )
