"""
Upload service.

Validates attachment uploads and stores them in the uploads bucket under
``{prefix}{file_id}-{sanitized_name}`` so the attachment resolver can find
them by id.

Dependencies: fastapi (threadpool), chat_backend.boundary.aws
System role: Upload path producing the fileId consumed by chat
"""

import logging
import uuid

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from chat_backend.boundary.aws.s3_client import S3UploadClient
from chat_backend.core.exceptions import (
    PayloadTooLargeError,
    StorageUnavailableError,
    ValidationError,
)
from chat_backend.models.file import UploadResponse

logger = logging.getLogger(__name__)

# Allowed extensions mapped to the content type stored on the object
ALLOWED_EXTENSIONS = {
    ".txt": "text/plain; charset=utf-8",
    ".md": "text/markdown; charset=utf-8",
    ".json": "application/json",
}


def split_extension(filename: str) -> tuple[str, str]:
    """Return (base, lowercased extension including the dot)."""
    if "." not in filename:
        return filename, ""
    base, ext = filename.rsplit(".", 1)
    return base, "." + ext.lower()


def validate_filename(filename: str) -> None:
    """
    Validate filename for security and allowed extensions.

    Args:
        filename: Original filename from user

    Raises:
        ValidationError: If filename is invalid or not allowed
    """
    if not filename or len(filename) > 255:
        raise ValidationError("Invalid filename length", field="file")

    # Block path traversal attacks
    if ".." in filename or "/" in filename or "\\" in filename:
        raise ValidationError("Invalid filename: path traversal detected", field="file")

    _, ext = split_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"File type '{ext or filename}' not allowed. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
            field="file",
        )


def sanitize_filename(filename: str) -> str:
    """
    Keep alphanumerics, hyphens and underscores of the base name.

    Args:
        filename: Validated original filename

    Returns:
        str: Safe name with lowercased extension
    """
    base, ext = split_extension(filename)
    safe_name = "".join(c for c in base if c.isascii() and (c.isalnum() or c in "-_"))
    if not safe_name:
        safe_name = "file"
    return f"{safe_name}{ext}"


class UploadService:
    """Stores validated attachments in blob storage."""

    def __init__(self, s3_client: S3UploadClient, max_upload_bytes: int = 1024 * 1024) -> None:
        """
        Initialize upload service.

        Args:
            s3_client: Uploads bucket client
            max_upload_bytes: Maximum accepted size in bytes
        """
        self._s3_client = s3_client
        self.max_upload_bytes = max_upload_bytes

    async def upload(self, filename: str | None, data: bytes) -> UploadResponse:
        """
        Validate and store one upload.

        Args:
            filename: Original filename
            data: File content

        Returns:
            UploadResponse: Generated fileId, sanitized name and size

        Raises:
            ValidationError: Bad filename, extension or empty file
            PayloadTooLargeError: File over the size cap
            StorageUnavailableError: Blob storage failure
        """
        filename = (filename or "").strip()
        validate_filename(filename)
        if not data:
            raise ValidationError("File is empty", field="file")
        if len(data) > self.max_upload_bytes:
            raise PayloadTooLargeError(
                f"File exceeds {self.max_upload_bytes} bytes",
                field="file",
                details={"size": len(data)},
            )

        file_id = uuid.uuid4().hex
        safe_name = sanitize_filename(filename)
        key = self._s3_client.build_key(file_id, safe_name)
        _, ext = split_extension(safe_name)

        try:
            await run_in_threadpool(self._s3_client.put_object, key, data, ALLOWED_EXTENSIONS[ext])
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:upload - Blob storage failure for key={key}: {type(e).__name__}")
            raise StorageUnavailableError(
                "Upload storage unavailable",
                operation="upload",
                component="blob",
            ) from e

        logger.info(
            "Upload stored",
            extra={"file_id": file_id, "file_name": safe_name, "size": len(data)},
        )
        return UploadResponse(file_id=file_id, name=safe_name, size=len(data))
