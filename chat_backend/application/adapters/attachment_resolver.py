"""
Attachment resolver.

Turns an upload identifier into decoded text for prompt injection.
Content is capped at a fixed number of bytes and decoded as permissive
UTF-8; truncation is silent and malformed sequences become U+FFFD.

Dependencies: fastapi (threadpool), chat_backend.boundary.aws
System role: Attachment lookup adapter for the chat flow
"""

import logging
import re

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from chat_backend.boundary.aws.s3_client import S3UploadClient
from chat_backend.core.exceptions import StorageUnavailableError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 100_000
FILE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,64}$")


def normalize_file_id(raw: str | None) -> str | None:
    """
    Trim and validate an optional upload identifier.

    Args:
        raw: Identifier from the request, possibly absent

    Returns:
        str | None: Identifier, or None when absent/empty

    Raises:
        ValidationError: If the identifier contains characters outside [A-Za-z0-9_]
    """
    if raw is None:
        return None
    file_id = raw.strip()
    if not file_id:
        return None
    if not FILE_ID_PATTERN.match(file_id):
        raise ValidationError("fileId must be 1..64 characters of [A-Za-z0-9_]", field="fileId")
    return file_id


class AttachmentResolver:
    """Resolves upload identifiers to size-capped text."""

    def __init__(self, s3_client: S3UploadClient, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        """
        Initialize resolver.

        Args:
            s3_client: Uploads bucket client
            max_bytes: Maximum bytes read from any object
        """
        self._s3_client = s3_client
        self.max_bytes = max_bytes

    async def resolve(self, file_id: str) -> str | None:
        """
        Look up an upload and return its decoded text.

        Args:
            file_id: Upload identifier

        Returns:
            str | None: Decoded content (at most ``max_bytes`` bytes read), None if no upload matches

        Raises:
            StorageUnavailableError: If blob storage fails
        """
        try:
            key = await run_in_threadpool(self._s3_client.find_key, file_id)
            if key is None:
                logger.info(f"{__name__}:resolve - No upload for file_id={file_id}")
                return None
            data = await run_in_threadpool(self._s3_client.read_head, key, self.max_bytes)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:resolve - Blob storage failure for file_id={file_id}: {type(e).__name__}")
            raise StorageUnavailableError(
                "Attachment storage unavailable",
                operation="resolve_attachment",
                component="blob",
            ) from e

        if data is None:
            return None
        return data[: self.max_bytes].decode("utf-8", errors="replace")
