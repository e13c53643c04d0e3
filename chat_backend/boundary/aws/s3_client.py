"""
S3 client for the uploads bucket.

Stores uploaded attachments and reads them back by key prefix.
Objects are keyed ``{key_prefix}{file_id}-{sanitized_name}``.

Dependencies: boto3, tenacity
System role: Blob storage boundary for uploads and attachment resolution
"""

import logging

import boto3
from botocore.exceptions import ClientError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

logger = logging.getLogger(__name__)

THROTTLING_CODES = {"Throttling", "ThrottlingException", "SlowDown", "RequestLimitExceeded", "503"}
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
READ_RETRY_WAIT = wait_exponential(multiplier=0.2, max=2) + wait_random(0, 0.2)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", "Unknown"))


def is_throttling_error(exc: BaseException) -> bool:
    """Return True for S3 errors worth retrying."""
    return isinstance(exc, ClientError) and _error_code(exc) in THROTTLING_CODES


def is_not_found_error(exc: BaseException) -> bool:
    """Return True when S3 reports a missing key."""
    return isinstance(exc, ClientError) and _error_code(exc) in NOT_FOUND_CODES


_read_retry = retry(
    retry=retry_if_exception(is_throttling_error),
    stop=stop_after_attempt(3),
    wait=READ_RETRY_WAIT,
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__} - S3 throttled, retry {retry_state.attempt_number}/3"
    ),
    reraise=True,
)


class S3UploadClient:
    """S3 client for upload bucket operations."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        key_prefix: str = "uploads/",
        s3_client=None,
    ) -> None:
        """
        Initialize S3 client for the uploads bucket.

        Args:
            bucket: S3 bucket name for uploads
            region: AWS region for S3 bucket
            key_prefix: Prefix for every upload key
            s3_client: Preconfigured boto3 client (tests, custom endpoints)
        """
        self._bucket = bucket
        self._region = region
        self.key_prefix = key_prefix
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    def build_key(self, file_id: str, safe_name: str) -> str:
        """Object key for an upload."""
        return f"{self.key_prefix}{file_id}-{safe_name}"

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        """
        Store an object.

        Args:
            key: Object key
            data: Object body
            content_type: MIME type recorded on the object

        Raises:
            ClientError: If the upload fails
        """
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )

    @_read_retry
    def find_key(self, file_id: str) -> str | None:
        """
        Find the stored key for an upload id.

        Args:
            file_id: Upload identifier

        Returns:
            str | None: First matching key, None if nothing matches
        """
        response = self._s3_client.list_objects_v2(
            Bucket=self._bucket,
            Prefix=f"{self.key_prefix}{file_id}-",
            MaxKeys=1,
        )
        contents = response.get("Contents") or []
        if not contents:
            return None
        return contents[0]["Key"]

    @_read_retry
    def read_head(self, key: str, max_bytes: int) -> bytes | None:
        """
        Read at most ``max_bytes`` from the start of an object.

        Args:
            key: Object key
            max_bytes: Byte cap

        Returns:
            bytes | None: Object prefix, None if the object vanished
        """
        try:
            response = self._s3_client.get_object(
                Bucket=self._bucket,
                Key=key,
                Range=f"bytes=0-{max_bytes - 1}",
            )
        except ClientError as e:
            if is_not_found_error(e):
                return None
            raise
        body = response["Body"]
        try:
            # Range may be ignored by S3-compatible backends
            return body.read(max_bytes)[:max_bytes]
        finally:
            body.close()


__all__ = ["S3UploadClient", "is_not_found_error", "is_throttling_error"]
