"""
Test suite for AttachmentResolver and fileId normalization.

Uses a mocked S3UploadClient; verifies the byte cap, permissive decoding,
missing uploads and blob storage fault mapping.

System role: Verification of attachment lookup adapter
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from chat_backend.application.adapters.attachment_resolver import (
    AttachmentResolver,
    normalize_file_id,
)
from chat_backend.core.exceptions import StorageUnavailableError, ValidationError

FILE_ID = "0f1e2d3c4b5a"
KEY = f"uploads/{FILE_ID}-notes.txt"


@pytest.fixture
def mock_s3_client() -> MagicMock:
    """Provide mocked uploads client with one stored object."""
    client = MagicMock()
    client.find_key.return_value = KEY
    client.read_head.return_value = b"hello"
    return client


class TestNormalizeFileId:
    """Test suite for normalize_file_id()."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_normalize_should_treat_blank_as_absent(self, raw) -> None:
        """Test absent or blank identifiers mean no attachment."""
        assert normalize_file_id(raw) is None

    def test_normalize_should_trim_valid_identifier(self) -> None:
        """Test surrounding whitespace is removed."""
        assert normalize_file_id("  abc_123XYZ ") == "abc_123XYZ"

    @pytest.mark.parametrize("raw", ["a/b", "../etc", "id with space", "x" * 65, "id*", "abc-def"])
    def test_normalize_should_reject_unsafe_identifier(self, raw: str) -> None:
        """Test identifiers outside the safe alphabet are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_file_id(raw)

        assert exc_info.value.details["field"] == "fileId"


class TestAttachmentResolverResolve:
    """Test suite for AttachmentResolver.resolve()."""

    @pytest.mark.asyncio
    async def test_resolve_should_return_decoded_content(self, mock_s3_client: MagicMock) -> None:
        """Test stored bytes come back as text."""
        # Arrange
        resolver = AttachmentResolver(mock_s3_client, max_bytes=100)

        # Act
        content = await resolver.resolve(FILE_ID)

        # Assert
        assert content == "hello"
        mock_s3_client.find_key.assert_called_once_with(FILE_ID)
        mock_s3_client.read_head.assert_called_once_with(KEY, 100)

    @pytest.mark.asyncio
    async def test_resolve_should_never_exceed_byte_cap(self, mock_s3_client: MagicMock) -> None:
        """Test oversized objects are truncated silently."""
        # Arrange
        mock_s3_client.read_head.return_value = b"a" * 500
        resolver = AttachmentResolver(mock_s3_client, max_bytes=100)

        # Act
        content = await resolver.resolve(FILE_ID)

        # Assert
        assert content == "a" * 100

    @pytest.mark.asyncio
    async def test_resolve_should_replace_malformed_utf8(self, mock_s3_client: MagicMock) -> None:
        """Test invalid byte sequences decode to replacement characters."""
        # Arrange
        mock_s3_client.read_head.return_value = b"ok\xff\xfe"
        resolver = AttachmentResolver(mock_s3_client)

        # Act
        content = await resolver.resolve(FILE_ID)

        # Assert
        assert content == "ok\ufffd\ufffd"

    @pytest.mark.asyncio
    async def test_resolve_should_tolerate_cut_multibyte_character(self, mock_s3_client: MagicMock) -> None:
        """Test a cap falling inside a multi-byte character does not raise."""
        # Arrange
        mock_s3_client.read_head.return_value = "ééé".encode("utf-8")
        resolver = AttachmentResolver(mock_s3_client, max_bytes=5)

        # Act
        content = await resolver.resolve(FILE_ID)

        # Assert
        assert content == "éé\ufffd"

    @pytest.mark.asyncio
    async def test_resolve_should_return_none_when_no_upload_matches(
        self, mock_s3_client: MagicMock
    ) -> None:
        """Test unknown ids resolve to None without reading."""
        # Arrange
        mock_s3_client.find_key.return_value = None
        resolver = AttachmentResolver(mock_s3_client)

        # Act
        content = await resolver.resolve(FILE_ID)

        # Assert
        assert content is None
        mock_s3_client.read_head.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolve_should_return_none_when_object_vanished(self, mock_s3_client: MagicMock) -> None:
        """Test a key deleted between list and read resolves to None."""
        # Arrange
        mock_s3_client.read_head.return_value = None
        resolver = AttachmentResolver(mock_s3_client)

        # Act & Assert
        assert await resolver.resolve(FILE_ID) is None

    @pytest.mark.asyncio
    async def test_resolve_should_map_client_error_to_storage_unavailable(
        self, mock_s3_client: MagicMock
    ) -> None:
        """Test blob storage faults surface as StorageUnavailableError."""
        # Arrange
        mock_s3_client.find_key.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}},
            "ListObjectsV2",
        )
        resolver = AttachmentResolver(mock_s3_client)

        # Act & Assert
        with pytest.raises(StorageUnavailableError) as exc_info:
            await resolver.resolve(FILE_ID)

        assert exc_info.value.details["component"] == "blob"
