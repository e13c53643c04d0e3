"""
Exception hierarchy for the chat backend.

Provides layered exception structure for domain-specific errors.
Every exception carries a stable error code and an HTTP status class so
the API layer can render the failure envelope without inspecting types.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatBackendError(Exception):
    """Base exception for all chat backend errors."""

    code: str = "internal"
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ChatBackendError):
    """Raised when request input is missing or malformed."""

    code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class PayloadTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size cap."""

    code = "payload_too_large"
    status_code = 413


class RateLimitedError(ChatBackendError):
    """Raised when a session exceeds its request budget for the current window."""

    code = "rate_limit"
    status_code = 429

    def __init__(
        self,
        session_id: str,
        retry_after_seconds: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize rate limit error.

        Args:
            session_id: Session that was throttled
            retry_after_seconds: Suggested wait before retrying
            details: Additional context
        """
        details = details or {}
        details["retry_after_seconds"] = retry_after_seconds
        self.session_id = session_id
        self.retry_after_seconds = retry_after_seconds
        super().__init__("Too many requests; try again later", details)


class StorageUnavailableError(ChatBackendError):
    """Raised when session storage or blob storage fails."""

    code = "internal"
    status_code = 500

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        component: str = "session_store",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (append_message, export_session, ...)
            component: Storage component that failed (session_store, blob)
            details: Additional context
        """
        details = details or {}
        details["component"] = component
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ModelUnavailableError(ChatBackendError):
    """Raised when the language model call fails or times out."""

    code = "ai_error"
    status_code = 502


class AttachmentNotFoundError(ChatBackendError):
    """Raised when a requested upload does not exist."""

    code = "not_found"
    status_code = 404

    def __init__(self, file_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize attachment not found error.

        Args:
            file_id: Upload identifier that had no match
            details: Additional context
        """
        details = details or {}
        details["file_id"] = file_id
        super().__init__(f"File not found: {file_id}", details)
