"""
Core business logic module.

Contains the exception hierarchy, the per-session actor store and the
rate limiter. All business rules and domain-specific logic reside here.
"""

from chat_backend.core.exceptions import (
    AttachmentNotFoundError,
    ChatBackendError,
    ModelUnavailableError,
    PayloadTooLargeError,
    RateLimitedError,
    StorageUnavailableError,
    ValidationError,
)

# Business logic modules
from chat_backend.core.rate_limiter import SlidingWindowRateLimiter
from chat_backend.core.session_actor import SessionActor, SessionActorRegistry

__all__ = [
    # Exceptions
    "ChatBackendError",
    "ValidationError",
    "PayloadTooLargeError",
    "RateLimitedError",
    "StorageUnavailableError",
    "ModelUnavailableError",
    "AttachmentNotFoundError",
    # Business logic
    "SlidingWindowRateLimiter",
    "SessionActor",
    "SessionActorRegistry",
]
