"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_attachment_resolver,
    get_chat_service,
    get_service_cache,
    get_upload_service,
)

__all__ = [
    "get_attachment_resolver",
    "get_chat_service",
    "get_service_cache",
    "get_upload_service",
]
