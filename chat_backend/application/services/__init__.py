"""Service orchestrators."""

from .chat_service import ChatService
from .upload_service import UploadService

__all__ = [
    "ChatService",
    "UploadService",
]
