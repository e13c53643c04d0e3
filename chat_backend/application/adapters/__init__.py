"""Supporting adapters."""

from .attachment_resolver import AttachmentResolver, normalize_file_id

__all__ = ["AttachmentResolver", "normalize_file_id"]
