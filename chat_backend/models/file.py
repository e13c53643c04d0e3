"""
File domain models and schemas.

Response schemas for attachment upload and retrieval.

Dependencies: pydantic
System role: Upload API contracts
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    """Response schema for a stored upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_id: str
    name: str
    size: int


class FileContentResponse(BaseModel):
    """Decoded, size-capped content of a stored upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_id: str
    content: str
