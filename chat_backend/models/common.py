"""
Common response models and utilities.

Success and failure envelopes shared by every endpoint:
``{"ok": true, "data": ...}`` and ``{"ok": false, "error": {"code", "message"}}``.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response wrapper."""

    ok: Literal[True] = True
    data: T


class ErrorDetail(BaseModel):
    """Machine-readable error code with a human-readable message."""

    code: str = Field(description="Stable error code (validation_error, rate_limit, ...)")
    message: str = Field(description="Error message safe to show to the caller")


class ErrorResponse(BaseModel):
    """Error response schema."""

    ok: Literal[False] = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
