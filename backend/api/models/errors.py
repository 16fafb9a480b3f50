"""
Error response models.

Every FinearrError is rendered in this shape by the app's exception
handlers, which keeps the "error" field a stable machine-checkable code.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Stable error code, e.g. REQUEST_NOT_FOUND")
    message: str
    details: dict[str, Any] = {}


class ValidationErrorResponse(ErrorResponse):
    """Validation error response format."""

    error: str = "VALIDATION_ERROR"
