"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"success": false, "error": "validation_failed", "message": "Missing fields"}
        413: {"success": false, "error": "payload_too_large", "message": "..."}
        500: {"success": false, "error": "storage_error", "message": "..."}
    """

    success: bool = False
    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "payload_too_large", "storage_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | list[Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
