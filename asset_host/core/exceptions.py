"""
Custom exceptions for the Asset Host API.
Every error body keeps the `success: false` flag the upload clients check.
"""

from typing import Any


class AssetHostException(Exception):
    """Base exception for all Asset Host errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "success": False,
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationException(AssetHostException):
    """400 - Missing or malformed upload fields."""

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class PayloadTooLargeException(AssetHostException):
    """413 - Upload size exceeds limit."""

    def __init__(self, max_size: int):
        max_size_mb = max_size / (1024 * 1024)
        super().__init__(
            error="payload_too_large",
            message=f"Maximum upload size exceeded ({max_size_mb:.0f}MB limit)",
            status_code=413,
        )


class StorageException(AssetHostException):
    """500 - Filesystem error while reading or writing an asset."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="storage_error",
            message=message,
            status_code=500,
            details=details,
        )


class MetadataCorruptedException(AssetHostException):
    """500 - A metadata sidecar could not be parsed (strict listing only)."""

    def __init__(self, sidecar: str, reason: str):
        super().__init__(
            error="metadata_corrupted",
            message=f"Malformed metadata file '{sidecar}': {reason}",
            status_code=500,
            details={"file": sidecar},
        )
