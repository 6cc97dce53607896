"""
Pydantic schemas for request/response validation.
"""

from asset_host.schemas.asset import (
    AssetFields,
    AssetMetadata,
    AssetRecord,
    Base64UploadRequest,
    DeleteResponse,
    OrphanReport,
    UploadResponse,
    VerifyResponse,
)
from asset_host.schemas.error import ErrorResponse

__all__ = [
    "AssetFields",
    "AssetMetadata",
    "AssetRecord",
    "Base64UploadRequest",
    "DeleteResponse",
    "OrphanReport",
    "UploadResponse",
    "VerifyResponse",
    "ErrorResponse",
]
