"""Core utilities and exceptions for the Asset Host API."""

from asset_host.core.exceptions import (
    AssetHostException,
    ValidationException,
    PayloadTooLargeException,
    StorageException,
    MetadataCorruptedException,
)

__all__ = [
    "AssetHostException",
    "ValidationException",
    "PayloadTooLargeException",
    "StorageException",
    "MetadataCorruptedException",
]
