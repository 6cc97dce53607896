"""
Asset storage layer.
Collections are kept as directories of binary + JSON sidecar pairs.
"""

from asset_host.storage.base import AssetRepository, encode_file_name, is_plain_file_name
from asset_host.storage.local import LocalAssetRepository
from asset_host.storage.locks import KeyedLock
from asset_host.storage.factory import get_storage_backend, get_storage

__all__ = [
    "AssetRepository",
    "LocalAssetRepository",
    "KeyedLock",
    "get_storage_backend",
    "get_storage",
    "encode_file_name",
    "is_plain_file_name",
]
