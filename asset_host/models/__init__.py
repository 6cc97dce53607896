"""Domain models for the Asset Host API."""

from asset_host.models.asset import Collection

__all__ = [
    "Collection",
]
