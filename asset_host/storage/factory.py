"""
Asset repository factory.
Provides the process-wide repository instance.
"""

from functools import lru_cache

from asset_host.config import get_settings
from asset_host.storage.base import AssetRepository
from asset_host.storage.local import LocalAssetRepository


@lru_cache
def get_storage_backend() -> AssetRepository:
    """
    Get the configured asset repository.

    Uses LRU cache so every request shares one instance, and with it one
    table of per-key write locks.
    """
    settings = get_settings()
    return LocalAssetRepository(
        data_root=settings.DATA_ROOT,
        public_base_url=settings.PUBLIC_BASE_URL,
        strict_listing=settings.STRICT_LISTING,
    )


def get_storage() -> AssetRepository:
    """
    Dependency function for FastAPI.

    Usage:
        @router.get("/list/{type}")
        async def list_assets(storage: AssetRepository = Depends(get_storage)):
            ...
    """
    return get_storage_backend()
