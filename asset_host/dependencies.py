"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends

from asset_host.config import Settings, get_settings
from asset_host.services.asset_service import AssetService
from asset_host.storage import AssetRepository, get_storage


def get_asset_service(
    storage: Annotated[AssetRepository, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AssetService:
    return AssetService(storage, max_upload_size=settings.MAX_UPLOAD_SIZE)


# Type aliases for cleaner endpoint signatures
Storage = Annotated[AssetRepository, Depends(get_storage)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Assets = Annotated[AssetService, Depends(get_asset_service)]
