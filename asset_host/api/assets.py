"""
Asset lookup and removal endpoints.

Collection identifiers other than "world" resolve to avatars on every
route here.
"""

from typing import Any

from fastapi import APIRouter, Query

from asset_host.core.exceptions import ValidationException
from asset_host.dependencies import Assets
from asset_host.models.asset import Collection
from asset_host.schemas.asset import DeleteResponse, OrphanReport, VerifyResponse

router = APIRouter()


@router.get("/verify", response_model=VerifyResponse)
async def verify_asset(
    assets: Assets,
    type_: str | None = Query(default=None, alias="type"),
    name: str | None = Query(default=None),
):
    """
    Check that both the binary and its metadata are stored.

    A missing asset is reported as `success: false`, not as 404.
    """
    if not type_ or not name:
        raise ValidationException("Missing type or name")

    return await assets.verify(Collection.parse(type_), name)


@router.get("/list/{type_}")
async def list_assets(type_: str, assets: Assets) -> list[dict[str, Any]]:
    """
    List every stored record in a collection.

    Each record is the stored metadata plus a freshly computed public `url`.
    Order follows directory enumeration.
    """
    return await assets.list(Collection.parse(type_))


@router.get("/orphans/{type_}", response_model=OrphanReport)
async def list_orphans(type_: str, assets: Assets):
    """Report binaries without metadata and metadata without a binary."""
    return await assets.orphans(Collection.parse(type_))


@router.delete("/{type_}/{name}", response_model=DeleteResponse)
async def delete_asset(type_: str, name: str, assets: Assets):
    """
    Delete an asset and its metadata.

    Succeeds whether or not either file existed.
    """
    return await assets.delete(Collection.parse(type_), name)
