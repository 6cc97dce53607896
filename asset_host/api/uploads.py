"""
Upload endpoints.

Two bindings decode to the same repository put:
- POST /upload: multipart form with a `type` field and a `file` part
- POST /worlds, POST /avatars: JSON body with base64 `fileContent`
"""

from fastapi import APIRouter, File, Form, UploadFile

from asset_host.core.exceptions import ValidationException
from asset_host.dependencies import Assets
from asset_host.models.asset import Collection
from asset_host.schemas.asset import AssetFields, Base64UploadRequest, UploadResponse
from asset_host.schemas.error import ErrorResponse

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
}


@router.post("/upload", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_multipart(
    assets: Assets,
    file: UploadFile | None = File(default=None, description="Asset binary"),
    type_: str | None = Form(default=None, alias="type", description="world or avatar"),
    userId: str | None = Form(default=None),
    name: str | None = Form(default=None),
    fileName: str | None = Form(default=None),
    description: str | None = Form(default=None),
    isPublic: bool = Form(default=False),
    isNSFW: bool = Form(default=False),
    preview: str | None = Form(default=None, description="World preview identifier"),
    pfp: str | None = Form(default=None, description="Avatar profile picture reference"),
):
    """
    Upload an asset as multipart/form-data.

    The stored file name is taken from `name`, then `fileName`, then the
    file part's own filename.
    """
    file_name = name or fileName or (file.filename if file else None)

    missing = [
        field
        for field, value in (("type", type_), ("userId", userId), ("fileName", file_name), ("file", file))
        if not value
    ]
    if missing:
        raise ValidationException("Missing fields", details={"missing": missing})

    content = await assets.read_upload(file)
    fields = AssetFields(
        owner_id=userId,
        description=description or "",
        is_public=isPublic,
        is_nsfw=isNSFW,
        preview=preview or pfp,
    )
    return await assets.upload(Collection.parse(type_), file_name, content, fields)


@router.post("/worlds", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_world(body: Base64UploadRequest, assets: Assets):
    """Upload a world as JSON with base64-encoded content."""
    return await assets.upload_base64(Collection.WORLD, body)


@router.post("/avatars", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_avatar(body: Base64UploadRequest, assets: Assets):
    """Upload an avatar as JSON with base64-encoded content."""
    return await assets.upload_base64(Collection.AVATAR, body)
