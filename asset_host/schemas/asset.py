"""
Pydantic schemas for asset metadata and request/response bodies.

Wire names (userId, fileName, isNSFW, pfp, ...) are kept as aliases so
sidecar files written by earlier server versions still load.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from asset_host.models.asset import Collection


def coerce_user_id(v: Any) -> Any:
    """Older clients sent numeric user ids; store them as strings."""
    if isinstance(v, bool):
        return v
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if isinstance(v, (int, float)):
        return str(v)
    return v


# ===================
# Stored metadata
# ===================

class AssetFields(BaseModel):
    """Caller-supplied metadata for an upload."""

    owner_id: str | None = Field(default=None, description="Uploading user's identifier")
    description: str = Field(default="")
    is_public: bool = Field(default=False)
    is_nsfw: bool = Field(default=False)
    preview: str | None = Field(
        default=None,
        description="Preview identifier (worlds) or profile picture reference (avatars)",
    )


class AssetMetadata(BaseModel):
    """Contents of a `<fileName>.json` sidecar."""

    model_config = ConfigDict(populate_by_name=True)

    owner_id: str = Field(..., alias="userId", min_length=1)
    file_name: str = Field(..., alias="fileName", min_length=1)
    description: str = Field(default="")
    is_public: bool = Field(default=False, alias="isPublic")
    is_nsfw: bool = Field(default=False, alias="isNSFW")
    preview: str | None = Field(default=None, alias="pfp")
    uploaded_at: datetime = Field(..., alias="uploadedAt")

    @field_validator("owner_id", mode="before")
    @classmethod
    def numeric_owner_id(cls, v: Any) -> Any:
        return coerce_user_id(v)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_public", "is_nsfw", mode="before")
    @classmethod
    def default_flag(cls, v: Any) -> Any:
        return False if v is None else v

    @field_serializer("uploaded_at")
    def serialize_uploaded_at(self, v: datetime) -> str:
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AssetRecord(AssetMetadata):
    """A stored asset: sidecar metadata plus its collection and public URL."""

    collection: Collection = Field(..., exclude=True)
    url: str = Field(..., description="Computed at read time, never stored")

    def to_sidecar(self) -> dict[str, Any]:
        """Serialize the fields persisted in the sidecar file."""
        return self.model_dump(by_alias=True, mode="json", exclude={"url"})

    def to_response(self) -> dict[str, Any]:
        """Serialize for listing responses (sidecar fields plus url)."""
        return self.model_dump(by_alias=True, mode="json")


class OrphanReport(BaseModel):
    """Half-written records found in a collection directory."""

    model_config = ConfigDict(populate_by_name=True)

    collection: Collection
    binaries_without_metadata: list[str] = Field(default_factory=list, alias="binariesWithoutMetadata")
    metadata_without_binary: list[str] = Field(default_factory=list, alias="metadataWithoutBinary")


# ===================
# Request Schemas
# ===================

class Base64UploadRequest(BaseModel):
    """JSON upload body with the binary payload base64-encoded inline."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    file_name: str | None = Field(default=None, alias="fileName")
    file_content: str | None = Field(default=None, alias="fileContent", description="Base64-encoded file bytes")
    description: str | None = None
    is_public: bool | None = Field(default=False, alias="isPublic")
    is_nsfw: bool | None = Field(default=False, alias="isNSFW")
    pfp: str | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def numeric_user_id(cls, v: Any) -> Any:
        return coerce_user_id(v)

    def to_fields(self) -> AssetFields:
        return AssetFields(
            owner_id=self.user_id,
            description=self.description or "",
            is_public=bool(self.is_public),
            is_nsfw=bool(self.is_nsfw),
            preview=self.pfp or None,
        )


# ===================
# Response Schemas
# ===================

class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    file_name: str = Field(..., alias="fileName")
    url: str
    message: str


class VerifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file_name: str = Field(..., alias="fileName")


class DeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    file_name: str = Field(..., alias="fileName")
