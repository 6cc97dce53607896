"""
Asset service - Business logic for asset operations.
Decodes both upload encodings into one repository put and shapes responses.
"""

import base64
import binascii
import logging
from typing import Any

from fastapi import UploadFile

from asset_host.core.exceptions import PayloadTooLargeException, ValidationException
from asset_host.models.asset import Collection
from asset_host.schemas.asset import (
    AssetFields,
    Base64UploadRequest,
    DeleteResponse,
    OrphanReport,
    UploadResponse,
    VerifyResponse,
)
from asset_host.services.metrics import MetricsCollector, get_metrics_collector
from asset_host.storage.base import AssetRepository

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 1024 * 1024  # 1MB


def decode_base64_content(value: str) -> bytes:
    """
    Decode a base64 payload.

    Accepts the standard and URL-safe alphabets, embedded whitespace and
    missing padding.

    Raises:
        ValidationException: If the value is not base64
    """
    cleaned = "".join(value.split()).replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationException("fileContent is not valid base64")


class AssetService:
    """Service class for asset operations."""

    def __init__(
        self,
        repository: AssetRepository,
        max_upload_size: int,
        metrics: MetricsCollector | None = None,
    ):
        self.repository = repository
        self.max_upload_size = max_upload_size
        self.metrics = metrics or get_metrics_collector()

    async def upload(
        self,
        collection: Collection,
        file_name: str | None,
        content: bytes,
        fields: AssetFields,
    ) -> UploadResponse:
        """
        Store an asset and build the upload response.

        Raises:
            PayloadTooLargeException: If content exceeds the upload limit
            ValidationException: If a required field is missing
        """
        if len(content) > self.max_upload_size:
            raise PayloadTooLargeException(self.max_upload_size)

        record = await self.repository.put(collection, file_name or "", content, fields)
        self.metrics.record_upload(collection.value)

        logger.info(f"Upload of {collection.value} '{record.file_name}' by '{record.owner_id}'")
        return UploadResponse(
            file_name=record.file_name,
            url=record.url,
            message=f"{collection.value.capitalize()} uploaded successfully",
        )

    async def upload_base64(
        self,
        collection: Collection,
        request: Base64UploadRequest,
    ) -> UploadResponse:
        """Store an asset sent as a JSON body with base64 content."""
        if not (request.user_id and request.file_name and request.file_content):
            raise ValidationException("Missing fields")

        content = decode_base64_content(request.file_content)
        return await self.upload(collection, request.file_name, content, request.to_fields())

    async def read_upload(self, file: UploadFile) -> bytes:
        """Read a multipart file part, enforcing the upload limit while reading."""
        chunks = []
        total = 0
        while chunk := await file.read(READ_CHUNK_SIZE):
            total += len(chunk)
            if total > self.max_upload_size:
                raise PayloadTooLargeException(self.max_upload_size)
            chunks.append(chunk)
        return b"".join(chunks)

    async def verify(self, collection: Collection, file_name: str) -> VerifyResponse:
        exists = await self.repository.exists(collection, file_name)
        return VerifyResponse(success=exists, file_name=file_name)

    async def list(self, collection: Collection) -> list[dict[str, Any]]:
        records = await self.repository.list(collection)
        return [record.to_response() for record in records]

    async def delete(self, collection: Collection, file_name: str) -> DeleteResponse:
        await self.repository.delete(collection, file_name)
        self.metrics.record_delete(collection.value)
        return DeleteResponse(file_name=file_name)

    async def orphans(self, collection: Collection) -> OrphanReport:
        report = await self.repository.find_orphans(collection)
        if report.binaries_without_metadata or report.metadata_without_binary:
            logger.warning(
                f"Orphaned {collection.value} files: "
                f"{len(report.binaries_without_metadata)} binaries, "
                f"{len(report.metadata_without_binary)} sidecars"
            )
        return report
