"""
Local filesystem asset repository.
Stores each collection as a directory of `<fileName>` / `<fileName>.json` pairs.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from asset_host.config import get_settings
from asset_host.core.exceptions import (
    MetadataCorruptedException,
    StorageException,
    ValidationException,
)
from asset_host.models.asset import Collection
from asset_host.schemas.asset import AssetFields, AssetMetadata, AssetRecord, OrphanReport
from asset_host.storage.base import SIDECAR_SUFFIX, AssetRepository, is_plain_file_name
from asset_host.storage.locks import KeyedLock

settings = get_settings()
logger = logging.getLogger(__name__)


class LocalAssetRepository(AssetRepository):
    """
    Local filesystem asset store.

    Files live under `<data_root>/worlds` and `<data_root>/avatars`. Writes
    for the same (collection, fileName) are serialized in-process; reads
    take no lock.
    """

    def __init__(
        self,
        data_root: str | None = None,
        public_base_url: str | None = None,
        strict_listing: bool | None = None,
    ):
        """
        Initialize the local repository and create the collection directories.

        Args:
            data_root: Storage root. Defaults to settings.DATA_ROOT
            public_base_url: URL prefix for public links. Defaults to settings.PUBLIC_BASE_URL
            strict_listing: Fail a listing on a malformed sidecar instead of skipping it.
                Defaults to settings.STRICT_LISTING
        """
        super().__init__(public_base_url or settings.PUBLIC_BASE_URL)
        self.data_root = Path(data_root or settings.DATA_ROOT)
        self.strict_listing = settings.STRICT_LISTING if strict_listing is None else strict_listing
        self._locks = KeyedLock()

        for collection in Collection:
            self.collection_dir(collection).mkdir(parents=True, exist_ok=True)

    def collection_dir(self, collection: Collection) -> Path:
        """Directory holding a collection's binaries and sidecars."""
        return self.data_root / collection.plural

    def _paths(self, collection: Collection, file_name: str) -> tuple[Path, Path]:
        directory = self.collection_dir(collection)
        return directory / file_name, directory / f"{file_name}{SIDECAR_SUFFIX}"

    async def put(
        self,
        collection: Collection,
        file_name: str,
        content: bytes,
        fields: AssetFields,
    ) -> AssetRecord:
        """Write the binary, then its sidecar."""
        missing = [
            name
            for name, value in (("fileName", file_name), ("userId", fields.owner_id), ("fileContent", content))
            if not value
        ]
        if missing:
            raise ValidationException("Missing fields", details={"missing": missing})
        # Writes stay inside the collection directory
        if not is_plain_file_name(file_name):
            raise ValidationException(
                "fileName must be a plain file name",
                details={"fileName": file_name},
            )

        record = AssetRecord(
            collection=collection,
            owner_id=fields.owner_id,
            file_name=file_name,
            description=fields.description,
            is_public=fields.is_public,
            is_nsfw=fields.is_nsfw,
            preview=fields.preview,
            uploaded_at=datetime.now(timezone.utc),
            url=self.public_url(collection, file_name),
        )
        binary_path, sidecar_path = self._paths(collection, file_name)

        async with self._locks.acquire((collection, file_name)):
            try:
                binary_path.parent.mkdir(parents=True, exist_ok=True)

                async with aiofiles.open(binary_path, "wb") as f:
                    await f.write(content)

                async with aiofiles.open(sidecar_path, "w", encoding="utf-8") as f:
                    await f.write(json.dumps(record.to_sidecar(), indent=2))

            except OSError as e:
                raise StorageException(
                    message=f"Failed to store asset: {str(e)}",
                    details={"collection": collection.value, "fileName": file_name},
                )

        logger.info(f"Stored {collection.value} '{file_name}' ({len(content)} bytes)")
        return record

    async def exists(self, collection: Collection, file_name: str) -> bool:
        if not is_plain_file_name(file_name):
            return False
        binary_path, sidecar_path = self._paths(collection, file_name)
        return await aiofiles.os.path.isfile(binary_path) and await aiofiles.os.path.isfile(sidecar_path)

    async def list(self, collection: Collection) -> list[AssetRecord]:
        directory = self.collection_dir(collection)

        try:
            entries = await aiofiles.os.listdir(directory)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageException(
                message=f"Failed to list collection: {str(e)}",
                details={"collection": collection.value},
            )

        names = set(entries)
        records = []
        for entry in entries:
            if not entry.endswith(SIDECAR_SUFFIX):
                continue
            file_name = entry[: -len(SIDECAR_SUFFIX)]
            if file_name not in names:
                # A *.json binary with its own sidecar is not itself a sidecar
                if f"{entry}{SIDECAR_SUFFIX}" not in names:
                    logger.warning(f"Skipping {collection.value} '{file_name}': binary missing")
                continue

            metadata = await self._read_sidecar(directory / entry)
            if metadata is None:
                continue

            records.append(
                AssetRecord(
                    **metadata.model_dump(),
                    collection=collection,
                    url=self.public_url(collection, metadata.file_name),
                )
            )

        return records

    async def _read_sidecar(self, path: Path) -> AssetMetadata | None:
        """Parse one sidecar; None means skip it."""
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            # Deleted between the directory scan and the read
            return None
        except (OSError, UnicodeDecodeError) as e:
            if self.strict_listing:
                raise MetadataCorruptedException(path.name, str(e))
            logger.warning(f"Skipping unreadable metadata file {path}: {e}")
            return None

        try:
            return AssetMetadata.model_validate_json(raw)
        except ValidationError as e:
            if self.strict_listing:
                raise MetadataCorruptedException(path.name, str(e))
            logger.warning(f"Skipping malformed metadata file {path}: {e.error_count()} error(s)")
            return None

    async def delete(self, collection: Collection, file_name: str) -> bool:
        if not is_plain_file_name(file_name):
            logger.warning(f"Ignoring delete of non-plain {collection.value} name '{file_name}'")
            return True

        removed = []
        async with self._locks.acquire((collection, file_name)):
            for path in self._paths(collection, file_name):
                try:
                    await aiofiles.os.remove(path)
                    removed.append(path.name)
                except FileNotFoundError:
                    pass
                except OSError as e:
                    raise StorageException(
                        message=f"Failed to delete file: {str(e)}",
                        details={"collection": collection.value, "fileName": file_name},
                    )

        logger.info(f"Deleted {collection.value} '{file_name}' (removed: {removed or 'nothing'})")
        return True

    async def is_writable(self, collection: Collection) -> bool:
        directory = self.collection_dir(collection)
        return await aiofiles.os.path.isdir(directory) and os.access(directory, os.W_OK | os.X_OK)

    async def find_orphans(self, collection: Collection) -> OrphanReport:
        report = OrphanReport(collection=collection)
        try:
            entries = await aiofiles.os.listdir(self.collection_dir(collection))
        except FileNotFoundError:
            return report

        names = set(entries)
        for entry in sorted(entries):
            has_sidecar = f"{entry}{SIDECAR_SUFFIX}" in names
            if entry.endswith(SIDECAR_SUFFIX) and not has_sidecar:
                if entry[: -len(SIDECAR_SUFFIX)] not in names:
                    report.metadata_without_binary.append(entry[: -len(SIDECAR_SUFFIX)])
            elif not has_sidecar:
                report.binaries_without_metadata.append(entry)

        return report
