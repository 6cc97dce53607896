"""
Abstract asset repository interface.
Defines the contract for all asset store implementations.
"""

from abc import ABC, abstractmethod
from urllib.parse import quote

from asset_host.models.asset import Collection
from asset_host.schemas.asset import AssetFields, AssetRecord, OrphanReport

SIDECAR_SUFFIX = ".json"

# Characters left unescaped by JavaScript's encodeURIComponent, beyond the
# alphanumerics and "_.-~" that quote() always keeps.
_URI_COMPONENT_SAFE = "!*'()"


def encode_file_name(file_name: str) -> str:
    """Percent-encode a file name for use as a single URL path segment."""
    return quote(file_name, safe=_URI_COMPONENT_SAFE)


def is_plain_file_name(file_name: str) -> bool:
    """
    True if the name is a single path component inside a collection.

    Stored names must resolve inside their collection directory, so
    separators, NUL and the dot entries are refused.
    """
    if not file_name or file_name in (".", ".."):
        return False
    return "/" not in file_name and "\\" not in file_name and "\x00" not in file_name


class AssetRepository(ABC):
    """
    Abstract base class for asset stores.

    A store keeps, per collection, a binary file and its metadata sidecar
    under the same file name. Implementations must treat a record as
    existing only when both halves are present.
    """

    def __init__(self, public_base_url: str):
        self.public_base_url = public_base_url.rstrip("/")

    def public_url(self, collection: Collection, file_name: str) -> str:
        """
        Build the public URL for an asset.

        Args:
            collection: Collection the asset belongs to
            file_name: Unencoded file name as stored

        Returns:
            `<base>/<collection-plural>/<percent-encoded file name>`
        """
        return f"{self.public_base_url}/{collection.plural}/{encode_file_name(file_name)}"

    @abstractmethod
    async def put(
        self,
        collection: Collection,
        file_name: str,
        content: bytes,
        fields: AssetFields,
    ) -> AssetRecord:
        """
        Store an asset binary and its metadata, overwriting any previous record.

        Args:
            collection: Target collection
            file_name: Name used for the binary and (with .json) the sidecar
            content: Raw file bytes
            fields: Caller-supplied metadata; owner_id is required

        Returns:
            The stored record with its public URL

        Raises:
            ValidationException: If file_name, owner_id or content is missing
            StorageException: If a write fails
        """
        pass

    @abstractmethod
    async def exists(self, collection: Collection, file_name: str) -> bool:
        """
        Check whether both the binary and its sidecar are present.

        Never raises; a missing collection directory reports False.
        """
        pass

    @abstractmethod
    async def list(self, collection: Collection) -> list[AssetRecord]:
        """
        List every record in a collection, each with a fresh public URL.

        Returns an empty list when the collection directory is absent.

        Raises:
            MetadataCorruptedException: In strict mode, on a malformed sidecar
        """
        pass

    @abstractmethod
    async def delete(self, collection: Collection, file_name: str) -> bool:
        """
        Remove the binary and the sidecar, each only if present.

        Returns:
            True, including when neither file existed
        """
        pass

    @abstractmethod
    async def find_orphans(self, collection: Collection) -> OrphanReport:
        """
        Report half-written records without modifying anything.

        Returns:
            Binaries lacking a sidecar and sidecars lacking a binary
        """
        pass

    @abstractmethod
    async def is_writable(self, collection: Collection) -> bool:
        """Check that new records can be written to a collection."""
        pass
