"""
Tests for the asset service.
"""

import base64

import pytest

from asset_host.core.exceptions import PayloadTooLargeException, ValidationException
from asset_host.models.asset import Collection
from asset_host.schemas.asset import AssetFields, Base64UploadRequest
from asset_host.services.asset_service import AssetService, decode_base64_content
from asset_host.services.metrics import MetricsCollector


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture
def service(repository, metrics) -> AssetService:
    return AssetService(repository, max_upload_size=64, metrics=metrics)


class TestDecodeBase64:
    """Tests for base64 payload decoding."""

    def test_standard(self):
        assert decode_base64_content(base64.b64encode(b"world data").decode()) == b"world data"

    def test_url_safe_alphabet(self):
        raw = b"\xfb\xff\xfe"
        assert decode_base64_content(base64.urlsafe_b64encode(raw).decode()) == raw

    def test_missing_padding_and_whitespace(self):
        encoded = base64.b64encode(b"ab").decode().rstrip("=")
        assert decode_base64_content(f" {encoded}\n") == b"ab"

    def test_invalid(self):
        with pytest.raises(ValidationException):
            decode_base64_content("not base64 at all!")


class TestUpload:
    """Tests for the upload bindings."""

    @pytest.mark.asyncio
    async def test_upload_world(self, service, repository, metrics):
        response = await service.upload(Collection.WORLD, "castle.zip", b"data", AssetFields(owner_id="u1"))

        assert response.success is True
        assert response.file_name == "castle.zip"
        assert response.url == "https://files.example.test/worlds/castle.zip"
        assert response.message == "World uploaded successfully"
        assert await repository.exists(Collection.WORLD, "castle.zip")
        assert metrics.get_metrics()["uploads"] == {"world": 1}

    @pytest.mark.asyncio
    async def test_upload_avatar_message(self, service):
        response = await service.upload(Collection.AVATAR, "bot.vrm", b"data", AssetFields(owner_id="u1"))

        assert response.message == "Avatar uploaded successfully"

    @pytest.mark.asyncio
    async def test_upload_too_large(self, service, repository):
        with pytest.raises(PayloadTooLargeException):
            await service.upload(Collection.WORLD, "big.zip", b"x" * 65, AssetFields(owner_id="u1"))

        assert not await repository.exists(Collection.WORLD, "big.zip")

    @pytest.mark.asyncio
    async def test_upload_base64(self, service, repository):
        request = Base64UploadRequest(
            userId="u1",
            fileName="bot.vrm",
            fileContent=base64.b64encode(b"avatar").decode(),
            isPublic=True,
            pfp="face.png",
        )

        await service.upload_base64(Collection.AVATAR, request)

        [record] = await repository.list(Collection.AVATAR)
        assert record.owner_id == "u1"
        assert record.is_public is True
        assert record.preview == "face.png"
        assert (repository.collection_dir(Collection.AVATAR) / "bot.vrm").read_bytes() == b"avatar"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["userId", "fileName", "fileContent"])
    async def test_upload_base64_missing_fields(self, service, repository, missing):
        body = {"userId": "u1", "fileName": "bot.vrm", "fileContent": "YXZhdGFy"}
        del body[missing]

        with pytest.raises(ValidationException) as exc_info:
            await service.upload_base64(Collection.AVATAR, Base64UploadRequest(**body))

        assert exc_info.value.message == "Missing fields"
        assert await repository.list(Collection.AVATAR) == []


class TestLookups:
    """Tests for verify, list, delete and orphans."""

    @pytest.mark.asyncio
    async def test_verify(self, service):
        await service.upload(Collection.WORLD, "castle.zip", b"data", AssetFields(owner_id="u1"))

        assert (await service.verify(Collection.WORLD, "castle.zip")).success is True
        assert (await service.verify(Collection.WORLD, "other.zip")).success is False

    @pytest.mark.asyncio
    async def test_list_serializes_wire_names(self, service):
        await service.upload(Collection.WORLD, "castle.zip", b"data", AssetFields(owner_id="u1"))

        [item] = await service.list(Collection.WORLD)

        assert item["userId"] == "u1"
        assert item["fileName"] == "castle.zip"
        assert item["url"] == "https://files.example.test/worlds/castle.zip"
        assert "collection" not in item

    @pytest.mark.asyncio
    async def test_delete_counts(self, service, metrics):
        response = await service.delete(Collection.AVATAR, "never.vrm")

        assert response.success is True
        assert metrics.get_metrics()["deletes"] == {"avatar": 1}

    @pytest.mark.asyncio
    async def test_orphans(self, service, repository):
        (repository.collection_dir(Collection.WORLD) / "lonely.zip").write_bytes(b"data")

        report = await service.orphans(Collection.WORLD)

        assert report.binaries_without_metadata == ["lonely.zip"]
