"""
Pytest configuration and fixtures for Asset Host tests.
"""

import os
import shutil
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

# Settings are read once at import time; point them at a scratch data root
# before the application is imported.
TEST_DATA_ROOT = tempfile.mkdtemp(prefix="asset-host-test-")
TEST_BASE_URL = "https://files.example.test"
TEST_MAX_UPLOAD_SIZE = 1024 * 1024  # 1MB

os.environ["DATA_ROOT"] = TEST_DATA_ROOT
os.environ["PUBLIC_BASE_URL"] = TEST_BASE_URL
os.environ["MAX_UPLOAD_SIZE"] = str(TEST_MAX_UPLOAD_SIZE)
os.environ["STRICT_LISTING"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from asset_host.main import app
from asset_host.models.asset import Collection
from asset_host.schemas.asset import AssetFields
from asset_host.storage import LocalAssetRepository


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(TEST_DATA_ROOT, ignore_errors=True)


@pytest.fixture
def data_root() -> Path:
    """The application's data root, emptied before each test."""
    root = Path(TEST_DATA_ROOT)
    for collection in Collection:
        directory = root / collection.plural
        shutil.rmtree(directory, ignore_errors=True)
        directory.mkdir(parents=True)
    return root


@pytest_asyncio.fixture(scope="function")
async def client(data_root) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def repository(tmp_path) -> LocalAssetRepository:
    """Create an isolated local repository."""
    return LocalAssetRepository(data_root=str(tmp_path), public_base_url=TEST_BASE_URL)


@pytest.fixture
def sample_fields() -> AssetFields:
    """Sample upload metadata."""
    return AssetFields(
        owner_id="u1",
        description="A floating castle",
        is_public=True,
        is_nsfw=False,
        preview="castle-preview.png",
    )


@pytest.fixture
def sample_file_content() -> bytes:
    """Sample file content for testing uploads."""
    return b"PK\x03\x04 fake world bundle content"
