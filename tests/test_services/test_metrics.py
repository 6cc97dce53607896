"""
Tests for request metrics path normalization.
"""

import pytest
from httpx import AsyncClient

from asset_host.services.metrics import UNMATCHED, normalize_path


@pytest.mark.parametrize(
    "method, path, key",
    [
        ("GET", "/health", "/health"),
        ("POST", "/worlds", "/worlds"),
        ("GET", "/list/world", "/list/{type}"),
        ("GET", "/orphans/avatar", "/orphans/{type}"),
        ("GET", "/worlds/castle.zip", "/worlds/{name}"),
        ("GET", "/avatars/bot.vrm.json", "/avatars/{name}"),
        ("DELETE", "/world/castle.zip", "/{type}/{name}"),
        ("DELETE", "/anything/castle.zip", "/{type}/{name}"),
        ("GET", "/random-1234", UNMATCHED),
        ("GET", "/foo/bar", UNMATCHED),
        ("GET", "/a/b/c", UNMATCHED),
        ("GET", "/worlds/", UNMATCHED),
    ],
)
def test_normalize_path(method, path, key):
    assert normalize_path(method, path) == key


@pytest.mark.asyncio
async def test_unknown_paths_share_one_metrics_key(client: AsyncClient):
    for i in range(25):
        await client.get(f"/random-{i}")
        await client.get(f"/unknown/{i}")

    response = await client.get("/metrics")

    keys = response.json()["requests_by_endpoint"]
    assert keys[f"GET {UNMATCHED}"] >= 50
    assert not any("random-" in key or "/unknown/" in key for key in keys)
