"""
Health and metrics endpoints.
"""

from fastapi import APIRouter

from asset_host.dependencies import AppSettings, Storage
from asset_host.models.asset import Collection
from asset_host.services.metrics import get_metrics_collector

router = APIRouter()


@router.get("/health")
async def health_check(storage: Storage, settings: AppSettings):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", ...} when both collections are writable
        {"status": "degraded", "issues": [...]} otherwise
    """
    issues = []
    collections = {}

    for collection in Collection:
        writable = await storage.is_writable(collection)
        collections[collection.value] = {"writable": writable}
        if not writable:
            issues.append(f"{collection.plural} directory is missing or not writable")

    response = {
        "status": "degraded" if issues else "ok",
        "dataRoot": settings.DATA_ROOT,
        "collections": collections,
    }
    if issues:
        response["issues"] = issues

    return response


@router.get("/metrics")
async def metrics(storage: Storage):
    """
    Request metrics plus the current record count per collection.
    """
    metrics_data = get_metrics_collector().get_metrics()
    metrics_data["storage"] = {
        collection.value: len(await storage.list(collection))
        for collection in Collection
    }
    return metrics_data
