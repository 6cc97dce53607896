"""
API Router - Aggregates all endpoints.
Routes are mounted at the root path, where existing upload clients expect them.
"""

from fastapi import APIRouter

from asset_host.api import assets, health, uploads

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(uploads.router, tags=["uploads"])
api_router.include_router(assets.router, tags=["assets"])
