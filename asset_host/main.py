"""
Asset Host - Main Application Entry Point.

FastAPI application serving world and avatar uploads, listings and the
raw files themselves. Plain HTTP only; TLS is terminated by the reverse
proxy that owns PUBLIC_BASE_URL.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from asset_host import __version__
from asset_host.api.router import api_router
from asset_host.config import get_settings
from asset_host.core.exceptions import AssetHostException
from asset_host.core.limits import (
    RequestBodyTooLarge,
    UploadSizeLimitMiddleware,
    payload_too_large_response,
)
from asset_host.core.responses import create_error_response
from asset_host.models.asset import Collection
from asset_host.services.metrics import MetricsMiddleware
from asset_host.storage import get_storage_backend

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Local filesystem store; creates <DATA_ROOT>/worlds and <DATA_ROOT>/avatars.
# Its directories also back the static file mounts below.
repository = get_storage_backend()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME} on {settings.HOST}:{settings.PORT}")
    logger.info(f"Data root: {settings.DATA_ROOT}")
    logger.info(f"Public base URL: {settings.PUBLIC_BASE_URL}")
    if not settings.PUBLIC_BASE_URL.startswith("https://"):
        logger.warning("PUBLIC_BASE_URL is not HTTPS; clients expect HTTPS links")

    for collection in Collection:
        repository.collection_dir(collection).mkdir(parents=True, exist_ok=True)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Asset Host

Upload, list, verify and delete user-created **worlds** and **avatars**.

Each asset is stored as its binary file plus a `<fileName>.json` metadata
sidecar. Uploads are accepted as multipart form-data (`POST /upload`) or as
JSON with base64 content (`POST /worlds`, `POST /avatars`). Stored files are
served directly under `/worlds/` and `/avatars/`.
    """,
    version=__version__,
    openapi_tags=[
        {"name": "uploads", "description": "Asset upload operations"},
        {"name": "assets", "description": "Listing, verification and deletion"},
        {"name": "health", "description": "Service health and metrics"},
    ],
    lifespan=lifespan,
)

app.add_middleware(UploadSizeLimitMiddleware, max_size=settings.MAX_UPLOAD_SIZE)
app.add_middleware(MetricsMiddleware)

# CORS middleware so browser-hosted clients (WebGL builds) can call the API.
# Added last so it wraps every response, including 413 rejections.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AssetHostException)
async def asset_host_exception_handler(request: Request, exc: AssetHostException) -> JSONResponse:
    """Return the standardized error body for API exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        if not settings.EXPOSE_ERROR_DETAILS:
            return create_error_response(exc.error, "An unexpected error occurred", exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestBodyTooLarge)
async def body_too_large_handler(request: Request, exc: RequestBodyTooLarge) -> JSONResponse:
    """Report a streamed body cut off by UploadSizeLimitMiddleware."""
    return payload_too_large_response(exc.max_size)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400, like missing fields."""
    return create_error_response(
        error="validation_failed",
        message="Request validation failed",
        status_code=400,
        details=[
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ],
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error; the message is only surfaced when EXPOSE_ERROR_DETAILS is set.
    """
    logger.exception(f"Unexpected error: {exc}")
    message = str(exc) if settings.EXPOSE_ERROR_DETAILS else "An unexpected error occurred"
    return create_error_response("internal_error", message, 500)


# Include API routers
app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root():
    """Service info."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Raw file serving; mounted after the routers so POST /worlds and
# DELETE /{type}/{name} take precedence
for _collection in Collection:
    app.mount(
        f"/{_collection.plural}",
        StaticFiles(directory=repository.collection_dir(_collection), check_dir=False),
        name=_collection.plural,
    )


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "asset_host.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
