"""
In-process request and asset activity metrics.

Tracks: request counts, response times, error rates, and per-collection
upload/delete counters.
"""

import time
from collections import defaultdict
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# Routes recorded under their literal path
_EXACT_PATHS = {
    "/", "/health", "/metrics", "/upload", "/worlds", "/avatars", "/verify",
    "/docs", "/redoc", "/openapi.json",
}
# First path segments whose second segment is a collection identifier
_TYPE_ROUTES = {"list", "orphans"}
_STATIC_ROUTES = {"worlds", "avatars"}
UNMATCHED = "{unmatched}"


def normalize_path(method: str, path: str) -> str:
    """
    Map a request path onto a bounded set of route keys.

    /list/world -> /list/{type}, GET /worlds/castle.zip -> /worlds/{name},
    DELETE /world/castle.zip -> /{type}/{name}. Anything else is counted
    under a single {unmatched} key.
    """
    if path in _EXACT_PATHS:
        return path
    parts = path.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        return UNMATCHED
    if parts[0] in _TYPE_ROUTES:
        return f"/{parts[0]}/{{type}}"
    if method == "DELETE":
        return "/{type}/{name}"
    if parts[0] in _STATIC_ROUTES:
        return f"/{parts[0]}/{{name}}"
    return UNMATCHED


class MetricsCollector:
    """
    In-process metrics collector.

    Counts are kept per `METHOD path` key with the path normalized.
    """

    def __init__(self) -> None:
        self._request_count: dict[str, int] = defaultdict(int)
        self._error_count: dict[str, int] = defaultdict(int)
        self._response_time_sum: dict[str, float] = defaultdict(float)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._uploads: dict[str, int] = defaultdict(int)
        self._deletes: dict[str, int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
    ) -> None:
        """Record a completed request."""
        key = f"{method} {path}"
        self._request_count[key] += 1
        self._response_time_sum[key] += duration
        self._status_counts[status_code] += 1

        if status_code >= 400:
            self._error_count[key] += 1

    def record_upload(self, collection: str) -> None:
        self._uploads[collection] += 1

    def record_delete(self, collection: str) -> None:
        self._deletes[collection] += 1

    def get_metrics(self) -> dict[str, Any]:
        """Get metrics as a structured dictionary."""
        total_requests = sum(self._request_count.values())
        total_errors = sum(self._error_count.values())

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests else 0,
            "requests_by_endpoint": dict(self._request_count),
            "errors_by_endpoint": dict(self._error_count),
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {
                k: round(self._response_time_sum[k] / count * 1000, 2)
                for k, count in self._request_count.items()
            },
            "uploads": dict(self._uploads),
            "deletes": dict(self._deletes),
        }


# Global singleton
_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


class MetricsMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that records duration and status of every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        get_metrics_collector().record_request(
            method=request.method,
            path=normalize_path(request.method, request.url.path),
            status_code=response.status_code,
            duration=duration,
        )

        return response
