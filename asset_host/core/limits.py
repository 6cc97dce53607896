"""
Request body size limiting.
Rejects oversized uploads before the body is buffered.
"""

import logging

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from asset_host.core.exceptions import PayloadTooLargeException
from asset_host.core.responses import create_error_response

logger = logging.getLogger(__name__)


class RequestBodyTooLarge(HTTPException):
    """
    Raised from the wrapped `receive` once the streamed body passes the limit.

    An HTTPException so FastAPI's body parsing re-raises it instead of
    reporting a generic 400.
    """

    def __init__(self, max_size: int):
        super().__init__(status_code=413)
        self.max_size = max_size


def payload_too_large_response(max_size: int):
    exc = PayloadTooLargeException(max_size)
    return create_error_response(
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
    )


class UploadSizeLimitMiddleware:
    """
    ASGI middleware enforcing MAX_UPLOAD_SIZE on request bodies.

    A declared Content-Length over the limit is rejected up front. Bodies
    without one (chunked transfer) are counted as they are received and
    cut off as soon as the running total passes the limit.
    """

    def __init__(self, app: ASGIApp, max_size: int):
        self.app = app
        self.max_size = max_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                response = create_error_response(
                    error="validation_failed",
                    message="Invalid Content-Length header",
                    status_code=400,
                )
                await response(scope, receive, send)
                return
            if length > self.max_size:
                logger.warning(
                    f"Rejected {scope['method']} {scope['path']}: "
                    f"{length} bytes exceeds {self.max_size}"
                )
                await payload_too_large_response(self.max_size)(scope, receive, send)
                return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_size:
                    logger.warning(
                        f"Rejected {scope['method']} {scope['path']}: "
                        f"streamed body exceeds {self.max_size} bytes"
                    )
                    raise RequestBodyTooLarge(self.max_size)
            return message

        async def tracked_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except RequestBodyTooLarge:
            if response_started:
                raise
            await payload_too_large_response(self.max_size)(scope, receive, send)
