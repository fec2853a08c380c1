"""
Request validation middleware.
Rejects oversized bodies before they reach the JSON parser and logs each request.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import BadRequestError, PayloadTooLargeError

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware enforcing the request body size limit.
    Tags every response with an X-Request-ID header.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 16 * 1024,
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the size check.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            await self._validate_request_size(request)
        except (BadRequestError, PayloadTooLargeError) as exc:
            return ErrorHandlerService.handle_api_exception(exc, request)

        if self.enable_request_logging:
            logger.info(f"Request [{request_id}]: {request.method} {request.url.path}")

        response = await call_next(request)

        if self.enable_request_logging:
            processing_time = time.time() - start_time
            logger.info(f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s")

        response.headers["X-Request-ID"] = request_id
        return response

    async def _validate_request_size(self, request: Request) -> None:
        """
        Validate request size.

        A declared content-length is checked up front. Bodies sent without one
        (chunked transfer encoding) are read up to the limit instead.

        Args:
            request: FastAPI request object

        Raises:
            PayloadTooLargeError: If request size exceeds limit
            BadRequestError: If the content-length header is not a number
        """
        content_length = request.headers.get("content-length")
        if not content_length:
            if request.method in BODY_METHODS:
                await self._read_limited_body(request)
            return

        try:
            size = int(content_length)
        except ValueError:
            raise BadRequestError("Invalid content-length header")

        if size > self.max_request_size:
            raise PayloadTooLargeError(size, self.max_request_size)

    async def _read_limited_body(self, request: Request) -> None:
        """Buffer a streamed body, stopping as soon as it passes the limit."""
        chunks = []
        received = 0
        async for chunk in request.stream():
            received += len(chunk)
            if received > self.max_request_size:
                logger.warning(f"Streamed request body exceeded {self.max_request_size} bytes")
                raise PayloadTooLargeError(received, self.max_request_size)
            chunks.append(chunk)

        # Cached the same way Request.body() does so the endpoint can replay it
        request._body = b"".join(chunks)
