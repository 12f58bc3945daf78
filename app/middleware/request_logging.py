"""
Request logging middleware.
Tags every request with an ID and logs method, path, status and processing time.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns a short request ID, exposes it as X-Request-ID and logs each
    request/response pair.

    Requests slower than ``slow_request_threshold`` seconds are logged at warning.
    """

    def __init__(
        self,
        app: ASGIApp,
        enable_request_logging: bool = True,
        slow_request_threshold: float = 1.0
    ):
        super().__init__(app)
        self.enable_request_logging = enable_request_logging
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.perf_counter()

        if self.enable_request_logging:
            logger.info(
                f"Request [{request_id}]: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": self._get_client_ip(request)
                }
            )

        response = await call_next(request)

        processing_time = time.perf_counter() - start_time
        self._log_response(request, response, request_id, processing_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.4f}"
        return response

    def _log_response(
        self,
        request: Request,
        response: Response,
        request_id: str,
        processing_time: float
    ) -> None:
        extra = {
            "request_id": request_id,
            "status_code": response.status_code,
            "processing_time": processing_time,
            "path": request.url.path,
            "method": request.method
        }

        if processing_time > self.slow_request_threshold:
            logger.warning(
                f"Slow request [{request_id}]: {request.method} {request.url.path} "
                f"took {processing_time:.3f}s",
                extra=extra
            )
        elif self.enable_request_logging:
            logger.info(
                f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s",
                extra=extra
            )

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Client IP, honouring X-Forwarded-For from a reverse proxy."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        if request.client:
            return request.client.host
        return "unknown"
