"""
Error handling service for consistent error response formatting and logging.
Every non-action failure leaves the API in the same envelope:
{"error": {"code", "message", "timestamp", "request_id", "details"?}}.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Turns exceptions that escape the routers into structured JSON responses.

    Form actions never reach this service for validation or persistence
    failures; they return an ActionState instead. What arrives here is
    auth failures, not-found reads, malformed requests and the unexpected.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Error code identifier
            message: Human-readable error message
            details: Optional list of per-field error entries
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": ErrorHandlerService._get_current_timestamp(),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def _respond(
        request: Optional[Request],
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        content = ErrorHandlerService.format_error_response(
            error_code=error_code,
            message=message,
            details=details,
            request_id=ErrorHandlerService._request_id(request)
        )
        return JSONResponse(status_code=status_code, content=content, headers=headers)

    @staticmethod
    def _log_context(request: Optional[Request], **extra: Any) -> Dict[str, Any]:
        return {
            "request_id": ErrorHandlerService._request_id(request),
            "path": request.url.path if request else None,
            **extra
        }

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle application exceptions (auth, not found, bad request)."""
        logger.warning(
            f"API Exception: {exception.error_code} - {exception.detail}",
            extra=ErrorHandlerService._log_context(
                request,
                error_code=exception.error_code,
                status_code=exception.status_code
            )
        )

        return ErrorHandlerService._respond(
            request,
            exception.status_code,
            exception.error_code or "API_ERROR",
            exception.detail,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle malformed path or query parameters, such as a non-UUID record id.
        Form bodies are validated by the actions, not here.
        """
        details = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"]
            }
            for error in exception.errors()
        ]

        logger.warning(
            f"Request validation failed: {len(details)} errors",
            extra=ErrorHandlerService._log_context(request, error_count=len(details))
        )

        return ErrorHandlerService._respond(
            request, 422, "VALIDATION_ERROR", "Request validation failed", details=details
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle database errors raised outside the form actions (listing and detail reads)."""
        logger.error(
            f"Database Error: {type(exception).__name__}",
            extra=ErrorHandlerService._log_context(request, exception_type=type(exception).__name__),
            exc_info=exception
        )

        # Internal database details are never exposed
        return ErrorHandlerService._respond(request, 500, "DATABASE_ERROR", "Database operation failed")

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle framework HTTP exceptions such as unknown routes or methods."""
        logger.warning(
            f"HTTP Exception: {exception.status_code} - {exception.detail}",
            extra=ErrorHandlerService._log_context(request, status_code=exception.status_code)
        )

        return ErrorHandlerService._respond(
            request,
            exception.status_code,
            f"HTTP_{exception.status_code}",
            str(exception.detail),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle unexpected errors; the exception text is logged, never returned."""
        logger.error(
            f"Unexpected Error: {type(exception).__name__} - {exception}",
            extra=ErrorHandlerService._log_context(request, exception_type=type(exception).__name__),
            exc_info=exception
        )

        return ErrorHandlerService._respond(
            request,
            500,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred. Please try again later."
        )

    @staticmethod
    def _request_id(request: Optional[Request] = None) -> str:
        """Reuse the request ID assigned by the logging middleware, or generate one."""
        request_id = getattr(request.state, "request_id", None) if request else None
        return request_id or str(uuid.uuid4())[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        """Get current timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
