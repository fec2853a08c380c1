"""
Error handling service for consistent error response formatting and logging.
Turns every failure into the `{statusCode, success, message, details}` envelope.
"""

from typing import Dict, Any, Optional, Sequence
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Input Validation Errors"


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Recognized errors are logged as warnings, faults as errors with traceback.
    """

    @staticmethod
    def format_error_response(
        status_code: int,
        message: str,
        details: Optional[Any] = None
    ) -> Dict[str, Any]:
        """
        Format error response in the envelope structure.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            details: Optional machine-readable details

        Returns:
            Formatted error response dictionary
        """
        return {
            "statusCode": status_code,
            "success": False,
            "message": message,
            "details": details,
        }

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                exception.status_code,
                exception.detail,
                exception.details
            ),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        errors: Sequence[Dict[str, Any]],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request validation errors, listing every failing field at once.

        Args:
            errors: Error entries as returned by `exc.errors()`
            request: Optional FastAPI request object

        Returns:
            400 JSON response with a field -> message mapping
        """
        request_id = ErrorHandlerService._generate_request_id()
        field_errors = ErrorHandlerService.collect_field_errors(errors)

        logger.warning(
            f"Validation Error [{request_id}]: {len(field_errors)} field errors",
            extra={
                "error_count": len(field_errors),
                "request_id": request_id,
                "path": request.url.path if request else None,
                "fields": list(field_errors)
            }
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(400, VALIDATION_MESSAGE, field_errors)
        )

    @staticmethod
    def collect_field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, str]:
        """
        Map each failing field to its first error message.

        Field names come from the error location, which carries the camelCase
        alias for request bodies. Errors on the whole body are keyed "body".
        """
        field_errors: Dict[str, str] = {}
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            if loc and loc[0] in ("body", "query", "path") and len(loc) > 1:
                field = loc[-1]
            else:
                field = loc[-1] if loc else "body"

            message = str(error.get("msg", "Invalid value"))
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]

            field_errors.setdefault(field, message)
        return field_errors

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors without exposing driver messages.

        Args:
            exception: SQLAlchemy error
            request: Optional FastAPI request object

        Returns:
            400 for constraint violations, 500 otherwise
        """
        request_id = ErrorHandlerService._generate_request_id()

        if isinstance(exception, IntegrityError):
            status_code = 400
            message = "Data integrity constraint violation"

            constraint_info = ErrorHandlerService._extract_constraint_info(exception)
            if constraint_info:
                message = f"Constraint violation: {constraint_info}"
        else:
            status_code = 500
            message = "Internal Server Error"

        logger.error(
            f"Database Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(status_code, message)
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions such as unmatched routes.

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._generate_request_id()
        message = "Route not found" if exception.status_code == 404 else str(exception.detail)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {message}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(exception.status_code, message),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors; details stay in the server log.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            500 JSON response with a generic message
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(500, "Internal Server Error")
        )

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """
        Extract constraint information from integrity error.

        Args:
            exception: SQLAlchemy integrity error

        Returns:
            Constraint information string or None
        """
        error_msg = str(exception.orig).lower()

        if "unique" in error_msg:
            return "Duplicate value for unique field"
        elif "foreign key" in error_msg:
            return "Referenced record does not exist"
        elif "not null" in error_msg:
            return "Required field cannot be empty"
        return None
